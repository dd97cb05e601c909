"""
Type parsing for the errordef DSL.

Field types are opaque to the compiler: they are read as balanced token
runs and copied into the generated annotations without interpretation.
"""

from typing import TYPE_CHECKING, Any

from ..lexer import Token, TokenType
from ..strings import render_tokens

OPENERS = {
    TokenType.LPAREN: TokenType.RPAREN,
    TokenType.LBRACKET: TokenType.RBRACKET,
    TokenType.LBRACE: TokenType.RBRACE,
}
CLOSERS = set(OPENERS.values())


class TypeParserMixin:
    """
    Mixin providing balanced token runs and field type parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        advance: Any
        match: Any
        current_token: Any
        error: Any

    def collect_balanced_run(self, *terminators: TokenType) -> list[Token]:
        """
        Consume tokens up to (not including) a top-level terminator.

        Brackets nest; a terminator only counts outside of them. A closing
        bracket that does not belong to the run also ends it, so the caller
        sees its own closer.

        Raises:
            ParseError: On mismatched brackets or end of input inside a bracket
        """
        run: list[Token] = []
        stack: list[TokenType] = []
        while True:
            token = self.current_token()
            if token.type == TokenType.EOF:
                if stack:
                    raise self.error(f"Expected {stack[-1].value}", token)
                return run
            if not stack and (token.type in terminators or token.type in CLOSERS):
                return run
            if token.type in OPENERS:
                stack.append(OPENERS[token.type])
            elif token.type in CLOSERS:
                if token.type != stack[-1]:
                    raise self.error(f"Expected {stack[-1].value}", token)
                stack.pop()
            run.append(self.advance())

    def parse_balanced_run(self, *terminators: TokenType) -> str:
        """Consume a balanced token run and return its canonical source."""
        return render_tokens(self.collect_balanced_run(*terminators))

    def parse_field_type(self) -> str:
        """
        Parse a field type.

        Grammar:
            TYPE := balanced tokens up to a top-level `,` or `}`

        Examples:
            OSError
            list[int]
            dict[str, tuple[int, ...]]
        """
        start = self.current_token()
        type_source = self.parse_balanced_run(TokenType.COMMA, TokenType.RBRACE)
        if not type_source:
            raise self.error("Expected a field type", start)
        return type_source
