"""
Token cursor shared by the errordef parser mixins.
"""

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..errors import ParseError, make_parse_error
from ..lexer import Token, TokenType

if TYPE_CHECKING:
    from .attributes import AttributeSite


@runtime_checkable
class ParserProtocol(Protocol):
    """
    What a mixin may call on `self`, and what an expression parser receives.

    The concrete Parser gets these from BaseParser and the other mixins.
    """

    tokens: list[Token]
    file: Path
    pos: int

    def current_token(self) -> Token: ...
    def peek_token(self, offset: int = 1) -> Token: ...
    def advance(self) -> Token: ...
    def expect(self, token_type: TokenType, message: str | None = None) -> Token: ...
    def match(self, *token_types: TokenType) -> bool: ...
    def error(self, message: str, token: Token | None = None) -> ParseError: ...

    # cross-mixin
    def parse_outer_attributes(self) -> list["AttributeSite"]: ...
    def parse_balanced_run(self, *terminators: TokenType) -> str: ...
    def parse_field_type(self) -> str: ...


# Parses one expression off the parser and returns its source text.
# Raises ParseError on failure.
ExpressionParser = Callable[[ParserProtocol], str]


def _terminated(tokens: list[Token]) -> list[Token]:
    if tokens and tokens[-1].type == TokenType.EOF:
        return tokens
    if not tokens:
        return [Token(TokenType.EOF, "", 1, 1)]
    last = tokens[-1]
    return [*tokens, Token(TokenType.EOF, "", last.line, last.column + len(last.value))]


class BaseParser:
    """
    Cursor over a token list.

    The list always ends with EOF (one is appended if missing) and the
    cursor never moves past it, so lookahead off the end yields EOF.
    """

    def __init__(self, tokens: list[Token], file: Path):
        self.tokens = _terminated(tokens)
        self.file = file
        self.pos = 0

    def _at(self, index: int) -> Token:
        return self.tokens[min(index, len(self.tokens) - 1)]

    def current_token(self) -> Token:
        return self._at(self.pos)

    def peek_token(self, offset: int = 1) -> Token:
        return self._at(self.pos + offset)

    def advance(self) -> Token:
        """Return the current token and step past it (EOF stays put)."""
        token = self._at(self.pos)
        if token.type is not TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        return self._at(self.pos).type in token_types

    def error(self, message: str, token: Token | None = None) -> ParseError:
        """ParseError positioned at `token`, or at the current token."""
        where = token if token is not None else self._at(self.pos)
        return make_parse_error(message, self.file, where.line, where.column)

    def expect(self, token_type: TokenType, message: str | None = None) -> Token:
        """
        Consume a token of `token_type`.

        Raises:
            ParseError: `message`, or "Expected X, got Y", at the current token
        """
        found = self._at(self.pos)
        if found.type is token_type:
            return self.advance()
        raise self.error(message or f"Expected {token_type.value}, got {found.type.value}", found)
