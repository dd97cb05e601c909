"""
errordef DSL Parser Package.

This package provides the parser for the body of an `error_def` block.
The parser is built using mixins to separate parsing logic by construct,
making it easier to maintain and extend.

The main exports are:
- Parser: The complete parser class
- parse_variants: Convenience function to parse a token stream

Usage:
    from errordef.core.dsl_parser_impl import parse_variants

    variants = parse_variants(tokens, file)
"""

from pathlib import Path

from .. import ir
from ..lexer import Token, tokenize
from . import expressions
from .attributes import AttributeParserMixin, AttributeSite
from .base import BaseParser, ExpressionParser, ParserProtocol
from .expressions import parse_expression
from .types import TypeParserMixin
from .variant import VariantParserMixin


class Parser(
    BaseParser,
    TypeParserMixin,
    AttributeParserMixin,
    VariantParserMixin,
):
    """
    Complete parser for an `error_def` body.

    Combines all parser mixins into a single parser class.
    """

    def __init__(
        self,
        tokens: list[Token],
        file: Path,
        parse_expression: ExpressionParser | None = None,
    ):
        """
        Initialize parser.

        Args:
            tokens: Token stream of the block body
            file: Source file path (for error reporting)
            parse_expression: Callback that parses one format argument;
                defaults to a balanced-token-run reader
        """
        super().__init__(tokens, file)
        self.parse_expression = parse_expression or expressions.parse_expression


def parse_variants(
    tokens: list[Token],
    file: Path | None = None,
    parse_expression: ExpressionParser | None = None,
) -> list[ir.VariantSpec]:
    """
    Parse a token stream into validated variants.

    Args:
        tokens: Token stream of an `error_def` body
        file: Source file path (for error reporting)
        parse_expression: Optional expression callback

    Returns:
        Variants in declaration order

    Raises:
        ParseError: On the first syntax or validation error
    """
    parser = Parser(tokens, file or Path("<string>"), parse_expression)
    return parser.parse_variants()


def parse_variants_text(text: str, file: Path | None = None) -> list[ir.VariantSpec]:
    """Tokenize and parse the text of an `error_def` body."""
    file = file or Path("<string>")
    return parse_variants(tokenize(text, file), file)


__all__ = [
    "AttributeSite",
    "ExpressionParser",
    "Parser",
    "ParserProtocol",
    "parse_expression",
    "parse_variants",
    "parse_variants_text",
]
