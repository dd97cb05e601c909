"""
Definition file loading.

A definition file holds one or more blocks:

    error_def ExampleError {
        AVariant => "Unit-like variant",
    }

The file is split into blocks first, so that a mistake inside one block
only fails that block. Mistakes outside any block (a stray token, an
unclosed brace) fail the whole file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from . import ir
from .dsl_parser_impl import ExpressionParser, parse_variants
from .dsl_parser_impl.base import BaseParser
from .dsl_parser_impl.types import TypeParserMixin
from .errors import ParseError, with_source_context
from .lexer import Token, TokenType, tokenize

logger = logging.getLogger(__name__)


@dataclass
class DefinitionBlock:
    """
    One `error_def` block, not yet parsed.

    Attributes:
        name: Name of the error type
        name_token: Token of the name (for error reporting)
        body: Tokens between the braces, EOF-terminated
    """

    name: str
    name_token: Token
    body: list[Token]


class DefinitionSplitter(BaseParser, TypeParserMixin):
    """Splits a file's token stream into `error_def` blocks."""

    def split(self) -> list[DefinitionBlock]:
        """
        Grammar:
            FILE := ("error_def" IDENTIFIER "{" TOKENS "}")*
        """
        blocks: list[DefinitionBlock] = []
        while not self.match(TokenType.EOF):
            self.expect(TokenType.ERROR_DEF, "Expected error_def")
            name_token = self.expect(TokenType.IDENTIFIER, "Expected error type name")
            self.expect(TokenType.LBRACE, "Expected {")
            body = self.collect_balanced_run()
            close = self.expect(TokenType.RBRACE, "Expected }")
            body.append(Token(TokenType.EOF, "", close.line, close.column))
            blocks.append(DefinitionBlock(name_token.value, name_token, body))
        return blocks


def split_definitions(tokens: list[Token], file: Path) -> list[DefinitionBlock]:
    """Split a token stream into `error_def` blocks."""
    return DefinitionSplitter(tokens, file).split()


def parse_definition(
    block: DefinitionBlock,
    file: Path,
    parse_expression: ExpressionParser | None = None,
) -> ir.ErrorDefinition:
    """
    Parse the body of one block.

    Raises:
        ParseError: On the first error in the block
    """
    variants = parse_variants(block.body, file, parse_expression)
    logger.debug("Parsed error_def %s with %d variants", block.name, len(variants))
    return ir.ErrorDefinition(name=block.name, variants=variants)


def load_definitions(text: str, file: Path | None = None) -> list[ir.ErrorDefinition]:
    """
    Parse every block in a definition file.

    Raises:
        ParseError: On the first error in the file, with a source snippet
    """
    file = file or Path("<string>")
    try:
        blocks = split_definitions(tokenize(text, file), file)
    except ParseError as e:
        raise with_source_context(e, text) from None

    definitions = []
    for block in blocks:
        try:
            definitions.append(parse_definition(block, file))
        except ParseError as e:
            raise with_source_context(e, text, block.name) from None
    return definitions
