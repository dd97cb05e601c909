"""
Variant parser mixin for the errordef DSL.

Parses the body of an `error_def` block into an ordered list of variants,
validating each variant as it is read.

DSL Syntax:

    AVariant => "Unit-like variant",
    AVariantWithArgs {
        flim: int,
        flam: int,
    } => "Variant with args" ("flim is {}. flam is {}.", flim, flam),
    AVariantWithACause {
        blah: bool,
        #[from] cause: OSError,
    } => "Variant with a cause" ("caused by {}", cause)
"""

from __future__ import annotations

import keyword
import logging
from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType

if TYPE_CHECKING:
    from .base import ExpressionParser

logger = logging.getLogger(__name__)

# Taken by the generated __init__ signature, by Exception, or by methods of the
# generated base class, which an instance attribute would shadow
RESERVED_FIELD_NAMES = frozenset(
    {"self", "args", "get_cause", "get_description", "from_", "with_traceback", "add_note"}
)


class VariantParserMixin:
    """
    Parser mixin for variant lists.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        current_token: Any
        peek_token: Any
        error: Any
        parse_outer_attributes: Any
        take_from_marker: Any
        parse_field_type: Any
        parse_expression: ExpressionParser

    def parse_variants(self) -> list[ir.VariantSpec]:
        """
        Parse variants until end of input.

        Grammar:
            VARIANTS := (VARIANT ("," | EOF))*
            VARIANT  := IDENTIFIER ("=>" | "{" FIELD* "}" "=>") STRING LONG_DESC?

        Returns:
            Variants in declaration order

        Raises:
            ParseError: On the first syntax or validation error
        """
        variants: list[ir.VariantSpec] = []
        while not self.match(TokenType.EOF):
            variants.append(self.parse_variant())

            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.EOF):
                raise self.error("Expected comma")
        return variants

    def parse_variant(self) -> ir.VariantSpec:
        """Parse a single variant, up to but excluding its trailing comma."""
        name_token = self.current_token()
        if name_token.type != TokenType.IDENTIFIER:
            raise self.error("Expected variant name")
        if keyword.iskeyword(name_token.value):
            raise self.error(f"Variant name {name_token.value!r} is a Python keyword")
        self.advance()

        fields: list[ir.FieldSpec] = []
        from_index: int | None = None

        if self.match(TokenType.FAT_ARROW):
            self.advance()
        elif self.match(TokenType.LBRACE):
            self.advance()
            fields, from_index = self.parse_struct_fields()
            self.expect(TokenType.FAT_ARROW, "Expected =>")
        else:
            raise self.error("Expected => or struct definition")

        short_description = self.expect(TokenType.STRING, "Expected a string literal").value
        long_description = None
        if self.match(TokenType.LPAREN):
            long_description = self.parse_long_description()

        kind = ir.VariantKind.STRUCT if fields else ir.VariantKind.UNIT
        variant = ir.VariantSpec(
            name=name_token.value,
            kind=kind,
            fields=fields,
            from_index=from_index,
            short_description=short_description,
            long_description=long_description,
        )
        logger.debug(
            "Parsed %s variant %s at %s:%d (%d fields)",
            kind.value,
            variant.name,
            name_token.line,
            name_token.column,
            len(fields),
        )
        return variant

    def parse_struct_fields(self) -> tuple[list[ir.FieldSpec], int | None]:
        """
        Parse the fields of a struct variant, including the closing brace.

        Grammar:
            FIELD := ATTR* IDENTIFIER ":" TYPE ","?

        Returns:
            The fields in order, and the index of the #[from] field if any
        """
        fields: list[ir.FieldSpec] = []
        from_index: int | None = None

        while True:
            if self.match(TokenType.RBRACE):
                self.advance()
                break

            attributes, marker = self.take_from_marker(self.parse_outer_attributes())
            if marker is not None:
                if from_index is not None:
                    raise self.error("Multiple fields marked #[from]", marker)
                from_index = len(fields)

            fields.append(self.parse_field(attributes))

            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.RBRACE):
                raise self.error("Expected , or } after struct field")

        return fields, from_index

    def parse_field(self, attributes: list[ir.Attribute]) -> ir.FieldSpec:
        """Parse `name: type` for one struct field."""
        token = self.current_token()
        if token.type in (TokenType.RBRACE, TokenType.COMMA, TokenType.EOF):
            raise self.error("Expected struct field", token)
        if token.type != TokenType.IDENTIFIER or self.peek_token().type != TokenType.COLON:
            raise self.error("Expected a named field", token)
        if keyword.iskeyword(token.value):
            raise self.error(f"Field name {token.value!r} is a Python keyword", token)
        if token.value in RESERVED_FIELD_NAMES:
            raise self.error(f"Field name {token.value!r} is reserved", token)

        self.advance()
        self.advance()
        field_type = self.parse_field_type()
        return ir.FieldSpec(name=token.value, type=field_type, attributes=attributes)

    def parse_long_description(self) -> ir.LongDescription:
        """
        Parse a parenthesised format string and its arguments.

        Grammar:
            LONG_DESC := "(" STRING ("," EXPR)* ")"
        """
        self.expect(TokenType.LPAREN)
        format_template = self.expect(TokenType.STRING, "Expected a format string").value

        args: list[str] = []
        while True:
            if self.match(TokenType.RPAREN):
                self.advance()
                break
            self.expect(TokenType.COMMA, "Expected comma")
            args.append(self.parse_expression(self))

        return ir.LongDescription(format_template=format_template, args=args)
