"""Tests for the variant list parser."""

from pathlib import Path

import pytest

from errordef.core import ir
from errordef.core.dsl_parser_impl import (
    Parser,
    ParserProtocol,
    parse_variants,
    parse_variants_text,
)
from errordef.core.errors import ParseError
from errordef.core.lexer import TokenType, tokenize

FILE = Path("test.errdef")


def parse_error(text: str) -> ParseError:
    with pytest.raises(ParseError) as exc_info:
        parse_variants_text(text, FILE)
    return exc_info.value


class TestUnitVariants:
    def test_empty_input(self) -> None:
        assert parse_variants_text("") == []

    def test_unit_variant(self) -> None:
        (variant,) = parse_variants_text('AVariant => "Unit-like variant"')
        assert variant.name == "AVariant"
        assert variant.kind == ir.VariantKind.UNIT
        assert variant.fields == []
        assert variant.from_index is None
        assert variant.short_description == "Unit-like variant"
        assert variant.long_description is None

    def test_trailing_comma(self) -> None:
        variants = parse_variants_text('A => "a",\nB => "b",')
        assert [v.name for v in variants] == ["A", "B"]

    def test_order_preserved(self) -> None:
        text = ", ".join(f'V{i} => "v{i}"' for i in range(10))
        assert [v.name for v in parse_variants_text(text)] == [f"V{i}" for i in range(10)]

    def test_long_description_without_args(self) -> None:
        (variant,) = parse_variants_text(
            'AVariantWithALongDescription => "Unit-like variant" ("A more verbose description")'
        )
        assert variant.long_description == ir.LongDescription(
            format_template="A more verbose description", args=[]
        )

    def test_empty_braces_make_a_unit_variant(self) -> None:
        (variant,) = parse_variants_text('A {} => "a"')
        assert variant.kind == ir.VariantKind.UNIT
        assert variant.fields == []

    def test_duplicate_names_accepted(self) -> None:
        variants = parse_variants_text('A => "first", A => "second"')
        assert [v.short_description for v in variants] == ["first", "second"]


class TestStructVariants:
    def test_fields_in_order(self) -> None:
        (variant,) = parse_variants_text(
            """
            AVariantWithArgs {
                flim: int,
                flam: int,
            } => "Variant with args" ("flim is {}. flam is {}.", flim, flam)
            """
        )
        assert variant.kind == ir.VariantKind.STRUCT
        assert [(f.name, f.type) for f in variant.fields] == [("flim", "int"), ("flam", "int")]
        assert variant.long_description.args == ["flim", "flam"]

    def test_last_field_without_comma(self) -> None:
        (variant,) = parse_variants_text('A { x: int, y: str } => "a"')
        assert [f.name for f in variant.fields] == ["x", "y"]

    def test_from_marker(self) -> None:
        (variant,) = parse_variants_text(
            """
            AVariantWithACause {
                blah: bool,
                #[from] cause: OSError,
            } => "Variant with a cause" ("caused by {}", cause)
            """
        )
        assert variant.from_index == 1
        assert variant.from_field.name == "cause"
        assert variant.fields[1].attributes == []
        assert not variant.is_convertible

    def test_single_from_field_is_convertible(self) -> None:
        (variant,) = parse_variants_text('J { #[from] blah: OSError } => "j"')
        assert variant.from_index == 0
        assert variant.is_convertible

    def test_complex_types(self) -> None:
        (variant,) = parse_variants_text(
            'A { x: dict[str, list[int]], y: Callable[[int], None] | None } => "a"'
        )
        assert [f.type for f in variant.fields] == [
            "dict[str,list[int]]",
            "Callable[[int],None]|None",
        ]

    def test_other_attributes_kept(self) -> None:
        (variant,) = parse_variants_text(
            'A { #[deprecated("old")] #[from] x: OSError, #[doc = "text"] y: int } => "a"'
        )
        assert variant.from_index == 0
        assert variant.fields[0].attributes == [
            ir.Attribute(name="deprecated", arguments='("old")')
        ]
        assert variant.fields[1].attributes == [ir.Attribute(name="doc", arguments=' = "text"')]

    def test_from_with_arguments_is_not_a_marker(self) -> None:
        (variant,) = parse_variants_text('A { #[from(x)] y: int } => "a"')
        assert variant.from_index is None
        assert variant.fields[0].attributes == [ir.Attribute(name="from", arguments="(x)")]

    def test_expressions_rendered(self) -> None:
        (variant,) = parse_variants_text('A { x: int } => "a" ("{} {}", self.x, f(x, y))')
        assert variant.long_description.args == ["self.x", "f(x,y)"]


class TestParseErrors:
    """Every malformed input fails with one ParseError at the offending token."""

    @pytest.mark.parametrize(
        ("text", "message", "column"),
        [
            ('"x" => "a"', "Expected variant name", 1),
            ('A "a"', "Expected => or struct definition", 3),
            ('A { x: int } "a"', "Expected =>", 14),
            ('A { #[from] #[from] x: E } => "a"', "Field marked #[from] twice", 13),
            ('A { #[from] x: E, #[from] y: E } => "a"', "Multiple fields marked #[from]", 19),
            ('A { int } => "a"', "Expected a named field", 5),
            ('A { x: int, , } => "a"', "Expected struct field", 13),
            ('A { #[from] } => "a"', "Expected struct field", 13),
            ('A { x: int] } => "a"', "Expected , or } after struct field", 11),
            ('A { x: } => "a"', "Expected a field type", 8),
            ("A => b", "Expected a string literal", 6),
            ('A => "a" (b)', "Expected a format string", 11),
            ('A => "a" ("x" b)', "Expected comma", 15),
            ('A => "a" B => "b"', "Expected comma", 10),
            ('A => "a" ("x", )', "Expected expression", 16),
            ('A => "a" ("x", f(]', "Expected )", 18),
        ],
    )
    def test_error_message_and_position(self, text: str, message: str, column: int) -> None:
        error = parse_error(text)
        assert error.message == message
        assert error.context.file == FILE
        assert (error.context.line, error.context.column) == (1, column)

    def test_end_of_input_inside_struct(self) -> None:
        assert parse_error("A {").message == "Expected struct field"

    def test_end_of_input_inside_long_description(self) -> None:
        assert parse_error('A => "a" ("x"').message == "Expected comma"

    def test_error_on_later_line(self) -> None:
        error = parse_error('A => "a",\nB {\n  x: int\n} "b"')
        assert error.message == "Expected =>"
        assert (error.context.line, error.context.column) == (4, 3)

    @pytest.mark.parametrize(
        ("text", "message", "column"),
        [
            ('None => "a"', "Variant name 'None' is a Python keyword", 1),
            ('A { class: int } => "a"', "Field name 'class' is a Python keyword", 5),
            ('A { x: int, self: int } => "a"', "Field name 'self' is reserved", 13),
            ('A { args: int } => "a"', "Field name 'args' is reserved", 5),
            ('A { get_cause: int } => "a"', "Field name 'get_cause' is reserved", 5),
        ],
    )
    def test_names_unusable_in_generated_code(self, text: str, message: str, column: int) -> None:
        error = parse_error(text)
        assert error.message == message
        assert (error.context.line, error.context.column) == (1, column)

    def test_no_partial_result(self) -> None:
        with pytest.raises(ParseError):
            parse_variants_text('Good => "fine", Bad "broken"')


class TestTokenStreams:
    def test_missing_eof_appended(self) -> None:
        tokens = tokenize('A => "a"', FILE)[:-1]
        (variant,) = parse_variants(tokens, FILE)
        assert variant.name == "A"

    def test_parser_class(self) -> None:
        parser = Parser(tokenize('A => "a", B => "b"', FILE), FILE)
        assert isinstance(parser, ParserProtocol)
        assert [v.name for v in parser.parse_variants()] == ["A", "B"]

    def test_custom_expression_parser(self) -> None:
        def field_reference(parser: ParserProtocol) -> str:
            token = parser.expect(TokenType.IDENTIFIER, "Expected a field name")
            return f"self.{token.value}"

        tokens = tokenize('A { x: int } => "a" ("{}", x)', FILE)
        (variant,) = parse_variants(tokens, FILE, field_reference)
        assert variant.long_description.args == ["self.x"]

    def test_custom_expression_parser_error(self) -> None:
        def field_reference(parser: ParserProtocol) -> str:
            return parser.expect(TokenType.IDENTIFIER, "Expected a field name").value

        tokens = tokenize('A { x: int } => "a" ("{}", 1)', FILE)
        with pytest.raises(ParseError) as exc_info:
            parse_variants(tokens, FILE, field_reference)
        assert exc_info.value.message == "Expected a field name"
