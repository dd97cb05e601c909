"""Tests for string utilities."""

import ast
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from errordef.core.lexer import TokenType, tokenize
from errordef.core.strings import quote_string, render_tokens, snake_case

FILE = Path("test.errdef")


def rendered(text: str) -> str:
    tokens = tokenize(text, FILE)
    return render_tokens(t for t in tokens if t.type != TokenType.EOF)


class TestQuoteString:
    def test_plain(self) -> None:
        assert quote_string("Unit-like variant") == '"Unit-like variant"'

    def test_quotes_and_backslashes(self) -> None:
        assert quote_string('say "hi" \\ bye') == '"say \\"hi\\" \\\\ bye"'

    def test_named_escapes(self) -> None:
        assert quote_string("a\nb\tc\rd") == '"a\\nb\\tc\\rd"'

    def test_control_characters(self) -> None:
        assert quote_string("\x01\x7f") == '"\\x01\\x7f"'

    def test_non_ascii_kept(self) -> None:
        assert quote_string("café ✓") == '"café ✓"'

    @given(st.text(max_size=200))
    @settings(max_examples=200)
    def test_lexer_reads_back_the_same_text(self, text: str) -> None:
        """Invariant: a quoted string lexes back to exactly the same text."""
        tokens = tokenize(quote_string(text), FILE)
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == text
        assert tokens[1].type == TokenType.EOF

    @given(st.text(max_size=200))
    @settings(max_examples=200)
    def test_valid_python_literal(self, text: str) -> None:
        """Invariant: a quoted string is a Python literal for the same text."""
        assert ast.literal_eval(quote_string(text)) == text


class TestSnakeCase:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("ExampleError", "example_error"),
            ("HTTPError", "http_error"),
            ("IOError", "io_error"),
            ("Error", "error"),
            ("ParseV2Error", "parse_v2_error"),
            ("already_snake", "already_snake"),
        ],
    )
    def test_conversion(self, name: str, expected: str) -> None:
        assert snake_case(name) == expected


class TestRenderTokens:
    def test_words_separated_by_one_space(self) -> None:
        assert rendered("x  if   y else z") == "x if y else z"

    def test_punctuation_joined(self) -> None:
        assert rendered("list[ int ]") == "list[int]"

    def test_nested_type(self) -> None:
        assert rendered("dict[str, tuple[int, ...]]") == "dict[str,tuple[int,...]]"

    def test_call_and_operators(self) -> None:
        assert rendered("f(x) + 1") == "f(x)+1"

    def test_strings_requoted(self) -> None:
        assert rendered("'it' \"s\"") == '"it" "s"'
