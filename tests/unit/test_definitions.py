"""Tests for definition files and file-level compilation."""

from pathlib import Path

import pytest

from errordef.compiler import compile_file, compile_source
from errordef.core.definitions import load_definitions, split_definitions
from errordef.core.errors import ErrorContext, ParseError, extract_snippet
from errordef.core.lexer import TokenType, tokenize

FILE = Path("errors.errdef")

TWO_BLOCKS = """\
error_def IoError {
    NotFound { path: str } => "Not found" ("{}", path),
}

error_def ConfigError {
    Missing => "Missing value",
}
"""

BROKEN_MIDDLE = """\
error_def First {
    A => "a",
}

error_def Broken {
    B { x: int } "b",
}

error_def Last {
    C => "c",
}
"""


class TestSplitDefinitions:
    def test_blocks_in_order(self) -> None:
        blocks = split_definitions(tokenize(TWO_BLOCKS, FILE), FILE)
        assert [b.name for b in blocks] == ["IoError", "ConfigError"]

    def test_body_ends_at_closing_brace(self) -> None:
        (block, _) = split_definitions(tokenize(TWO_BLOCKS, FILE), FILE)
        assert block.body[0].value == "NotFound"
        eof = block.body[-1]
        assert eof.type == TokenType.EOF
        assert (eof.line, eof.column) == (3, 1)

    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("stray", "Expected error_def"),
            ("error_def {", "Expected error type name"),
            ("error_def E", "Expected {"),
            ('error_def E { A => "a",', "Expected }"),
            ("error_def E { A => f(] }", "Expected )"),
        ],
    )
    def test_file_level_errors(self, text: str, message: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            split_definitions(tokenize(text, FILE), FILE)
        assert exc_info.value.message == message

    def test_empty_file(self) -> None:
        assert split_definitions(tokenize("# nothing here\n", FILE), FILE) == []


class TestLoadDefinitions:
    def test_loads_every_block(self) -> None:
        definitions = load_definitions(TWO_BLOCKS, FILE)
        assert [d.name for d in definitions] == ["IoError", "ConfigError"]
        assert definitions[0].variants[0].long_description.args == ["path"]

    def test_error_carries_snippet_and_definition(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            load_definitions(BROKEN_MIDDLE, FILE)
        error = exc_info.value
        assert error.message == "Expected =>"
        assert error.context.definition == "Broken"
        assert (error.context.line, error.context.column) == (6, 18)
        assert 'B { x: int } "b",' in error.context.snippet
        text = str(error)
        assert text.startswith("errors.errdef:6:18 in error_def Broken\n")
        assert "   6 |     B { x: int } \"b\"," in text
        assert text.endswith("Expected =>")

    def test_file_level_error_has_snippet(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            load_definitions("error_def E {\n  A => \"a\",\n", FILE)
        assert exc_info.value.context.definition is None
        assert exc_info.value.context.snippet is not None

    def test_lexer_error_has_snippet(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            load_definitions('error_def E {\n  A => "a\n}', FILE)
        assert exc_info.value.message == "Unterminated string literal"
        assert exc_info.value.context.snippet is not None


class TestErrorContext:
    def test_marker_under_column(self) -> None:
        context = ErrorContext(file=FILE, line=2, column=5, snippet="first\nsecond\nthird")
        assert context.format() == (
            "errors.errdef:2:5\n"
            "   1 | first\n"
            "   2 | second\n"
            "           ^^^\n"
            "   3 | third"
        )

    def test_extract_snippet(self) -> None:
        text = "\n".join(f"line {i}" for i in range(1, 11))
        assert extract_snippet(text, 5) == "line 3\nline 4\nline 5\nline 6\nline 7"
        assert extract_snippet(text, 1) == "line 1\nline 2\nline 3"
        assert extract_snippet(text, 10) == "line 8\nline 9\nline 10"


class TestCompileSource:
    def test_one_artifact_per_block(self) -> None:
        artifacts = compile_source(TWO_BLOCKS, FILE)
        assert [a.type_name for a in artifacts] == ["IoError", "ConfigError"]

    def test_fail_fast(self) -> None:
        with pytest.raises(ParseError):
            compile_source(BROKEN_MIDDLE, FILE)


class TestCompileFile:
    def test_failures_isolated_per_block(self, tmp_path: Path) -> None:
        path = tmp_path / "errors.errdef"
        path.write_text(BROKEN_MIDDLE, encoding="utf-8")

        results = compile_file(path)

        assert [r.name for r in results] == ["First", "Broken", "Last"]
        assert [r.success for r in results] == [True, False, True]
        assert results[1].artifacts is None
        assert results[1].error.message == "Expected =>"
        assert results[1].error.context.definition == "Broken"
        assert results[2].artifacts.type_name == "Last"

    def test_file_level_error_raised(self, tmp_path: Path) -> None:
        path = tmp_path / "errors.errdef"
        path.write_text("error_def {", encoding="utf-8")
        with pytest.raises(ParseError) as exc_info:
            compile_file(path)
        assert exc_info.value.context.file == path

    def test_header(self, example_path: Path) -> None:
        (result,) = compile_file(example_path, header="Project header.")
        assert "Project header." in result.artifacts.module
