"""
Exceptions raised by errordef, and the source positions they carry.
"""

from dataclasses import dataclass, replace
from pathlib import Path

# Lines of source shown on each side of the offending line
SNIPPET_RADIUS = 2


@dataclass(frozen=True)
class ErrorContext:
    """
    Where in a definition file an error was found.

    Attributes:
        file: Definition file
        line: 1-indexed line of the offending token
        column: 1-indexed column of the offending token
        snippet: Source lines around `line`, starting SNIPPET_RADIUS lines
            before it (fewer at the top of the file)
        definition: Name of the `error_def` block being compiled, if known
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None
    definition: str | None = None

    @property
    def location(self) -> str:
        where = f"{self.file}:{self.line}:{self.column}"
        if self.definition:
            return f"{where} in error_def {self.definition}"
        return where

    def format(self) -> str:
        """
        Render the location, followed by the numbered snippet when present.

        Example:
            errors.errdef:6:18 in error_def Broken
               5 | error_def Broken {
               6 |     B { x: int } "b",
                                    ^^^
        """
        if not self.snippet:
            return self.location
        return f"{self.location}\n{render_snippet(self.snippet, self.line, self.column)}"


def render_snippet(snippet: str, line: int, column: int) -> str:
    """Number the snippet's lines and put a marker under `column` of `line`."""
    first = max(1, line - SNIPPET_RADIUS)
    out: list[str] = []
    for number, text in enumerate(snippet.split("\n"), start=first):
        gutter = f"{number:4d} | "
        out.append(gutter + text)
        if number == line:
            out.append(" " * (len(gutter) + column - 1) + "^^^")
    return "\n".join(out)


def extract_snippet(text: str, line: int, radius: int = SNIPPET_RADIUS) -> str:
    """The lines of `text` within `radius` of `line` (1-indexed)."""
    lines = text.split("\n")
    first = max(1, line - radius)
    last = min(len(lines), line + radius)
    return "\n".join(lines[first - 1 : last])


class ErrordefError(Exception):
    """
    Root of every errordef exception.

    `str()` gives the rendered context (if any) on top of the message.
    """

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(f"{context.format()}\n{message}" if context else message)


class ParseError(ErrordefError):
    """
    A definition cannot be compiled.

    Raised for lexical errors (unterminated strings, stray characters),
    syntax errors (a missing `=>` or comma, a description that is not a
    string literal) and #[from] misuse. Compilation stops at the first one.
    """


class TemplateError(ErrordefError):
    """
    A generator filled a template with the wrong number of arguments.

    User input never reaches templates unescaped, so this is a bug in a
    generator rather than in a definition.
    """


def make_parse_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    snippet: str | None = None,
) -> ParseError:
    """ParseError located at `file:line:column`."""
    return ParseError(message, ErrorContext(file, line, column, snippet))


def with_source_context(
    error: ParseError,
    text: str,
    definition: str | None = None,
) -> ParseError:
    """
    Copy `error` with a snippet cut from `text` and the enclosing definition's name.

    The parser only knows token positions; whoever holds the file text
    calls this before reporting.
    """
    if error.context is None:
        return error
    context = replace(
        error.context,
        snippet=extract_snippet(text, error.context.line),
        definition=definition,
    )
    return ParseError(error.message, context)
