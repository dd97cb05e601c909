"""
String utility functions for errordef.

Provides the string transformations shared by the parser, the DSL
formatter and the code generator.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lexer import Token

_NAMED_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def quote_string(text: str) -> str:
    """
    Quote `text` as a double-quoted literal.

    The result is valid both as a DSL string and as a Python string
    literal, and the DSL lexer reads it back to exactly `text`.

    Examples:
        >>> quote_string('say "hi"')
        '"say \\\\"hi\\\\""'
        >>> quote_string("tab\\there")
        '"tab\\\\there"'
    """
    out = ['"']
    for ch in text:
        if ch in _NAMED_ESCAPES:
            out.append(_NAMED_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def snake_case(name: str) -> str:
    """
    Convert PascalCase to snake_case.

    Examples:
        >>> snake_case("ExampleError")
        'example_error'
        >>> snake_case("HTTPError")
        'http_error'
    """
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    return name.lower()


def _is_word(token: Token) -> bool:
    from .lexer import TokenType

    return token.type in (
        TokenType.IDENTIFIER,
        TokenType.NUMBER,
        TokenType.STRING,
        TokenType.PREFIXED_STRING,
        TokenType.ERROR_DEF,
    )


def token_source(token: Token) -> str:
    """Source text of a single token, re-quoting strings."""
    from .lexer import TokenType

    if token.type == TokenType.STRING:
        return quote_string(token.value)
    return token.value


def render_tokens(tokens: Iterable[Token]) -> str:
    """
    Join a token run back into canonical source text.

    Adjacent word-like tokens (identifiers, numbers, strings) are separated
    by one space; everything else is written without whitespace, so
    `list[ int ]` and `list[int]` both render as `list[int]`.
    """
    parts: list[str] = []
    previous: Token | None = None
    for token in tokens:
        if previous is not None and _is_word(previous) and _is_word(token):
            parts.append(" ")
        parts.append(token_source(token))
        previous = token
    return "".join(parts)
