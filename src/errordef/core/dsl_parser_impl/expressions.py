"""
Default expression parser for long-description arguments.

Format arguments are opaque to the compiler: any balanced token run up to
a top-level `,` or the closing `)` is accepted and re-serialized to
canonical source. Callers that need a stricter grammar pass their own
callback to `parse_variants`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..lexer import TokenType

if TYPE_CHECKING:
    from .base import ParserProtocol


def parse_expression(parser: ParserProtocol) -> str:
    """
    Parse one format argument and return its source text.

    Raises:
        ParseError: If no expression starts at the current token
    """
    start = parser.current_token()
    source = parser.parse_balanced_run(TokenType.COMMA)
    if not source:
        raise parser.error("Expected expression", start)
    return source
