"""
Positional template substitution.

Templates use `{}` for positional placeholders and `{{` / `}}` for literal
braces, the same rules as auto-numbered `str.format` fields. The code
generator builds every emitted line through `substitute` so that each
artifact can be checked against literal expected strings.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .errors import TemplateError


def _scan(template: str) -> list[str | None]:
    """
    Split a template into literal chunks and placeholders (None).

    Raises:
        TemplateError: On a lone `}` or a `{` that is not `{}` or `{{`
    """
    parts: list[str | None] = []
    literal: list[str] = []
    i = 0
    while i < len(template):
        ch = template[i]
        nxt = template[i + 1] if i + 1 < len(template) else ""
        if ch == "{" and nxt == "{":
            literal.append("{")
            i += 2
        elif ch == "}" and nxt == "}":
            literal.append("}")
            i += 2
        elif ch == "{" and nxt == "}":
            parts.append("".join(literal))
            literal = []
            parts.append(None)
            i += 2
        elif ch in "{}":
            raise TemplateError(f"Unmatched {ch!r} at offset {i} in template {template!r}")
        else:
            literal.append(ch)
            i += 1
    parts.append("".join(literal))
    return parts


def substitute(template: str, args: Sequence[Any]) -> str:
    """
    Fill the `{}` placeholders of `template` with `args`, in order.

    Arguments are converted with `str()` and inserted verbatim; they are
    not scanned for further placeholders.

    Raises:
        TemplateError: If the placeholder and argument counts differ

    Examples:
        >>> substitute("{} {{ {} }}", ["Name", "x: 1"])
        'Name { x: 1 }'
    """
    parts = _scan(template)
    expected = sum(1 for part in parts if part is None)
    if expected != len(args):
        raise TemplateError(
            f"Template {template!r} has {expected} placeholders, got {len(args)} arguments"
        )

    out: list[str] = []
    remaining = iter(args)
    for part in parts:
        out.append(str(next(remaining)) if part is None else part)
    return "".join(out)
