"""
Shared helpers for the code generators.

Every renderer method of the generated base class is a `match self:`
statement with one class pattern per variant. These helpers build the
patterns and the method skeleton.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from errordef.core.template import substitute

if TYPE_CHECKING:
    from errordef.core.ir import VariantSpec

INDENT = "    "


def indent(lines: list[str], level: int = 1) -> list[str]:
    """Indent non-empty lines by `level` steps."""
    prefix = INDENT * level
    return [prefix + line if line else line for line in lines]


def class_pattern(variant: VariantSpec, bind: list[str] | None = None) -> str:
    """
    Class pattern matching `variant` and binding the named fields.

    Examples:
        AVariant()
        AVariantWithArgs(flim=flim, flam=flam)
    """
    bindings = ", ".join(substitute("{}={}", [name, name]) for name in bind or [])
    return substitute("{}({})", [variant.name, bindings])


def field_names(variant: VariantSpec) -> list[str]:
    return [f.name for f in variant.fields]


def match_method(
    signature: str,
    cases: list[tuple[str, str]],
    fallback: str,
) -> str:
    """
    Build a method that dispatches on the variant.

    Args:
        signature: The `def` line without indentation
        cases: (class pattern, return expression) pairs, in variant order
        fallback: Return expression when no case matches (plain base instance)

    Returns:
        Method source indented for a class body
    """
    body: list[str] = []
    if cases:
        body.append("match self:")
        for pattern, expression in cases:
            body.append(substitute("{}case {}:", [INDENT, pattern]))
            body.append(substitute("{}return {}", [INDENT * 2, expression]))
    body.append(substitute("return {}", [fallback]))

    lines = [signature, *indent(body)]
    return "\n".join(indent(lines))
