"""
Display text generation.

`str()` of a generated error is the short description, the separator
`". "`, and the filled long description when there is one. The long
description's arguments are evaluated with the variant's fields bound
by name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from errordef.core.strings import quote_string
from errordef.core.template import substitute

from .utils import class_pattern, field_names, match_method

if TYPE_CHECKING:
    from errordef.core.ir import VariantSpec

SEPARATOR = ". "


def display_expression(variant: VariantSpec) -> str:
    """
    Source of the expression producing the display text of `variant`.

    Examples:
        "Unit-like variant. "
        "Variant with args. " + "flim is {}.".format(flim)
    """
    head = quote_string(variant.short_description + SEPARATOR)
    long = variant.long_description
    if long is None:
        return head
    tail = substitute(
        "{}.format({})",
        [quote_string(long.format_template), ", ".join(long.args)],
    )
    return substitute("{} + {}", [head, tail])


def generate_display(variants: list[VariantSpec]) -> str:
    """Generate the `__str__` method of the base class."""
    cases = []
    for variant in variants:
        bind = field_names(variant) if variant.long_description else []
        cases.append((class_pattern(variant, bind), display_expression(variant)))

    return match_method(
        "def __str__(self) -> str:",
        cases,
        "Exception.__str__(self)",
    )
