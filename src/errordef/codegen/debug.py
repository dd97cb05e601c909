"""
Debug text generation.

`repr()` of a generated error is a structural dump followed by the
display text in a comment:

    AVariant /* Unit-like variant.  */
    AVariantWithArgs { flim: 123, flam: 456 } /* Variant with args. ... */
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from errordef.core.strings import quote_string
from errordef.core.template import substitute

from .utils import class_pattern, field_names, match_method

if TYPE_CHECKING:
    from errordef.core.ir import VariantSpec

# Runtime str.format strings, so braces are doubled once for that
# and once more for substitute().
UNIT_FORMAT = "{} /* {{}} */"
STRUCT_FORMAT = "{} {{{{ {} }}}} /* {{}} */"
FIELD_FORMAT = "{}: {{!r}}"


def debug_format(variant: VariantSpec) -> str:
    """
    The `str.format` string rendering `variant`.

    Examples:
        "AVariant /* {} */"
        "AVariantWithArgs {{ flim: {!r}, flam: {!r} }} /* {} */"
    """
    if not variant.fields:
        return substitute(UNIT_FORMAT, [variant.name])
    fields = ", ".join(substitute(FIELD_FORMAT, [name]) for name in field_names(variant))
    return substitute(STRUCT_FORMAT, [variant.name, fields])


def generate_debug(variants: list[VariantSpec]) -> str:
    """Generate the `__repr__` method of the base class."""
    cases = []
    for variant in variants:
        names = field_names(variant)
        args = ", ".join([*names, "self"])
        expression = substitute("{}.format({})", [quote_string(debug_format(variant)), args])
        cases.append((class_pattern(variant, names), expression))

    return match_method(
        "def __repr__(self) -> str:",
        cases,
        "Exception.__repr__(self)",
    )
