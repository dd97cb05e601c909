"""
Cause accessor and conversion constructor generation.

A struct variant may mark one field `#[from]`. That field is returned by
`get_cause()`, linked as `__cause__` for traceback chaining, and, when it is
the variant's only field, gets a one-argument `from_()` constructor.
"""

from __future__ import annotations

from errordef.core import ir
from errordef.core.template import substitute

from .utils import INDENT, class_pattern, indent, match_method


def generate_cause(variants: list[ir.VariantSpec]) -> str:
    """Generate `get_cause()`; variants without a #[from] field fall through to None."""
    cases = []
    for variant in variants:
        field = variant.from_field
        if field is not None:
            cases.append((class_pattern(variant, [field.name]), field.name))

    return match_method(
        "def get_cause(self) -> BaseException | None:",
        cases,
        "None",
    )


def generate_cause_link(variant: ir.VariantSpec) -> list[str]:
    """
    `__init__` lines linking the #[from] field as `__cause__`.

    Field types are opaque, so the link is only made for exception values.
    """
    field = variant.from_field
    if field is None:
        return []
    return [
        substitute("if isinstance({}, BaseException):", [field.name]),
        substitute("{}self.__cause__ = {}", [INDENT, field.name]),
    ]


def conversion_for(variant: ir.VariantSpec) -> ir.ConversionSpec | None:
    """The `from_()` constructor of `variant`: only when its one field is marked #[from]."""
    if not variant.is_convertible:
        return None
    field = variant.fields[0]
    return ir.ConversionSpec(variant=variant.name, field=field.name, type=field.type)


def conversions_for(variants: list[ir.VariantSpec]) -> list[ir.ConversionSpec]:
    """All generated `from_()` constructors, in variant order."""
    return [c for c in (conversion_for(v) for v in variants) if c is not None]


def generate_conversion(conversion: ir.ConversionSpec) -> str:
    """Generate the `from_()` classmethod for one variant, indented for its class body."""
    lines = [
        "@classmethod",
        substitute("def from_(cls, value: {}) -> {}:", [conversion.type, conversion.variant]),
        substitute('{}"""Build {} from its #[from] field."""', [INDENT, conversion.variant]),
        substitute("{}return cls({}=value)", [INDENT, conversion.field]),
    ]
    return "\n".join(indent(lines))
