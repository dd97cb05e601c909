"""Description accessor generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from errordef.core.strings import quote_string

from .utils import class_pattern, match_method

if TYPE_CHECKING:
    from errordef.core.ir import VariantSpec


def generate_description(variants: list[VariantSpec]) -> str:
    """Generate `get_description()`, returning each variant's short description verbatim."""
    cases = [(class_pattern(v), quote_string(v.short_description)) for v in variants]
    return match_method(
        "def get_description(self) -> str:",
        cases,
        "Exception.__str__(self)",
    )
