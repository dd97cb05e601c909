"""
DSL formatter.

Writes parsed variants back out as canonical DSL source. Parsing the
output again yields an equal model, which is what `errordef fmt` relies on.
"""

from __future__ import annotations

from . import ir
from .dsl_parser_impl.attributes import FROM_MARKER
from .strings import quote_string

INDENT = "    "


def format_variant(variant: ir.VariantSpec) -> str:
    """Format one variant without its trailing comma."""
    lines: list[str] = []
    if variant.fields:
        lines.append(f"{variant.name} {{")
        for index, field in enumerate(variant.fields):
            attributes = [a.to_source() for a in field.attributes]
            if index == variant.from_index:
                attributes.insert(0, f"#[{FROM_MARKER}]")
            prefix = " ".join(attributes)
            declaration = f"{field.name}: {field.type},"
            lines.append(INDENT + (f"{prefix} {declaration}" if prefix else declaration))
        head = "} => "
    else:
        head = f"{variant.name} => "

    tail = quote_string(variant.short_description)
    long = variant.long_description
    if long is not None:
        args = "".join(f", {arg}" for arg in long.args)
        tail += f" ({quote_string(long.format_template)}{args})"

    lines.append(head + tail)
    return "\n".join(lines)


def format_variants(variants: list[ir.VariantSpec]) -> str:
    """Format a variant list as the body of an `error_def` block."""
    return "".join(f"{format_variant(v)},\n" for v in variants)


def format_definition(definition: ir.ErrorDefinition) -> str:
    """Format a complete `error_def` block."""
    body = format_variants(definition.variants)
    # Split on "\n" only: descriptions may hold other line-breaking characters
    lines = body.split("\n")[:-1]
    indented = "".join(f"{INDENT}{line}\n" for line in lines)
    return f"error_def {definition.name} {{\n{indented}}}\n"
