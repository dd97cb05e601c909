"""
Type shape generation.

Each variant becomes a subclass of the generated base class. Struct
variants store their fields as attributes and pass them on as the
exception's args, so generated errors pickle and compare like ordinary
exceptions.
"""

from __future__ import annotations

from errordef.core import ir
from errordef.core.strings import quote_string
from errordef.core.template import substitute

from .cause import conversion_for, generate_cause_link, generate_conversion
from .utils import INDENT, field_names, indent


def _docstring(text: str) -> str:
    if '"' in text or "\\" in text or not text.isprintable():
        return quote_string(text)
    return substitute('"""{}"""', [text])


def _match_args(variant: ir.VariantSpec) -> str:
    names = [quote_string(name) for name in field_names(variant)]
    if len(names) == 1:
        return substitute("__match_args__ = ({},)", names)
    return substitute("__match_args__ = ({})", [", ".join(names)])


def _annotations(variant: ir.VariantSpec) -> list[str]:
    lines = []
    for field in variant.fields:
        for attribute in field.attributes:
            lines.append(substitute("# {}", [attribute.to_source()]))
        lines.append(substitute("{}: {}", [field.name, field.type]))
    return lines


def _init(variant: ir.VariantSpec) -> list[str]:
    params = ", ".join(substitute("{}: {}", [f.name, f.type]) for f in variant.fields)
    body = [substitute("super().__init__({})", [", ".join(field_names(variant))])]
    body.extend(substitute("self.{} = {}", [name, name]) for name in field_names(variant))
    body.extend(generate_cause_link(variant))
    return [
        substitute("def __init__(self, {}) -> None:", [params]),
        *indent(body),
    ]


def generate_variant_class(variant: ir.VariantSpec, type_name: str) -> str:
    """Generate the subclass for one variant, with its `from_()` constructor if it gets one."""
    lines = [
        substitute("class {}({}):", [variant.name, type_name]),
        INDENT + _docstring(variant.doc),
        "",
        INDENT + _match_args(variant),
    ]
    if variant.fields:
        lines.append("")
        lines.extend(indent(_annotations(variant)))
        lines.append("")
        lines.extend(indent(_init(variant)))

    source = "\n".join(lines)
    conversion = conversion_for(variant)
    if conversion is not None:
        source += "\n\n" + generate_conversion(conversion)
    return source


def generate_type_shape(definition: ir.ErrorDefinition) -> str:
    """
    Generate every variant class and the base class's `VARIANTS` tuple.

    The base class itself is written by `render_module`, which places the
    renderer methods in its body.
    """
    classes = [generate_variant_class(v, definition.name) for v in definition.variants]
    names = [v.name for v in definition.variants]
    if len(names) == 1:
        variants_tuple = substitute("({},)", names)
    else:
        variants_tuple = substitute("({})", [", ".join(names)])
    classes.append(substitute("{}.VARIANTS = {}", [definition.name, variants_tuple]))
    return "\n\n\n".join(classes)
