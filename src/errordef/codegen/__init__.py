"""
Python code generation for error definitions.

Generates, from a validated ErrorDefinition:
- shape.py: one subclass per variant (the tagged union's cases)
- debug.py: `__repr__`, a structural dump plus the display text
- display.py: `__str__`, the human-readable message
- description.py: `get_description()`, the fixed short description
- cause.py: `get_cause()` and the `from_()` conversion constructors

Generation is pure: it never fails for a definition that parsed.
"""

from __future__ import annotations

import logging

from errordef.core import ir
from errordef.core.strings import quote_string
from errordef.core.template import substitute

from .cause import conversions_for, generate_cause
from .debug import generate_debug
from .description import generate_description
from .display import generate_display
from .shape import generate_type_shape
from .utils import INDENT

logger = logging.getLogger(__name__)

DEFAULT_HEADER = "Generated by errordef - DO NOT EDIT."


def generate(definition: ir.ErrorDefinition, header: str = DEFAULT_HEADER) -> ir.Artifacts:
    """
    Generate all artifacts for one error definition.

    Args:
        definition: Parsed definition
        header: Line placed in the generated module's docstring

    Returns:
        Artifacts with each fragment and the assembled module
    """
    variants = definition.variants
    artifacts = ir.Artifacts(
        type_name=definition.name,
        type_shape=generate_type_shape(definition),
        debug=generate_debug(variants),
        display=generate_display(variants),
        description=generate_description(variants),
        cause=generate_cause(variants),
        conversions=conversions_for(variants),
    )
    module = render_module(artifacts, [v.name for v in variants], header)
    logger.debug(
        "Generated %s: %d variants, %d conversions",
        definition.name,
        len(variants),
        len(artifacts.conversions),
    )
    return artifacts.model_copy(update={"module": module})


def render_module(
    artifacts: ir.Artifacts,
    variant_names: list[str],
    header: str = DEFAULT_HEADER,
) -> str:
    """
    Assemble the artifacts into one importable module.

    The base class holds the four renderer methods; the variant classes
    follow it.
    """
    name = artifacts.type_name
    exports = list(dict.fromkeys([name, *variant_names]))

    lines = [
        '"""',
        substitute("{} error type.", [name]),
        "",
        header,
        '"""',
        "",
        "from __future__ import annotations",
        "",
        "",
        substitute("class {}(Exception):", [name]),
        substitute('{}"""Base class of the {} variants."""', [INDENT, name]),
        "",
        substitute("{}VARIANTS: tuple[type[{}], ...] = ()", [INDENT, name]),
        "",
        artifacts.debug,
        "",
        artifacts.display,
        "",
        artifacts.description,
        "",
        artifacts.cause,
        "",
        "",
        artifacts.type_shape,
        "",
        "",
        "__all__ = [",
        *(substitute("{}{},", [INDENT, quote_string(export)]) for export in exports),
        "]",
        "",
    ]
    return "\n".join(lines)


__all__ = [
    "DEFAULT_HEADER",
    "generate",
    "render_module",
]
