"""
errordef Internal Representation (IR).

The parser produces these models and the code generator consumes them.
All models are frozen pydantic models.
"""

from .artifacts import Artifacts, ConversionSpec
from .variants import (
    Attribute,
    ErrorDefinition,
    FieldSpec,
    LongDescription,
    VariantKind,
    VariantSpec,
)

__all__ = [
    "Artifacts",
    "Attribute",
    "ConversionSpec",
    "ErrorDefinition",
    "FieldSpec",
    "LongDescription",
    "VariantKind",
    "VariantSpec",
]
