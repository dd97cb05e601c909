"""
Generated artifacts for errordef IR.

The generator produces one Python source fragment per artifact. The
fragments are independent: each can be inspected and tested on its own,
and `module` joins them into an importable module.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ConversionSpec(BaseModel):
    """A generated one-argument `from_()` constructor."""

    variant: str
    field: str
    type: str

    model_config = ConfigDict(frozen=True)


class Artifacts(BaseModel):
    """
    Everything generated for one error definition.

    Attributes:
        type_name: Name of the generated base class
        type_shape: Base class and one subclass per variant
        debug: `__repr__` method source
        display: `__str__` method source
        description: `get_description()` method source
        cause: `get_cause()` method source
        conversions: Variants that received a `from_()` constructor
        module: All of the above assembled into one module
    """

    type_name: str
    type_shape: str
    debug: str
    display: str
    description: str
    cause: str
    conversions: list[ConversionSpec] = Field(default_factory=list)
    module: str = ""

    model_config = ConfigDict(frozen=True)
