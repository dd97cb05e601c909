"""
Variant types for errordef IR.

DSL Syntax:

    error_def ExampleError {
        AVariant => "Unit-like variant",
        AVariantWithArgs {
            flim: int,
            flam: int,
        } => "Variant with args" ("flim is {}. flam is {}.", flim, flam),
        AVariantWithACause {
            #[from] cause: OSError,
        } => "Variant with a cause",
    }
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VariantKind(str, Enum):
    """Shape of a variant."""

    UNIT = "unit"
    STRUCT = "struct"


class Attribute(BaseModel):
    """
    A field attribute such as `#[from]` or `#[deprecated("use x")]`.

    `arguments` holds the canonical source of whatever follows the name
    (`(...)` or `= value`), or None for a bare word.
    """

    name: str
    arguments: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_word(self) -> bool:
        return self.arguments is None

    def to_source(self) -> str:
        if self.arguments is None:
            return f"#[{self.name}]"
        return f"#[{self.name}{self.arguments}]"


class FieldSpec(BaseModel):
    """
    A named field of a struct variant.

    Attributes:
        name: Field identifier
        type: Type source text, copied verbatim into generated annotations
        attributes: Field attributes, with the #[from] marker removed
    """

    name: str
    type: str
    attributes: list[Attribute] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class LongDescription(BaseModel):
    """A format template and the expressions that fill its `{}` placeholders."""

    format_template: str
    args: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class VariantSpec(BaseModel):
    """
    One named case of a generated error type.

    Attributes:
        name: Variant identifier
        kind: Unit (no fields) or struct (named fields)
        fields: Fields in declaration order
        from_index: Index into `fields` of the #[from] field, if any
        short_description: Fixed description, also the start of the display text
        long_description: Optional templated continuation of the display text
    """

    name: str
    kind: VariantKind = VariantKind.UNIT
    fields: list[FieldSpec] = Field(default_factory=list)
    from_index: int | None = None
    short_description: str
    long_description: LongDescription | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_shape(self) -> VariantSpec:
        if self.kind == VariantKind.UNIT and self.fields:
            raise ValueError(f"Unit variant {self.name} cannot have fields")
        if self.from_index is not None and not 0 <= self.from_index < len(self.fields):
            raise ValueError(
                f"from_index {self.from_index} out of range for variant {self.name}"
            )
        return self

    @property
    def doc(self) -> str:
        """One-line documentation for the emitted variant class."""
        return f"{self.short_description}."

    @property
    def from_field(self) -> FieldSpec | None:
        if self.from_index is None:
            return None
        return self.fields[self.from_index]

    @property
    def is_convertible(self) -> bool:
        """True when the only field is the #[from] field."""
        return len(self.fields) == 1 and self.from_index == 0


class ErrorDefinition(BaseModel):
    """An `error_def` block: the type name and its variants in order."""

    name: str
    variants: list[VariantSpec] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
