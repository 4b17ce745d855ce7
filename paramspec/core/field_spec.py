"""Field Specification: the cross-cutting options every field constructor accepts.

Invariants:
    - Recognized options: required, description, default, example, format
    - Unknown options are a ConstructionError, raised at declaration time
    - An option left out leaves the validator exactly as it was
    - convert_params never mutates its input validator

Design Decisions:
    - Pydantic model with extra="forbid": typos in declarations fail fast
    - Default presence read from model_fields_set, so falsy defaults (0, "", False)
      are applied like any other default
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from paramspec.core.errors import ConstructionError, ErrorContext
from paramspec.core.validator import Validator


class FieldSpec(BaseModel):
    """Options shared by every field constructor and parameter declarator.

    Use ``model_fields_set`` to tell an explicit ``default=None`` apart from
    no default at all::

        spec = FieldSpec(default=None)
        has_default = "default" in spec.model_fields_set  # True
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    required: bool = True
    description: str | None = None
    default: Any = None
    example: Any = None
    format: str | None = None

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set


FieldOptions = FieldSpec | Mapping[str, Any] | None


def build_field_spec(spec: FieldOptions = None, **params: Any) -> FieldSpec:
    """Merge a FieldSpec or mapping with keyword options (keywords win)."""
    if isinstance(spec, FieldSpec):
        if not params:
            return spec
        data = spec.model_dump(exclude_unset=True)
    else:
        data = dict(spec or {})
    data.update(params)
    try:
        return FieldSpec.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(loc) for loc in e["loc"]) for e in exc.errors()
        )
        raise ConstructionError(
            f"Invalid field options: {fields}",
            ErrorContext(debug_info={"options": sorted(data)}),
        ) from exc


def convert_params(field: Validator, spec: FieldOptions = None, **params: Any) -> Validator:
    """Apply optionality, description, default, example and format to `field`."""
    spec = build_field_spec(spec, **params)

    if not spec.required:
        field = field.optional()

    if spec.description:
        field = field.describe(spec.description)

    if spec.has_default:
        field = field.with_default(spec.default)

    if spec.example is not None:
        field = field.annotate(example=spec.example)

    if spec.format:
        field = field.annotate(format=spec.format)

    return field
