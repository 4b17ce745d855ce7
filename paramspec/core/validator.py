"""Validator: immutable handle on a pydantic-backed validation/coercion pipeline.

Invariants:
    - A Validator is never mutated; every combinator returns a new instance
    - Absence (None) is decided here, before the engine runs: optional fields
      accept it, defaulted fields substitute their default, required fields fail
    - validate() never raises for bad input; failures are returned as data
    - expects_sequence is fixed at declaration time by `kind`, never probed per request

Design Decisions:
    - Frozen dataclass over subclassing pydantic types: the engine stays an
      implementation detail behind validate()/json_schema()
    - TypeAdapter built lazily and cached per instance: declarations are cheap,
      the first request pays the schema build once
    - Documentation metadata travels as Field(json_schema_extra=...) so nested
      arrays and objects document their members without extra plumbing
"""

from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Annotated, Any, Mapping, Optional

from pydantic import Field, TypeAdapter, ValidationError
from pydantic_core import PydanticUndefined

from paramspec.core.errors import ParameterValidationError, format_error_details


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one raw value: a coerced value or structured errors."""

    ok: bool
    value: Any = None
    errors: list[dict] = field(default_factory=list)

    @classmethod
    def success(cls, value: Any) -> "ValidationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, errors: list[dict]) -> "ValidationResult":
        return cls(ok=False, errors=list(errors))

    def unwrap(self, *loc: str) -> Any:
        """Return the value or raise ParameterValidationError (loc prefixes each field)."""
        if not self.ok:
            raise ParameterValidationError(format_error_details(self.errors, loc))
        return self.value


def _missing_error() -> dict:
    return {"type": "missing", "loc": (), "msg": "Field required", "input": None}


@dataclass(frozen=True, eq=False)
class Validator:
    """A field's validation pipeline plus its documentation annotations."""

    annotation: Any
    kind: str
    required: bool = True
    default: Any = PydanticUndefined
    description: str | None = None
    openapi: Mapping[str, Any] = field(default_factory=dict)
    shape: Mapping[str, "Validator"] | None = None

    # ─── Capabilities ────────────────────────────────────────────

    @property
    def has_default(self) -> bool:
        return self.default is not PydanticUndefined

    @property
    def expects_sequence(self) -> bool:
        return self.kind == "array"

    def expects_sequence_at(self, key: str) -> bool:
        """True if this object validator declares a list-valued field `key`."""
        if not self.shape or key not in self.shape:
            return False
        return self.shape[key].expects_sequence

    # ─── Combinators ─────────────────────────────────────────────

    def optional(self) -> "Validator":
        return replace(self, required=False)

    def with_default(self, value: Any) -> "Validator":
        return replace(self, required=False, default=value)

    def describe(self, text: str) -> "Validator":
        return replace(self, description=text)

    def annotate(self, **metadata: Any) -> "Validator":
        return replace(self, openapi={**self.openapi, **metadata})

    def array(self) -> "Validator":
        return Validator(list[self.member_type], kind="array")

    # ─── Engine ──────────────────────────────────────────────────

    def _documented(self, annotation: Any) -> Any:
        return Annotated[
            annotation,
            Field(
                description=self.description,
                json_schema_extra=dict(self.openapi) or None,
            ),
        ]

    @property
    def member_type(self) -> Any:
        """Annotation to use when this validator is nested in an array or object."""
        annotation = self.annotation if self.required else Optional[self.annotation]
        return self._documented(annotation)

    @property
    def member_default(self) -> Any:
        """Default for a nested object field (PydanticUndefined means required)."""
        if self.has_default:
            return self.default
        if not self.required:
            return None
        return PydanticUndefined

    @cached_property
    def adapter(self) -> TypeAdapter:
        return TypeAdapter(self._documented(self.annotation))

    def validate(self, raw: Any = None) -> ValidationResult:
        """Validate and coerce `raw`; None stands for an absent value."""
        if raw is None:
            if self.has_default:
                return ValidationResult.success(self.default)
            if not self.required:
                return ValidationResult.success(None)
            return ValidationResult.failure([_missing_error()])
        try:
            value = self.adapter.validate_python(raw)
        except ValidationError as exc:
            return ValidationResult.failure(
                exc.errors(include_url=False, include_context=False),
            )
        return ValidationResult.success(value)

    def json_schema(self) -> dict[str, Any]:
        schema = self.adapter.json_schema()
        if self.has_default:
            schema.setdefault("default", self.default)
        return schema
