"""Legacy-Type Adapter: one funnel from any accepted type declaration to a Validator.

Invariants:
    - Every branch ends in exactly one Validator with the FieldSpec options applied
    - Bare values are shorthand for their kind with the value as the example
    - bool is checked before int (bool is an int subclass), datetime before date
    - Unrecognized inputs are ConstructionErrors, never silently stringified

Design Decisions:
    - Single explicit resolution order instead of per-constructor special cases:
      Arr/Obj/declarators call this and never inspect their inputs themselves
"""

from datetime import date, datetime
from typing import Any, Mapping

from paramspec.core.errors import ConstructionError, ErrorContext
from paramspec.core.field_spec import convert_params
from paramspec.core.fields import (
    Arr,
    Bool,
    DateOnly,
    DateTime,
    EnumerationField,
    Int,
    Num,
    Obj,
    Str,
    is_field_constructor,
)
from paramspec.core.validator import Validator

# builtin class → field constructor
_BUILTIN_TYPES = {
    str: Str,
    int: Int,
    float: Num,
    bool: Bool,
    datetime: DateTime,
    date: DateOnly,
}


def legacy_type_into_validator(type_: Any, params: Mapping[str, Any] | None = None) -> Validator:
    """Normalize a type declaration (validator, constructor, class or value)."""
    params = dict(params or {})

    if isinstance(type_, Validator):
        return convert_params(type_, params)

    if isinstance(type_, EnumerationField):
        return convert_params(type_.validator, params)

    if is_field_constructor(type_):
        result = type_(**params)
        return result.validator if isinstance(result, EnumerationField) else result

    if isinstance(type_, type) and type_ in _BUILTIN_TYPES:
        return _BUILTIN_TYPES[type_](**params)

    if isinstance(type_, bool):
        return Bool(**{"example": type_, **params})
    if isinstance(type_, str):
        return Str(**{"example": type_, **params})
    if isinstance(type_, int):
        return Int(**{"example": type_, **params})
    if isinstance(type_, float):
        return Num(**{"example": type_, **params})
    if isinstance(type_, datetime):
        return DateTime(**{"example": type_.isoformat(), **params})
    if isinstance(type_, date):
        return DateOnly(**{"example": type_.isoformat(), **params})

    if isinstance(type_, list):
        if len(type_) != 1:
            raise ConstructionError(
                "Array shorthand must contain exactly one member type",
                ErrorContext(debug_info={"length": len(type_)}),
            )
        return Arr(type_[0], **params)

    if isinstance(type_, Mapping):
        return Obj(type_, **params)

    raise ConstructionError(
        f"Unsupported parameter type: {type_!r}",
        ErrorContext(debug_info={"type": type(type_).__name__}),
    )
