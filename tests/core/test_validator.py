"""Validator: tests for absence handling, combinators and result unwrapping.

Tests cover:
    - Required fields fail on None with a "missing" error
    - optional() and with_default() accept absence
    - Combinators return new instances and never mutate the original
    - unwrap() raises ParameterValidationError with location-prefixed fields
    - json_schema() carries description, annotations and default
"""

import pytest

from paramspec.core.errors import ParameterValidationError
from paramspec.core.fields import Str, Int
from paramspec.core.validator import ValidationResult, Validator


# ─── Absence ─────────────────────────────────────────────────────

def test_required_field_rejects_absent_value():
    result = Str().validate(None)
    assert result.ok is False
    assert result.errors[0]["type"] == "missing"


def test_required_field_accepts_present_value():
    result = Str().validate("hello")
    assert result.ok is True
    assert result.value == "hello"


def test_optional_field_accepts_absent_value():
    result = Str(required=False).validate(None)
    assert result.ok is True
    assert result.value is None


def test_optional_field_still_validates_present_value():
    result = Int(required=False).validate("abc")
    assert result.ok is False


def test_default_applies_when_absent():
    result = Str(default="fallback").validate()
    assert result.ok is True
    assert result.value == "fallback"


def test_default_makes_field_optional():
    assert Str(default="x").required is False


# ─── Combinators ─────────────────────────────────────────────────

def test_optional_returns_new_instance():
    base = Str()
    optional = base.optional()
    assert optional is not base
    assert base.required is True
    assert optional.required is False


def test_describe_does_not_mutate_original():
    base = Str()
    described = base.describe("A name")
    assert base.description is None
    assert described.description == "A name"


def test_annotate_merges_metadata():
    field = Str().annotate(example="abc").annotate(format="slug")
    assert field.openapi == {"example": "abc", "format": "slug"}


def test_array_expects_sequence():
    assert Str().array().expects_sequence is True
    assert Str().expects_sequence is False


def test_array_validates_members():
    result = Int().array().validate(["1", "2"])
    assert result.ok is True
    assert result.value == [1, 2]


def test_expects_sequence_at_without_shape_is_false():
    assert Str().expects_sequence_at("anything") is False


# ─── Results ─────────────────────────────────────────────────────

def test_invalid_value_returns_errors_instead_of_raising():
    result = Str().validate(123)
    assert result.ok is False
    assert result.value is None
    assert result.errors


def test_unwrap_returns_value_on_success():
    assert ValidationResult.success(5).unwrap() == 5


def test_unwrap_raises_with_prefixed_fields():
    result = Int().validate("abc")
    with pytest.raises(ParameterValidationError) as exc_info:
        result.unwrap("query", "page")
    details = exc_info.value.details
    assert details[0]["field"] == "query.page"
    assert exc_info.value.http_status == 400


def test_validator_is_immutable():
    field = Str()
    with pytest.raises(AttributeError):
        field.required = False  # type: ignore[misc]


# ─── JSON Schema ─────────────────────────────────────────────────

def test_json_schema_includes_description():
    schema = Str(description="Search text").json_schema()
    assert schema["type"] == "string"
    assert schema["description"] == "Search text"


def test_json_schema_includes_annotations():
    schema = Str(example="shoes", format="slug").json_schema()
    assert schema["example"] == "shoes"
    assert schema["format"] == "slug"


def test_json_schema_includes_default():
    schema = Int(default=10).json_schema()
    assert schema["default"] == 10


def test_validator_wraps_plain_annotation():
    field = Validator(int, kind="integer")
    assert field.validate("7").value == 7
