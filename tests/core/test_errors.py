"""Error Hierarchy: tests for codes, categories and the REST envelope.

Tests cover:
    - Configuration errors are 500-level and critical
    - ParameterValidationError is 400-level and carries details
    - format_error_details flattens pydantic locations with a prefix
"""

from paramspec.core.errors import (
    ConstructionError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    ParameterValidationError,
    ParamSpecError,
    UnsupportedLocationError,
    format_error_details,
)


def test_construction_error_is_configuration_category():
    error = ConstructionError("Regex requires 'pattern'")
    assert isinstance(error, ParamSpecError)
    assert error.code == "CONSTRUCTION_ERROR"
    assert error.category is ErrorCategory.CONFIGURATION
    assert error.severity is ErrorSeverity.CRITICAL
    assert error.http_status == 500


def test_unsupported_location_error_records_location():
    error = UnsupportedLocationError("cookie", ErrorContext(parameter="session"))
    assert error.message == "Cookie parameters are not supported"
    assert error.context.location == "cookie"
    assert error.context.parameter == "session"
    assert error.http_status == 500


def test_to_response_envelope():
    response = ConstructionError("boom").to_response()
    assert response["error"]["code"] == "CONSTRUCTION_ERROR"
    assert response["error"]["message"] == "boom"
    assert response["error"]["category"] == "configuration"
    assert response["error"]["severity"] == "critical"
    assert "timestamp" in response["error"]


def test_validation_error_response_includes_details():
    details = [{"field": "query.page", "message": "bad", "type": "int_parsing"}]
    error = ParameterValidationError(details)
    response = error.to_response()
    assert error.http_status == 400
    assert response["error"]["code"] == "VALIDATION_ERROR"
    assert response["error"]["category"] == "validation"
    assert response["error"]["details"] == details


def test_format_error_details_with_prefix():
    errors = [{"loc": ("tags", 1), "msg": "Input should be a valid string", "type": "string_type"}]
    assert format_error_details(errors, ("query", "filter")) == [{
        "field": "query.filter.tags.1",
        "message": "Input should be a valid string",
        "type": "string_type",
    }]


def test_format_error_details_without_location():
    errors = [{"loc": (), "msg": "Field required", "type": "missing"}]
    assert format_error_details(errors, ("headers", "x-api-key"))[0]["field"] == "headers.x-api-key"


def test_enums_serialize_to_string_values():
    assert ErrorCategory.VALIDATION.value == "validation"
    assert ErrorSeverity.ERROR.value == "error"
