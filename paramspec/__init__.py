"""paramspec: declarative request parameters on top of pydantic.

Example:
    from paramspec import Query, Path, Header, Str, Int, Enumeration

    page = Query(Int(required=False, default=1), name="page")
    order = Query(Enumeration(["asc", "desc"], case_sensitive=False), name="order")
    item_id = Path(Int(description="Item identifier"), name="item_id")
"""

from paramspec.core.errors import (
    ConstructionError,
    ParameterValidationError,
    ParamSpecError,
    UnsupportedLocationError,
)
from paramspec.core.extract import extract_parameter, extract_query_parameters
from paramspec.core.field_spec import FieldSpec, convert_params
from paramspec.core.fields import (
    Arr,
    Bool,
    DateOnly,
    DateTime,
    Email,
    Enumeration,
    EnumerationField,
    Hostname,
    Int,
    Ipv4,
    Ipv6,
    Num,
    Obj,
    Regex,
    Str,
    Uuid,
)
from paramspec.core.legacy import legacy_type_into_validator
from paramspec.core.parameters import (
    Header,
    ParameterDescriptor,
    ParameterLocation,
    Path,
    Query,
    RequestLocation,
)
from paramspec.core.validator import ValidationResult, Validator

__version__ = "0.1.0"

__all__ = [
    # Fields
    "Arr",
    "Bool",
    "DateOnly",
    "DateTime",
    "Email",
    "Enumeration",
    "EnumerationField",
    "Hostname",
    "Int",
    "Ipv4",
    "Ipv6",
    "Num",
    "Obj",
    "Regex",
    "Str",
    "Uuid",
    "FieldSpec",
    "convert_params",
    "legacy_type_into_validator",
    # Validators
    "Validator",
    "ValidationResult",
    # Parameters
    "Query",
    "Path",
    "Header",
    "ParameterDescriptor",
    "ParameterLocation",
    "RequestLocation",
    "extract_parameter",
    "extract_query_parameters",
    # Errors
    "ParamSpecError",
    "ConstructionError",
    "ParameterValidationError",
    "UnsupportedLocationError",
]
