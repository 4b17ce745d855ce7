"""Field Constructors: one builder per primitive/composite kind, all decorated.

Invariants:
    - Every constructor returns its result through convert_params (FieldSpec options)
    - Nested types (array members, object fields) go through the legacy-type adapter
    - Strings stay strings for format checks (email, uuid, ip, datetime); only
      Num, Int, Bool, DateOnly and Enumeration change the value's type
    - Missing primary arguments (pattern, values, inner, fields) are ConstructionErrors

Design Decisions:
    - Plain functions registered in FIELD_CONSTRUCTORS: the adapter can accept the
      constructor itself (Query(Str)) as well as its result (Query(Str()))
    - Format checks use `re` in AfterValidators, not Field(pattern=...): the
      email rule needs lookaheads that pydantic's Rust regex engine rejects
    - Enumeration returns EnumerationField (validator + original values) instead of
      hanging the raw mapping off the validator
"""

import ipaddress
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Annotated, Any, Callable, Iterable, Literal, Mapping

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    FiniteFloat,
    TypeAdapter,
    ValidationError,
    WithJsonSchema,
    create_model,
)
from pydantic_core import PydanticCustomError

from paramspec.config import get_settings
from paramspec.core.errors import ConstructionError, ErrorContext
from paramspec.core.field_spec import FieldOptions, convert_params
from paramspec.core.validator import Validator

DATETIME_MESSAGE = "Must be in the following format: YYYY-mm-ddTHH:MM:ssZ"

DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$")
EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Z0-9_'+\-\.]*)[A-Z0-9_+-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE,
)
UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
HOSTNAME_PATTERN = re.compile(
    r"^(([a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9])\.)*"
    r"([A-Za-z0-9]|[A-Za-z0-9][A-Za-z0-9-]*[A-Za-z0-9])$"
)

_TIMESTAMP = TypeAdapter(datetime)

FIELD_CONSTRUCTORS: set[Callable[..., Any]] = set()


def field_constructor(func: Callable[..., Any]) -> Callable[..., Any]:
    """Register `func` so the legacy-type adapter can call it with parameters."""
    FIELD_CONSTRUCTORS.add(func)
    return func


def is_field_constructor(value: Any) -> bool:
    try:
        return value in FIELD_CONSTRUCTORS
    except TypeError:
        return False


def _require(value: Any, argument: str, constructor: str) -> Any:
    if value is None:
        raise ConstructionError(
            f"{constructor} requires '{argument}'",
            ErrorContext(debug_info={"constructor": constructor}),
        )
    return value


# ─── Engine-level checks ────────────────────────────────────────

def _numeric_input(value: Any) -> Any:
    # bool is an int subclass; pydantic's lax mode would turn True into 1
    if isinstance(value, bool):
        raise PydanticCustomError("number_type", "Input should be a valid number")
    # Python literal syntax ("1_000") is not a number on the wire
    if isinstance(value, str) and "_" in value:
        raise PydanticCustomError("number_parsing", "Input should be a valid number")
    return value


def _matches(pattern: re.Pattern, message: str) -> AfterValidator:
    def check(value: str) -> str:
        if pattern.search(value) is None:
            raise PydanticCustomError("string_pattern_mismatch", message)
        return value

    return AfterValidator(check)


def _ip_address(version: type, message: str) -> AfterValidator:
    def check(value: str) -> str:
        try:
            version(value)
        except ValueError:
            raise PydanticCustomError("ip_address", message) from None
        return value

    return AfterValidator(check)


def _to_date(value: Any) -> Any:
    # timestamps ("2024-01-15T10:00:00Z") are cut to their calendar date
    if isinstance(value, str) and len(value) > 10:
        try:
            value = _TIMESTAMP.validate_python(value)
        except ValidationError:
            return value
    if isinstance(value, datetime):
        return value.date()
    return value


def _to_str(value: Any) -> str:
    return str(value)


def _lowercase(value: Any) -> str:
    return str(value).lower()


def _to_bool(value: str) -> bool:
    return value == "true"


# ─── Composite kinds ────────────────────────────────────────────

@field_constructor
def Arr(inner: Any = None, spec: FieldOptions = None, **params: Any) -> Validator:
    """List of `inner` (any type the legacy-type adapter understands)."""
    from paramspec.core.legacy import legacy_type_into_validator

    inner = _require(inner, "inner", "Arr")
    return convert_params(legacy_type_into_validator(inner).array(), spec, **params)


def _field_name(key: str, index: int, taken: Mapping[str, Any]) -> str:
    if (
        key.isidentifier()
        and not key.startswith(("_", "model_"))
        and not hasattr(BaseModel, key)
    ):
        return key
    name = f"field_{index}"
    while name in taken:
        name += "_"
    return name


@field_constructor
def Obj(fields: Mapping[str, Any] | None = None, spec: FieldOptions = None, **params: Any) -> Validator:
    """Structured value with one validator per named field; validates into a dict.

    Keys that are not valid Python identifiers (``user-agent``, ``_id``) are
    kept as aliases, so the validated dict always uses the declared keys.
    Undeclared keys are dropped.
    """
    from paramspec.core.legacy import legacy_type_into_validator

    fields = _require(fields, "fields", "Obj")
    shape = {key: legacy_type_into_validator(value) for key, value in fields.items()}

    definitions: dict[str, Any] = {}
    names: dict[str, str] = {}
    for index, (key, member) in enumerate(shape.items()):
        name = _field_name(key, index, shape)
        names[name] = key
        definitions[name] = (
            member.member_type,
            Field(default=member.member_default, alias=key, title=key),
        )

    model = create_model(
        "Object",
        __config__=ConfigDict(extra="ignore", protected_namespaces=()),
        **definitions,
    )

    def to_dict(instance: Any) -> dict[str, Any]:
        return {key: getattr(instance, name) for name, key in names.items()}

    annotation = Annotated[model, AfterValidator(to_dict)]
    return convert_params(Validator(annotation, kind="object", shape=shape), spec, **params)


# ─── Numeric kinds ──────────────────────────────────────────────

@field_constructor
def Num(spec: FieldOptions = None, **params: Any) -> Validator:
    """Number or numeric string, coerced to float.

    NaN, infinities and underscore-grouped literals ("1_000") are rejected.
    """
    annotation = Annotated[FiniteFloat, BeforeValidator(_numeric_input)]
    field = convert_params(Validator(annotation, kind="number"), spec, **params)
    return field.annotate(type="number")


@field_constructor
def Int(spec: FieldOptions = None, **params: Any) -> Validator:
    """Integer or integral string, coerced to int."""
    annotation = Annotated[int, BeforeValidator(_numeric_input)]
    field = convert_params(Validator(annotation, kind="integer"), spec, **params)
    return field.annotate(type="integer")


# ─── String kinds ───────────────────────────────────────────────

@field_constructor
def Str(spec: FieldOptions = None, **params: Any) -> Validator:
    return convert_params(Validator(str, kind="string"), spec, **params)


@field_constructor
def DateTime(spec: FieldOptions = None, **params: Any) -> Validator:
    annotation = Annotated[str, _matches(DATETIME_PATTERN, DATETIME_MESSAGE)]
    field = Validator(annotation, kind="string", openapi={"format": "date-time"})
    return convert_params(field, spec, **params)


@field_constructor
def Regex(
    pattern: str | re.Pattern | None = None,
    pattern_error: str | None = None,
    spec: FieldOptions = None,
    **params: Any,
) -> Validator:
    """String that contains a match for `pattern` (re.search semantics)."""
    pattern = re.compile(_require(pattern, "pattern", "Regex"))
    message = pattern_error or get_settings().regex_error_message
    annotation = Annotated[str, _matches(pattern, message)]
    field = Validator(annotation, kind="string", openapi={"pattern": pattern.pattern})
    return convert_params(field, spec, **params)


@field_constructor
def Email(spec: FieldOptions = None, **params: Any) -> Validator:
    annotation = Annotated[str, _matches(EMAIL_PATTERN, "Invalid email")]
    field = Validator(annotation, kind="string", openapi={"format": "email"})
    return convert_params(field, spec, **params)


@field_constructor
def Uuid(spec: FieldOptions = None, **params: Any) -> Validator:
    annotation = Annotated[str, _matches(UUID_PATTERN, "Invalid uuid")]
    field = Validator(annotation, kind="string", openapi={"format": "uuid"})
    return convert_params(field, spec, **params)


@field_constructor
def Hostname(spec: FieldOptions = None, **params: Any) -> Validator:
    annotation = Annotated[str, _matches(HOSTNAME_PATTERN, "Invalid hostname")]
    field = Validator(annotation, kind="string", openapi={"format": "hostname"})
    return convert_params(field, spec, **params)


@field_constructor
def Ipv4(spec: FieldOptions = None, **params: Any) -> Validator:
    """IPv4 address; non-string input is converted with str() before checking."""
    annotation = Annotated[
        str, BeforeValidator(_to_str), _ip_address(ipaddress.IPv4Address, "Invalid ip"),
    ]
    field = Validator(annotation, kind="string", openapi={"format": "ipv4"})
    return convert_params(field, spec, **params)


@field_constructor
def Ipv6(spec: FieldOptions = None, **params: Any) -> Validator:
    annotation = Annotated[str, _ip_address(ipaddress.IPv6Address, "Invalid ip")]
    field = Validator(annotation, kind="string", openapi={"format": "ipv6"})
    return convert_params(field, spec, **params)


# ─── Other scalar kinds ─────────────────────────────────────────

@field_constructor
def DateOnly(spec: FieldOptions = None, **params: Any) -> Validator:
    """ISO date or timestamp string, date or datetime, normalized to datetime.date."""
    annotation = Annotated[date, BeforeValidator(_to_date)]
    return convert_params(Validator(annotation, kind="date"), spec, **params)


@field_constructor
def Bool(spec: FieldOptions = None, **params: Any) -> Validator:
    """Case-insensitive "true"/"false" (after str()), mapped to bool."""
    annotation = Annotated[
        Literal["true", "false"],
        BeforeValidator(_lowercase),
        AfterValidator(_to_bool),
        WithJsonSchema({"type": "boolean"}),
    ]
    field = convert_params(Validator(annotation, kind="boolean"), spec, **params)
    return field.annotate(type="boolean")


# ─── Enumeration ────────────────────────────────────────────────

@dataclass(frozen=True)
class EnumerationField:
    """Result of Enumeration(): the validator and the values as declared."""

    validator: Validator
    values: Mapping[str, Any] | list[str]


def _enumeration_mapping(values: Mapping[str, Any] | Iterable[str]) -> dict[str, Any]:
    if isinstance(values, Mapping):
        mapping = dict(values)
    else:
        mapping = {key: key for key in values}
    if not mapping:
        raise ConstructionError("Enumeration requires at least one value")
    for key in mapping:
        if not isinstance(key, str) or not key:
            raise ConstructionError(
                f"Enumeration keys must be non-empty strings, got {key!r}",
            )
    return mapping


def _fold_case(mapping: dict[str, Any]) -> dict[str, Any]:
    folded: dict[str, Any] = {}
    owners: dict[str, str] = {}
    for key, value in mapping.items():
        lowered = key.lower()
        if lowered in folded:
            raise ConstructionError(
                f"Enumeration keys {owners[lowered]!r} and {key!r} collide "
                f"when matched case-insensitively",
            )
        folded[lowered] = value
        owners[lowered] = key
    return folded


@field_constructor
def Enumeration(
    values: Mapping[str, Any] | Iterable[str] | None = None,
    case_sensitive: bool | None = None,
    spec: FieldOptions = None,
    **params: Any,
) -> EnumerationField:
    """Accept one of the declared keys and emit its mapped value.

    A list of keys maps each key to itself. With ``case_sensitive=False`` input
    is lower-cased before matching while the documented ``enum`` keeps the
    declared casing.
    """
    values = _require(values, "values", "Enumeration")
    original = dict(values) if isinstance(values, Mapping) else list(values)
    mapping = _enumeration_mapping(original)
    declared_keys = list(mapping)

    if case_sensitive is None:
        case_sensitive = get_settings().enum_case_sensitive

    metadata: list[Any] = []
    openapi: dict[str, Any] = {}
    if not case_sensitive:
        mapping = _fold_case(mapping)
        metadata.append(BeforeValidator(_lowercase))
        openapi["enum"] = declared_keys

    def to_value(key: str) -> Any:
        return mapping[key]

    metadata.append(AfterValidator(to_value))
    annotation = Annotated[(Literal[tuple(mapping)], *metadata)]

    field = Validator(annotation, kind="enumeration", openapi=openapi)
    return EnumerationField(convert_params(field, spec, **params), original)
