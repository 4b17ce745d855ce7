"""Parameter Declarators: bind a validator to a named request location.

Invariants:
    - Descriptor locations are exactly "query", "params", "headers"
      (Path → "params", Header → "headers"), never "path"/"header"
    - The extractor speaks "query"/"path"/"header"; request_location translates
    - Descriptors are immutable and built once at declaration time
    - expects_sequence is carried on the descriptor, decided by its validator kind

Design Decisions:
    - Two str Enums instead of one: descriptor locations name request attributes,
      extractor locations name OpenAPI "in" values; mixing them is a bug magnet
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from paramspec.core.legacy import legacy_type_into_validator
from paramspec.core.validator import Validator


class ParameterLocation(str, Enum):
    """Where a declared parameter lives, as the route layer names it."""
    QUERY = "query"
    PATH = "params"
    HEADER = "headers"


class RequestLocation(str, Enum):
    """Location names understood by extract_parameter."""
    QUERY = "query"
    PATH = "path"
    HEADER = "header"
    COOKIE = "cookie"


_REQUEST_LOCATIONS = {
    ParameterLocation.QUERY: RequestLocation.QUERY,
    ParameterLocation.PATH: RequestLocation.PATH,
    ParameterLocation.HEADER: RequestLocation.HEADER,
}


@dataclass(frozen=True)
class ParameterDescriptor:
    """Declarative binding of a name, request location and Validator."""

    name: str | None
    location: ParameterLocation
    type: Validator

    @property
    def expects_sequence(self) -> bool:
        return self.type.expects_sequence

    @property
    def request_location(self) -> RequestLocation:
        return _REQUEST_LOCATIONS[self.location]

    @property
    def required(self) -> bool:
        # path segments are always present when the route matched
        return self.location is ParameterLocation.PATH or self.type.required

    def openapi(self) -> dict[str, Any]:
        """OpenAPI parameter object for documentation generators."""
        schema = self.type.json_schema()
        parameter: dict[str, Any] = {
            "name": self.name,
            "in": self.request_location.value,
            "required": self.required,
            "schema": schema,
        }
        if self.type.description:
            parameter["description"] = self.type.description
        if "example" in self.type.openapi:
            parameter["example"] = self.type.openapi["example"]
        return parameter


def _declare(location: ParameterLocation, type_: Any, name: str | None, params: dict) -> ParameterDescriptor:
    return ParameterDescriptor(
        name=name,
        location=location,
        type=legacy_type_into_validator(type_, params),
    )


def Query(type_: Any, name: str | None = None, **params: Any) -> ParameterDescriptor:
    return _declare(ParameterLocation.QUERY, type_, name, params)


def Path(type_: Any, name: str | None = None, **params: Any) -> ParameterDescriptor:
    return _declare(ParameterLocation.PATH, type_, name, params)


def Header(type_: Any, name: str | None = None, **params: Any) -> ParameterDescriptor:
    return _declare(ParameterLocation.HEADER, type_, name, params)
