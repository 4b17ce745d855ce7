"""Parameter Extraction: raw values out of a request, plus query-string normalization.

Invariants:
    - extract_query_parameters returns None when the URL has no query parameters,
      and a dict otherwise (never {} for "nothing to parse")
    - Inside the mapping, None means "present but empty" (?a=); a missing key
      means "not sent"
    - Repeated keys become lists in URL order; a key declared as a sequence is
      always a list, even when sent once
    - Cookie extraction always raises UnsupportedLocationError

Design Decisions:
    - Starlette URL/QueryParams for parsing: the same parser FastAPI routes use
    - Sequence keys come from the validators' declared kind, not isinstance checks
      on engine types at request time
"""

from typing import Any, Iterable, Mapping

from starlette.datastructures import URL, QueryParams
from starlette.requests import HTTPConnection

from paramspec.core.errors import ErrorContext, UnsupportedLocationError
from paramspec.core.parameters import ParameterDescriptor, ParameterLocation, RequestLocation
from paramspec.core.validator import Validator

QueryMapping = dict[str, Any]

QuerySchema = Validator | Mapping[str, Validator] | Iterable[ParameterDescriptor] | None


def extract_parameter(
    request: HTTPConnection,
    query: QueryMapping | None,
    name: str,
    location: RequestLocation | str,
) -> Any:
    """Return the raw value of `name` at `location` (None when absent)."""
    if location == RequestLocation.COOKIE:
        raise UnsupportedLocationError(
            RequestLocation.COOKIE.value, ErrorContext(parameter=name),
        )

    if location == RequestLocation.QUERY:
        return query.get(name) if query is not None else None

    if location == RequestLocation.PATH:
        return request.path_params.get(name)

    if location == RequestLocation.HEADER:
        return request.headers.get(name)

    raise UnsupportedLocationError(str(location), ErrorContext(parameter=name))


def sequence_keys(schema: QuerySchema) -> set[str]:
    """Names of the query keys whose declared validator expects a list."""
    if schema is None:
        return set()
    if isinstance(schema, Validator):
        return {key for key in (schema.shape or {}) if schema.expects_sequence_at(key)}
    if isinstance(schema, Mapping):
        return {key for key, member in schema.items() if member.expects_sequence}
    return {
        descriptor.name
        for descriptor in schema
        if descriptor.location is ParameterLocation.QUERY and descriptor.expects_sequence
    }


def _query_string(source: HTTPConnection | URL | str) -> str:
    if isinstance(source, HTTPConnection):
        return source.url.query
    return URL(str(source)).query


def extract_query_parameters(
    source: HTTPConnection | URL | str, schema: QuerySchema = None,
) -> QueryMapping | None:
    """Build the query mapping for a request URL, or None if it has no query."""
    items = QueryParams(_query_string(source)).multi_items()
    if not items:
        return None

    params: QueryMapping = {}
    for key, value in items:
        value = value if value != "" else None

        if key not in params:
            params[key] = value
        elif not isinstance(params[key], list):
            params[key] = [params[key], value]
        else:
            params[key].append(value)

    for key in sequence_keys(schema):
        if key in params and not isinstance(params[key], list):
            params[key] = [params[key]]

    return params
