"""FastAPI Dependencies: resolve declared parameters and bodies for a route.

Invariants:
    - The query string is normalized once per request, not once per parameter
    - Every declared parameter is validated before any error is raised, so the
      client sees all failures in one response
    - Error fields are prefixed with the descriptor location ("query.page")

Design Decisions:
    - Dependency factories over a custom APIRoute: works with plain Depends(),
      no routing involvement
    - Descriptor names checked when the dependency is built: a nameless
      parameter is a declaration bug, not a request error
"""

import json
import logging
from typing import Any, Awaitable, Callable

from fastapi import Request

from paramspec.core.errors import (
    ConstructionError,
    ErrorContext,
    ParameterValidationError,
    format_error_details,
)
from paramspec.core.extract import extract_parameter, extract_query_parameters
from paramspec.core.parameters import ParameterDescriptor
from paramspec.core.validator import Validator

logger = logging.getLogger(__name__)


def parameters_dependency(
    *descriptors: ParameterDescriptor,
) -> Callable[[Request], Awaitable[dict[str, Any]]]:
    """Build a dependency returning {name: coerced value} for `descriptors`.

    Usage:
        page_params = parameters_dependency(
            Query(Int(required=False, default=1), name="page"),
        )

        @app.get("/items")
        async def list_items(params: dict = Depends(page_params)):
            ...
    """
    for descriptor in descriptors:
        if not descriptor.name:
            raise ConstructionError(
                "Parameter declarations need a name",
                ErrorContext(location=descriptor.location.value),
            )

    async def resolve(request: Request) -> dict[str, Any]:
        query = extract_query_parameters(request, descriptors)

        values: dict[str, Any] = {}
        details: list[dict] = []
        for descriptor in descriptors:
            raw = extract_parameter(
                request, query, descriptor.name, descriptor.request_location,
            )
            result = descriptor.type.validate(raw)
            if result.ok:
                values[descriptor.name] = result.value
            else:
                logger.debug(
                    "Parameter %s failed validation", descriptor.name,
                    extra={
                        "parameter": descriptor.name,
                        "location": descriptor.location.value,
                    },
                )
                details.extend(format_error_details(
                    result.errors, (descriptor.location.value, descriptor.name),
                ))

        if details:
            logger.warning(
                "Parameter validation failed on %s", request.url.path,
                extra={
                    "error_code": "VALIDATION_ERROR",
                    "path": request.url.path,
                    "error_count": len(details),
                },
            )
            raise ParameterValidationError(details)
        return values

    return resolve


def body_dependency(validator: Validator) -> Callable[[Request], Awaitable[Any]]:
    """Build a dependency validating the JSON request body against `validator`."""

    async def resolve(request: Request) -> Any:
        raw = await request.body()
        try:
            payload = json.loads(raw) if raw else None
        except ValueError:
            raise ParameterValidationError([
                {"field": "body", "message": "Invalid JSON", "type": "json_invalid"},
            ]) from None

        result = validator.validate(payload)
        if not result.ok:
            logger.warning(
                "Body validation failed on %s", request.url.path,
                extra={
                    "location": "body",
                    "error_code": "VALIDATION_ERROR",
                    "path": request.url.path,
                    "error_count": len(result.errors),
                },
            )
        return result.unwrap("body")

    return resolve
