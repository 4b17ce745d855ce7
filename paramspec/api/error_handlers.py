"""Error Handlers: global exception handlers for applications using paramspec.

Invariants:
    - ParamSpecError → structured JSON with error code, message, severity
    - ParameterValidationError and RequestValidationError share one envelope
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: library (ParamSpecError), validation (Pydantic), catch-all
    - Registered explicitly by the host app; paramspec never installs handlers itself
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from paramspec.core.errors import (
    ParamSpecError,
    ParameterValidationError,
    ErrorSeverity,
    format_error_details,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_paramspec_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_paramspec_error_handler(app: FastAPI) -> None:
    """Register paramspec configuration/validation error handler."""

    @app.exception_handler(ParamSpecError)
    async def paramspec_error_handler(request: Request, exc: ParamSpecError):
        """Handle all paramspec errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"ParamSpecError: {exc.message}",
            extra={
                "parameter": exc.context.parameter,
                "location": exc.context.location,
                "error_code": exc.code,
                "path": request.url.path,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle FastAPI's own validation errors in the paramspec envelope."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        error = ParameterValidationError(format_error_details(list(exc.errors())))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
