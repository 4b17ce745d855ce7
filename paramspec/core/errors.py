"""Error Hierarchy: typed, categorized exceptions for paramspec failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Configuration errors (bad declarations, unsupported locations) are 500-level
      programmer errors and propagate immediately
    - Validation errors (bad client input) are 400-level and only raised after
      every parameter of a request has been validated
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with ParamSpecError base: one FastAPI handler catches all
    - ErrorContext as dataclass: parameter/location context without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    parameter: str | None = None
    location: str | None = None
    debug_info: dict[str, Any] | None = None


class ParamSpecError(Exception):
    """Base exception for all paramspec errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Configuration Errors (500-level) ───────────────────────────

class ConstructionError(ParamSpecError):
    """A field or parameter declaration is malformed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONSTRUCTION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class UnsupportedLocationError(ParamSpecError):
    """Extraction requested from a location that is not implemented."""
    def __init__(self, location: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.location = location
        super().__init__(
            f"{location.capitalize()} parameters are not supported",
            "UNSUPPORTED_LOCATION", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.location = location


# ─── Validation Errors (400-level) ──────────────────────────────

def format_error_details(errors: list[dict], prefix: tuple = ()) -> list[dict]:
    """Flatten pydantic error dicts into field/message/type triples."""
    return [
        {
            "field": ".".join(str(loc) for loc in (*prefix, *e.get("loc", ()))),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]


class ParameterValidationError(ParamSpecError):
    """One or more request values failed validation."""
    def __init__(self, details: list[dict], context: ErrorContext | None = None):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.details = details

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response
