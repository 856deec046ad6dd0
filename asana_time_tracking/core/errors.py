"""Error Hierarchy — typed, categorized exceptions for every client failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Local validation errors are raised before any network call
    - Remote failures are always AsanaApiError (RateLimitError is a subclass)
    - to_dict() never includes the access token or request headers

Design Decisions:
    - Single hierarchy with AsanaError base: callers can catch one type
    - InvalidArgumentError also subclasses ValueError so generic argument handling still works
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    EXTERNAL_API = "external_api"
    RATE_LIMIT = "rate_limit"
    CONNECTION = "connection"


@dataclass
class ErrorContext:
    """Request context attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    method: str | None = None
    path: str | None = None
    status_code: int | None = None
    retry_after_seconds: int | None = None


class AsanaError(Exception):
    """Base exception for all client errors."""

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

    def to_dict(self) -> dict:
        """Convert to a structured error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "method": self.context.method,
                    "path": self.context.path,
                    "status_code": self.context.status_code,
                    "retry_after_seconds": self.context.retry_after_seconds,
                },
            }
        }


# ─── Local Errors ───────────────────────────────────────────────

class InvalidArgumentError(AsanaError, ValueError):
    """Argument rejected before any request was sent."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


# ─── Remote Errors ──────────────────────────────────────────────

class AsanaApiError(AsanaError):
    """Asana API call failed (HTTP error status, bad body, or transport failure).

    status_code is 0 when no response was received.
    """
    def __init__(
        self,
        message: str,
        status_code: int = 0,
        details: dict | None = None,
        context: ErrorContext | None = None,
        code: str = "ASANA_API_ERROR",
        category: ErrorCategory = ErrorCategory.EXTERNAL_API,
    ):
        ctx = context or ErrorContext()
        ctx.status_code = status_code
        super().__init__(
            message, code, category,
            ErrorSeverity.ERROR, ctx, status_code or 503,
        )
        self.status_code = status_code
        self.details = details or {}

    @property
    def errors(self) -> list[dict]:
        """The `errors` array of an Asana error body, if any."""
        errors = self.details.get("errors")
        return errors if isinstance(errors, list) else []


class RateLimitError(AsanaApiError):
    """HTTP 429 persisted after every allowed retry."""
    def __init__(
        self,
        retry_after_seconds: int,
        details: dict | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_seconds = retry_after_seconds
        super().__init__(
            f"Rate limit exceeded. Please retry after {retry_after_seconds} seconds.",
            429, details, ctx,
            code="RATE_LIMITED", category=ErrorCategory.RATE_LIMIT,
        )
        self.severity = ErrorSeverity.WARNING
        self.retry_after_seconds = retry_after_seconds
