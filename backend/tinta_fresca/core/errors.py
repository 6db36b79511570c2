"""Error Hierarchy — typed, categorized exceptions for every failure the API reports.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; store/provider errors (500-level) are critical
    - to_response() produces the REST envelope {"error": {...}}
    - Store and identity-provider messages are passed through verbatim

Design Decisions:
    - Single hierarchy with TintaFrescaError base: one global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: carries resource identifiers for logs without coupling to logging
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
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORE = "store"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for observability."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class TintaFrescaError(Exception):
    """Base exception for all API errors."""

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
                "context": {
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class BadInputError(TintaFrescaError):
    """Required input missing or unusable."""
    def __init__(
        self, message: str, fields: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "BAD_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.fields = fields or []


class UnauthenticatedError(TintaFrescaError):
    """Bearer token missing, malformed, or rejected by the identity provider."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.UNAUTHENTICATED,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(TintaFrescaError):
    """Authenticated identity lacks the configured admin role."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(TintaFrescaError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


# ─── Upstream Errors (500-level) ────────────────────────────────

class StoreError(TintaFrescaError):
    """Store rejected or failed an operation. Message is the store's own."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "STORE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class IdentityProviderError(TintaFrescaError):
    """Identity provider call failed."""
    def __init__(
        self,
        message: str,
        error_type: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "IDENTITY_PROVIDER_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.error_type = error_type
        self.status_code = status_code
