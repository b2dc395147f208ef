"""Error Hierarchy — typed, categorized exceptions for all FindTell failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope with success=false
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with FindTellError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Unauthorized and Forbidden are separate classes so callers and tests can tell
      "no credential" from "wrong credential"
    - License verdicts are NOT errors: they are returned as values (core/license_rules.py)
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
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORE = "store"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    chart_type: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class FindTellError(Exception):
    """Base exception for all FindTell errors."""

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
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class InputError(FindTellError):
    """Request field missing or malformed — rejected before provider/store."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class UnauthorizedError(FindTellError):
    """No credential, or credential not in the expected form."""
    def __init__(
        self, message: str = "Authorization required", context: ErrorContext | None = None,
    ):
        super().__init__(
            message,
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(FindTellError):
    """Credential present but does not match the admin secret."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid admin token",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(FindTellError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class ConfigurationMissingError(FindTellError):
    """Server-side secret or setting absent — operator fault, not caller fault."""
    def __init__(self, setting: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIGURATION_MISSING", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.setting = setting


class ProviderTransportError(FindTellError):
    """License provider unreachable or its response unparsable.

    Distinct from a license verdict: "could not determine validity" is never
    reported as "the license is invalid".
    """
    def __init__(self, operation: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.debug_info = {"reason": reason}
        super().__init__(
            f"Server error during {operation}. Please try again.",
            "LICENSE_PROVIDER_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.reason = reason


class StoreError(FindTellError):
    """Key-value persistence failed. Fatal for the request, never retried."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
