"""Error Hierarchy — typed, categorized exceptions for all GroupHub failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Callers only ever see two outward signals: UNAUTHORIZED (401) or SERVER_ERROR (500)
    - to_response() carries a public message only; internal detail stays in
      `message` and in the log record
    - CredentialMismatchError keeps its reason (not_found / wrong_credential) for
      logging, never for the response body

Design Decisions:
    - Single hierarchy with GroupHubError base: FastAPI global handler catches all
    - ErrorContext as dataclass: acting identities and operation travel with the
      error into the log record without coupling to the logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    HASHING = "hashing"
    INTERNAL = "internal"


PUBLIC_UNAUTHORIZED_MESSAGE = "Invalid credentials"
PUBLIC_SERVER_ERROR_MESSAGE = "An unexpected error occurred"


@dataclass
class ErrorContext:
    """Correlation context for error logging; never serialized to the caller."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    user_id: str | None = None
    group_id: str | None = None
    login_handle: str | None = None

    def log_extra(self) -> dict[str, Any]:
        return {
            k: v for k, v in (
                ("operation", self.operation),
                ("user_id", self.user_id),
                ("group_id", self.group_id),
                ("login_handle", self.login_handle),
            ) if v is not None
        }


class GroupHubError(Exception):
    """Base exception for all GroupHub errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        public_message: str = PUBLIC_SERVER_ERROR_MESSAGE,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.public_message = public_message

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.public_message,
            }
        }


# ─── Credential Errors (401) ────────────────────────────────────

class CredentialMismatchError(GroupHubError):
    """Login handle unknown or password wrong. Both look identical outward."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Credential mismatch: {reason}",
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
            PUBLIC_UNAUTHORIZED_MESSAGE,
        )
        self.reason = reason


# ─── Infrastructure Errors (500) ────────────────────────────────

class PersistenceError(GroupHubError):
    """Data store operation failed (connectivity, constraint, driver)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "SERVER_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class RecordNotFoundError(PersistenceError):
    """A point lookup by identity returned no row."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            f"find_{resource_type.lower()}_by_id", context,
        )
        self.category = ErrorCategory.RESOURCE_NOT_FOUND
        self.resource_type = resource_type
        self.resource_id = resource_id


class HashingError(GroupHubError):
    """The one-way password transform failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Password hashing failed: {message}",
            "SERVER_ERROR", ErrorCategory.HASHING,
            ErrorSeverity.CRITICAL, context, 500,
        )


class CompensationError(GroupHubError):
    """Compensating delete failed after a membership insert failure.

    Leaves an orphaned group with no members. Logged, never raised to callers.
    """
    def __init__(
        self, group_id: str, cause: Exception, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Compensating delete of group '{group_id}' failed: {cause}",
            "COMPENSATION_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.group_id = group_id
        self.cause = cause
