"""Error Hierarchy: typed exceptions raised from operations and guards.

Invariants:
    - Every error has a code (ErrorKind), a reason (str) and an opaque details payload
    - Codes are strings; http_status is only a transport mapping for the API layer
    - ValidationFailedError is the only kind built from internal logic (ValidationGate);
      ForbiddenError / NotFoundError are raised explicitly by callers
    - to_response() produces the REST envelope

Design Decisions:
    - Single hierarchy with SafeError base: one FastAPI handler catches all kinds
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from safekit.core.domain_types import ErrorKind, FieldErrorMap


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    method: str | None = None
    debug_info: dict[str, Any] | None = None


class SafeError(Exception):
    """Base exception for all safekit errors.

    Mirrors the (code, reason, details) triple of the host framework's error:
    ``code`` is machine readable, ``reason`` is a short human sentence and
    ``details`` is whatever the raiser wants the client to see.
    """

    def __init__(
        self,
        code: ErrorKind | str,
        reason: str,
        details: Any = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        self.code = code.value if isinstance(code, ErrorKind) else code
        super().__init__(f"{reason} [{self.code}]")
        self.reason = reason
        self.details = details
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def kind(self) -> ErrorKind | None:
        try:
            return ErrorKind(self.code)
        except ValueError:
            return None

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "reason": self.reason,
                "details": self.details,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Error Kinds ────────────────────────────────────────────────

class ForbiddenError(SafeError):
    """Caller is not allowed to perform the operation."""
    def __init__(
        self,
        details: str | None = None,
        reason: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            ErrorKind.FORBIDDEN, reason or "Forbidden", details,
            ErrorSeverity.WARNING, context, 403,
        )


class NotFoundError(SafeError):
    """Requested resource does not exist."""
    def __init__(
        self,
        details: str | None = None,
        reason: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            ErrorKind.NOT_FOUND, reason or "Not Found", details,
            ErrorSeverity.WARNING, context, 404,
        )


class ValidationFailedError(SafeError):
    """Document or modifier failed schema validation. details is the FieldErrorMap."""
    def __init__(
        self,
        details: FieldErrorMap,
        reason: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            ErrorKind.VALIDATION_FAILED, reason or "Validation Error", details,
            ErrorSeverity.ERROR, context, 400,
        )

    @property
    def field_errors(self) -> FieldErrorMap:
        return self.details
