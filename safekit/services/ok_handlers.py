"""Ok Handlers: completion callbacks for mutating operations.

A mutating operation completes with (error, result) where result follows the
OkResult shape: {"ok": bool, "errors": {field: message} | None, ...}.

Invariants:
    - TrustedOkHandler: every failure is logged then raised, never swallowed
    - UserFacingOkHandler: every failure ends at the UI (target renderer or one
      notification) and is never re-raised
    - on_success runs only for ok results with no error

Design Decisions:
    - Two named strategies chosen by the composition root; no runtime sniffing of
      whether the code runs in a trusted or user-facing context
"""

import json
import logging
from typing import Any, Callable

from pydantic import ValidationError

from safekit.core.domain_types import ErrorKind, FieldErrorMap
from safekit.core.errors import ErrorSeverity, SafeError, ValidationFailedError
from safekit.core.match import MatchError
from safekit.core.transport_protocols import ErrorTarget, NotificationSink
from safekit.schemas.results import Notification, OkResult

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[Any], None]


class TrustedOkHandler:
    """Server-side strategy: fail loud."""

    def __init__(self, on_success: SuccessCallback | None = None):
        self.on_success = on_success

    def __call__(self, error: BaseException | None, result: Any = None) -> None:
        if error is not None:
            logger.error(
                f"Operation failed: {getattr(error, 'details', None) or error}",
                extra={"error_code": getattr(error, "code", None)},
            )
            raise error

        ok_result = OkResult.coerce(result)
        if not ok_result.ok:
            dumped = ok_result.model_dump(mode="json")
            logger.error(
                f"Operation not ok: {dumped}",
                extra={"error_code": ErrorKind.INTERNAL.value},
            )
            raise SafeError(
                ErrorKind.INTERNAL, "Operation not ok",
                json.dumps(dumped), ErrorSeverity.CRITICAL,
            )

        if self.on_success is not None:
            self.on_success(result)


class UserFacingOkHandler:
    """Client-side strategy: report to the user, never raise."""

    def __init__(
        self,
        on_success: SuccessCallback | None,
        notifier: NotificationSink,
        target: ErrorTarget | None = None,
    ):
        self.on_success = on_success
        self.notifier = notifier
        self.target = target

    def __call__(self, error: BaseException | None, result: Any = None) -> None:
        if error is not None:
            self._handle_error(error)
            return

        try:
            ok_result = OkResult.coerce(result)
        except ValidationError:
            self._report(result, "Bad result")
            return

        if ok_result.errors is not None:
            self._show_field_errors(ok_result.errors)
        elif not ok_result.ok:
            self._report(result, "Bad result")
        elif self.on_success is not None:
            self.on_success(result)

    def _handle_error(self, error: BaseException) -> None:
        if isinstance(error, ValidationFailedError):
            self._show_field_errors(error.field_errors)
        elif isinstance(error, SafeError):
            self._report(error, _describe(error.reason, error.details))
        elif isinstance(error, MatchError):
            self._report(error, _describe("Match failed", str(error)))
        else:
            self._report(error, str(error) or "An unexpected error occurred")

    def _show_field_errors(self, errors: FieldErrorMap) -> None:
        renderer = getattr(self.target, "on_error", None)
        if callable(renderer):
            renderer(errors)
        else:
            self._report(errors, "Validation error")

    def _report(self, log: Any, description: str) -> None:
        logger.error(f"Operation failed: {log}")
        self.notifier.notify(Notification(
            title="Operation Failed",
            description=description,
        ))


def _describe(*parts: Any) -> str:
    return ", ".join(str(p) for p in parts if p)
