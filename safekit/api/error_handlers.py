"""Error Handlers: FastAPI exception handlers for the safekit error hierarchy.

Invariants:
    - SafeError → its own REST envelope and http_status
    - RequestValidationError → validation-failed envelope with a field error map
    - Exception (catch-all) → never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from safekit.core.domain_types import ErrorKind, FieldErrorMap
from safekit.core.errors import ErrorSeverity, SafeError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_safe_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_safe_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SafeError)
    async def safe_error_handler(request: Request, exc: SafeError):
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"SafeError: {exc}",
            extra={"error_code": exc.code, "method": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Request bodies rejected by pydantic get the same shape as ValidationGate failures."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

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
                    "code": ErrorKind.INTERNAL.value,
                    "reason": "An unexpected error occurred",
                    "details": None,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def request_field_errors(exc: RequestValidationError) -> FieldErrorMap:
    """Flatten pydantic request errors into {field: message}.

    The leading location segment (body/query/path) is dropped. When several
    errors hit one field the first message wins.
    """
    errors: FieldErrorMap = {}
    for e in exc.errors():
        loc = [str(part) for part in e["loc"]]
        if len(loc) > 1 and loc[0] in ("body", "query", "path", "header", "cookie"):
            loc = loc[1:]
        errors.setdefault(".".join(loc), e["msg"])
    return errors


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": ErrorKind.VALIDATION_FAILED.value,
            "reason": "Validation Error",
            "details": request_field_errors(exc),
            "severity": ErrorSeverity.ERROR.value,
        },
    }
