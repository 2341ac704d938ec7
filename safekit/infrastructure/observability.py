"""Structured Logging: record rendering and root handler install.

Invariants:
    - Every JSON line carries the record's creation time (UTC), level, logger
      name and message
    - Only the safekit extras in EXTRA_KEYS are copied off the record
    - A SafeError in exc_info contributes its code, severity and details; the
      traceback is kept only at ERROR and above
    - setup_logging() replaces the handler it installed earlier, never stacks

Design Decisions:
    - configure_logging() reads Settings; setup_logging() stays explicit for hosts
      that own their configuration
"""

import json
import logging
from datetime import datetime, timezone

from safekit.config import Settings, get_settings
from safekit.core.errors import SafeError

EXTRA_KEYS = ("error_code", "method", "subscription", "fields", "user_id")
TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_installed: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, record.__dict__[key])
            for key in EXTRA_KEYS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info and record.exc_info[0] is not None:
            self._add_exception(payload, record)
        return json.dumps(payload, ensure_ascii=False, default=str)

    def _add_exception(self, payload: dict, record: logging.LogRecord) -> None:
        error = record.exc_info[1]
        if isinstance(error, SafeError):
            payload.setdefault("error_code", error.code)
            payload["severity"] = error.severity.value
            if error.details is not None:
                payload["details"] = error.details
            # expected failures (403/404/400) are logged below ERROR
            if record.levelno < logging.ERROR:
                return
        payload["exception"] = self.formatException(record.exc_info)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install a stream handler on the root logger and return it."""
    global _installed
    root = logging.getLogger()
    if _installed is not None:
        root.removeHandler(_installed)

    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT)
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _installed = handler
    return handler


def configure_logging(settings: Settings | None = None) -> logging.Handler:
    """setup_logging() driven by SAFEKIT_LOG_LEVEL / SAFEKIT_LOG_FORMAT."""
    settings = settings or get_settings()
    return setup_logging(settings.log_level, settings.log_format)
