"""Structured Logging: JSON formatter fields and setup_logging handler install."""

import json
import logging
import sys

import pytest

from safekit.config import Settings
from safekit.core.errors import NotFoundError, SafeError
from safekit.infrastructure.observability import (
    JSONFormatter,
    configure_logging,
    setup_logging,
)


def _record(level=logging.WARNING, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "safekit.test", level, __file__, 1, "validation failed", None, exc_info,
    )
    record.__dict__.update(extra)
    return record


def _raised(error: BaseException):
    try:
        raise error
    except type(error):
        return sys.exc_info()


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    previous_level = root.level
    previous_handlers = list(root.handlers)
    yield root
    for handler in list(root.handlers):
        if handler not in previous_handlers:
            root.removeHandler(handler)
    root.setLevel(previous_level)


# ─── JSONFormatter ──────────────────────────────────────────────

def test_json_formatter_includes_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "safekit.test"
    assert log["message"] == "validation failed"
    assert "timestamp" in log


def test_json_formatter_uses_record_creation_time():
    record = _record()
    record.created = 1767225600.0
    log = json.loads(JSONFormatter().format(record))
    assert log["timestamp"] == "2026-01-01T00:00:00+00:00"


def test_json_formatter_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(_record(
        error_code="validation-failed", fields=["title"], unrelated="x",
    )))
    assert log["error_code"] == "validation-failed"
    assert log["fields"] == ["title"]
    assert "unrelated" not in log


def test_json_formatter_surfaces_safe_error_without_traceback_below_error():
    record = _record(exc_info=_raised(NotFoundError("ticket 9")))
    log = json.loads(JSONFormatter().format(record))
    assert log["error_code"] == "not-found"
    assert log["details"] == "ticket 9"
    assert log["severity"] == "warning"
    assert "exception" not in log


def test_json_formatter_keeps_traceback_for_safe_error_at_error_level():
    error = SafeError("internal-error", "Operation not ok")
    record = _record(logging.ERROR, _raised(error), error_code="custom")
    log = json.loads(JSONFormatter().format(record))
    assert log["error_code"] == "custom"
    assert "details" not in log
    assert "Traceback" in log["exception"]


def test_json_formatter_keeps_traceback_for_other_exceptions():
    record = _record(exc_info=_raised(RuntimeError("boom")))
    log = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in log["exception"]
    assert "error_code" not in log


# ─── setup_logging / configure_logging ──────────────────────────

def test_setup_logging_installs_formatter_and_level(root_logger):
    handler = setup_logging("debug", "json")
    assert handler in root_logger.handlers
    assert isinstance(handler.formatter, JSONFormatter)
    assert root_logger.level == logging.DEBUG


def test_setup_logging_text_format(root_logger):
    handler = setup_logging("INFO", "text")
    assert not isinstance(handler.formatter, JSONFormatter)


def test_setup_logging_replaces_its_previous_handler(root_logger):
    first = setup_logging("INFO", "json")
    count = len(root_logger.handlers)
    second = setup_logging("WARNING", "text")
    assert first not in root_logger.handlers
    assert second in root_logger.handlers
    assert len(root_logger.handlers) == count
    assert root_logger.level == logging.WARNING


def test_configure_logging_reads_settings_from_env(root_logger, monkeypatch):
    monkeypatch.setenv("SAFEKIT_LOG_LEVEL", "error")
    monkeypatch.setenv("SAFEKIT_LOG_FORMAT", "json")
    handler = configure_logging()
    assert isinstance(handler.formatter, JSONFormatter)
    assert root_logger.level == logging.ERROR


def test_configure_logging_accepts_explicit_settings(root_logger):
    handler = configure_logging(Settings(log_level="debug", log_format="text"))
    assert not isinstance(handler.formatter, JSONFormatter)
    assert root_logger.level == logging.DEBUG
