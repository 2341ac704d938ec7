"""Root conftest: shared test configuration and fakes."""

import os

import pytest

os.environ.setdefault("SAFEKIT_VALIDATION_ERRORS", "raise")
os.environ.setdefault("SAFEKIT_LOG_FORMAT", "text")

from safekit.config import get_settings  # noqa: E402
from safekit.services.validation_gate import get_validation_gate  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_cached_settings():
    """Settings and the default gate are lru_cached; tests that patch env need a fresh read."""
    get_settings.cache_clear()
    get_validation_gate.cache_clear()
    yield
    get_settings.cache_clear()
    get_validation_gate.cache_clear()


class RecordingSink:
    """NotificationSink fake that keeps every notification."""

    def __init__(self):
        self.notifications = []

    def notify(self, notification):
        self.notifications.append(notification)


@pytest.fixture
def sink():
    return RecordingSink()
