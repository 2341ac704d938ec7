"""In-memory notification sink.

Keeps the most recent notifications so a web layer can flash them to the
user on the next response. Bounded; oldest entries are dropped first.
"""

import logging
import threading
from collections import deque

from safekit.schemas.results import Notification

logger = logging.getLogger(__name__)


class InMemoryNotificationSink:
    def __init__(self, maxlen: int = 100):
        self._items: deque[Notification] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def notify(self, notification: Notification) -> None:
        logger.info(
            f"Notification: {notification.title}: {notification.description}",
        )
        with self._lock:
            self._items.append(notification)

    def drain(self) -> list[Notification]:
        """Return and forget every pending notification."""
        with self._lock:
            items = list(self._items)
            self._items.clear()
        return items

    def __len__(self) -> int:
        return len(self._items)
