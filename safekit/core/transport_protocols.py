"""Boundary Protocols: contracts for the RPC, subscription and notification collaborators.

Invariants:
    - safekit never implements delivery; it only wraps these interfaces
    - An RPC callback is invoked at most once with (error, result)
    - Subscription callbacks are passed as a SubscriptionCallbacks bundle
"""

from dataclasses import dataclass
from typing import Any, Callable, Protocol

RpcCallback = Callable[[BaseException | None, Any], None]


@dataclass
class SubscriptionCallbacks:
    on_ready: Callable[[], None] | None = None
    on_error: Callable[..., None] | None = None


class RpcTransport(Protocol):
    def call(self, name: str, *args: Any, callback: RpcCallback) -> Any: ...


class SubscriptionTransport(Protocol):
    def subscribe(
        self, name: str, *args: Any, callbacks: SubscriptionCallbacks,
    ) -> Any: ...


class NotificationSink(Protocol):
    def notify(self, notification: Any) -> None: ...


class ErrorTarget(Protocol):
    """A UI element able to render field errors itself."""
    def on_error(self, errors: dict[str, str]) -> None: ...
