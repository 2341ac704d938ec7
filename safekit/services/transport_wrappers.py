"""Transport Wrappers: call/subscribe helpers that normalize failure delivery.

Invariants:
    - call(): a synchronous transport exception reaches the callback exactly once,
      as (exc, None), and never propagates; an exception raised after delivery
      propagates and is never redelivered
    - subscribe(): every subscription error is logged and notified before the
      caller's own on_error runs
    - No retries, ordering or timeouts are added on top of the transport
"""

import logging
from typing import Any, Callable

from safekit.core.transport_protocols import (
    NotificationSink,
    RpcCallback,
    RpcTransport,
    SubscriptionCallbacks,
    SubscriptionTransport,
)
from safekit.schemas.results import Notification

logger = logging.getLogger(__name__)


def call(transport: RpcTransport, name: str, *args: Any, callback: RpcCallback) -> Any:
    """Forward to transport.call, funnelling synchronous errors into callback.

    An exception raised after the transport already delivered to callback
    (typically raised by the callback itself) propagates unchanged.
    """
    delivered = False

    def guarded(error: BaseException | None, result: Any) -> None:
        nonlocal delivered
        delivered = True
        callback(error, result)

    try:
        return transport.call(name, *args, callback=guarded)
    except Exception as exc:
        if delivered:
            raise
        logger.error(
            f"Call to '{name}' failed before dispatch: {exc}",
            extra={"method": name},
        )
        callback(exc, None)
        return None


def subscribe(
    transport: SubscriptionTransport,
    notifier: NotificationSink,
    name: str,
    *args: Any,
    callbacks: SubscriptionCallbacks | Callable[[], None] | None = None,
) -> Any:
    """Forward to transport.subscribe with error notification added.

    callbacks may be a SubscriptionCallbacks bundle or a bare function, which
    is used as on_ready.
    """
    user_callbacks = _normalize_callbacks(callbacks)

    def on_ready() -> None:
        if user_callbacks.on_ready is not None:
            user_callbacks.on_ready()

    def on_error(*error: Any) -> None:
        logger.error(
            f"Subscription '{name}' failed: {error}",
            extra={"subscription": name},
        )
        notifier.notify(Notification(
            title="Subscription Error",
            description=f"Failed to subscribe to '{name}'",
        ))
        if user_callbacks.on_error is not None:
            user_callbacks.on_error(*error)

    return transport.subscribe(
        name, *args,
        callbacks=SubscriptionCallbacks(on_ready=on_ready, on_error=on_error),
    )


def _normalize_callbacks(
    callbacks: SubscriptionCallbacks | Callable[[], None] | None,
) -> SubscriptionCallbacks:
    if callbacks is None:
        return SubscriptionCallbacks()
    if isinstance(callbacks, SubscriptionCallbacks):
        return callbacks
    if callable(callbacks):
        return SubscriptionCallbacks(on_ready=callbacks)
    raise TypeError(
        f"callbacks must be SubscriptionCallbacks or callable, got {type(callbacks).__name__}"
    )
