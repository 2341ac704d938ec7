"""FastAPI dependencies exposing the call context to route handlers.

The identity is whatever upstream authentication stored on
request.state.user_id; safekit does not authenticate.
"""

from fastapi import Depends, Request

from safekit.core.call_context import CallContext, check_logged_in


def get_call_context(request: Request) -> CallContext:
    return CallContext(user_id=getattr(request.state, "user_id", None))


def require_logged_in(
    ctx: CallContext = Depends(get_call_context),
) -> CallContext:
    """Dependency form of check_logged_in; yields the context when authenticated."""
    check_logged_in(ctx)
    return ctx
