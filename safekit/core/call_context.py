"""Call Context: the authenticated identity of the current operation.

Invariants:
    - Identity is passed in explicitly, never looked up from global state
    - check_logged_in is a pure function of the context
"""

from dataclasses import dataclass

from safekit.core.errors import ForbiddenError

NOT_LOGGED_IN_MESSAGE = "You must be logged in"


@dataclass(frozen=True)
class CallContext:
    """Who is making the call. user_id is None for anonymous callers."""
    user_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)


def check_logged_in(ctx: CallContext) -> None:
    """Raise ForbiddenError when the context carries no authenticated identity."""
    if not ctx.is_authenticated:
        raise ForbiddenError(NOT_LOGGED_IN_MESSAGE)
