import pytest

from safekit.core.call_context import (
    NOT_LOGGED_IN_MESSAGE,
    CallContext,
    check_logged_in,
)
from safekit.core.errors import ForbiddenError


def test_check_logged_in_passes_with_identity():
    assert check_logged_in(CallContext(user_id="u1")) is None


@pytest.mark.parametrize("user_id", [None, ""])
def test_check_logged_in_raises_forbidden_without_identity(user_id):
    with pytest.raises(ForbiddenError) as exc_info:
        check_logged_in(CallContext(user_id=user_id))
    assert exc_info.value.details == NOT_LOGGED_IN_MESSAGE
    assert exc_info.value.code == "forbidden"
