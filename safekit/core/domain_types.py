"""Domain Types: shared aliases and enums used across the package.

Invariants:
    - FieldErrorMap maps a field name to one human-readable message
    - ErrorKind values are the stable machine codes sent to clients
    - SET_KEY / UNSET_KEY are the only modifier operators the gate understands
"""

from enum import Enum
from typing import Any, MutableMapping, TypeAlias


FieldErrorMap: TypeAlias = dict[str, str]
Document: TypeAlias = MutableMapping[str, Any]

SET_KEY = "$set"
UNSET_KEY = "$unset"


class ErrorKind(str, Enum):
    """Machine codes carried by SafeError subclasses."""
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not-found"
    VALIDATION_FAILED = "validation-failed"
    INTERNAL = "internal-error"


class NotificationFeeling(str, Enum):
    """Tone of a user-facing notification."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
