"""Result Schemas: shapes exchanged with transports and notification sinks.

Invariants:
    - OkResult.ok is the single success flag of a mutating operation
    - OkResult.errors, when present, is a FieldErrorMap
    - Notification mirrors the sink contract: title, description, icon, feeling
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from safekit.core.domain_types import FieldErrorMap, NotificationFeeling


class OkResult(BaseModel):
    """Generic return value of a mutating operation."""
    model_config = ConfigDict(extra="allow")

    ok: bool = False
    errors: FieldErrorMap | None = None

    @classmethod
    def coerce(cls, result: Any) -> "OkResult":
        """Accept an OkResult, a mapping, or None (treated as a bad result)."""
        if isinstance(result, OkResult):
            return result
        if result is None:
            return cls()
        return cls.model_validate(result)


class Notification(BaseModel):
    """A message shown to the end user."""
    title: str
    description: str
    icon: str = "alert"
    feeling: NotificationFeeling = NotificationFeeling.NEGATIVE
