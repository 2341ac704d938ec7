"""Package Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - validation_errors picks one failure mode per deployment: "raise" or "return"

Design Decisions:
    - Env prefix SAFEKIT_ so the settings coexist with the host application's own
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Package settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="SAFEKIT_", case_sensitive=False, extra="ignore",
    )

    # ValidationGate: raise ValidationFailedError, or return the field map
    validation_errors: Literal["raise", "return"] = "raise"

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def raise_validation_errors(self) -> bool:
        return self.validation_errors == "raise"


@lru_cache
def get_settings() -> Settings:
    return Settings()
