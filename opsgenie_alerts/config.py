"""Client configuration settings."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Remote API defaults ------------------------------------------------
DEFAULT_BASE_URL = "https://api.opsgenie.com/v1/json/"
DEFAULT_TIMEOUT_SECONDS = 30.0


class Settings(BaseSettings):
    """Environment configuration for the Opsgenie alert client."""

    OPSGENIE_API_KEY: str | None = None
    OPSGENIE_BASE_URL: str = DEFAULT_BASE_URL
    OPSGENIE_TIMEOUT_SECONDS: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("OPSGENIE_API_KEY")
    @classmethod
    def _strip_empty_key(cls, value: str | None) -> str | None:
        """Normalise empty API keys to ``None`` so callers see a missing key."""

        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    @field_validator("OPSGENIE_BASE_URL")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        # Endpoint paths are joined relative to the base.
        cleaned = value.strip()
        return cleaned if cleaned.endswith("/") else f"{cleaned}/"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache
def get_settings() -> Settings:
    """Return cached client settings."""

    return Settings()


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "Settings",
    "get_settings",
]
