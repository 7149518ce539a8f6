"""Environment-driven configuration.

Every setting can be overridden with a ``FRIDGE_``-prefixed environment
variable or a ``.env`` file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fridge.application.product_lookup import DEFAULT_BASE_URL


class FridgeSettings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="FRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DATA_DIR: Path = Field(default_factory=lambda: Path.home() / ".fridge")
    LOOKUP_BASE_URL: str = DEFAULT_BASE_URL
    LOOKUP_TIMEOUT: float = 10.0  # seconds
    # Takes precedence over the key saved with ``fridge config set-key``.
    API_KEY: str | None = None
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("LOOKUP_TIMEOUT")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("LOOKUP_TIMEOUT must be positive")
        return value


@lru_cache
def get_settings() -> FridgeSettings:
    return FridgeSettings()
