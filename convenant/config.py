"""Runtime configuration.

Settings are read from environment variables prefixed with ``CONVENANT_``
(or a local ``.env`` file). Engine code should use the accessor functions
below instead of reading settings directly.
"""

from datetime import date, datetime
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="CONVENANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Reference timezone for "today" (age derivation)
    timezone: str = "Europe/Amsterdam"

    # Children with a known age below this are minors
    adult_age: int = 18

    # Default number of passes for nested placeholder resolution
    nested_placeholder_depth: int = 5

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()


def get_timezone() -> ZoneInfo:
    """Get the configured reference timezone."""
    return ZoneInfo(get_settings().timezone)


def get_adult_age() -> int:
    return get_settings().adult_age


def get_nested_placeholder_depth() -> int:
    return get_settings().nested_placeholder_depth


def today() -> date:
    """Current date in the configured timezone."""
    return datetime.now(get_timezone()).date()
