"""Environment-based configuration using pydantic-settings.

Settings are read from ``RESULT_PATTERN_*`` environment variables (or a
``.env`` file) and cached for the life of the process.

Example:
    >>> from result_pattern.config import get_settings
    >>> get_settings().panic_payload
    True
    >>> get_settings().logging.level
    'WARNING'

    # Or with environment variables:
    # RESULT_PATTERN_PANIC_PAYLOAD=false
    # RESULT_PATTERN_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RESULT_PATTERN_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force ANSI colors (None = auto-detect)")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class ResultSettings(BaseSettings):
    """Root settings for result_pattern.

    Example environment variables:
        RESULT_PATTERN_DEBUG=true
        RESULT_PATTERN_PANIC_PAYLOAD=false
        RESULT_PATTERN_LOG_LEVEL=DEBUG
        RESULT_PATTERN_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="RESULT_PATTERN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Force DEBUG log level in configure_from_settings()")
    panic_payload: bool = Field(
        default=True,
        description="Include the payload repr in unwrap()/expect() error messages",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> ResultSettings:
    """Get the global settings instance (cached)."""
    return ResultSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
