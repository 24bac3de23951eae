"""Environment-based configuration using pydantic-settings.

Example:
    >>> from lonely.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # LONELY_LOG_LEVEL=DEBUG
    # LONELY_RAISE_NATIVE_ERRORS=false
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LONELY_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force color output (None = auto-detect)")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class LonelySettings(BaseSettings):
    """Root settings for lonely.

    Example environment variables:
        LONELY_DEBUG=true
        LONELY_RAISE_NATIVE_ERRORS=false
        LONELY_LOG_LEVEL=DEBUG
        LONELY_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="LONELY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Log at DEBUG unless LONELY_LOG_LEVEL is set")
    raise_native_errors: bool = Field(
        default=True,
        description="Re-raise exception payloads as-is when an Err is forced open",
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def log_level(self) -> str:
        """Effective log level: debug mode lowers it to DEBUG unless a level was set explicitly."""
        if self.debug and "level" not in self.logging.model_fields_set:
            return "DEBUG"
        return self.logging.level


def default_settings() -> LonelySettings:
    """Field defaults only, without reading the environment."""
    return LonelySettings.model_construct(logging=LoggingSettings.model_construct())


@lru_cache(maxsize=1)
def get_settings() -> LonelySettings:
    """Get the global settings instance (cached).

    Raises:
        ValidationError: If a LONELY_* variable holds an invalid value
    """
    return LonelySettings()


@lru_cache(maxsize=1)
def runtime_settings() -> LonelySettings:
    """Settings read by the algebra itself (cached).

    Same as get_settings(), except that an invalid environment falls back to
    the field defaults instead of raising.
    """
    try:
        return get_settings()
    except ValidationError:
        return default_settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
    runtime_settings.cache_clear()
