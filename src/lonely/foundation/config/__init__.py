"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    LonelySettings,
    clear_settings_cache,
    default_settings,
    get_settings,
    runtime_settings,
)

__all__ = [
    "LoggingSettings",
    "LonelySettings",
    "clear_settings_cache",
    "default_settings",
    "get_settings",
    "runtime_settings",
]
