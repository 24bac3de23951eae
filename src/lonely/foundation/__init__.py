"""Foundation layer: faults and configuration shared by both algebras."""

from .config import LoggingSettings, LonelySettings, clear_settings_cache, get_settings
from .errors import ErrorCode, Fault, LonelyException, ShapeError, UnwrapError

__all__ = [
    "ErrorCode", "Fault", "LonelyException", "ShapeError", "UnwrapError",
    "LoggingSettings", "LonelySettings", "clear_settings_cache", "get_settings",
]
