"""Shared fixtures: isolate settings and logging between tests."""

import pytest

from lonely.foundation.config import clear_settings_cache
from lonely.runtime.observability import reset_logging


@pytest.fixture(autouse=True)
def clean_globals(monkeypatch: pytest.MonkeyPatch) -> object:
    """Reset cached settings and logging config around each test."""
    for var in ("LONELY_DEBUG", "LONELY_RAISE_NATIVE_ERRORS", "LONELY_LOG_LEVEL", "LONELY_LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    reset_logging()
    yield
    clear_settings_cache()
    reset_logging()
