"""Root conftest: shared test configuration."""

import pytest

from paramspec.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from PARAMSPEC_* variables and the cached settings."""
    for key in ("PARAMSPEC_ENUM_CASE_SENSITIVE", "PARAMSPEC_REGEX_ERROR_MESSAGE"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
