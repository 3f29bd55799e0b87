import warnings

import pytest

from outward.config import get_settings
from outward.validation import InvalidIntervalWarning


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run every test with IA_VALID unset and a fresh settings cache."""
    monkeypatch.delenv("IA_VALID", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def no_warnings():
    """Turn any InvalidIntervalWarning into a test failure."""
    with warnings.catch_warnings():
        warnings.simplefilter("error", InvalidIntervalWarning)
        yield
