"""
Root conftest for all tests.

The project root is on sys.path (pytest ``pythonpath``) so that the
``libs``, ``config`` and ``scripts`` packages import without installation.
"""

import pytest

from config.settings import get_settings


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Settings are cached process-wide; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
