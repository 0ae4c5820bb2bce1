# tests/conftest.py
import pytest

from cards.presentation import get_presentation_tables
from core.config import get_settings


@pytest.fixture(autouse=True)
def _reset_cached_config():
    # Settings and presentation tables are process-wide lru caches; env changes
    # made by a test must not leak into the next one.
    get_settings.cache_clear()
    get_presentation_tables.cache_clear()
    yield
    get_settings.cache_clear()
    get_presentation_tables.cache_clear()
