"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
import structlog

from fixed_decimal.math.pow10 import PowerOfTenCache, set_pow10_cache


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore structlog defaults after each test (some tests configure it)."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def pow10_cache() -> Iterator[PowerOfTenCache]:
    """Install a fresh process-wide power-of-ten cache for one test."""
    cache = PowerOfTenCache()
    set_pow10_cache(cache)
    yield cache
    set_pow10_cache(None)


