"""Memoized powers of ten.

Scaling, rounding and digit counting all need 10**n for the same small set
of exponents over and over. PowerOfTenCache keeps them in an append-only map.
Entries are never invalidated; inserting the same exponent twice is
idempotent, so the lock only guards map access.
"""

from __future__ import annotations

import threading

import structlog

__all__ = [
    "PowerOfTenCache",
    "get_pow10_cache",
    "set_pow10_cache",
    "pow10",
]

logger = structlog.get_logger()


class PowerOfTenCache:
    """Thread-safe read-through cache of 10**n for n >= 0."""

    __slots__ = ("_powers", "_lock")

    def __init__(self) -> None:
        self._powers: dict[int, int] = {0: 1, 1: 10}
        self._lock = threading.Lock()

    def get(self, exponent: int) -> int:
        """Return 10**exponent, computing and storing it on first use.

        Raises:
            ValueError: If exponent is negative
        """
        if exponent < 0:
            raise ValueError(f"Exponent must be non-negative, got {exponent}")
        with self._lock:
            value = self._powers.get(exponent)
        if value is not None:
            return value

        value = 10**exponent
        logger.debug("pow10_cache_miss", exponent=exponent)
        with self._lock:
            # Another thread may have stored the same value meanwhile; both are equal.
            return self._powers.setdefault(exponent, value)

    def clear(self) -> None:
        """Drop all cached powers except the seed entries."""
        with self._lock:
            self._powers = {0: 1, 1: 10}

    def __contains__(self, exponent: object) -> bool:
        with self._lock:
            return exponent in self._powers

    def __len__(self) -> int:
        with self._lock:
            return len(self._powers)

    def __repr__(self) -> str:
        return f"PowerOfTenCache(size={len(self)})"


_default_cache: PowerOfTenCache | None = None
_default_cache_lock = threading.Lock()


def get_pow10_cache() -> PowerOfTenCache:
    """Return the process-wide cache, creating it lazily."""
    global _default_cache
    if _default_cache is None:
        with _default_cache_lock:
            if _default_cache is None:
                _default_cache = PowerOfTenCache()
    return _default_cache


def set_pow10_cache(cache: PowerOfTenCache | None) -> None:
    """Replace the process-wide cache (None resets to a fresh lazy cache)."""
    global _default_cache
    with _default_cache_lock:
        _default_cache = cache


def pow10(exponent: int) -> int:
    """Return 10**exponent from the process-wide cache."""
    return get_pow10_cache().get(exponent)
