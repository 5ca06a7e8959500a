# league_standings/cache.py
"""
Injectable in-memory TTL cache.

One instance is built per process by the app factory and handed to every service
that needs it. If you run multiple gunicorn workers, each worker has its own cache.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry(Generic[T]):
    """A single cached value and the timestamp after which it is stale."""
    expires_at: float
    value: Optional[T]


class TTLCache:
    """A small key/value cache with per-entry expiry and lazy loading."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        """Initialize an empty cache store. `clock` is swappable for tests."""
        self._clock = clock
        self._store: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for key, or None when missing/expired."""
        entry = self._store.get(key)
        if entry is None:
            return None

        if self._clock() >= entry.expires_at:
            self._store.pop(key, None)
            return None

        return entry.value

    def put(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Store a value that stays fresh for ttl_seconds from now."""
        self._store[key] = CacheEntry(expires_at=self._clock() + ttl_seconds, value=value)

    def get_or_set(self, key: str, ttl_seconds: float, loader: Callable[[], T]) -> T:
        """
        Retrieve a cached value if not expired, otherwise compute & store a new value.

        Args:
            key: Cache key.
            ttl_seconds: Time-to-live for the entry.
            loader: Function that returns the value if the cache is stale/missing.

        Returns:
            The cached or newly loaded value.

        A loader that raises leaves the cache untouched; a loader returning None
        is not cached.
        """
        value = self.get(key)
        if value is not None:
            return value

        logger.debug("cache miss for %s", key)
        value = loader()
        if value is not None:
            self.put(key, value, ttl_seconds)
        return value

    def invalidate(self, key: str) -> None:
        """Drop a single entry if present."""
        self._store.pop(key, None)

    def clear(self) -> None:
        """Clear all cached entries."""
        self._store.clear()
