"""In-memory TTL cache for the resolved now-playing snapshot."""

from __future__ import annotations

import time
from typing import Any, NamedTuple


class CacheEntry(NamedTuple):
    value: Any
    expires_at: float


class SnapshotCache:
    """Single-slot TTL cache.

    The stored value may itself be None (a cached "unavailable"), so a miss is
    reported as a None entry rather than a None value. The value and its
    expiry are always written together.
    """

    def __init__(self, ttl: float = 10.0) -> None:
        self._ttl = ttl
        self._entry: CacheEntry | None = None

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self) -> CacheEntry | None:
        """Return the cached entry if it exists and has not expired."""
        entry = self._entry
        if entry is None:
            return None
        if time.time() >= entry.expires_at:
            return None
        return entry

    def put(self, value: Any) -> CacheEntry:
        """Store a value, stamping it with a fresh expiry."""
        entry = CacheEntry(value, time.time() + self._ttl)
        self._entry = entry
        return entry

    def peek(self) -> CacheEntry | None:
        """Return the stored entry regardless of freshness."""
        return self._entry

    def clear(self) -> None:
        self._entry = None

    @property
    def seconds_remaining(self) -> float:
        """Seconds until the stored entry goes stale, 0 when empty or stale."""
        if self._entry is None:
            return 0.0
        return max(0.0, self._entry.expires_at - time.time())
