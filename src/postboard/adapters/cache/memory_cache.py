"""In-memory cache adapter implementing CachePort."""

from __future__ import annotations

import math
import threading
import time
from collections.abc import Callable
from typing import Generic, NamedTuple, TypeVar

from cachetools import TLRUCache

from postboard.core.exceptions import ConfigurationError


T = TypeVar("T")


class _Entry(NamedTuple, Generic[T]):
    value: T
    cost: int
    ttl: float


def _entry_cost(entry: _Entry[object]) -> int:
    return entry.cost


def _entry_expiry(_key: str, entry: _Entry[object], now: float) -> float:
    return now + entry.ttl


class MemoryCache(Generic[T]):
    """Cost-bounded, per-entry TTL cache held in process memory.

    Wraps a cachetools TLRUCache: the cache budget is max_cost and every
    entry counts its admission cost against it. Entries expire ttl
    seconds after they were stored; an entry stored at T with ttl D is
    gone from T + D on. When the budget or the key count would be
    exceeded, the entries closest to expiry are evicted first.

    cachetools caches are not thread-safe, so every operation takes an
    internal lock. Values are stored and returned as-is, so callers
    should store immutable values.

    Attributes:
        max_cost: Total admission budget.
        capacity_hint: Maximum number of distinct keys kept at once.
    """

    def __init__(
        self,
        max_cost: int,
        capacity_hint: int = 100,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            max_cost: Total admission budget across all entries.
            capacity_hint: Expected number of distinct keys.
            timer: Clock returning seconds; injectable for tests.

        Raises:
            ConfigurationError: If max_cost or capacity_hint is not positive.
        """
        if max_cost < 1:
            raise ConfigurationError(f"Cache max_cost must be positive, got {max_cost}")
        if capacity_hint < 1:
            raise ConfigurationError(
                f"Cache capacity_hint must be positive, got {capacity_hint}"
            )
        self.max_cost = max_cost
        self.capacity_hint = capacity_hint
        self._entries: TLRUCache[str, _Entry[T]] = TLRUCache(
            maxsize=max_cost,
            ttu=_entry_expiry,
            timer=timer,
            getsizeof=_entry_cost,
        )
        self._lock = threading.Lock()

    def get(self, key: str) -> T | None:
        """Return the live value for key, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
        return None if entry is None else entry.value

    def put(self, key: str, value: T, cost: int, ttl: float | None) -> bool:
        """Store value under key, replacing any existing entry.

        Args:
            key: Cache key.
            value: Value to store.
            cost: Admission cost, at least 1.
            ttl: Seconds until expiry, or None to keep until evicted.

        Returns:
            True if stored. False if cost exceeds max_cost or ttl is not
            positive; any previous entry under key is dropped in that case.
        """
        entry = _Entry(value, max(cost, 1), math.inf if ttl is None else ttl)
        with self._lock:
            self._entries.pop(key, None)
            if entry.cost > self.max_cost or entry.ttl <= 0:
                return False
            self._entries.expire()
            while len(self._entries) >= self.capacity_hint:
                self._entries.popitem()
            self._entries[key] = entry
            return key in self._entries

    def invalidate(self, key: str) -> None:
        """Remove key from the cache (no-op if absent)."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        """Number of live (unexpired) entries."""
        with self._lock:
            self._entries.expire()
            return len(self._entries)

    @property
    def current_cost(self) -> int:
        """Sum of admission costs of the entries currently held."""
        with self._lock:
            self._entries.expire()
            return int(self._entries.currsize)
