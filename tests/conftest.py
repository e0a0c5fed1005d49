"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import pytest

from postboard.adapters.cache import MemoryCache
from postboard.adapters.store import InMemoryRecordStore
from postboard.core.services import CachedCollectionStore


if TYPE_CHECKING:
    from collections.abc import Callable

    from postboard.core.context import CallContext
    from postboard.core.models import Record, RecordCollection


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, ports, and services")
    config.addinivalue_line("markers", "store: Backing store adapters (memory, sqlite)")
    config.addinivalue_line("markers", "cache: Memory cache adapter")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingStore:
    """Call-counting stub wrapping an InMemoryRecordStore.

    Failures can be switched on per operation to simulate an unavailable
    backing store, and a hook can run in the middle of list_all to
    interleave other work with an in-flight read.
    """

    def __init__(self, bodies: list[str] | None = None) -> None:
        self.inner = InMemoryRecordStore(bodies)
        self.list_calls = 0
        self.append_calls = 0
        self.fail_list: BaseException | None = None
        self.fail_append: BaseException | None = None
        self.during_list: Callable[[], None] | None = None
        self._lock = threading.Lock()

    def list_all(self, ctx: CallContext) -> RecordCollection:
        with self._lock:
            self.list_calls += 1
        if self.fail_list is not None:
            raise self.fail_list
        records = self.inner.list_all(ctx)
        if self.during_list is not None:
            hook, self.during_list = self.during_list, None
            hook()
        return records

    def append(self, ctx: CallContext, body: str) -> Record:
        with self._lock:
            self.append_calls += 1
        if self.fail_append is not None:
            raise self.fail_append
        return self.inner.append(ctx, body)


@pytest.fixture
def clock() -> FakeClock:
    """A fake monotonic clock starting at t=1000."""
    return FakeClock()


@pytest.fixture
def counting_store() -> CountingStore:
    """An empty call-counting backing store."""
    return CountingStore()


@pytest.fixture
def store_factory() -> type[CountingStore]:
    """The CountingStore class, for tests that need several stores."""
    return CountingStore


@pytest.fixture
def board(counting_store: CountingStore, clock: FakeClock) -> CachedCollectionStore:
    """A board over the counting store with a 60s TTL and a fake clock."""
    cache: MemoryCache[RecordCollection] = MemoryCache(max_cost=100, timer=clock)
    return CachedCollectionStore(store=counting_store, cache=cache, ttl=60.0)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove POSTBOARD_* variables so tests see default settings."""
    import os

    for name in list(os.environ):
        if name.startswith("POSTBOARD_"):
            monkeypatch.delenv(name)
