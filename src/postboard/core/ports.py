"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable


if TYPE_CHECKING:
    from concurrent.futures import Future

    from postboard.core.context import CallContext
    from postboard.core.models import Record, RecordCollection

T = TypeVar("T")


@runtime_checkable
class RecordStorePort(Protocol):
    """Authoritative ordered record store (SQLite, in-memory).

    Implementations must be safe to call from many threads at once
    without external synchronization.
    """

    def list_all(self, ctx: CallContext) -> RecordCollection:
        """Return every record in creation order.

        Raises:
            StoreUnavailableError: If the store cannot be read.
            OperationCancelledError: If ctx is cancelled or expires.
        """
        ...

    def append(self, ctx: CallContext, body: str) -> Record:
        """Persist a new record with the given body and return it.

        Raises:
            StoreUnavailableError: If the write fails.
            OperationCancelledError: If ctx is cancelled or expires.
        """
        ...


@runtime_checkable
class CachePort(Protocol[T]):
    """In-process cache holding whole values under string keys.

    Values are replaced whole; a reader sees either the old value or the
    new one. Implementations must tolerate concurrent use.
    """

    def get(self, key: str) -> T | None:
        """Return the live value for key, or None if absent or expired."""
        ...

    def put(self, key: str, value: T, cost: int, ttl: float | None) -> bool:
        """Store value under key, replacing any existing entry.

        Args:
            key: Cache key.
            value: Value to store.
            cost: Admission cost counted against the cache budget.
            ttl: Seconds until the entry expires, or None for no expiry.

        Returns:
            True if the cache admitted the value, False if it declined.
            Declining is not an error.
        """
        ...

    def invalidate(self, key: str) -> None:
        """Remove key from the cache (no-op if absent)."""
        ...


# Admission cost of a collection
CostFunction = Callable[["RecordCollection"], int]


@runtime_checkable
class ExecutorPort(Protocol):
    """Executor for parallel task execution.

    Abstracts over concurrent.futures executors so the core can fan out
    work without importing a thread pool itself.
    """

    def submit(
        self, fn: Callable[..., object], *args: object, **kwargs: object
    ) -> Future[object]:  # type: ignore[name-defined, unused-ignore]
        """Submit a function for execution and return its future."""
        ...

    def __enter__(self) -> ExecutorPort:
        """Enter context manager."""
        ...

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Exit context manager."""
        ...
