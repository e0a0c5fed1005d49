"""Core domain services for postboard."""

import threading
from collections.abc import Callable, Iterable
from dataclasses import fields
from typing import TYPE_CHECKING, TypeVar

from postboard.core.context import CallContext
from postboard.core.exceptions import (
    OperationCancelledError,
    PostboardError,
    StoreUnavailableError,
)
from postboard.core.models import (
    DEFAULT_BODY_MAX_LENGTH,
    Record,
    RecordCollection,
    StoreStats,
    validate_body,
)
from postboard.core.ports import CachePort, CostFunction, ExecutorPort, RecordStorePort


if TYPE_CHECKING:
    from postboard.config import Settings

R = TypeVar("R")

MESSAGES_CACHE_KEY = "messages"


def fixed_cost(collection: RecordCollection) -> int:  # noqa: ARG001
    """Charge every cached collection the same single unit."""
    return 1


def payload_cost(collection: RecordCollection) -> int:
    """Charge a collection by the UTF-8 size of its bodies (at least 1)."""
    return 1 + sum(len(record.body.encode("utf-8")) for record in collection)


COST_FUNCTIONS: dict[str, CostFunction] = {
    "fixed": fixed_cost,
    "size": payload_cost,
}


class CachedCollectionStore:
    """Read-through, invalidate-on-write cache in front of a record store.

    The whole board is cached as one immutable collection under a single
    key. Reads are served from the cache until the entry expires or is
    invalidated; every successful append invalidates the entry and
    re-reads the board from the backing store, which stays the only
    source of truth.

    No lock is held across backing-store calls. Invalidations bump a
    generation counter, and a fill only lands in the cache if no
    invalidation happened while its read was in flight, so a slow reader
    cannot re-cache a board from before a completed append.
    """

    def __init__(
        self,
        store: RecordStorePort,
        cache: CachePort[RecordCollection],
        *,
        ttl: float | None = None,
        cost: CostFunction = fixed_cost,
        key: str = MESSAGES_CACHE_KEY,
        body_max_length: int | None = DEFAULT_BODY_MAX_LENGTH,
        executor: ExecutorPort | None = None,
    ) -> None:
        self._store = store
        self._cache = cache
        self._ttl = ttl
        self._cost = cost
        self._key = key
        self._body_max_length = body_max_length
        self._executor = executor
        self._lock = threading.Lock()
        self._generation = 0
        self._counters = {f.name: 0 for f in fields(StoreStats)}

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        store: RecordStorePort | None = None,
        executor: ExecutorPort | None = None,
    ) -> "CachedCollectionStore":
        """Create a store wired with the default adapters for settings.

        Args:
            settings: Loaded configuration.
            store: Backing store to use. Defaults to the store named by
                settings.database, resolved against the project root.
            executor: Optional executor for append_many().

        Returns:
            CachedCollectionStore backed by a MemoryCache.
        """
        from postboard.adapters.cache import MemoryCache
        from postboard.adapters.store import open_record_store

        if store is None:
            store = open_record_store(settings.resolved_database())

        cache: MemoryCache[RecordCollection] = MemoryCache(
            max_cost=settings.cache_max_cost,
            capacity_hint=settings.cache_capacity_hint,
        )
        return cls(
            store=store,
            cache=cache,
            ttl=settings.cache_ttl,
            cost=COST_FUNCTIONS[settings.cache_cost_mode],
            body_max_length=settings.body_max_length,
            executor=executor,
        )

    @property
    def key(self) -> str:
        """The cache key the collection is stored under."""
        return self._key

    def fetch(self, ctx: CallContext | None = None) -> RecordCollection:
        """Return the current board, from cache when possible.

        Args:
            ctx: Deadline/cancellation for the backing-store read on a miss.

        Returns:
            Every record in creation order.

        Raises:
            StoreUnavailableError: If the cache missed and the store failed.
                The cache is left untouched.
            OperationCancelledError: If ctx was cancelled or expired.
        """
        cached = self._cache.get(self._key)
        if cached is not None:
            self._count("hits")
            return cached

        self._count("misses")
        return self._fill(ctx or CallContext.background())

    def append(self, body: str, *, ctx: CallContext | None = None) -> RecordCollection:
        """Store a new message and return the board including it.

        Args:
            body: Message text. Must be non-empty and respect the
                configured length limit.
            ctx: Deadline/cancellation for the store calls.

        Returns:
            The board as re-read from the backing store after the write.

        Raises:
            InvalidInputError: If body is invalid. Nothing is written.
            StoreUnavailableError: If the write failed (cache untouched), or
                the write committed but the re-read failed (``record`` set).
            OperationCancelledError: If ctx was cancelled or expired.
        """
        validate_body(body, self._body_max_length)
        ctx = ctx or CallContext.background()

        record = self._write(ctx, body)
        return self._refill_after_write(ctx, [record])

    def append_many(
        self,
        bodies: Iterable[str],
        *,
        ctx: CallContext | None = None,
        max_workers: int = 4,
    ) -> RecordCollection:
        """Store several messages and return the board including them.

        Every body is validated before anything is written. Writes run in
        parallel when an executor is injected and max_workers > 1; their
        relative order is whatever order the backing store commits them in.

        Args:
            bodies: Message texts to append.
            ctx: Deadline/cancellation shared by all store calls.
            max_workers: Use 1 to force sequential writes.

        Returns:
            The board as re-read after all writes completed.

        Raises:
            InvalidInputError: If any body is invalid. Nothing is written.
            StoreUnavailableError: If a write failed. Writes that committed
                before the failure stay committed.
            OperationCancelledError: If ctx was cancelled or expired.
        """
        pending = [validate_body(body, self._body_max_length) for body in bodies]
        ctx = ctx or CallContext.background()

        if not pending:
            return self.fetch(ctx)

        records: list[Record] = []
        if max_workers == 1 or self._executor is None or len(pending) == 1:
            for body in pending:
                records.append(self._write(ctx, body))
        else:
            executor = self._executor
            with executor:
                futures = [executor.submit(self._write, ctx, body) for body in pending]
                errors: list[PostboardError] = []
                for future in futures:
                    try:
                        result = future.result()
                    except PostboardError as e:
                        errors.append(e)
                        continue
                    assert isinstance(result, Record)
                    records.append(result)
            if errors:
                raise errors[0]

        return self._refill_after_write(ctx, records)

    def invalidate(self) -> None:
        """Drop the cached board so the next fetch reads the backing store."""
        with self._lock:
            self._generation += 1
            self._cache.invalidate(self._key)
            self._counters["invalidations"] += 1

    def stats(self) -> StoreStats:
        """Return a snapshot of hit/miss/fill counters."""
        with self._lock:
            return StoreStats(**self._counters)

    def _write(self, ctx: CallContext, body: str) -> Record:
        """Append one record and invalidate the cached board."""
        record = self._call_store("append", ctx, self._store.append, ctx, body)
        self._count("store_writes")
        self.invalidate()
        return record

    def _refill_after_write(
        self, ctx: CallContext, records: list[Record]
    ) -> RecordCollection:
        """Re-read the board after committed writes."""
        try:
            return self._fill(ctx)
        except StoreUnavailableError as e:
            last = records[-1] if records else None
            raise StoreUnavailableError(
                "Message saved but the board could not be re-read",
                operation=e.operation,
                cause=e.cause,
                record=last,
            ) from e

    def _fill(self, ctx: CallContext) -> RecordCollection:
        """Cache-miss path: read the store, then cache unless invalidated."""
        with self._lock:
            generation = self._generation

        collection = tuple(
            self._call_store("list_all", ctx, self._store.list_all, ctx)
        )
        self._count("store_reads")
        cost = self._cost(collection)

        with self._lock:
            if generation != self._generation:
                self._counters["discarded_fills"] += 1
                return collection
            if self._cache.put(self._key, collection, cost, self._ttl):
                self._counters["fills"] += 1
            else:
                self._counters["rejected_fills"] += 1
        return collection

    def _call_store(
        self,
        operation: str,
        ctx: CallContext,
        fn: Callable[..., R],
        *args: object,
    ) -> R:
        """Invoke a backing-store method, mapping failures to domain errors."""
        ctx.raise_if_done(operation)
        try:
            return fn(*args)
        except PostboardError:
            raise
        except Exception as e:
            if ctx.done:
                raise OperationCancelledError(
                    f"{operation} was interrupted by its deadline or cancellation",
                    operation,
                ) from e
            raise StoreUnavailableError(
                f"Backing store {operation} failed: {e}",
                operation=operation,
                cause=e,
            ) from e

    def _count(self, name: str) -> None:
        with self._lock:
            self._counters[name] += 1

