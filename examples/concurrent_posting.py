"""Concurrent posting to a SQLite-backed board.

This example posts a batch of messages in parallel using a WorkerPool
and reads the board back. initialize() creates the SQLite file and its
directory; later calls only need the file to be reachable.
"""

from pathlib import Path

from postboard import (
    CachedCollectionStore,
    CallContext,
    MemoryCache,
    SqliteRecordStore,
    WorkerPool,
)


store = SqliteRecordStore(Path("./data/board.db"))
store.initialize()

board = CachedCollectionStore(
    store=store,
    cache=MemoryCache(max_cost=1_000),
    ttl=30.0,
    executor=WorkerPool(max_workers=4),
)

messages = [f"status update {i}" for i in range(10)]

# Every body is validated first; writes then run on 4 threads
records = board.append_many(
    messages, ctx=CallContext.with_timeout(10.0), max_workers=4
)
print(f"Board now holds {len(records)} messages")

# Use max_workers=1 to keep submission order
board.append_many(["first", "second"], max_workers=1)

stats = board.stats()
print(f"{stats.store_writes} writes, hit ratio {stats.hit_ratio:.0%}")
