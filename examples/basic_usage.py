"""Basic read-through board example.

This example shows the simplest usage pattern: open a record store,
put a cache in front of it, and read and post messages. Reads are
served from the cache until the entry expires or a post invalidates it.
"""

from postboard import CachedCollectionStore, InMemoryRecordStore, MemoryCache


# Option 1: Manual wiring (full control over adapters)
# Use this when you need a custom store or cache sizing
board = CachedCollectionStore(
    store=InMemoryRecordStore(),
    cache=MemoryCache(max_cost=1_000),
    ttl=300.0,
)

# Option 2: Factory method (recommended for most cases)
# Reads POSTBOARD_* settings and opens the SQLite file they name
# from postboard import load_settings
# board = CachedCollectionStore.from_settings(load_settings())

# First fetch reads the store and caches the whole board
print(f"Messages: {len(board.fetch())}")

# append() writes, invalidates the cached board and re-reads it
records = board.append("hello")
print(f"Board after posting: {[r.body for r in records]}")

# Served from the cache: no store read
records = board.fetch()
print(board.stats())
