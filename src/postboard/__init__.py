"""postboard - A message board served through a read-through cache.

This library keeps an ordered collection of short text messages in a
backing store and serves the whole board from an in-process cache that
is invalidated on every write.

Example:
    >>> from postboard import CachedCollectionStore, InMemoryRecordStore, MemoryCache
    >>> board = CachedCollectionStore(
    ...     store=InMemoryRecordStore(),
    ...     cache=MemoryCache(max_cost=1000),
    ...     ttl=60,
    ... )
    >>> [r.body for r in board.append("hello")]
    ['hello']
"""

from postboard.adapters.cache import MemoryCache
from postboard.adapters.executor import InlineExecutor, WorkerPool
from postboard.adapters.store import (
    InMemoryRecordStore,
    SqliteRecordStore,
    open_record_store,
)
from postboard.config import Settings, find_project_root, load_settings
from postboard.core.context import CallContext
from postboard.core.exceptions import (
    ConfigurationError,
    InvalidInputError,
    OperationCancelledError,
    PostboardError,
    StoreUnavailableError,
)
from postboard.core.models import Record, RecordCollection, StoreStats, validate_body
from postboard.core.ports import CachePort, ExecutorPort, RecordStorePort
from postboard.core.services import (
    MESSAGES_CACHE_KEY,
    CachedCollectionStore,
    fixed_cost,
    payload_cost,
)


__version__ = "0.1.0"

__all__ = [
    "MESSAGES_CACHE_KEY",
    "CachePort",
    "CachedCollectionStore",
    "CallContext",
    "ConfigurationError",
    "ExecutorPort",
    "InMemoryRecordStore",
    "InlineExecutor",
    "InvalidInputError",
    "MemoryCache",
    "OperationCancelledError",
    "PostboardError",
    "Record",
    "RecordCollection",
    "RecordStorePort",
    "Settings",
    "SqliteRecordStore",
    "StoreStats",
    "StoreUnavailableError",
    "WorkerPool",
    "__version__",
    "find_project_root",
    "fixed_cost",
    "load_settings",
    "open_record_store",
    "payload_cost",
    "validate_body",
]
