"""Core domain module for postboard.

This module contains pure Python domain models, port definitions and the
cached collection store. It has no I/O dependencies and can be tested in
isolation.
"""

from postboard.core.context import CallContext
from postboard.core.models import Record, RecordCollection, StoreStats
from postboard.core.ports import CachePort, ExecutorPort, RecordStorePort
from postboard.core.services import CachedCollectionStore


__all__ = [
    "CachePort",
    "CachedCollectionStore",
    "CallContext",
    "ExecutorPort",
    "Record",
    "RecordCollection",
    "RecordStorePort",
    "StoreStats",
]
