"""Backing record store adapters."""

from __future__ import annotations

from pathlib import Path

from postboard.adapters.store.memory import InMemoryRecordStore
from postboard.adapters.store.sqlite import SqliteRecordStore
from postboard.config import MEMORY_DATABASE
from postboard.core.ports import RecordStorePort


def open_record_store(target: Path | str) -> RecordStorePort:
    """Open the record store named by target.

    Args:
        target: ":memory:" for a process-local store, otherwise the path
            of a SQLite database file.

    Returns:
        A RecordStorePort implementation.
    """
    if str(target) == MEMORY_DATABASE:
        return InMemoryRecordStore()
    return SqliteRecordStore(target)


__all__ = [
    "InMemoryRecordStore",
    "SqliteRecordStore",
    "open_record_store",
]
