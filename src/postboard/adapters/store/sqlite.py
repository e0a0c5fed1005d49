"""SQLite record store adapter implementing RecordStorePort."""

from __future__ import annotations

import contextlib
import sqlite3
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from postboard.core.exceptions import OperationCancelledError, StoreUnavailableError
from postboard.core.models import Record, RecordCollection


if TYPE_CHECKING:
    from collections.abc import Iterator

    from postboard.core.context import CallContext


# Busy timeout used when the caller sets no deadline
DEFAULT_BUSY_TIMEOUT = 5.0

# SQLite VM instructions between cancellation checks
_PROGRESS_INTERVAL = 1000

_SCHEMA = """
CREATE TABLE IF NOT EXISTS messages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    body TEXT NOT NULL CHECK (length(body) > 0),
    created_at TEXT
)
"""


class SqliteRecordStore:
    """Record store persisting messages in a SQLite database file.

    A fresh connection is opened for every call, so one instance can be
    shared across threads. The messages table is created on first use.
    Long-running statements are interrupted once the call context is
    cancelled or its deadline passes.

    Attributes:
        path: Location of the database file.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._schema_ready = False
        self._schema_lock = threading.Lock()

    def initialize(self) -> None:
        """Create the database file, its parent directory and the table."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with contextlib.closing(sqlite3.connect(self.path)) as conn, conn:
            conn.execute(_SCHEMA)
        self._schema_ready = True

    def list_all(self, ctx: CallContext) -> RecordCollection:
        """Return every record ordered by id."""
        with self._connect(ctx, "list_all") as conn:
            rows = conn.execute(
                "SELECT id, body, created_at FROM messages ORDER BY id"
            ).fetchall()
        return tuple(
            Record(
                id=row[0],
                body=row[1],
                created_at=datetime.fromisoformat(row[2]) if row[2] else None,
            )
            for row in rows
        )

    def append(self, ctx: CallContext, body: str) -> Record:
        """Insert a record and return it with its assigned id."""
        created_at = datetime.now(UTC)
        with self._connect(ctx, "append") as conn:
            cursor = conn.execute(
                "INSERT INTO messages (body, created_at) VALUES (?, ?)",
                (body, created_at.isoformat()),
            )
            record_id = cursor.lastrowid
        assert record_id is not None
        return Record(id=record_id, body=body, created_at=created_at)

    @contextlib.contextmanager
    def _connect(self, ctx: CallContext, operation: str) -> Iterator[sqlite3.Connection]:
        """Open a connection bound to ctx, committing on success."""
        ctx.raise_if_done(operation)
        remaining = ctx.remaining()
        timeout = DEFAULT_BUSY_TIMEOUT if remaining is None else remaining
        try:
            with contextlib.closing(sqlite3.connect(self.path, timeout=timeout)) as conn:
                conn.set_progress_handler(lambda: 1 if ctx.done else 0, _PROGRESS_INTERVAL)
                self._ensure_schema(conn)
                with conn:
                    yield conn
        except sqlite3.Error as e:
            if ctx.done:
                raise OperationCancelledError(
                    f"{operation} was interrupted by its deadline or cancellation",
                    operation,
                ) from e
            raise StoreUnavailableError(
                f"SQLite {operation} failed on {self.path}: {e}",
                operation=operation,
                cause=e,
            ) from e

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        if self._schema_ready:
            return
        with self._schema_lock:
            if not self._schema_ready:
                with conn:
                    conn.execute(_SCHEMA)
                self._schema_ready = True
