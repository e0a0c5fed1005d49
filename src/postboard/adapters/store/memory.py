"""In-memory record store for development and tests."""

from __future__ import annotations

import contextlib
import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from postboard.core.exceptions import OperationCancelledError
from postboard.core.models import Record, RecordCollection


if TYPE_CHECKING:
    from collections.abc import Iterator

    from postboard.core.context import CallContext


class InMemoryRecordStore:
    """Record store keeping messages in a process-local list.

    Implements RecordStorePort. Ids start at 1 and increase by one per
    append. Data is lost when the process exits.
    """

    def __init__(self, bodies: list[str] | None = None) -> None:
        """Initialize the store, optionally pre-seeded with messages.

        Args:
            bodies: Message texts to insert, in order.
        """
        self._records: list[Record] = []
        self._lock = threading.Lock()
        for body in bodies or []:
            self._insert(body)

    def list_all(self, ctx: CallContext) -> RecordCollection:
        """Return every record in creation order."""
        with self._locked(ctx, "list_all"):
            return tuple(self._records)

    def append(self, ctx: CallContext, body: str) -> Record:
        """Store a new record and return it."""
        with self._locked(ctx, "append"):
            return self._insert(body)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _insert(self, body: str) -> Record:
        record = Record(
            id=len(self._records) + 1,
            body=body,
            created_at=datetime.now(UTC),
        )
        self._records.append(record)
        return record

    @contextlib.contextmanager
    def _locked(self, ctx: CallContext, operation: str) -> Iterator[None]:
        ctx.raise_if_done(operation)
        remaining = ctx.remaining()
        if not self._lock.acquire(timeout=-1 if remaining is None else remaining):
            raise OperationCancelledError(
                f"{operation} timed out waiting for the store", operation
            )
        try:
            yield
        finally:
            self._lock.release()
