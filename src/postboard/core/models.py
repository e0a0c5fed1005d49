"""Core domain models for postboard.

These models are pure Python dataclasses with no I/O dependencies.
They represent the records on the board and the counters kept about them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from postboard.core.exceptions import InvalidInputError


DEFAULT_BODY_MAX_LENGTH = 256


@dataclass(frozen=True, slots=True)
class Record:
    """A single message stored on the board.

    Attributes:
        id: Identifier assigned by the backing store, increasing with
            creation order.
        body: The message text, exactly as supplied.
        created_at: When the backing store created the record, if known.

    Example:
        >>> record = Record(id=1, body="hello")
        >>> record.body
        'hello'
    """

    id: int
    body: str
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate record fields after initialization."""
        if not self.body:
            raise ValueError("Record body cannot be empty")


# The full ordered board. A tuple so a cached value can only be swapped
# whole, never edited in place.
RecordCollection = tuple[Record, ...]


def validate_body(body: str, max_length: int | None = DEFAULT_BODY_MAX_LENGTH) -> str:
    """Check that a message body is acceptable for appending.

    A body must be non-empty and, when max_length is given, be no longer
    than max_length characters. Whitespace is significant: a body of only
    spaces is accepted and stored as supplied.

    Args:
        body: The candidate message text.
        max_length: Upper bound on the body length, or None for no bound.

    Returns:
        The body unchanged.

    Raises:
        InvalidInputError: If the body is empty or too long.
    """
    if not body:
        raise InvalidInputError("Message body cannot be empty", body=body)
    if max_length is not None and len(body) > max_length:
        raise InvalidInputError(
            f"Message body is {len(body)} characters, limit is {max_length}",
            body=body,
            max_length=max_length,
        )
    return body


@dataclass(frozen=True, slots=True)
class StoreStats:
    """Snapshot of a CachedCollectionStore's counters.

    Attributes:
        hits: Fetches served from the cache.
        misses: Fetches that had to read the backing store.
        store_reads: Successful list_all calls.
        store_writes: Successful append calls.
        fills: Collections written into the cache.
        rejected_fills: Fills the cache declined (cost or ttl limits).
        discarded_fills: Fills skipped because an invalidation happened
            while the read was in flight.
        invalidations: Times the cache entry was dropped.
    """

    hits: int = 0
    misses: int = 0
    store_reads: int = 0
    store_writes: int = 0
    fills: int = 0
    rejected_fills: int = 0
    discarded_fills: int = 0
    invalidations: int = 0

    @property
    def hit_ratio(self) -> float:
        """Fraction of fetches served from the cache (0.0 when none yet)."""
        total = self.hits + self.misses
        return self.hits / total if total else 0.0
