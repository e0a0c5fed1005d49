"""Error handling patterns with recovery hints.

This example demonstrates how to handle common errors and use
the recovery_hint property to provide actionable guidance.
"""

from postboard import (
    CachedCollectionStore,
    CallContext,
    InMemoryRecordStore,
    # Exceptions
    InvalidInputError,
    MemoryCache,
    OperationCancelledError,
    PostboardError,
    RecordCollection,
    StoreUnavailableError,
)


board = CachedCollectionStore(
    store=InMemoryRecordStore(["welcome"]),
    cache=MemoryCache(max_cost=1_000),
    ttl=60.0,
    body_max_length=140,
)


# Pattern 1: Reject bad input before anything is written
def post_checked(board: CachedCollectionStore, body: str) -> RecordCollection | None:
    """Post a message, explaining why it was refused."""
    try:
        return board.append(body)
    except InvalidInputError as e:
        print(f"Not posted: {e}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 2: The write may have landed even though the re-read failed
def post_reporting_saved(board: CachedCollectionStore, body: str) -> None:
    """Post a message, telling the user when it was saved anyway."""
    try:
        board.append(body)
    except StoreUnavailableError as e:
        if e.record is not None:
            print(f"Saved as message {e.record.id}, but the board is unreachable")
        else:
            print(f"Store failed during {e.operation}: {e.cause}")
        print(f"Hint: {e.recovery_hint}")


# Pattern 3: Bound how long a read may wait
def fetch_with_deadline(
    board: CachedCollectionStore, seconds: float
) -> RecordCollection | None:
    """Fetch the board, giving up after the given number of seconds."""
    try:
        return board.fetch(CallContext.with_timeout(seconds))
    except OperationCancelledError as e:
        print(f"Gave up on {e.operation}")
        return None


# Pattern 4: Catch-all for any library error
def fetch_safe(board: CachedCollectionStore) -> RecordCollection:
    """Fetch the board with comprehensive error handling."""
    try:
        return board.fetch()
    except PostboardError as e:
        # Catch any library error
        print(f"Unexpected error: {e}")
        print(f"Hint: {e.recovery_hint}")
        return ()


# Example usage
if __name__ == "__main__":
    # This prints the error message and the hint
    post_checked(board, "   ")
