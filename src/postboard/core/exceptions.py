"""Domain exceptions for postboard.

All library errors inherit from PostboardError, allowing users to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from postboard.core.models import Record


class PostboardError(Exception):
    """Base class for all postboard exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class InvalidInputError(PostboardError):
    """Raised when a message body fails validation.

    Attributes:
        body: The rejected body, as supplied by the caller.
        max_length: The length limit in force, if the body was too long.
    """

    def __init__(
        self, message: str, body: str, max_length: int | None = None
    ) -> None:
        self.body = body
        self.max_length = max_length
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest what a valid body looks like."""
        if self.max_length is not None and len(self.body) > self.max_length:
            return f"Shorten the message to at most {self.max_length} characters"
        return "Provide a message with at least one character"


class StoreUnavailableError(PostboardError):
    """Raised when a backing-store call fails.

    Covers connection failures, store-side timeouts and constraint
    violations. Never retried by the library.

    Attributes:
        operation: The store operation that failed ("list_all" or "append").
        cause: The underlying exception, if any.
        record: The committed record when an append succeeded but the
            follow-up read of the collection failed, otherwise None.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        cause: BaseException | None = None,
        record: Record | None = None,
    ) -> None:
        self.operation = operation
        self.cause = cause
        self.record = record
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the store, noting a committed write."""
        if self.record is not None:
            return (
                f"Message {self.record.id} was saved; "
                "retry listing once the store is reachable"
            )
        return "Check that the message store is reachable and retry"


class OperationCancelledError(PostboardError):
    """Raised when the caller's deadline passed or it cancelled the call.

    Kept distinct from StoreUnavailableError so callers can tell
    "the store failed" apart from "I gave up waiting".

    Attributes:
        operation: The operation that was cancelled.
    """

    def __init__(self, message: str, operation: str) -> None:
        self.operation = operation
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest a longer deadline."""
        return "Increase the timeout (POSTBOARD_STORE_TIMEOUT) or retry"


class ConfigurationError(PostboardError):
    """Raised for configuration problems (invalid cache sizing, bad paths)."""

    pass
