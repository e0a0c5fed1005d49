"""Call contexts carrying deadlines and cancellation for store calls."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Self

from postboard.core.exceptions import OperationCancelledError


@dataclass(frozen=True, slots=True)
class CallContext:
    """Deadline and cancellation signal passed down to every store call.

    The deadline is an absolute time.monotonic() value. Contexts are
    immutable, but the cancellation event is shared, so cancelling a
    context cancels every context derived from it.

    Attributes:
        deadline: Monotonic time after which the call should give up,
            or None for no deadline.
        cancel_event: Event set when the caller cancels.

    Example:
        >>> ctx = CallContext.with_timeout(2.0)
        >>> ctx.done
        False
    """

    deadline: float | None = None
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @classmethod
    def background(cls) -> Self:
        """Return a context with no deadline that is never cancelled."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> Self:
        """Return a context whose deadline is seconds from now."""
        return cls(deadline=time.monotonic() + seconds)

    def child(self, seconds: float) -> Self:
        """Derive a context with a deadline no later than this one's.

        The child shares this context's cancellation event.
        """
        deadline = time.monotonic() + seconds
        if self.deadline is not None:
            deadline = min(deadline, self.deadline)
        return type(self)(deadline=deadline, cancel_event=self.cancel_event)

    def cancel(self) -> None:
        """Signal cancellation to everything holding this context."""
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        """Whether cancel() has been called."""
        return self.cancel_event.is_set()

    @property
    def expired(self) -> bool:
        """Whether the deadline has passed."""
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def done(self) -> bool:
        """Whether the call should stop (cancelled or expired)."""
        return self.cancelled or self.expired

    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), or None."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def raise_if_done(self, operation: str) -> None:
        """Raise OperationCancelledError if the context is done.

        Args:
            operation: Name of the operation being guarded, for the error.
        """
        if self.cancelled:
            raise OperationCancelledError(f"{operation} was cancelled", operation)
        if self.expired:
            raise OperationCancelledError(
                f"{operation} exceeded its deadline", operation
            )
