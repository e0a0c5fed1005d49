"""Unit tests for CallContext deadlines and cancellation."""

from __future__ import annotations

import time

import pytest

from postboard.core.context import CallContext
from postboard.core.exceptions import OperationCancelledError


@pytest.mark.core
@pytest.mark.tra("Domain.CallContext")
@pytest.mark.tier(0)
class TestCallContext:
    """Tests for CallContext."""

    def test_background_is_never_done(self) -> None:
        ctx = CallContext.background()

        assert ctx.deadline is None
        assert ctx.remaining() is None
        assert not ctx.done
        ctx.raise_if_done("list_all")

    def test_with_timeout_sets_future_deadline(self) -> None:
        ctx = CallContext.with_timeout(30)

        remaining = ctx.remaining()
        assert remaining is not None
        assert 0 < remaining <= 30
        assert not ctx.expired

    def test_zero_timeout_is_expired(self) -> None:
        ctx = CallContext.with_timeout(0)

        assert ctx.expired
        assert ctx.done
        assert ctx.remaining() == 0.0

    def test_expired_context_raises(self) -> None:
        ctx = CallContext(deadline=time.monotonic() - 1)

        with pytest.raises(OperationCancelledError, match="exceeded its deadline") as exc_info:
            ctx.raise_if_done("append")

        assert exc_info.value.operation == "append"

    def test_cancel(self) -> None:
        ctx = CallContext.background()

        ctx.cancel()

        assert ctx.cancelled
        assert ctx.done
        with pytest.raises(OperationCancelledError, match="was cancelled"):
            ctx.raise_if_done("list_all")

    def test_child_shares_cancellation(self) -> None:
        parent = CallContext.background()
        child = parent.child(10)

        parent.cancel()

        assert child.cancelled

    def test_child_deadline_never_exceeds_parent(self) -> None:
        parent = CallContext.with_timeout(1)
        child = parent.child(60)

        assert child.deadline == parent.deadline

    def test_child_can_tighten_deadline(self) -> None:
        parent = CallContext.with_timeout(60)
        child = parent.child(1)

        assert parent.deadline is not None
        assert child.deadline is not None
        assert child.deadline < parent.deadline

    def test_context_is_immutable(self) -> None:
        ctx = CallContext.background()

        with pytest.raises(AttributeError):
            ctx.deadline = 1.0  # type: ignore[misc]
