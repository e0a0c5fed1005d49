"""Executor adapters implementing ExecutorPort."""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Callable


class InlineExecutor:
    """Runs each submitted task immediately in the calling thread.

    Useful in tests, where deterministic ordering matters more than
    throughput.
    """

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Run fn now and return an already-completed future."""
        future: Future[object] = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def __enter__(self) -> InlineExecutor:
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        return None


class WorkerPool:
    """Thread pool that can be entered many times, from many threads.

    Every ``with`` block gets its own ThreadPoolExecutor, created on entry
    and shut down (waiting for its tasks) on exit. Pools are tracked per
    entering thread, so one WorkerPool can be injected into a long-lived
    store and used by concurrent batches. submit() goes to the innermost
    pool entered by the calling thread.
    """

    def __init__(self, max_workers: int | None = None) -> None:
        """Initialize the pool.

        Args:
            max_workers: Maximum worker threads per batch. None uses the
                ThreadPoolExecutor default.
        """
        self.max_workers = max_workers
        self._local = threading.local()

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Submit fn to this thread's pool; only valid inside a ``with`` block."""
        pools = self._pools()
        if not pools:
            raise RuntimeError("WorkerPool.submit() called outside a with block")
        return pools[-1].submit(fn, *args, **kwargs)

    def __enter__(self) -> WorkerPool:
        self._pools().append(
            ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="postboard"
            )
        )
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        pools = self._pools()
        if pools:
            pools.pop().shutdown(wait=True)
        return None

    def _pools(self) -> list[ThreadPoolExecutor]:
        pools: list[ThreadPoolExecutor] | None = getattr(self._local, "pools", None)
        if pools is None:
            pools = self._local.pools = []
        return pools
