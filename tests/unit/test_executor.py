"""Unit tests for executor adapters."""

from __future__ import annotations

import threading

import pytest

from postboard.adapters.executor import InlineExecutor, WorkerPool


@pytest.mark.core
@pytest.mark.tra("Adapter.Executor")
@pytest.mark.tier(0)
class TestInlineExecutor:
    """Tests for InlineExecutor."""

    def test_runs_immediately_in_calling_thread(self) -> None:
        with InlineExecutor() as executor:
            future = executor.submit(threading.get_ident)

        assert future.done()
        assert future.result() == threading.get_ident()

    def test_exception_is_captured_in_future(self) -> None:
        def boom() -> None:
            raise ValueError("nope")

        future = InlineExecutor().submit(boom)

        with pytest.raises(ValueError, match="nope"):
            future.result()


@pytest.mark.core
@pytest.mark.tra("Adapter.Executor")
@pytest.mark.tier(1)
class TestWorkerPool:
    """Tests for WorkerPool."""

    def test_runs_tasks_on_worker_threads(self) -> None:
        with WorkerPool(max_workers=2) as pool:
            futures = [pool.submit(threading.current_thread) for _ in range(4)]
            threads = [f.result() for f in futures]

        assert all(t.name.startswith("postboard") for t in threads)

    def test_submit_outside_with_block_raises(self) -> None:
        with pytest.raises(RuntimeError, match="outside a with block"):
            WorkerPool().submit(print)

    def test_concurrent_with_blocks_get_separate_pools(self) -> None:
        """One thread leaving its block does not shut down another's pool."""
        pool = WorkerPool(max_workers=1)
        inside = threading.Barrier(2)
        first_left = threading.Event()
        results: dict[str, object] = {}

        def first() -> None:
            with pool:
                inside.wait()
            first_left.set()

        def second() -> None:
            with pool:
                inside.wait()
                first_left.wait(5)
                results["second"] = pool.submit(lambda: "ok").result()

        threads = [threading.Thread(target=first), threading.Thread(target=second)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == {"second": "ok"}

    def test_pool_is_reusable(self) -> None:
        pool = WorkerPool(max_workers=1)

        with pool:
            first = pool.submit(lambda: 1).result()
        with pool:
            second = pool.submit(lambda: 2).result()

        assert (first, second) == (1, 2)
