"""Executor adapters for parallel appends."""

from postboard.adapters.executor.executor import InlineExecutor, WorkerPool


__all__ = ["InlineExecutor", "WorkerPool"]
