"""Executor adapters for parallel artifact fetches."""

from libvault.adapters.executor.executor import (
    SynchronousExecutor,
    ThreadPoolExecutorAdapter,
    create_executor,
)


__all__ = ["SynchronousExecutor", "ThreadPoolExecutorAdapter", "create_executor"]
