"""Executor adapters implementing ExecutorPort."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Callable

    from libvault.core.ports import ExecutorPort


class SynchronousExecutor:
    """Runs each submitted fetch immediately in the calling thread.

    Used for sequential installs (--workers 1) and in tests, where a
    deterministic order of transport calls is easier to assert on.
    """

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Execute function immediately and return completed future."""
        future: Future[object] = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def __enter__(self) -> SynchronousExecutor:
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        return None


class ThreadPoolExecutorAdapter:
    """Thread pool running one artifact fetch per task.

    Fetches block on network and disk, so threads give real parallelism
    here. The pool is created per install so that a finished install does
    not keep idle worker threads around.
    """

    def __init__(self, max_workers: int | None = None) -> None:
        """Initialize thread pool executor adapter.

        Args:
            max_workers: Maximum number of worker threads. None uses default.
        """
        self._max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Submit function to thread pool.

        Raises:
            RuntimeError: If called outside the context manager.
        """
        if self._executor is None:
            raise RuntimeError("ThreadPoolExecutorAdapter used outside 'with' block")
        return self._executor.submit(fn, *args, **kwargs)

    def __enter__(self) -> ThreadPoolExecutorAdapter:
        self._executor = ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="libvault-fetch"
        )
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True, cancel_futures=exc_type is not None)
        return None


def create_executor(max_workers: int | None = None) -> ExecutorPort:
    """Pick an executor for the requested parallelism.

    Args:
        max_workers: 1 for sequential fetches, None or >1 for a thread pool.

    Returns:
        SynchronousExecutor or ThreadPoolExecutorAdapter.
    """
    if max_workers == 1:
        return SynchronousExecutor()
    return ThreadPoolExecutorAdapter(max_workers=max_workers)
