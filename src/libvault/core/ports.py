"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from concurrent.futures import Future
    from pathlib import Path

    from libvault.core.models import FetchInstruction, TransportResponse

ProgressCallback = Callable[[int, int], None]


@runtime_checkable
class TransportPort(Protocol):
    """Fetches bytes from a remote repository (HTTP, S3, local mirror)."""

    def get(
        self, url: str, progress: ProgressCallback | None = None
    ) -> TransportResponse:
        """Issue a GET and return the status code and full body.

        Args:
            url: Absolute URL or path understood by the adapter.
            progress: Optional callback function(bytes_received, total_bytes).

        Returns:
            TransportResponse with the observed status. A non-200 status is
            returned, not raised; interpreting it is the caller's job.

        Raises:
            TransportError: If the request could not be performed at all.
        """
        ...


@runtime_checkable
class CachePort(Protocol):
    """Local artifact cache with content verification."""

    def fetch(
        self,
        path: Path,
        url: str,
        force_refresh: bool = False,
        expected_sha1: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> bytes:
        """Return the artifact bytes, from disk if valid, else from url."""
        ...

    def fetch_instruction(
        self,
        instruction: FetchInstruction,
        progress: ProgressCallback | None = None,
    ) -> bytes:
        """Execute a FetchInstruction produced by the locator."""
        ...

    def is_cached(self, path: Path, expected_sha1: str | None = None) -> bool:
        """Check whether a valid local copy exists, without fetching."""
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Reports download progress to the user.

    This protocol defines the contract for progress display adapters.
    The core domain uses this to report progress without depending
    on any specific UI library.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a download task.

        Args:
            name: Unique key for the task (the artifact's local path).
            total: Total bytes to download, 0 if unknown.

        Returns:
            A ProgressCallback to call with (bytes_downloaded, total_bytes).
        """
        ...

    def finish_task(self, name: str) -> None:
        """Mark a task as complete.

        Args:
            name: The task name passed to start_task().
        """
        ...


class NullProgressReporter:
    """A ProgressReporter that produces no output.

    Used as the default when no progress reporting is desired.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:  # noqa: ARG002
        """Return a no-op callback."""
        return lambda _downloaded, _total: None

    def finish_task(self, name: str) -> None:
        """Do nothing."""
        _ = name  # Unused but required by protocol


@runtime_checkable
class ExecutorPort(Protocol):
    """Executor for parallel task execution.

    Abstracts over concurrent.futures executors to allow dependency injection
    and testing. The core domain uses this protocol instead of directly
    importing ThreadPoolExecutor, keeping concurrency at the edges.
    """

    def submit(
        self, fn: Callable[..., object], *args: object, **kwargs: object
    ) -> Future[object]:  # type: ignore[name-defined, unused-ignore]
        """Submit a function for execution.

        Args:
            fn: Function to execute.
            *args: Positional arguments to pass to fn.
            **kwargs: Keyword arguments to pass to fn.

        Returns:
            Future representing the pending result.
        """
        ...

    def __enter__(self) -> ExecutorPort:
        """Enter context manager."""
        ...

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Exit context manager."""
        ...
