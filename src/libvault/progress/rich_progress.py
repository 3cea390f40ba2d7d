"""Rich-based progress reporter for terminal output."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TextColumn,
    TransferSpeedColumn,
)


if TYPE_CHECKING:
    from types import TracebackType

    from libvault.core.ports import ProgressCallback


class RichProgressReporter:
    """Progress reporter using Rich for terminal display.

    Shows one bar per artifact being fetched. Artifacts served from the
    local cache finish immediately without ever receiving bytes. Safe to
    use from the installer's worker threads.

    Example:
        with RichProgressReporter() as reporter:
            paths = installer.install(descriptors, progress=reporter)
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the progress display.

        Args:
            console: Optional Rich console, e.g. one writing to stderr.
        """
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=console,
            transient=True,
        )
        self._tasks: dict[str, TaskID] = {}
        self._lock = threading.Lock()
        self._started = False

    def __enter__(self) -> RichProgressReporter:
        """Start the progress display."""
        self._progress.start()
        self._started = True
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Stop the progress display."""
        self._progress.stop()
        self._started = False

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a fetch.

        Args:
            name: Task key, the artifact's local path. The bar shows
                only its file name.
            total: Declared size in bytes, 0 when unknown.

        Returns:
            A callback to update progress.
        """
        with self._lock:
            # Auto-start if not in context manager
            if not self._started:
                self._progress.start()
                self._started = True
            task_id = self._progress.add_task(Path(name).name, total=total or None)
            self._tasks[name] = task_id

        def callback(downloaded: int, reported_total: int) -> None:
            # Content-Length may be known even when the metadata size is not
            if total == 0 and reported_total:
                self._progress.update(task_id, total=reported_total)
            self._progress.update(task_id, completed=downloaded)

        return callback

    def finish_task(self, name: str) -> None:
        """Mark a fetch as complete and hide its bar.

        Args:
            name: The task name.
        """
        with self._lock:
            task_id = self._tasks.pop(name, None)
        if task_id is not None:
            self._progress.remove_task(task_id)
