"""Progress reporting adapters."""

from libvault.progress.rich_progress import RichProgressReporter


__all__ = ["RichProgressReporter"]
