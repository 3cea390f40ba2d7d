"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

from libvault.core.formatting import status_to_color


if TYPE_CHECKING:
    from pathlib import Path

    from libvault.core.models import FetchInstruction


def _format_status_with_color(status: str) -> Text:
    """Format status string with color coding.

    Args:
        status: Status string ("cached", "refresh", or "missing")

    Returns:
        Rich Text object with the color from status_to_color().
    """
    color = status_to_color(status)
    return Text(status, style=color) if color else Text(status)


def _display_path(instruction: FetchInstruction, base_dir: Path) -> str:
    """Show the instruction's target relative to the libraries directory."""
    try:
        return instruction.local_path.relative_to(base_dir).as_posix()
    except ValueError:
        return str(instruction.local_path)


def _short_sha1(sha1: str | None) -> str:
    """Abbreviate a SHA-1 for table display."""
    if sha1 is None:
        return "-"
    return sha1[:12]


def _format_size(size_bytes: int | None) -> str:
    """Format size in bytes to human-readable format."""
    if size_bytes is None:
        return "-"
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} TB"
