"""Configuration utilities for libvault.

This module provides utilities for project configuration and path resolution.
"""

from __future__ import annotations

import os
from pathlib import Path

from libvault.core.exceptions import ConfigurationError


LIBRARIES_DIR_ENV = "LIBVAULT_LIBRARIES_DIR"
DEFAULT_LIBRARIES_DIR = "libraries"


def find_project_root(start: Path | None = None) -> Path:
    """Find the project root directory by walking up from start directory.

    Searches for marker files in the following priority order:
    1. .libvault - Explicit project marker
    2. pyproject.toml - Python project root
    3. .git - Version control root

    Args:
        start: Directory to start searching from. If None, uses current directory.

    Returns:
        Path to project root directory. Returns start directory if no markers found.

    Example:
        >>> from libvault.config import find_project_root
        >>> root = find_project_root()
        >>> libraries = root / "libraries"
    """
    if start is None:
        start = Path.cwd()

    markers = [".libvault", "pyproject.toml", ".git"]
    current = start.resolve()

    for parent in [current, *current.parents]:
        for marker in markers:
            if (parent / marker).exists():
                return parent

    return current


def resolve_libraries_dir(
    root: Path | None = None, override: Path | str | None = None
) -> Path:
    """Resolve the directory artifacts are cached under.

    Precedence: explicit override, then the LIBVAULT_LIBRARIES_DIR
    environment variable, then "libraries" under the project root.
    Relative values are resolved against root.

    Args:
        root: Project root. If None, uses find_project_root().
        override: Explicit directory, e.g. from a --dest option.

    Returns:
        Absolute path to the libraries directory. It may not exist yet.

    Raises:
        ConfigurationError: If the resolved path exists but is not a directory.
    """
    if root is None:
        root = find_project_root()

    configured = override if override is not None else os.environ.get(LIBRARIES_DIR_ENV)
    libraries_dir = Path(configured) if configured else Path(DEFAULT_LIBRARIES_DIR)

    if not libraries_dir.is_absolute():
        libraries_dir = root / libraries_dir
    if libraries_dir.exists() and not libraries_dir.is_dir():
        raise ConfigurationError(f"Libraries directory {libraries_dir} is not a directory")
    return libraries_dir
