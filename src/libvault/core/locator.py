"""Artifact location: turning a library descriptor into fetch instructions.

This module decides which files a descriptor needs on the current platform
and where they come from. It performs no I/O; the resulting instructions
are executed by a cache adapter.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from libvault.core.exceptions import ClassifierNotFoundError, UnsafePathError
from libvault.core.models import (
    ArtifactDownload,
    DerivedUrl,
    ExplicitDownloads,
    FetchInstruction,
    LibraryCoordinate,
    LibraryDescriptor,
)
from libvault.core.path_utils import to_relative_path
from libvault.core.platform import platform_identifier
from libvault.core.rules import is_needed


logger = logging.getLogger(__name__)


def locate(
    base_dir: Path,
    descriptor: LibraryDescriptor,
    platform: str | None = None,
) -> list[FetchInstruction]:
    """Determine the files to materialize for a library.

    Args:
        base_dir: Libraries directory; relative paths are joined under it.
        descriptor: The library to resolve.
        platform: Platform identifier. Defaults to the running platform.

    Returns:
        Instructions in order (primary artifact first, then natives).
        Empty when the rules exclude the library or no download applies.

    Raises:
        CoordinateParseError: If the descriptor name is not a valid coordinate.
        ClassifierNotFoundError: If the natives map names a classifier that
            has no download entry.
        UnsafePathError: If a derived path would land outside base_dir.
    """
    if platform is None:
        platform = platform_identifier()

    if not is_needed(descriptor.rules, platform):
        logger.debug("Skipping %s: not needed on %s", descriptor.name, platform)
        return []

    coordinate = LibraryCoordinate.parse(descriptor.name)

    strategy = descriptor.strategy
    match strategy:
        case ExplicitDownloads():
            instructions = _locate_explicit(
                base_dir, descriptor.name, coordinate, strategy, platform
            )
        case DerivedUrl():
            instructions = [_locate_derived(base_dir, coordinate, strategy)]
        case _:
            raise TypeError(f"Unsupported location strategy: {type(strategy).__name__}")

    for instruction in instructions:
        _check_contained(base_dir, instruction.local_path, descriptor.name)
    return instructions


def _check_contained(base_dir: Path, local_path: Path, name: str) -> None:
    """Reject paths that an absolute or '..' segment moves out of base_dir."""
    # Lexical check; symlinks under base_dir are not followed
    target = Path(os.path.abspath(local_path))
    if not target.is_relative_to(os.path.abspath(base_dir)):
        raise UnsafePathError(name, target)


def _locate_explicit(
    base_dir: Path,
    name: str,
    coordinate: LibraryCoordinate,
    downloads: ExplicitDownloads,
    platform: str,
) -> list[FetchInstruction]:
    """Build instructions for a descriptor that lists its downloads."""
    instructions: list[FetchInstruction] = []

    if downloads.artifact is not None:
        instructions.append(
            _explicit_instruction(base_dir, coordinate, downloads.artifact)
        )

    if downloads.natives is not None and platform in downloads.natives:
        classifier = downloads.natives[platform]
        classifiers = downloads.classifiers or {}
        if classifier not in classifiers:
            raise ClassifierNotFoundError(name, classifier, platform)
        instructions.append(
            _explicit_instruction(
                base_dir, coordinate, classifiers[classifier], classifier
            )
        )

    return instructions


def _explicit_instruction(
    base_dir: Path,
    coordinate: LibraryCoordinate,
    download: ArtifactDownload,
    classifier: str | None = None,
) -> FetchInstruction:
    return FetchInstruction(
        local_path=base_dir / to_relative_path(coordinate, classifier),
        source_url=download.url,
        force_refresh=False,
        expected_sha1=download.sha1,
        size=download.size,
    )


def _locate_derived(
    base_dir: Path, coordinate: LibraryCoordinate, derived: DerivedUrl
) -> FetchInstruction:
    """Build the instruction for a descriptor whose URL comes from its name."""
    relative_path = to_relative_path(coordinate)
    url = derived.base_url
    # A base without trailing slash already points at the file itself
    if url.endswith("/"):
        url += relative_path
    return FetchInstruction(
        local_path=base_dir / relative_path,
        source_url=url,
        force_refresh=derived.always_stale,
        expected_sha1=None,
    )
