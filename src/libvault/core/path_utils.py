"""Repository layout path derivation.

Artifacts live under ``group/as/dirs/artifact/version/`` with file names
``artifact-version[-classifier].extension``, the standard Maven layout used
both for on-disk storage and for repository URLs.
"""

from __future__ import annotations

from libvault.core.models import LibraryCoordinate


def artifact_filename(
    coordinate: LibraryCoordinate, classifier: str | None = None
) -> str:
    """Build the file name for a coordinate.

    Args:
        coordinate: The parsed coordinate.
        classifier: Overrides the coordinate's own classifier when given.

    Returns:
        File name in format artifact-version[-classifier].extension
    """
    if classifier is None:
        classifier = coordinate.classifier
    stem = f"{coordinate.artifact}-{coordinate.version}"
    if classifier is not None:
        stem = f"{stem}-{classifier}"
    return f"{stem}.{coordinate.file_extension}"


def to_relative_path(
    coordinate: LibraryCoordinate, classifier: str | None = None
) -> str:
    """Derive the repository-relative path of an artifact.

    Always uses "/" separators, so the result is valid both as a URL
    suffix and as a path joined under a local directory.

    Example:
        >>> coord = LibraryCoordinate("org.ow2.asm", "asm", "9.2")
        >>> to_relative_path(coord)
        'org/ow2/asm/asm/9.2/asm-9.2.jar'
        >>> to_relative_path(coord, "sources")
        'org/ow2/asm/asm/9.2/asm-9.2-sources.jar'
    """
    directory = coordinate.group.replace(".", "/")
    filename = artifact_filename(coordinate, classifier)
    return f"{directory}/{coordinate.artifact}/{coordinate.version}/{filename}"
