"""Library coordinate parsing.

Coordinates follow the Maven shorthand
``group:artifact:version[:classifier][@extension]``. Each field is a
non-empty run of characters other than ``:`` and ``@``.
"""

from __future__ import annotations

import re

from libvault.core.models import LibraryCoordinate


_FIELD = r"[^:@]+"

COORDINATE_PATTERN = re.compile(
    rf"(?P<group>{_FIELD}):(?P<artifact>{_FIELD}):(?P<version>{_FIELD})"
    rf"(?::(?P<classifier>{_FIELD}))?"
    rf"(?:@(?P<extension>{_FIELD}))?"
)


def parse_coordinate(coordinate: str) -> LibraryCoordinate | None:
    """Parse a coordinate string into its fields.

    The whole string must match; there are no partial results.

    Args:
        coordinate: e.g. "org.lwjgl:lwjgl:3.3.1:natives-linux@jar".

    Returns:
        The parsed LibraryCoordinate, or None if the string does not match.

    Example:
        >>> parse_coordinate("org.ow2.asm:asm:9.2")
        LibraryCoordinate(group='org.ow2.asm', artifact='asm', version='9.2', classifier=None, extension=None)
        >>> parse_coordinate("not-a-coordinate") is None
        True
    """
    match = COORDINATE_PATTERN.fullmatch(coordinate)
    if match is None:
        return None
    return LibraryCoordinate(
        group=match["group"],
        artifact=match["artifact"],
        version=match["version"],
        classifier=match["classifier"],
        extension=match["extension"],
    )
