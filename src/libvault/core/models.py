"""Core domain models for libvault.

These models are pure Python dataclasses with no I/O dependencies.
They represent library descriptors as handed over by the metadata layer,
and the fetch instructions derived from them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Self


if TYPE_CHECKING:
    from pathlib import Path


DEFAULT_REPOSITORY_URL = "https://libraries.minecraft.net/"
DEFAULT_EXTENSION = "jar"


@dataclass(frozen=True, slots=True)
class LibraryCoordinate:
    """Parsed identity of a library.

    Attributes:
        group: Dotted namespace (e.g., "org.ow2.asm").
        artifact: Short artifact name.
        version: Opaque version string, only used to build paths.
        classifier: Optional qualifier such as "natives-linux".
        extension: File extension; None means the default ("jar").

    Example:
        >>> coord = LibraryCoordinate.parse("org.lwjgl:lwjgl:3.3.1:natives-linux")
        >>> coord.classifier
        'natives-linux'
        >>> coord.file_extension
        'jar'
    """

    group: str
    artifact: str
    version: str
    classifier: str | None = None
    extension: str | None = None

    @classmethod
    def parse(cls, coordinate: str) -> Self:
        """Parse a coordinate string, raising on mismatch.

        Raises:
            CoordinateParseError: If the string does not match the grammar.
        """
        from libvault.core.coordinates import parse_coordinate
        from libvault.core.exceptions import CoordinateParseError

        parsed = parse_coordinate(coordinate)
        if parsed is None:
            raise CoordinateParseError(coordinate)
        return cls(
            group=parsed.group,
            artifact=parsed.artifact,
            version=parsed.version,
            classifier=parsed.classifier,
            extension=parsed.extension,
        )

    @property
    def file_extension(self) -> str:
        """Extension used for the artifact file name."""
        return self.extension if self.extension is not None else DEFAULT_EXTENSION

    def __str__(self) -> str:
        text = f"{self.group}:{self.artifact}:{self.version}"
        if self.classifier is not None:
            text += f":{self.classifier}"
        if self.extension is not None:
            text += f"@{self.extension}"
        return text


class RuleAction(Enum):
    """Outcome a matching rule assigns to a library."""

    ALLOW = "allow"
    DISALLOW = "disallow"


@dataclass(frozen=True, slots=True)
class PlatformScope:
    """Platform a rule applies to.

    Attributes:
        name: Platform identifier, e.g. "osx" or "linux-arm64".
        version: OS version pattern. Carried but not used in matching.
    """

    name: str
    version: str | None = None


@dataclass(frozen=True, slots=True)
class PlatformRule:
    """One allow/disallow entry in a library's rule list.

    A rule without a scope matches every platform.
    """

    action: RuleAction
    scope: PlatformScope | None = None

    def matches(self, platform: str) -> bool:
        """Check whether this rule applies on the given platform identifier."""
        return self.scope is None or self.scope.name == platform


@dataclass(frozen=True, slots=True)
class ArtifactDownload:
    """A downloadable file declared explicitly by the metadata.

    Attributes:
        sha1: Hex-encoded SHA-1 digest of the file.
        size: File size in bytes.
        url: Absolute download URL.
    """

    sha1: str
    size: int
    url: str


@dataclass(frozen=True, slots=True)
class ExplicitDownloads:
    """Strategy A: every file to fetch is listed with its URL and hash.

    Attributes:
        artifact: The primary artifact, if any.
        classifiers: Classifier name to per-classifier artifact.
        natives: Platform identifier to classifier name.
    """

    artifact: ArtifactDownload | None = None
    classifiers: Mapping[str, ArtifactDownload] | None = None
    natives: Mapping[str, str] | None = None


@dataclass(frozen=True, slots=True)
class DerivedUrl:
    """Strategy B: the URL is derived from the coordinate.

    Attributes:
        url: Base URL override. None means DEFAULT_REPOSITORY_URL. A value
            not ending in "/" is used verbatim as the file URL.
        always_stale: Re-download on every fetch, ignoring the local copy.
    """

    url: str | None = None
    always_stale: bool = False

    @property
    def base_url(self) -> str:
        """Base URL after applying the default repository."""
        return self.url if self.url is not None else DEFAULT_REPOSITORY_URL


LocationStrategy = ExplicitDownloads | DerivedUrl


@dataclass(frozen=True, slots=True)
class LibraryDescriptor:
    """A library as declared by a version manifest.

    Attributes:
        name: Coordinate string (group:artifact:version[:classifier][@ext]).
        strategy: How artifact files are located. Exactly one applies.
        rules: Ordered platform rules. None means always needed.

    Example:
        >>> asm = LibraryDescriptor(name="org.ow2.asm:asm:9.2")
        >>> asm.strategy
        DerivedUrl(url=None, always_stale=False)
    """

    name: str
    strategy: LocationStrategy = DerivedUrl()
    rules: tuple[PlatformRule, ...] | None = None

    def __post_init__(self) -> None:
        """Validate descriptor fields after initialization."""
        if not self.name:
            raise ValueError("Library name cannot be empty")


@dataclass(frozen=True, slots=True)
class FetchInstruction:
    """A single file to materialize in the local cache.

    Attributes:
        local_path: Absolute target path under the libraries directory.
        source_url: URL to GET on a cache miss.
        force_refresh: Skip the local copy and always fetch.
        expected_sha1: Hex SHA-1 the local copy must match, if known.
        size: Declared size in bytes, used for progress display only.
    """

    local_path: Path
    source_url: str
    force_refresh: bool = False
    expected_sha1: str | None = None
    size: int | None = None


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Result of a GET through a transport adapter."""

    status: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        """Whether the status is exactly 200."""
        return self.status == 200
