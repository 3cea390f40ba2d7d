"""Domain exceptions for libvault.

All library errors inherit from LibvaultError, allowing users to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.

Descriptor-level errors (DescriptorError) abort the resolution of one
library. Fetch-level errors (FetchError) abort a single artifact download.
Filesystem failures are not wrapped and propagate as OSError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from pathlib import Path


class LibvaultError(Exception):
    """Base class for all libvault exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class DescriptorError(LibvaultError):
    """Base class for errors tied to a single library descriptor.

    Attributes:
        name: The descriptor's coordinate string.
    """

    def __init__(self, message: str, name: str) -> None:
        self.name = name
        super().__init__(message)


class CoordinateParseError(DescriptorError):
    """Raised when a coordinate string does not match the grammar.

    The grammar is ``group:artifact:version[:classifier][@extension]``.
    """

    def __init__(self, coordinate: str) -> None:
        self.coordinate = coordinate
        super().__init__(
            f"Cannot derive path from coordinate '{coordinate}'", name=coordinate
        )

    @property
    def recovery_hint(self) -> str:
        """Show the expected coordinate shape."""
        return "Expected group:artifact:version[:classifier][@extension]"


class ClassifierNotFoundError(DescriptorError):
    """Raised when a native classifier has no matching download entry.

    Attributes:
        classifier: The classifier named by the natives map.
        platform: The platform identifier that selected the classifier.
    """

    def __init__(self, name: str, classifier: str, platform: str) -> None:
        self.classifier = classifier
        self.platform = platform
        super().__init__(
            f"Library '{name}' maps platform '{platform}' to classifier "
            f"'{classifier}', which has no download entry",
            name=name,
        )

    @property
    def recovery_hint(self) -> str:
        """Point at the inconsistent metadata."""
        return (
            f"Check that downloads.classifiers of '{self.name}' "
            f"contains '{self.classifier}'"
        )


class UnsafePathError(DescriptorError):
    """Raised when a coordinate maps to a path outside the libraries directory.

    Attributes:
        path: The normalized local path derived from the name.
    """

    def __init__(self, name: str, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Library '{name}' resolves to '{path}', "
            "outside the libraries directory",
            name=name,
        )

    @property
    def recovery_hint(self) -> str:
        """Point at the offending coordinate fields."""
        return "Check the group for a leading '.' and the other fields for '..'"


class FetchError(LibvaultError):
    """Base class for errors fetching a single artifact.

    Attributes:
        url: The source URL being fetched.
        path: The local target path, if known.
    """

    def __init__(self, message: str, url: str, path: Path | None = None) -> None:
        self.url = url
        self.path = path
        super().__init__(message)


class TransportError(FetchError):
    """Raised when the transport itself fails (connection, DNS, timeout).

    Attributes:
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        url: str,
        path: Path | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.cause = cause
        super().__init__(message, url=url, path=path)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking connectivity."""
        return "Check network connectivity and that the repository is reachable"


class RemoteStatusError(FetchError):
    """Raised when the remote answers with a status other than 200.

    Attributes:
        status: The observed status code.
    """

    def __init__(self, status: int, url: str, path: Path | None = None) -> None:
        self.status = status
        super().__init__(
            f"Got status {status} instead of 200 for {url}", url=url, path=path
        )

    @property
    def recovery_hint(self) -> str:
        """Suggest verifying the URL or credentials."""
        if self.status == 404:
            return f"Verify the artifact exists at {self.url}"
        if self.status in (401, 403):
            return "Check credentials and repository permissions"
        return "The repository may be temporarily unavailable; try again later"


class HashDecodeError(FetchError):
    """Raised when an expected SHA-1 is not valid hexadecimal.

    Attributes:
        expected_sha1: The malformed hash string.
    """

    def __init__(self, expected_sha1: str, url: str, path: Path | None = None) -> None:
        self.expected_sha1 = expected_sha1
        super().__init__(
            f"Expected SHA-1 '{expected_sha1}' is not valid hex", url=url, path=path
        )

    @property
    def recovery_hint(self) -> str:
        """Point at the bad metadata."""
        return "The library metadata carries a malformed sha1 value"


class ConfigurationError(LibvaultError):
    """Raised for configuration problems (e.g. a libraries path that is a file)."""

    @property
    def recovery_hint(self) -> str:
        """Point at the settings that choose the libraries directory."""
        return "Check --dest and the LIBVAULT_LIBRARIES_DIR environment variable"


class ManifestLoadError(LibvaultError):
    """Raised when a manifest file cannot be loaded.

    Attributes:
        manifest_path: Path to the manifest file that failed to load.
        line: Line number where the error occurred (if available).
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        manifest_path: Path,
        line: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.manifest_path = manifest_path
        self.line = line
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the manifest file at the specific line."""
        if self.line:
            return f"Check {self.manifest_path.name} at line {self.line}"
        return f"Check {self.manifest_path.name} for syntax or missing fields"
