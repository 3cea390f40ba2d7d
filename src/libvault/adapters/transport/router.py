"""RouterTransport composite adapter for URI scheme-based routing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from libvault.core.exceptions import TransportError


if TYPE_CHECKING:
    from libvault.core.models import TransportResponse
    from libvault.core.ports import ProgressCallback, TransportPort


def parse_uri_scheme(uri: str) -> str | None:
    """Extract the URI scheme from a source string.

    Args:
        uri: Source URI or file path.

    Returns:
        The scheme (e.g., 'https', 's3', 'file') or None for local paths.
    """
    if "://" in uri:
        scheme = uri.split("://", 1)[0]
        # Avoid confusing Windows drive letters (C:) with schemes
        if len(scheme) > 1:
            return scheme.lower()
    return None


def strip_file_scheme(uri: str) -> str:
    """Strip file:// prefix from URI, returning plain path.

    Args:
        uri: URI that may have file:// prefix.

    Returns:
        The path without file:// prefix.
    """
    if uri.lower().startswith("file://"):
        return uri[7:]  # len("file://") == 7
    return uri


class RouterTransport:
    """Transport adapter that routes to backends based on URI scheme.

    Implements TransportPort by delegating to scheme-specific adapters.
    """

    def __init__(self, backends: dict[str | None, TransportPort]) -> None:
        """Initialize with scheme-to-adapter mapping.

        Args:
            backends: Mapping of scheme (e.g., 'https', 's3') to TransportPort adapter.
                      Use None as key for default (local paths without scheme).
        """
        self._backends = backends

    def _get_backend_and_path(self, uri: str) -> tuple[TransportPort, str]:
        """Get the appropriate backend and normalized path for a URI."""
        scheme = parse_uri_scheme(uri)
        if scheme in self._backends:
            # Strip file:// prefix for filesystem backend
            path = strip_file_scheme(uri) if scheme == "file" else uri
            return self._backends[scheme], path
        if scheme is None and None in self._backends:
            return self._backends[None], uri
        scheme_display = f"'{scheme}'" if scheme else "local path"
        raise TransportError(
            f"No transport registered for scheme {scheme_display}", url=uri
        )

    def get(
        self, url: str, progress: ProgressCallback | None = None
    ) -> TransportResponse:
        """Fetch by delegating to the appropriate backend."""
        backend, path = self._get_backend_and_path(url)
        return backend.get(path, progress)


def create_router(
    s3_client: Any | None = None,
    timeout: float | None = None,
) -> RouterTransport:
    """Create a RouterTransport with default backends.

    The S3 backend is created lazily by boto3 only when an s3_client is
    supplied or an s3:// URL is routed, so credentials are not required
    for plain HTTP use.

    Args:
        s3_client: Optional boto3 S3 client.
        timeout: Optional HTTP request timeout in seconds.

    Returns:
        RouterTransport configured with HTTP, S3 and filesystem transports.
    """
    from libvault.adapters.transport import FilesystemTransport, HttpTransport

    http = HttpTransport(timeout=timeout)
    fs = FilesystemTransport()
    return RouterTransport(
        backends={
            "http": http,
            "https": http,
            "s3": _LazyS3Transport(s3_client),
            "file": fs,
            None: fs,
        }
    )


class _LazyS3Transport:
    """Defers boto3 client creation until the first s3:// request."""

    def __init__(self, client: Any | None = None) -> None:
        self._client = client
        self._transport: TransportPort | None = None

    def get(
        self, url: str, progress: ProgressCallback | None = None
    ) -> TransportResponse:
        if self._transport is None:
            from libvault.adapters.transport.s3 import S3Transport

            self._transport = S3Transport(client=self._client)
        return self._transport.get(url, progress)
