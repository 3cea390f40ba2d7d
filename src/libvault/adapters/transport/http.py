"""HTTP transport adapter using requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests

from libvault.core.exceptions import TransportError
from libvault.core.models import TransportResponse


if TYPE_CHECKING:
    from libvault.core.ports import ProgressCallback


logger = logging.getLogger(__name__)

# Chunk size for streaming downloads (64KB)
_CHUNK_SIZE = 64 * 1024


class HttpTransport:
    """Transport adapter for http:// and https:// repositories.

    Implements TransportPort with a shared requests.Session. No custom
    headers, authentication or redirect policy is applied beyond the
    requests defaults.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize HTTP transport.

        Args:
            session: Optional requests session. If not provided, creates one.
            timeout: Optional per-request timeout in seconds. None waits forever.
        """
        self._session = session or requests.Session()
        self._timeout = timeout

    def get(
        self, url: str, progress: ProgressCallback | None = None
    ) -> TransportResponse:
        """Download a URL into memory with optional progress reporting.

        Args:
            url: http(s) URL.
            progress: Optional callback function(bytes_received, total_bytes).

        Returns:
            TransportResponse with the status code. The body is only read
            for 200 responses.

        Raises:
            TransportError: On connection errors, timeouts and broken streams.
        """
        logger.debug("GET %s", url)
        try:
            with self._session.get(url, stream=True, timeout=self._timeout) as response:
                if response.status_code != 200:
                    logger.debug("GET %s returned %s", url, response.status_code)
                    return TransportResponse(status=response.status_code)

                total_size = int(response.headers.get("Content-Length") or 0)
                chunks: list[bytes] = []
                bytes_received = 0
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    chunks.append(chunk)
                    bytes_received += len(chunk)
                    if progress:
                        progress(bytes_received, total_size)
        except requests.RequestException as e:
            raise TransportError(
                f"Request to {url} failed: {e}", url=url, cause=e
            ) from e

        return TransportResponse(status=200, body=b"".join(chunks))
