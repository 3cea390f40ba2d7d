"""SHA-1 verified artifact cache implementing CachePort."""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from libvault.core.exceptions import HashDecodeError, RemoteStatusError


if TYPE_CHECKING:
    from libvault.core.models import FetchInstruction
    from libvault.core.ports import ProgressCallback, TransportPort


logger = logging.getLogger(__name__)


class VerifiedCache:
    """Local artifact cache validated by SHA-1 digests.

    A local file is reused when it can be read, refresh is not forced, and
    either no hash is expected or its SHA-1 matches. Anything else (missing
    file, unreadable file, stale or corrupt content) is re-fetched through
    the transport and written in place. The filesystem is the only state;
    nothing is shared between calls.

    Attributes:
        transport: Adapter used to GET artifacts on a cache miss.
    """

    def __init__(self, transport: TransportPort) -> None:
        """Initialize the cache with a transport.

        Args:
            transport: Adapter implementing TransportPort.
        """
        self.transport = transport

    def fetch(
        self,
        path: Path,
        url: str,
        force_refresh: bool = False,
        expected_sha1: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> bytes:
        """Return artifact bytes, from disk if valid, otherwise from url.

        Args:
            path: Local target path.
            url: Source URL used on a cache miss.
            force_refresh: Ignore any local copy.
            expected_sha1: Hex SHA-1 the local copy must match.
            progress: Optional callback function(bytes_received, total_bytes).

        Returns:
            The artifact content.

        Raises:
            HashDecodeError: If expected_sha1 is not valid hex.
            TransportError: If the transport fails.
            RemoteStatusError: If the remote answers with a status other than 200.
            OSError: If the directory or file cannot be written.
        """
        if not force_refresh:
            cached = self._read_valid(path, url, expected_sha1)
            if cached is not None:
                logger.debug("Cache hit for %s", path)
                return cached

        logger.debug("Fetching %s -> %s", url, path)
        response = self.transport.get(url, progress)
        if not response.ok:
            raise RemoteStatusError(response.status, url=url, path=path)

        self._write(path, response.body)
        return response.body

    def fetch_instruction(
        self,
        instruction: FetchInstruction,
        progress: ProgressCallback | None = None,
    ) -> bytes:
        """Execute a FetchInstruction produced by the locator."""
        return self.fetch(
            instruction.local_path,
            instruction.source_url,
            force_refresh=instruction.force_refresh,
            expected_sha1=instruction.expected_sha1,
            progress=progress,
        )

    def is_cached(self, path: Path, expected_sha1: str | None = None) -> bool:
        """Check whether a valid local copy exists, without fetching.

        Raises:
            HashDecodeError: If expected_sha1 is not valid hex.
        """
        return self._read_valid(path, str(path), expected_sha1) is not None

    def _read_valid(
        self, path: Path, url: str, expected_sha1: str | None
    ) -> bytes | None:
        """Read the local copy if it passes verification, else None."""
        try:
            data = path.read_bytes()
        except OSError:
            return None

        if expected_sha1 is None:
            return data

        expected = _decode_sha1(expected_sha1, url, path)
        if hashlib.sha1(data).digest() == expected:
            return data

        logger.debug("SHA-1 mismatch for %s, re-fetching", path)
        return None

    def _write(self, path: Path, data: bytes) -> None:
        """Write data to path, replacing any previous content."""
        path.parent.mkdir(parents=True, exist_ok=True)

        # Temporary file sits next to the target so os.replace stays atomic
        with tempfile.NamedTemporaryFile(
            delete=False, dir=path.parent, prefix=f".{path.name}.", suffix=".part"
        ) as tmp_file:
            tmp_path = Path(tmp_file.name)

        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        finally:
            tmp_path.unlink(missing_ok=True)


def _decode_sha1(expected_sha1: str, url: str, path: Path) -> bytes:
    try:
        return bytes.fromhex(expected_sha1)
    except ValueError as e:
        raise HashDecodeError(expected_sha1, url=url, path=path) from e
