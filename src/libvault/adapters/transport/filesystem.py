"""Filesystem transport adapter for local repository mirrors."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from libvault.core.exceptions import TransportError
from libvault.core.models import TransportResponse


if TYPE_CHECKING:
    from libvault.core.ports import ProgressCallback


# Chunk size for reading files (64KB)
_CHUNK_SIZE = 64 * 1024


class FilesystemTransport:
    """Transport adapter for plain paths (a mirror on local or network disk).

    Implements TransportPort. A missing file is reported as a 404 response
    and an unreadable one as 403, matching what an HTTP mirror would answer.
    """

    def get(
        self, url: str, progress: ProgressCallback | None = None
    ) -> TransportResponse:
        """Read a file with optional progress reporting.

        Args:
            url: Path to the file (file:// prefix already stripped).
            progress: Optional callback function(bytes_read, total_bytes).

        Returns:
            TransportResponse with the file content.

        Raises:
            TransportError: For read failures other than missing or unreadable files.
        """
        source_path = Path(url)
        try:
            total_size = source_path.stat().st_size
            chunks: list[bytes] = []
            bytes_read = 0
            with source_path.open("rb") as src:
                for chunk in iter(lambda: src.read(_CHUNK_SIZE), b""):
                    chunks.append(chunk)
                    bytes_read += len(chunk)
                    if progress:
                        progress(bytes_read, total_size)
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return TransportResponse(status=404)
        except PermissionError:
            return TransportResponse(status=403)
        except OSError as e:
            raise TransportError(f"Cannot read {url}: {e}", url=url, cause=e) from e

        return TransportResponse(status=200, body=b"".join(chunks))
