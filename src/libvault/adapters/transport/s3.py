"""S3 transport adapter using boto3, for repository mirrors kept in a bucket."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from libvault.core.exceptions import TransportError
from libvault.core.models import TransportResponse


if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

    from libvault.core.ports import ProgressCallback


logger = logging.getLogger(__name__)

# Chunk size for streaming downloads (64KB)
_CHUNK_SIZE = 64 * 1024

_NOT_FOUND_CODES = ("404", "NoSuchKey", "NoSuchBucket")
_ACCESS_DENIED_CODES = ("403", "AccessDenied")


class S3Transport:
    """Transport adapter for s3://bucket/key URLs.

    Implements TransportPort for AWS S3. Missing objects and denied access
    surface as 404 and 403 responses, so callers see the same status
    semantics as with an HTTP repository.
    """

    def __init__(self, client: S3Client | None = None) -> None:
        """Initialize S3 transport.

        Args:
            client: Optional boto3 S3 client. If not provided, creates a default client.
        """
        self._client = client or boto3.client("s3")

    def get(
        self, url: str, progress: ProgressCallback | None = None
    ) -> TransportResponse:
        """Download an object into memory with optional progress reporting.

        Args:
            url: S3 URI (s3://bucket/key).
            progress: Optional callback function(bytes_received, total_bytes).

        Returns:
            TransportResponse with status 200 and the object body, or the
            error status reported by S3.

        Raises:
            ValueError: If url is not a valid S3 URI.
            TransportError: For credential, endpoint and other non-HTTP failures.
        """
        bucket, key = self._parse_s3_uri(url)
        logger.debug("GetObject bucket=%s key=%s", bucket, key)

        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            total_size = response["ContentLength"]
            body = response["Body"]

            chunks: list[bytes] = []
            bytes_received = 0
            for chunk in iter(lambda: body.read(_CHUNK_SIZE), b""):
                chunks.append(chunk)
                bytes_received += len(chunk)
                if progress:
                    progress(bytes_received, total_size)
        except ClientError as e:
            return TransportResponse(status=self._status_from_client_error(e, url))
        except BotoCoreError as e:
            raise TransportError(f"S3 error: {e}", url=url, cause=e) from e

        return TransportResponse(status=200, body=b"".join(chunks))

    def _parse_s3_uri(self, uri: str) -> tuple[str, str]:
        """Parse an S3 URI into bucket and key.

        Args:
            uri: S3 URI in format s3://bucket/key.

        Returns:
            Tuple of (bucket, key).

        Raises:
            ValueError: If URI is not a valid S3 URI.
        """
        if not uri.startswith("s3://"):
            raise ValueError(f"Invalid S3 URI: {uri}")

        # Remove s3:// prefix
        path = uri[5:]

        # Split on first /
        parts = path.split("/", 1)
        if len(parts) != 2 or not parts[1]:
            raise ValueError(f"Invalid S3 URI (missing key): {uri}")

        bucket, key = parts
        return bucket, key

    def _status_from_client_error(self, error: ClientError, url: str) -> int:
        """Translate a botocore ClientError into an HTTP-style status code.

        Raises:
            TransportError: If the error carries no usable status.
        """
        code = error.response.get("Error", {}).get("Code", "")
        status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

        if code in _NOT_FOUND_CODES:
            return 404
        if code in _ACCESS_DENIED_CODES:
            return 403
        if isinstance(status, int):
            return status

        raise TransportError(f"S3 error ({code}): {error}", url=url, cause=error)
