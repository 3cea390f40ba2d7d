"""Transport adapters (HTTP, S3, filesystem) implementing TransportPort."""

from libvault.adapters.transport.filesystem import FilesystemTransport
from libvault.adapters.transport.http import HttpTransport
from libvault.adapters.transport.router import RouterTransport, create_router
from libvault.adapters.transport.s3 import S3Transport


__all__ = [
    "FilesystemTransport",
    "HttpTransport",
    "RouterTransport",
    "S3Transport",
    "create_router",
]
