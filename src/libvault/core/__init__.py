"""Core domain module for libvault.

This module contains pure Python domain models, the resolution logic
(coordinates, platform rules, paths, artifact location) and port
definitions. It has no I/O dependencies and can be tested in isolation.
"""

from libvault.core.models import (
    FetchInstruction,
    LibraryCoordinate,
    LibraryDescriptor,
    PlatformRule,
)
from libvault.core.ports import CachePort, ProgressCallback, TransportPort


__all__ = [
    "CachePort",
    "FetchInstruction",
    "LibraryCoordinate",
    "LibraryDescriptor",
    "PlatformRule",
    "ProgressCallback",
    "TransportPort",
]
