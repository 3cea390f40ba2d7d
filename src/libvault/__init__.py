"""libvault - Resolve library descriptors into verified local artifacts.

This library turns Maven-style library descriptors with platform rules
into concrete files, fetched from a remote repository and cached locally
with SHA-1 verification.

Example:
    >>> from libvault import LibraryDescriptor, LibraryInstaller
    >>> asm = LibraryDescriptor(name="org.ow2.asm:asm:9.2")
    >>> installer = LibraryInstaller.from_directory(libraries_dir="./libraries")
    >>> paths = installer.install([asm])  # Downloads unless already cached
"""

from libvault.adapters.cache import VerifiedCache
from libvault.adapters.executor import (
    SynchronousExecutor,
    ThreadPoolExecutorAdapter,
    create_executor,
)
from libvault.adapters.transport import (
    FilesystemTransport,
    HttpTransport,
    RouterTransport,
    S3Transport,
    create_router,
)
from libvault.config import find_project_root, resolve_libraries_dir
from libvault.core.coordinates import parse_coordinate
from libvault.core.exceptions import (
    ClassifierNotFoundError,
    ConfigurationError,
    CoordinateParseError,
    DescriptorError,
    FetchError,
    HashDecodeError,
    LibvaultError,
    ManifestLoadError,
    RemoteStatusError,
    TransportError,
    UnsafePathError,
)
from libvault.core.locator import locate
from libvault.core.models import (
    DEFAULT_REPOSITORY_URL,
    ArtifactDownload,
    DerivedUrl,
    ExplicitDownloads,
    FetchInstruction,
    LibraryCoordinate,
    LibraryDescriptor,
    PlatformRule,
    PlatformScope,
    RuleAction,
    TransportResponse,
)
from libvault.core.path_utils import artifact_filename, to_relative_path
from libvault.core.platform import current_arch, current_os, platform_identifier
from libvault.core.ports import (
    CachePort,
    ExecutorPort,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    TransportPort,
)
from libvault.core.rules import is_needed
from libvault.core.services import LibraryInstaller
from libvault.manifest import descriptor_from_dict, discover_manifests, load_manifest
from libvault.progress import RichProgressReporter


__version__ = "0.1.0"

__all__ = [
    "DEFAULT_REPOSITORY_URL",
    "ArtifactDownload",
    "CachePort",
    "ClassifierNotFoundError",
    "ConfigurationError",
    "CoordinateParseError",
    "DerivedUrl",
    "DescriptorError",
    "ExecutorPort",
    "ExplicitDownloads",
    "FetchError",
    "FetchInstruction",
    "FilesystemTransport",
    "HashDecodeError",
    "HttpTransport",
    "LibraryCoordinate",
    "LibraryDescriptor",
    "LibraryInstaller",
    "LibvaultError",
    "ManifestLoadError",
    "NullProgressReporter",
    "PlatformRule",
    "PlatformScope",
    "ProgressCallback",
    "ProgressReporter",
    "RemoteStatusError",
    "RichProgressReporter",
    "RouterTransport",
    "RuleAction",
    "S3Transport",
    "SynchronousExecutor",
    "ThreadPoolExecutorAdapter",
    "TransportError",
    "TransportPort",
    "TransportResponse",
    "UnsafePathError",
    "VerifiedCache",
    "__version__",
    "artifact_filename",
    "create_executor",
    "create_router",
    "current_arch",
    "current_os",
    "descriptor_from_dict",
    "discover_manifests",
    "find_project_root",
    "is_needed",
    "load_manifest",
    "locate",
    "parse_coordinate",
    "platform_identifier",
    "resolve_libraries_dir",
    "to_relative_path",
]
