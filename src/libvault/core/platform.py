"""Platform identification in the metadata's vocabulary.

Rule scopes and natives keys name platforms as an OS tag ("linux", "osx",
"windows"), optionally suffixed with an architecture tag for non-x86
machines ("linux-arm64"). Every function takes an optional override so
callers and tests can evaluate rules for an arbitrary platform.
"""

from __future__ import annotations

import platform as _platform


UNKNOWN = "unknown"

_OS_TAGS = {
    "linux": "linux",
    "darwin": "osx",
    "windows": "windows",
}

_ARCH_TAGS = {
    "x86": "x86",
    "i386": "x86",
    "i486": "x86",
    "i586": "x86",
    "i686": "x86",
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "arm": "arm32",
    "armv6l": "arm32",
    "armv7l": "arm32",
    "armv8l": "arm32",
}

# Architectures the metadata leaves implicit in platform names
_DEFAULT_ARCHES = frozenset({"x86", "x86_64"})


def current_os(system: str | None = None) -> str:
    """Return the OS tag for the running interpreter.

    Args:
        system: Value to normalize instead of platform.system().

    Returns:
        "linux", "osx", "windows" or "unknown".
    """
    if system is None:
        system = _platform.system()
    return _OS_TAGS.get(system.lower(), UNKNOWN)


def current_arch(machine: str | None = None) -> str:
    """Return the CPU architecture tag.

    Args:
        machine: Value to normalize instead of platform.machine().

    Returns:
        "x86", "x86_64", "arm64", "arm32" or "unknown".
    """
    if machine is None:
        machine = _platform.machine()
    return _ARCH_TAGS.get(machine.lower(), UNKNOWN)


def platform_identifier(os_tag: str | None = None, arch_tag: str | None = None) -> str:
    """Combine OS and architecture into the identifier used for matching.

    Example:
        >>> platform_identifier("linux", "x86_64")
        'linux'
        >>> platform_identifier("osx", "arm64")
        'osx-arm64'
    """
    if os_tag is None:
        os_tag = current_os()
    if arch_tag is None:
        arch_tag = current_arch()
    if arch_tag in _DEFAULT_ARCHES:
        return os_tag
    return f"{os_tag}-{arch_tag}"
