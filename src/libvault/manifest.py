"""Manifest loading and discovery.

A manifest is a version JSON file as published by the metadata service.
Only the library lists are read here; everything else in the file belongs
to higher layers. Manifests are discovered under .libvault/manifests/.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from libvault.core.exceptions import ManifestLoadError
from libvault.core.models import (
    ArtifactDownload,
    DerivedUrl,
    ExplicitDownloads,
    LibraryDescriptor,
    LocationStrategy,
    PlatformRule,
    PlatformScope,
    RuleAction,
)


ALWAYS_STALE_HINT = "always-stale"

# Keys of a version manifest holding library lists, in install order
_LIBRARY_LIST_KEYS = ("libraries", "mavenFiles", "jarMods")
_MAIN_JAR_KEY = "mainJar"


def discover_manifests(root: Path) -> dict[str, Path]:
    """Find all manifest files under .libvault/manifests/.

    Args:
        root: Project root directory to search from.

    Returns:
        Dict mapping manifest names to their file paths.
        Names are derived from filenames (e.g., '1.20.1.json' -> '1.20.1').
    """
    manifest_dir = root / ".libvault" / "manifests"
    if not manifest_dir.exists():
        return {}

    return {
        p.stem: p
        for p in sorted(manifest_dir.glob("*.json"))
        if not p.name.startswith("_")
    }


def load_manifest(path: Path) -> list[LibraryDescriptor]:
    """Load the library descriptors declared by a manifest file.

    The file may be a version manifest (an object with "libraries",
    "mavenFiles", "jarMods" and "mainJar") or a bare list of library
    objects.

    Args:
        path: Path to the manifest JSON file.

    Returns:
        Descriptors in declaration order.

    Raises:
        ManifestLoadError: If the file cannot be read or is malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestLoadError(
            f"Invalid JSON in {path.name}: {e.msg}",
            manifest_path=path,
            line=e.lineno,
            cause=e,
        ) from e
    except UnicodeDecodeError as e:
        raise ManifestLoadError(
            f"Manifest {path.name} is not valid UTF-8: {e.reason}",
            manifest_path=path,
            cause=e,
        ) from e
    except OSError as e:
        raise ManifestLoadError(
            f"Cannot read manifest {path}: {e}", manifest_path=path, cause=e
        ) from e

    entries = _library_entries(data, path)

    descriptors: list[LibraryDescriptor] = []
    for index, entry in enumerate(entries):
        try:
            descriptors.append(descriptor_from_dict(entry))
        except ValueError as e:
            raise ManifestLoadError(
                f"Invalid library #{index} in {path.name}: {e}",
                manifest_path=path,
                cause=e,
            ) from e
    return descriptors


def _library_entries(data: Any, path: Path) -> list[Any]:
    if isinstance(data, list):
        return data
    if not isinstance(data, dict):
        raise ManifestLoadError(
            f"{path.name} must contain a JSON object or list", manifest_path=path
        )

    entries: list[Any] = []
    for key in _LIBRARY_LIST_KEYS:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, list):
            raise ManifestLoadError(
                f"'{key}' in {path.name} must be a list", manifest_path=path
            )
        entries.extend(value)
    if data.get(_MAIN_JAR_KEY) is not None:
        entries.append(data[_MAIN_JAR_KEY])
    return entries


def descriptor_from_dict(data: Mapping[str, Any]) -> LibraryDescriptor:
    """Build a LibraryDescriptor from a library JSON object.

    Example:
        >>> descriptor_from_dict({"name": "org.ow2.asm:asm:9.2"}).strategy
        DerivedUrl(url=None, always_stale=False)

    Raises:
        ValueError: If required fields are missing or have the wrong type.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object, got {type(data).__name__}")

    name = _require_str(data, "name")
    rules_data = data.get("rules")
    rules = (
        tuple(_rule_from_dict(rule) for rule in _require_list(rules_data, "rules"))
        if rules_data is not None
        else None
    )

    strategy: LocationStrategy
    if data.get("downloads") is not None:
        strategy = _explicit_from_dict(data["downloads"], data.get("natives"))
    else:
        url = data.get("url")
        if url is not None and not isinstance(url, str):
            raise ValueError("'url' must be a string")
        strategy = DerivedUrl(
            url=url, always_stale=data.get("MMC-hint") == ALWAYS_STALE_HINT
        )

    return LibraryDescriptor(name=name, strategy=strategy, rules=rules)


def _rule_from_dict(data: Any) -> PlatformRule:
    if not isinstance(data, Mapping):
        raise ValueError("each rule must be an object")
    action_value = _require_str(data, "action")
    try:
        action = RuleAction(action_value)
    except ValueError:
        raise ValueError(f"unknown rule action '{action_value}'") from None

    os_data = data.get("os")
    if os_data is None:
        return PlatformRule(action=action)
    if not isinstance(os_data, Mapping):
        raise ValueError("rule 'os' must be an object")
    return PlatformRule(
        action=action,
        scope=PlatformScope(name=_require_str(os_data, "name"), version=os_data.get("version")),
    )


def _explicit_from_dict(downloads: Any, natives: Any) -> ExplicitDownloads:
    if not isinstance(downloads, Mapping):
        raise ValueError("'downloads' must be an object")
    if natives is not None and not isinstance(natives, Mapping):
        raise ValueError("'natives' must be an object")

    artifact_data = downloads.get("artifact")
    classifiers_data = downloads.get("classifiers")
    if classifiers_data is not None and not isinstance(classifiers_data, Mapping):
        raise ValueError("'downloads.classifiers' must be an object")

    return ExplicitDownloads(
        artifact=_download_from_dict(artifact_data) if artifact_data is not None else None,
        classifiers=(
            {key: _download_from_dict(value) for key, value in classifiers_data.items()}
            if classifiers_data is not None
            else None
        ),
        natives=dict(natives) if natives is not None else None,
    )


def _download_from_dict(data: Any) -> ArtifactDownload:
    if not isinstance(data, Mapping):
        raise ValueError("download entries must be objects")
    size = data.get("size")
    if not isinstance(size, int):
        raise ValueError("download 'size' must be an integer")
    return ArtifactDownload(
        sha1=_require_str(data, "sha1"),
        size=size,
        url=_require_str(data, "url"),
    )


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"missing or non-string '{key}'")
    return value


def _require_list(value: Any, key: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list")
    return value
