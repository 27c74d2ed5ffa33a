"""
Lock Entry Loader.

Builds PackageDescriptor objects from lock-file style package entries
(the JSON objects found under "packages" in a lock file) and dumps them
back to JSON-compatible dictionaries.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from package_descriptor.models.link import Link
from package_descriptor.models.mirror import Mirror
from package_descriptor.models.package import PackageDescriptor

logger = logging.getLogger(__name__)

# Manifest key -> (descriptor attribute, Link description)
LINK_TYPES = {
    "require": ("requires", "requires"),
    "conflict": ("conflicts", "conflicts"),
    "provide": ("provides", "provides"),
    "replace": ("replaces", "replaces"),
    "require-dev": ("dev_requires", "requires (for development)"),
}

# Manifest key -> descriptor attribute, for values stored as-is
PLAIN_FIELDS = {
    "type": "type",
    "target-dir": "raw_target_dir",
    "extra": "extra",
    "bin": "binaries",
    "autoload": "autoload",
    "autoload-dev": "dev_autoload",
    "include-path": "include_paths",
    "notification-url": "notification_url",
    "transport-options": "transport_options",
    "installation-source": "installation_source",
    "suggest": "suggests",
}

# Object-valued keys; an empty object may be written as [] by PHP encoders
OBJECT_FIELDS = {"extra", "autoload", "autoload-dev", "transport-options", "suggest"}


class ManifestError(ValueError):
    """Raised when a package entry cannot be turned into a descriptor."""


def _as_object(value: Any, what: str) -> Mapping[str, Any]:
    """Return value as a mapping, accepting [] for an empty object."""
    if isinstance(value, Mapping):
        return value
    if isinstance(value, list) and not value:
        return {}
    raise ManifestError(f"{what} must be an object, got {type(value).__name__}: {value!r}")


def _parse_links(source: str, description: str, data: Any, key: str) -> dict[str, Link]:
    links = {}
    for target, constraint in _as_object(data, f"{source}: {key!r}").items():
        link = Link(source=source, target=target, constraint=str(constraint), description=description)
        links[link.target] = link
    return links


def _parse_mirrors(data: Any, what: str) -> list[Mirror] | None:
    if data is None:
        return None
    if not isinstance(data, list):
        raise ManifestError(f"{what} must be a list, got {type(data).__name__}")
    mirrors = []
    for mirror in data:
        if not isinstance(mirror, Mapping) or "url" not in mirror:
            raise ManifestError(f"{what} entries need a 'url': {mirror!r}")
        mirrors.append(Mirror.from_dict(mirror))
    return mirrors


def _parse_release_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparseable release date: {value!r}")
        return None


def load_package(data: Mapping[str, Any], **descriptor_options: Any) -> PackageDescriptor:
    """
    Build a descriptor from a lock entry.

    Args:
        data: Package entry with at least 'name' and 'version'.
        descriptor_options: Passed through to PackageDescriptor (collaborators, callbacks).

    Returns:
        The populated PackageDescriptor.

    Raises:
        ManifestError: If 'name' or 'version' is missing, or a field has the wrong shape.
    """
    if not isinstance(data, Mapping):
        raise ManifestError(f"Package entry must be an object, got {type(data).__name__}: {data!r}")
    for key in ("name", "version"):
        if not data.get(key):
            raise ManifestError(f"Package entry is missing {key!r}: {dict(data)!r}")
    if not isinstance(data["name"], str):
        raise ManifestError(f"Package name must be a string: {data['name']!r}")

    pretty_version = str(data["version"])
    version = str(data.get("version_normalized") or pretty_version)
    package = PackageDescriptor(data["name"], version, pretty_version, **descriptor_options)

    if source := data.get("source"):
        source = _as_object(source, f"{package.pretty_name}: 'source'")
        package.source_type = source.get("type")
        package.source_url = source.get("url")
        package.source_reference = source.get("reference")
        package.source_mirrors = _parse_mirrors(source.get("mirrors"), f"{package.pretty_name}: source mirrors")

    if dist := data.get("dist"):
        dist = _as_object(dist, f"{package.pretty_name}: 'dist'")
        package.dist_type = dist.get("type")
        package.dist_url = dist.get("url")
        package.dist_reference = dist.get("reference")
        package.dist_sha1_checksum = dist.get("shasum") or None
        package.dist_mirrors = _parse_mirrors(dist.get("mirrors"), f"{package.pretty_name}: dist mirrors")

    for key, (attribute, description) in LINK_TYPES.items():
        if key in data:
            setattr(package, attribute, _parse_links(package.name, description, data[key], key))

    for key, attribute in PLAIN_FIELDS.items():
        if key in data:
            value = data[key]
            if key in OBJECT_FIELDS:
                value = dict(_as_object(value, f"{package.pretty_name}: {key!r}"))
            setattr(package, attribute, value)

    package.is_default_branch = bool(data.get("default-branch", False))
    package.release_date = _parse_release_date(data.get("time"))

    logger.debug(f"Loaded {package.pretty_name} {package.pretty_version} ({package.stability.value})")
    return package


def dump_package(package: PackageDescriptor) -> dict[str, Any]:
    """Serialize a descriptor back to a lock entry, omitting empty fields."""
    data: dict[str, Any] = {
        "name": package.pretty_name,
        "version": package.pretty_version,
        "version_normalized": package.version,
    }

    if package.source_type or package.source_url:
        data["source"] = {
            "type": package.source_type,
            "url": package.source_url,
            "reference": package.source_reference,
        }
        if package.source_mirrors:
            data["source"]["mirrors"] = [mirror.to_dict() for mirror in package.source_mirrors]

    if package.dist_type or package.dist_url:
        data["dist"] = {
            "type": package.dist_type,
            "url": package.dist_url,
            "reference": package.dist_reference,
            "shasum": package.dist_sha1_checksum or "",
        }
        if package.dist_mirrors:
            data["dist"]["mirrors"] = [mirror.to_dict() for mirror in package.dist_mirrors]

    for key, (attribute, _description) in LINK_TYPES.items():
        if links := getattr(package, attribute):
            data[key] = {target: link.constraint for target, link in links.items()}

    data["type"] = package.type
    for key, attribute in PLAIN_FIELDS.items():
        if key == "type":
            continue
        value = getattr(package, attribute)
        if value:
            data[key] = value

    if package.is_default_branch:
        data["default-branch"] = True
    if package.release_date is not None:
        data["time"] = package.release_date.isoformat()

    return data


def load_packages_file(path: Path, **descriptor_options: Any) -> list[PackageDescriptor]:
    """
    Load descriptors from a JSON file.

    The file may hold a single package entry, a list of entries, or a lock
    document with 'packages' and 'packages-dev' lists.

    Raises:
        ManifestError: If the file is not UTF-8 JSON or any entry is malformed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except UnicodeDecodeError as e:
        raise ManifestError(f"{path} is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"{path} is not valid JSON: {e}") from e

    if isinstance(document, list):
        entries = document
    elif not isinstance(document, dict):
        raise ManifestError(f"{path} must hold an object or a list, got {type(document).__name__}")
    elif "packages" in document or "packages-dev" in document:
        entries = []
        for key in ("packages", "packages-dev"):
            section = document.get(key, [])
            if not isinstance(section, list):
                raise ManifestError(f"{path}: {key!r} must be a list, got {type(section).__name__}")
            entries.extend(section)
    else:
        entries = [document]

    packages = [load_package(entry, **descriptor_options) for entry in entries]
    logger.info(f"Loaded {len(packages)} packages from {path}")
    return packages
