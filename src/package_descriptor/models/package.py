"""
Package Descriptor Model.

In-memory description of a resolved package: identity, source and dist
locations, dependency links and install metadata. Candidate URL resolution
and source/dist reference synchronization are exposed as methods.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Protocol

from package_descriptor.core.links import DeprecationCallback, log_deprecation, normalize_links
from package_descriptor.core.references import sync_references
from package_descriptor.core.urls import MirrorExpander, UrlType, get_urls
from package_descriptor.models.link import Link
from package_descriptor.models.mirror import Mirror
from package_descriptor.parsers.mirror import MirrorUrlExpander
from package_descriptor.parsers.version import Stability, VersionParser

DEFAULT_TYPE = "library"

# Runs of '.'/'..' segments at the start of the path or after a separator.
_TRAVERSAL_SEGMENTS = re.compile(r"(?:^|[\\/]+)\.\.?(?:[\\/]+|$)(?:\.\.?(?:[\\/]+|$))*")

LinkInput = Mapping[str, Link] | Sequence[Link]


class StabilityParser(Protocol):
    def parse_stability(self, version: str) -> Stability: ...


def sanitize_target_dir(target_dir: str) -> str:
    """
    Remove path traversal segments from a target directory.

    '../../etc/passwd' -> 'etc/passwd'
    './a/b'            -> 'a/b'
    """
    return _TRAVERSAL_SEGMENTS.sub("/", target_dir).lstrip("/")


class PackageDescriptor:
    """
    A resolved package, as held by the resolver and installer.

    Identity (name, version, stability) is fixed at construction; version
    and its derived stability can only change together via replace_version().
    Everything else is set by a loader after construction.
    """

    def __init__(
        self,
        name: str,
        version: str,
        pretty_version: str,
        *,
        version_parser: StabilityParser | None = None,
        mirror_expander: MirrorExpander | None = None,
        on_deprecation: DeprecationCallback = log_deprecation,
    ):
        self._pretty_name = name
        self._name = name.lower()
        self._version_parser = version_parser or VersionParser()
        self._mirror_expander = mirror_expander or MirrorUrlExpander()
        self._on_deprecation = on_deprecation
        self.replace_version(version, pretty_version)

        self._type: str | None = None
        self._target_dir: str | None = None
        self.installation_source: str | None = None  # "source", "dist" or None

        self.source_type: str | None = None
        self.source_url: str | None = None
        self.source_reference: str | None = None
        self.source_mirrors: list[Mirror] | None = None

        self.dist_type: str | None = None
        self.dist_url: str | None = None
        self.dist_reference: str | None = None
        self.dist_sha1_checksum: str | None = None
        self.dist_mirrors: list[Mirror] | None = None

        self.release_date: datetime | None = None
        self.extra: dict[str, Any] = {}
        self.binaries: list[str] = []
        self.notification_url: str | None = None
        self.is_default_branch = False
        self.transport_options: dict[str, Any] = {}

        self._requires: dict[str, Link] = {}
        self._conflicts: dict[str, Link] = {}
        self._provides: dict[str, Link] = {}
        self._replaces: dict[str, Link] = {}
        self._dev_requires: dict[str, Link] = {}
        self.suggests: dict[str, str] = {}

        self.autoload: dict[str, Any] = {}
        self.dev_autoload: dict[str, Any] = {}
        self.include_paths: list[str] = []

    # ──────────────────────────────────────────────
    # Identity
    # ──────────────────────────────────────────────

    @property
    def name(self) -> str:
        """Lowercased package name."""
        return self._name

    @property
    def pretty_name(self) -> str:
        return self._pretty_name

    @property
    def version(self) -> str:
        return self._version

    @property
    def pretty_version(self) -> str:
        return self._pretty_version

    @property
    def stability(self) -> Stability:
        return self._stability

    @property
    def is_dev(self) -> bool:
        return self._dev

    @property
    def unique_name(self) -> str:
        return f"{self._name}-{self._version}"

    def replace_version(self, version: str, pretty_version: str) -> None:
        """Replace version and pretty version, re-deriving stability."""
        stability = self._version_parser.parse_stability(version)
        self._version, self._pretty_version = version, pretty_version
        self._stability, self._dev = stability, stability is Stability.DEV

    def __str__(self) -> str:
        return self.unique_name

    def __repr__(self) -> str:
        return f"<PackageDescriptor {self._pretty_name} {self._pretty_version}>"

    # ──────────────────────────────────────────────
    # Install metadata
    # ──────────────────────────────────────────────

    @property
    def type(self) -> str:
        return self._type or DEFAULT_TYPE

    @type.setter
    def type(self, value: str | None) -> None:
        self._type = value

    @property
    def target_dir(self) -> str | None:
        """Target directory with any leading path traversal removed."""
        if self._target_dir is None:
            return None
        return sanitize_target_dir(self._target_dir)

    @target_dir.setter
    def target_dir(self, value: str | None) -> None:
        self._target_dir = value

    @property
    def raw_target_dir(self) -> str | None:
        """Target directory exactly as it was set, for serialization."""
        return self._target_dir

    @raw_target_dir.setter
    def raw_target_dir(self, value: str | None) -> None:
        self._target_dir = value

    # ──────────────────────────────────────────────
    # Locations
    # ──────────────────────────────────────────────

    def get_source_urls(self) -> list[str]:
        return self.get_urls(
            self.source_url, self.source_mirrors, self.source_reference, self.source_type, UrlType.SOURCE
        )

    def get_dist_urls(self) -> list[str]:
        return self.get_urls(self.dist_url, self.dist_mirrors, self.dist_reference, self.dist_type, UrlType.DIST)

    def get_urls(
        self,
        url: str | None,
        mirrors: Sequence[Mirror] | None,
        reference: str | None,
        type: str | None,
        url_type: UrlType,
    ) -> list[str]:
        """Candidate URLs for the given location, see core.urls.get_urls()."""
        return get_urls(
            url,
            mirrors,
            reference,
            type,
            url_type,
            package_name=self._name,
            version=self._version,
            pretty_version=self._pretty_version,
            expander=self._mirror_expander,
        )

    def set_source_dist_references(self, reference: str) -> None:
        """
        Set the source reference and keep the dist reference/URL in step.

        The dist URL is only rewritten for Bitbucket, GitHub and GitLab
        archive URLs; elsewhere only an existing dist reference is updated.
        """
        synced = sync_references(reference, self.dist_url, self.dist_reference)
        self.source_reference = synced.source_reference
        self.dist_reference = synced.dist_reference
        self.dist_url = synced.dist_url

    # ──────────────────────────────────────────────
    # Links
    # ──────────────────────────────────────────────

    def _normalize(self, links: LinkInput, caller: str) -> dict[str, Link]:
        return normalize_links(links, caller, self._on_deprecation)

    @property
    def requires(self) -> dict[str, Link]:
        return self._requires

    @requires.setter
    def requires(self, links: LinkInput) -> None:
        self._requires = self._normalize(links, "requires")

    @property
    def conflicts(self) -> dict[str, Link]:
        return self._conflicts

    @conflicts.setter
    def conflicts(self, links: LinkInput) -> None:
        self._conflicts = self._normalize(links, "conflicts")

    @property
    def provides(self) -> dict[str, Link]:
        return self._provides

    @provides.setter
    def provides(self, links: LinkInput) -> None:
        self._provides = self._normalize(links, "provides")

    @property
    def replaces(self) -> dict[str, Link]:
        return self._replaces

    @replaces.setter
    def replaces(self, links: LinkInput) -> None:
        self._replaces = self._normalize(links, "replaces")

    @property
    def dev_requires(self) -> dict[str, Link]:
        return self._dev_requires

    @dev_requires.setter
    def dev_requires(self, links: LinkInput) -> None:
        self._dev_requires = self._normalize(links, "dev_requires")
