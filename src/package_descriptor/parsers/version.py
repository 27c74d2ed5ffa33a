"""
Version Stability Parser.

Classifies version strings into stability levels using regex-based
matching of the trailing release modifier (beta, RC, -dev, ...).
"""

import re
from enum import Enum


class Stability(Enum):
    """Stability of a version, most stable first."""

    STABLE = "stable"
    RC = "RC"
    BETA = "beta"
    ALPHA = "alpha"
    DEV = "dev"

    @property
    def priority(self) -> int:
        """Lower is more stable."""
        return STABILITY_PRIORITIES[self]


STABILITY_PRIORITIES = {
    Stability.STABLE: 0,
    Stability.RC: 5,
    Stability.BETA: 10,
    Stability.ALPHA: 15,
    Stability.DEV: 20,
}

_BUILD_SUFFIX = re.compile(r"#.+$")
_MODIFIER = re.compile(
    r"[._-]?(?:(stable|beta|b|rc|alpha|a|patch|pl|p)((?:[.-]?\d+)*)?)?([.-]?dev)?(?:\+.*)?$"
)


def parse_stability(version: str) -> Stability:
    """
    Return the stability of a version string.

    Args:
        version: Normalized or pretty version (e.g. '1.0.0.0-beta2', 'dev-main').

    Returns:
        The Stability member matching the version's release modifier.
    """
    version = _BUILD_SUFFIX.sub("", version)

    if version.startswith("dev-") or version.endswith("-dev"):
        return Stability.DEV

    found = _MODIFIER.search(version.lower())
    if found is None:
        return Stability.STABLE

    modifier, _number, dev = found.groups()
    if dev:
        return Stability.DEV

    match modifier:
        case "beta" | "b":
            return Stability.BETA
        case "alpha" | "a":
            return Stability.ALPHA
        case "rc":
            return Stability.RC
        case _:
            return Stability.STABLE


class VersionParser:
    """Default stability classifier handed to package descriptors."""

    def parse_stability(self, version: str) -> Stability:
        return parse_stability(version)
