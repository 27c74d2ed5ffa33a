"""
Link set normalization.

Link collections are keyed by lowercased target package name. Older callers
hand over a plain list of links instead; those are converted here and a
deprecation notice is reported through an explicit callback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from package_descriptor.models.link import Link

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeprecationNotice:
    """Non-fatal notice that a caller used a deprecated input shape."""

    caller: str
    message: str


DeprecationCallback = Callable[[DeprecationNotice], None]


def log_deprecation(notice: DeprecationNotice) -> None:
    """Default callback: report the notice through logging."""
    logger.warning(notice.message)


def normalize_links(
    links: Mapping[str, Link] | Sequence[Link],
    caller: str,
    on_deprecation: DeprecationCallback = log_deprecation,
) -> dict[str, Link]:
    """
    Return links as a mapping of lowercased target name to Link.

    Args:
        links: Either the canonical mapping, or a legacy list of links.
        caller: Name of the setter that received the links, used in the notice.
        on_deprecation: Receives exactly one notice when a legacy list is given.

    Returns:
        A new dict owned by the caller; only the Link values are shared.
        For legacy lists, later links win over earlier links with the same
        target.
    """
    if isinstance(links, Mapping):
        return dict(links)
    if not links:
        return {}

    on_deprecation(
        DeprecationNotice(
            caller=caller,
            message=(
                f"PackageDescriptor.{caller} must be called with a map of lowercased "
                "package name => Link, got a list; this is deprecated and should be fixed."
            ),
        )
    )

    mapping: dict[str, Link] = {}
    for link in links:
        mapping[link.target] = link
    return mapping
