"""
Candidate URL resolution.

Builds the ordered, deduplicated list of URLs from which a package's source
repository or dist archive can be fetched: the primary URL plus its mirrors.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Protocol

from package_descriptor.models.mirror import Mirror

logger = logging.getLogger(__name__)


class UrlType(Enum):
    """Which location channel a URL belongs to."""

    SOURCE = "source"
    DIST = "dist"


class MirrorExpander(Protocol):
    """Expands mirror templates into concrete URLs."""

    def expand_dist(
        self,
        mirror_url: str,
        package_name: str,
        version: str,
        reference: str | None,
        type: str | None,
        pretty_version: str | None = None,
    ) -> str: ...

    def expand_git_mirror(self, mirror_url: str, package_name: str, url: str, type: str | None) -> str: ...

    def expand_hg_mirror(self, mirror_url: str, package_name: str, url: str, type: str | None) -> str: ...


def get_urls(
    url: str | None,
    mirrors: Sequence[Mirror] | None,
    reference: str | None,
    type: str | None,
    url_type: UrlType,
    *,
    package_name: str,
    version: str,
    pretty_version: str,
    expander: MirrorExpander,
) -> list[str]:
    """
    Return candidate URLs for one channel of a package.

    Preferred mirrors are inserted at the front as they are encountered, so
    the last preferred mirror comes first, then the earlier preferred mirrors
    in reverse order, then the primary URL, then the other mirrors in order.

    Args:
        url: Primary URL. Without one there are no candidates at all.
        mirrors: Mirror templates, in declaration order.
        reference: Channel reference (commit, tag or branch).
        type: Channel type ('git', 'hg', 'zip', ...).
        url_type: Channel the URL belongs to.
        package_name, version, pretty_version: Package identity for template expansion.
        expander: Mirror template expander.

    Returns:
        Candidate URLs with exact duplicates removed.
    """
    if not url:
        return []

    if url_type is UrlType.DIST and "%" in url:
        url = expander.expand_dist(url, package_name, version, reference, type, pretty_version)

    urls = [url]
    for mirror in mirrors or ():
        match (url_type, type):
            case (UrlType.DIST, _):
                candidate = expander.expand_dist(mirror.url, package_name, version, reference, type, pretty_version)
            case (UrlType.SOURCE, "git"):
                candidate = expander.expand_git_mirror(mirror.url, package_name, url, type)
            case (UrlType.SOURCE, "hg"):
                candidate = expander.expand_hg_mirror(mirror.url, package_name, url, type)
            case _:
                logger.debug(f"No mirror rule for {url_type.value} type {type!r}, skipping {mirror.url}")
                continue

        if candidate in urls:
            continue
        if mirror.preferred:
            urls.insert(0, candidate)
        else:
            urls.append(candidate)

    return urls
