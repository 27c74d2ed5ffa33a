"""
Source/dist reference synchronization.

When a floating source reference (a branch) is resolved to a fixed one (a
commit), the dist reference and, for hosts with generated archive URLs, the
commit embedded in the dist URL are updated to match.
"""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Only these hosts generate archive URLs that embed the commit SHA verbatim.
GENERATED_DIST_HOSTS = re.compile(
    r"^https?://(?:(?:www\.)?bitbucket\.org|(?:api\.)?github\.com|(?:www\.)?gitlab\.com)/",
    re.IGNORECASE,
)
# A 40-hex commit after '/' or 'sha=' that ends a path segment, ends the URL,
# or is the stem of an archive file name ('.../archive/<sha>.zip').
EMBEDDED_SHA = re.compile(
    r"(?:(?<=/)|(?<=sha=))[a-f0-9]{40}"
    r"(?=/|$|\.(?:zip|tar(?:\.gz|\.bz2|\.xz)?|tgz)(?:$|[/?#]))",
    re.IGNORECASE,
)


@dataclass
class SyncedReferences:
    """Result of synchronizing references."""

    source_reference: str
    dist_reference: str | None
    dist_url: str | None


def sync_references(reference: str, dist_url: str | None, dist_reference: str | None) -> SyncedReferences:
    """
    Compute new source/dist references and dist URL for a resolved reference.

    Args:
        reference: The new source reference.
        dist_url: Current dist URL, if any.
        dist_reference: Current dist reference, if any.

    Returns:
        SyncedReferences with the values to store.
    """
    if dist_url is not None and GENERATED_DIST_HOSTS.match(dist_url):
        new_url = EMBEDDED_SHA.sub(lambda _m: reference, dist_url)
        if new_url != dist_url:
            logger.debug(f"Rewrote dist URL reference: {dist_url} -> {new_url}")
        return SyncedReferences(reference, reference, new_url)

    if dist_reference:
        return SyncedReferences(reference, reference, dist_url)

    return SyncedReferences(reference, dist_reference, dist_url)
