"""
Mirror URL Templates.

Expands mirror URL templates (``%package%``, ``%version%``, ``%reference%``,
``%type%``, ``%prettyVersion%``, ``%normalizedUrl%``) into concrete
candidate URLs for dist archives and git/hg source repositories.
"""

import hashlib
import re

_HEX_REFERENCE = re.compile(r"^(?:[a-f0-9]*|%reference%)$")
_GITHUB_REPO = re.compile(r"^(?:(?:https?|git)://github\.com/|git@github\.com:)([^/]+)/(.+?)(?:\.git)?$")
_BITBUCKET_REPO = re.compile(r"^https://bitbucket\.org/([^/]+)/(.+?)(?:\.git)?/?$")
_UNSAFE_URL_CHARS = re.compile(r"[^a-z0-9_.-]", re.IGNORECASE)


def _md5(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest()


def _replace_all(template: str, replacements: dict[str, str | None]) -> str:
    for placeholder, value in replacements.items():
        template = template.replace(placeholder, value or "")
    return template


def process_url(
    mirror_url: str,
    package_name: str,
    version: str,
    reference: str | None,
    type: str | None,
    pretty_version: str | None = None,
) -> str:
    """
    Expand a dist mirror template for one package version.

    Non-hex references (branch names) and versions containing a slash are
    replaced by their md5 digest so they are safe inside a URL path.

    Args:
        mirror_url: Template such as 'https://mirror.example/%package%/%reference%.%type%'.
        package_name: Lowercased package name.
        version: Normalized version.
        reference: Dist reference, usually a commit SHA.
        type: Dist archive type ('zip', 'tar', ...).
        pretty_version: As-authored version; '%prettyVersion%' is only expanded when given.

    Returns:
        The expanded URL.
    """
    if reference and not _HEX_REFERENCE.match(reference):
        reference = _md5(reference)
    if "/" in version:
        version = _md5(version)

    replacements = {
        "%package%": package_name,
        "%version%": version,
        "%reference%": reference,
        "%type%": type,
    }
    if pretty_version is not None:
        replacements["%prettyVersion%"] = pretty_version

    return _replace_all(mirror_url, replacements)


def normalize_repository_url(url: str) -> str:
    """
    Reduce a repository URL to a short, path-safe token.

    'https://github.com/acme/lib.git' -> 'gh-acme/lib'
    'https://bitbucket.org/acme/lib'  -> 'bb-acme/lib'
    'https://example.org/repo'        -> 'https---example.org-repo'
    """
    if match := _GITHUB_REPO.match(url):
        return f"gh-{match.group(1)}/{match.group(2)}"
    if match := _BITBUCKET_REPO.match(url):
        return f"bb-{match.group(1)}/{match.group(2)}"
    return _UNSAFE_URL_CHARS.sub("-", url.strip("/"))


def process_git_url(mirror_url: str, package_name: str, url: str, type: str | None) -> str:
    """Expand a git source mirror template against the package's repository URL."""
    return _replace_all(
        mirror_url,
        {
            "%package%": package_name,
            "%normalizedUrl%": normalize_repository_url(url),
            "%type%": type,
        },
    )


def process_hg_url(mirror_url: str, package_name: str, url: str, type: str | None) -> str:
    """Expand a Mercurial source mirror template; same rules as git."""
    return process_git_url(mirror_url, package_name, url, type)


class MirrorUrlExpander:
    """Default mirror expander handed to package descriptors."""

    def expand_dist(self, mirror_url, package_name, version, reference, type, pretty_version=None) -> str:
        return process_url(mirror_url, package_name, version, reference, type, pretty_version)

    def expand_git_mirror(self, mirror_url, package_name, url, type) -> str:
        return process_git_url(mirror_url, package_name, url, type)

    def expand_hg_mirror(self, mirror_url, package_name, url, type) -> str:
        return process_hg_url(mirror_url, package_name, url, type)
