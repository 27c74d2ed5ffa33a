"""Tests for source/dist reference synchronization."""

import pytest

from package_descriptor.core.references import sync_references
from package_descriptor.models.package import PackageDescriptor

OLD = "deadbeef" * 5
NEW = "cafebabe" * 5


@pytest.fixture
def package():
    return PackageDescriptor("acme/lib", "dev-main", "dev-main")


# ═══════════════════════════════════════════
# Known Hosts
# ═══════════════════════════════════════════


class TestKnownHosts:
    def test_github_archive_url(self, package):
        package.dist_url = f"https://github.com/acme/lib/archive/{OLD}.zip"
        package.set_source_dist_references(NEW)
        assert package.source_reference == NEW
        assert package.dist_reference == NEW
        assert package.dist_url == f"https://github.com/acme/lib/archive/{NEW}.zip"

    @pytest.mark.parametrize(
        "url_template",
        [
            "https://api.github.com/repos/acme/lib/zipball/{}",
            "https://bitbucket.org/acme/lib/get/{}.zip",
            "https://www.bitbucket.org/acme/lib/get/{}/",
            "https://gitlab.com/api/v4/projects/acme%2Flib/repository/archive.zip?sha={}",
            "https://www.gitlab.com/acme/lib/-/archive/{}/lib.zip",
            "http://github.com/acme/lib/zipball/{}",
            "HTTPS://API.GITHUB.COM/repos/acme/lib/zipball/{}",
        ],
    )
    def test_embedded_sha_is_replaced(self, package, url_template):
        package.dist_url = url_template.format(OLD)
        package.set_source_dist_references(NEW)
        assert package.dist_url == url_template.format(NEW)
        assert package.dist_reference == NEW

    def test_uppercase_sha_is_replaced(self, package):
        package.dist_url = f"https://api.github.com/repos/acme/lib/zipball/{OLD.upper()}"
        package.set_source_dist_references(NEW)
        assert package.dist_url == f"https://api.github.com/repos/acme/lib/zipball/{NEW}"

    def test_known_host_without_sha_keeps_url(self, package):
        package.dist_url = "https://api.github.com/repos/acme/lib/zipball/main"
        package.set_source_dist_references(NEW)
        assert package.dist_url == "https://api.github.com/repos/acme/lib/zipball/main"
        assert package.dist_reference == NEW

    def test_longer_hex_run_is_not_a_sha(self, package):
        url = f"https://api.github.com/repos/acme/lib/zipball/{OLD}ab"
        package.dist_url = url
        package.set_source_dist_references(NEW)
        assert package.dist_url == url

    @pytest.mark.parametrize(
        "url_template",
        [
            "https://github.com/acme/{}.github.io/x",
            "https://github.com/acme/lib/{}.json",
            "https://github.com/acme/lib/{}.zipped",
        ],
    )
    def test_non_archive_suffix_is_not_rewritten(self, package, url_template):
        url = url_template.format(OLD)
        package.dist_url = url
        package.set_source_dist_references(NEW)
        assert package.dist_url == url
        assert package.dist_reference == NEW

    @pytest.mark.parametrize("extension", ["zip", "tar", "tar.gz", "tar.bz2", "tar.xz", "tgz"])
    def test_archive_extensions_are_rewritten(self, package, extension):
        package.dist_url = f"https://gitlab.com/acme/lib/-/archive/{OLD}.{extension}?inline=false"
        package.set_source_dist_references(NEW)
        assert package.dist_url == f"https://gitlab.com/acme/lib/-/archive/{NEW}.{extension}?inline=false"

    def test_lookalike_host_is_unknown(self, package):
        url = f"https://github.com.evil.io/acme/lib/zipball/{OLD}"
        package.dist_url = url
        package.set_source_dist_references(NEW)
        assert package.dist_url == url
        assert package.dist_reference is None

    def test_non_sha_reference_is_inserted_literally(self, package):
        package.dist_url = f"https://api.github.com/repos/acme/lib/zipball/{OLD}"
        package.set_source_dist_references("feature\\1")
        assert package.dist_url == "https://api.github.com/repos/acme/lib/zipball/feature\\1"


# ═══════════════════════════════════════════
# Unknown Hosts
# ═══════════════════════════════════════════


class TestUnknownHosts:
    def test_existing_dist_reference_is_updated(self, package):
        package.dist_url = "https://example.com/pkg.zip"
        package.dist_reference = "old"
        package.set_source_dist_references(NEW)
        assert package.source_reference == NEW
        assert package.dist_reference == NEW
        assert package.dist_url == "https://example.com/pkg.zip"

    def test_missing_dist_reference_stays_unset(self, package):
        package.set_source_dist_references(NEW)
        assert package.source_reference == NEW
        assert package.dist_reference is None
        assert package.dist_url is None

    def test_empty_dist_reference_stays_empty(self, package):
        package.dist_url = "https://example.com/pkg.zip"
        package.dist_reference = ""
        package.set_source_dist_references(NEW)
        assert package.dist_reference == ""


# ═══════════════════════════════════════════
# Pure Function
# ═══════════════════════════════════════════


class TestSyncReferences:
    def test_returns_values_without_mutation(self):
        result = sync_references(NEW, f"https://github.com/acme/lib/archive/{OLD}.zip", OLD)
        assert result.source_reference == NEW
        assert result.dist_reference == NEW
        assert result.dist_url.endswith(f"{NEW}.zip")
