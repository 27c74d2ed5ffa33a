"""Tests for link set normalization."""

import logging

import pytest

from package_descriptor.core.links import DeprecationNotice, normalize_links
from package_descriptor.models.link import Link
from package_descriptor.models.package import PackageDescriptor


@pytest.fixture
def notices():
    return []


# ═══════════════════════════════════════════
# normalize_links
# ═══════════════════════════════════════════


class TestNormalizeLinks:
    def test_mapping_is_copied(self, notices):
        links = {"foo/bar": Link("acme/lib", "foo/bar", "^1.0")}
        result = normalize_links(links, "requires", notices.append)
        assert result == links
        assert result is not links
        assert result["foo/bar"] is links["foo/bar"]
        assert notices == []

    def test_legacy_list_is_keyed_by_target(self, notices):
        first = Link("acme/lib", "foo", "^1.0")
        second = Link("acme/lib", "bar", "^2.0")
        third = Link("acme/lib", "foo", "^3.0")
        result = normalize_links([first, second, third], "requires", notices.append)
        assert result == {"foo": third, "bar": second}
        assert result["foo"] is third
        assert len(notices) == 1

    def test_notice_names_caller(self, notices):
        normalize_links([Link("acme/lib", "foo")], "conflicts", notices.append)
        assert notices[0].caller == "conflicts"
        assert "conflicts" in notices[0].message

    def test_empty_list_is_not_deprecated(self, notices):
        assert normalize_links([], "requires", notices.append) == {}
        assert notices == []

    def test_default_callback_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="package_descriptor.core.links"):
            normalize_links([Link("acme/lib", "foo")], "provides")
        assert "deprecated" in caplog.text


# ═══════════════════════════════════════════
# Descriptor Link Setters
# ═══════════════════════════════════════════


class TestDescriptorLinks:
    @pytest.mark.parametrize("attribute", ["requires", "conflicts", "provides", "replaces", "dev_requires"])
    def test_every_setter_accepts_legacy_lists(self, attribute):
        notices: list[DeprecationNotice] = []
        package = PackageDescriptor("acme/lib", "1.0.0.0", "1.0.0", on_deprecation=notices.append)
        link = Link("acme/lib", "Foo/Bar")
        setattr(package, attribute, [link])
        assert getattr(package, attribute) == {"foo/bar": link}
        assert [n.caller for n in notices] == [attribute]

    def test_descriptors_do_not_share_link_maps(self):
        shared = {"foo": Link("acme/lib", "foo")}
        first = PackageDescriptor("acme/a", "1.0.0.0", "1.0.0")
        second = PackageDescriptor("acme/b", "1.0.0.0", "1.0.0")
        first.requires = shared
        second.requires = shared
        first.requires["bar"] = Link("acme/a", "bar")
        shared["baz"] = Link("acme/lib", "baz")
        assert list(second.requires) == ["foo"]
        assert list(first.requires) == ["foo", "bar"]
        assert first.requires["foo"] is second.requires["foo"]

    def test_mapping_setter_is_silent(self):
        notices: list[DeprecationNotice] = []
        package = PackageDescriptor("acme/lib", "1.0.0.0", "1.0.0", on_deprecation=notices.append)
        package.requires = {"foo": Link("acme/lib", "foo")}
        assert list(package.requires) == ["foo"]
        assert notices == []

    def test_link_names_are_lowercased(self):
        link = Link("Acme/Lib", "Foo/Bar", ">=1.0", "requires")
        assert link.source == "acme/lib"
        assert link.target == "foo/bar"
        assert str(link) == "acme/lib requires foo/bar (>=1.0)"
