"""Tests for descriptor exporters."""

import json
from pathlib import Path

import pytest

from package_descriptor.exporters import Exporter, JSONExporter, get_exporter
from package_descriptor.exporters.json_export import export_filename
from package_descriptor.models.package import PackageDescriptor


@pytest.fixture
def sample_package():
    pkg = PackageDescriptor("acme/lib", "1.2.0.0", "1.2.0")
    pkg.dist_type = "zip"
    pkg.dist_url = "https://example.com/lib.zip"
    pkg.dist_reference = "abc"
    return pkg


# ═══════════════════════════════════════════
# JSON Exporter Tests
# ═══════════════════════════════════════════


class TestJSONExporter:
    @pytest.mark.asyncio
    async def test_exports_json_file(self, sample_package, tmp_path):
        exporter = JSONExporter(output_dir=tmp_path)
        await exporter.export(sample_package)
        await exporter.finalize()

        outfile = tmp_path / "acme_lib-1.2.0.json"
        assert outfile.exists()

        data = json.loads(outfile.read_text())
        assert data["name"] == "acme/lib"
        assert data["dist"]["url"] == "https://example.com/lib.zip"

    @pytest.mark.asyncio
    async def test_count_tracking(self, sample_package, tmp_path):
        exporter = JSONExporter(output_dir=tmp_path)
        await exporter.export(sample_package)
        assert exporter.count == 1
        assert await exporter.finalize() == 1

    def test_branch_version_filename(self):
        pkg = PackageDescriptor("acme/lib", "dev-feature/x", "dev-feature/x")
        assert export_filename(pkg) == "acme_lib-dev-feature_x.json"

    def test_satisfies_protocol(self, tmp_path):
        assert isinstance(JSONExporter(output_dir=tmp_path), Exporter)


# ═══════════════════════════════════════════
# Factory
# ═══════════════════════════════════════════


class TestGetExporter:
    def test_json(self, tmp_path):
        exporter = get_exporter("json", str(tmp_path / "out"))
        assert isinstance(exporter, JSONExporter)
        assert exporter.output_dir == Path(tmp_path / "out")

    def test_unknown_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown export format"):
            get_exporter("sqlite", str(tmp_path))
