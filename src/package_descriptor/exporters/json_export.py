"""
JSON Exporter — Exports package descriptors as lock-entry JSON files.
"""

import json
import logging
from pathlib import Path

import aiofiles

from package_descriptor.models.package import PackageDescriptor
from package_descriptor.parsers.manifest import dump_package

logger = logging.getLogger(__name__)


def export_filename(package: PackageDescriptor) -> str:
    """'acme/lib' at '1.2.0' -> 'acme_lib-1.2.0.json'"""
    return f"{package.name.replace('/', '_')}-{package.pretty_version.replace('/', '_')}.json"


class JSONExporter:
    """
    Exports PackageDescriptor objects as individual JSON files.

    Output structure:
        output_dir/
        ├── acme_lib-1.2.0.json
        └── acme_tools-dev-main.json
    """

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.count = 0

    async def export(self, package: PackageDescriptor) -> None:
        """Export a single package as a JSON file."""
        filepath = self.output_dir / export_filename(package)

        async with aiofiles.open(filepath, "w") as f:
            await f.write(json.dumps(dump_package(package), indent=2))

        self.count += 1
        logger.debug(f"[JSON] Exported {package.pretty_name} {package.pretty_version}")

    async def finalize(self) -> int:
        """Log export summary and return the number of files written."""
        logger.info(f"[JSON] Export complete: {self.count} packages exported to {self.output_dir}")
        return self.count
