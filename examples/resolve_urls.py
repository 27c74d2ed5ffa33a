"""
Example: Resolve candidate URLs and pin a branch to a commit.

Usage:
    python examples/resolve_urls.py
"""

import asyncio
from pathlib import Path

from package_descriptor import load_package
from package_descriptor.exporters.json_export import JSONExporter


async def main():
    package = load_package(
        {
            "name": "acme/lib",
            "version": "dev-main",
            "source": {
                "type": "git",
                "url": "https://github.com/acme/lib.git",
                "reference": "main",
                "mirrors": [{"url": "https://git.mirror.example/%normalizedUrl%.git", "preferred": True}],
            },
            "dist": {
                "type": "zip",
                "url": "https://api.github.com/repos/acme/lib/zipball/" + "0" * 40,
                "reference": "0" * 40,
                "mirrors": [{"url": "https://dist.mirror.example/%package%/%reference%.%type%", "preferred": False}],
            },
        }
    )

    print("Source candidates:", *package.get_source_urls(), sep="\n  ")
    print("Dist candidates:", *package.get_dist_urls(), sep="\n  ")

    # The VCS layer resolved 'main' to a commit
    package.set_source_dist_references("4f1e2a3b4c5d6e7f8091a2b3c4d5e6f708192a3b")
    print("Pinned dist URL:", package.dist_url)

    exporter = JSONExporter(output_dir=Path("./descriptor_output"))
    await exporter.export(package)
    await exporter.finalize()


if __name__ == "__main__":
    asyncio.run(main())
