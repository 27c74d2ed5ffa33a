"""Export backends for package descriptors."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from package_descriptor.exporters.json_export import JSONExporter
from package_descriptor.models.package import PackageDescriptor


@runtime_checkable
class Exporter(Protocol):
    """
    Persists descriptor snapshots as lock entries.

    export() is called once per descriptor, after any reference
    synchronization, and must write the entry produced by
    parsers.manifest.dump_package(). finalize() flushes pending output and
    returns how many descriptors were written.
    """

    async def export(self, package: PackageDescriptor) -> None: ...

    async def finalize(self) -> int: ...


def get_exporter(format_name: str, output_dir: str) -> Exporter:
    """Factory function to create an exporter by format name."""
    from pathlib import Path

    out = Path(output_dir)
    match format_name:
        case "json":
            return JSONExporter(output_dir=out)
        case _:
            raise ValueError(f"Unknown export format: {format_name!r}. Use 'json'.")


__all__ = ["Exporter", "JSONExporter", "get_exporter"]
