"""
Package Descriptor CLI — Inspect candidate URLs and synchronize references.

Usage:
    package-descriptor urls composer.lock --channel dist
    package-descriptor sync-ref package.json 3f2b...e1 --package acme/lib --output-dir ./out
    package-descriptor export composer.lock --output-dir ./out
"""

import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

logger = logging.getLogger(__name__)
console = Console()


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load(file: str) -> list:
    from package_descriptor.parsers.manifest import ManifestError, load_packages_file

    try:
        return load_packages_file(Path(file))
    except ManifestError as e:
        raise click.ClickException(str(e)) from e


async def _export_all(packages: list, fmt: str, output_dir: str) -> None:
    from package_descriptor.exporters import get_exporter

    exporter = get_exporter(fmt, output_dir)
    for package in packages:
        await exporter.export(package)
    count = await exporter.finalize()
    console.print(f"Exported {count} packages to {output_dir}")


@click.group()
@click.version_option(package_name="package-descriptor")
def cli():
    """Package Descriptor — Resolve package source and dist locations."""
    pass


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--channel",
    "-c",
    type=click.Choice(["source", "dist", "all"]),
    default="all",
    help="Which location channel to list.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def urls(file, channel, verbose):
    """List candidate download URLs for every package in FILE."""
    _configure_logging(verbose)
    packages = _load(file)

    table = Table(title="Candidate URLs")
    table.add_column("Package")
    table.add_column("Version")
    table.add_column("Channel")
    table.add_column("#", justify="right")
    table.add_column("URL", overflow="fold")

    for package in packages:
        channels = []
        if channel in ("source", "all"):
            channels.append(("source", package.get_source_urls()))
        if channel in ("dist", "all"):
            channels.append(("dist", package.get_dist_urls()))
        for name, candidates in channels:
            for index, url in enumerate(candidates, start=1):
                table.add_row(package.pretty_name, package.pretty_version, name, str(index), url)

    console.print(table)


@cli.command("sync-ref")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("reference")
@click.option("--package", "-p", "package_name", type=str, default=None, help="Only update this package.")
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(),
    default=None,
    help="Export updated packages as JSON to this directory.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def sync_ref(file, reference, package_name, output_dir, verbose):
    """Set REFERENCE as the source reference and update dist references to match."""
    _configure_logging(verbose)
    packages = _load(file)
    if package_name is not None:
        packages = [p for p in packages if p.name == package_name.lower()]
        if not packages:
            raise click.ClickException(f"Package {package_name!r} not found in {file}")

    table = Table(title="Synchronized References")
    table.add_column("Package")
    table.add_column("Source Reference")
    table.add_column("Dist Reference")
    table.add_column("Dist URL", overflow="fold")

    for package in packages:
        package.set_source_dist_references(reference)
        table.add_row(
            package.pretty_name,
            package.source_reference,
            package.dist_reference or "-",
            package.dist_url or "-",
        )

    console.print(table)

    if output_dir is not None:
        asyncio.run(_export_all(packages, "json", output_dir))


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["json"]),
    default="json",
    help="Export format.",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(),
    default="./descriptor_output",
    help="Output directory for exported packages.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def export(file, fmt, output_dir, verbose):
    """Export every package in FILE as individual descriptor files."""
    _configure_logging(verbose)
    packages = _load(file)
    asyncio.run(_export_all(packages, fmt, output_dir))


if __name__ == "__main__":
    cli()
