"""
Package Descriptor - In-memory description of resolved packages.

Holds a package's identity, source/dist locations and dependency links, and
derives the candidate URLs its source repository or dist archive can be
fetched from.
"""

__version__ = "1.0.0"


def __getattr__(name: str):
    """Lazy import for the model and loader."""
    if name == "PackageDescriptor":
        from package_descriptor.models.package import PackageDescriptor

        return PackageDescriptor
    if name == "load_package":
        from package_descriptor.parsers.manifest import load_package

        return load_package
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["PackageDescriptor", "load_package", "__version__"]
