"""
Link Model — a dependency relationship between two packages.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Link:
    """
    Immutable relationship from a source package to a target package.

    Links are shared value objects: several descriptors may hold the same
    instance in their requires/conflicts/provides/replaces maps.
    """

    source: str
    target: str
    constraint: str = "*"
    description: str = "relates to"

    def __post_init__(self):
        object.__setattr__(self, "source", self.source.lower())
        object.__setattr__(self, "target", self.target.lower())

    def __str__(self) -> str:
        return f"{self.source} {self.description} {self.target} ({self.constraint})"
