"""
Mirror Model — an alternate location for a source or dist artifact.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Mirror:
    """A mirror URL template and whether it takes precedence over the primary URL."""

    url: str
    preferred: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Mirror":
        return cls(url=data["url"], preferred=bool(data.get("preferred", False)))
