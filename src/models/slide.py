"""Slide manifest and selection models."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping


class QualityTier(str, Enum):
    """Named quality bucket; each maps to exactly one slide image width."""

    HD = "HD"
    SD = "SD"

    @property
    def width(self) -> int:
        return _TIER_WIDTHS[self]

    @classmethod
    def parse(cls, value: str) -> "QualityTier":
        """Parse ``hd``/``sd`` in any letter case."""
        return cls(value.strip().upper())


_TIER_WIDTHS = {
    QualityTier.HD: 2048,
    QualityTier.SD: 638,
}


@dataclass(frozen=True)
class SlideManifestEntry:
    """Image URLs available for one slide, keyed by pixel width."""

    resolutions: Mapping[int, str]

    def __post_init__(self) -> None:
        # Freeze a private copy so the entry stays immutable after parsing.
        object.__setattr__(self, "resolutions", MappingProxyType(dict(self.resolutions)))

    def url_for(self, width: int) -> str | None:
        return self.resolutions.get(width)

    @property
    def widths(self) -> list[int]:
        return sorted(self.resolutions)


@dataclass(frozen=True)
class SlideManifest:
    """Ordered slides of one presentation plus its page title."""

    title: str
    slides: tuple[SlideManifestEntry, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.slides)


@dataclass(frozen=True)
class SlideSelection:
    """One image URL per selected slide, in manifest order."""

    urls: tuple[str, ...]
    thumbnail: str


@dataclass(frozen=True)
class FetchedImage:
    """A slide image normalized to JPEG on local storage."""

    source_url: str
    local_path: Path
