"""
Data model for discovered course resources.

A ``ResourceDescriptor`` is created by the page parser and mutated only by
the retrieval queue (``PENDING`` → ``DOWNLOADED`` | ``FAILED``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import DISPLAY_TITLES, FILE_PATTERNS


class ResourceKind(str, Enum):
    ORIGINAL_BOOK = "original_book"
    HIGHLIGHTED_BOOK = "highlighted_book"
    SUMMARY = "summary"
    SLIDE_DECK = "slide_deck"
    MIND_MAP = "mind_map"

    @property
    def suffix(self) -> str:
        return _SUFFIXES[self]

    @property
    def display_title(self) -> str:
        return _TITLES[self]

    @property
    def is_per_video(self) -> bool:
        """True for materials attached to a single video of a lesson."""
        return self in PER_VIDEO_KINDS

    @classmethod
    def parse(cls, raw: str) -> "ResourceKind":
        """Look a kind up by value (``slide_deck``) or name (``SLIDE_DECK``)."""
        key = raw.strip()
        try:
            return cls(key.lower())
        except ValueError:
            pass
        try:
            return cls[key.upper()]
        except KeyError:
            raise ValueError(f"unknown resource kind: {raw!r}") from None


class RetrievalState(str, Enum):
    PENDING = "pending"
    DOWNLOADED = "downloaded"
    FAILED = "failed"


BOOK_KINDS = frozenset({ResourceKind.ORIGINAL_BOOK, ResourceKind.HIGHLIGHTED_BOOK})
PER_VIDEO_KINDS = frozenset(
    {ResourceKind.SUMMARY, ResourceKind.SLIDE_DECK, ResourceKind.MIND_MAP}
)

# Exhaustive kind → suffix / title tables; a missing kind fails at import time.
_SUFFIXES: dict[ResourceKind, str] = {k: FILE_PATTERNS[k.value] for k in ResourceKind}
_TITLES: dict[ResourceKind, str] = {k: DISPLAY_TITLES[k.value] for k in ResourceKind}


def derive_filename(kind: ResourceKind, unit_index: int, sub_index: int | None = None) -> str:
    """Return ``UnitNN_[VMM_]<suffix>`` for a resource.

    >>> derive_filename(ResourceKind.SUMMARY, 3, 2)
    'Unit03_V02_Resumo.pdf'
    """
    video_prefix = f"V{sub_index:02d}_" if sub_index else ""
    return f"Unit{unit_index:02d}_{video_prefix}{kind.suffix}"


@dataclass(eq=False)
class ResourceDescriptor:
    """One downloadable item found on a lesson page."""

    kind: ResourceKind
    source_url: str
    display_title: str
    unit_index: int
    sub_index: int | None = None
    state: RetrievalState = RetrievalState.PENDING

    def __post_init__(self) -> None:
        if self.unit_index < 1:
            raise ValueError(f"unit_index must be positive, got {self.unit_index}")
        if self.sub_index is not None:
            if not self.kind.is_per_video:
                raise ValueError(f"{self.kind.value} resources carry no video ordinal")
            if self.sub_index < 1:
                raise ValueError(f"sub_index must be positive, got {self.sub_index}")

    @property
    def filename(self) -> str:
        return derive_filename(self.kind, self.unit_index, self.sub_index)

    @property
    def downloaded(self) -> bool:
        return self.state is RetrievalState.DOWNLOADED

    @property
    def failed(self) -> bool:
        return self.state is RetrievalState.FAILED

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "url": self.source_url,
            "title": self.display_title,
            "unit": self.unit_index,
            "video": self.sub_index,
            "filename": self.filename,
            "state": self.state.value,
        }
