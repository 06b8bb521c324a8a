"""Segment types produced by the guillemet parser."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

PROSE_TAG = "p"
QUOTE_TAG = "arabic"


class SegmentType(str, Enum):
    """Kind of a parsed segment."""

    PROSE = "prose"  # LTR paragraph text
    SCRIPT_QUOTE = "script_quote"  # RTL Arabic quote block

    @property
    def tag(self) -> str:
        """Markup tag used when the segment is serialized."""
        return QUOTE_TAG if self is SegmentType.SCRIPT_QUOTE else PROSE_TAG


@dataclass(frozen=True)
class Segment:
    """A parsed, immutable piece of text."""

    type: SegmentType
    text: str

    @property
    def is_quote(self) -> bool:
        return self.type is SegmentType.SCRIPT_QUOTE

    def copy_with(
        self, type: Optional[SegmentType] = None, text: Optional[str] = None  # pylint: disable=redefined-builtin
    ) -> "Segment":
        """Return a new segment with the given fields replaced."""
        return replace(
            self,
            type=self.type if type is None else type,
            text=self.text if text is None else text,
        )

    def __repr__(self) -> str:
        preview = self.text[:30]
        return f'Segment(type={self.type.name}, text="{preview}...")'


__all__ = ["PROSE_TAG", "QUOTE_TAG", "Segment", "SegmentType"]
