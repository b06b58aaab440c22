"""Text run types produced by bidirectional resolution.

This module defines the types exchanged between the shaping and
rasterization stages:
- TextDirection: Enum for the resolved direction of a run
- TextRun: A contiguous substring with one resolved direction
- ShapedLine: Visual-order text ready for left-to-right painting
"""

from dataclasses import dataclass, field
from enum import Enum, auto

ARABIC_BLOCK = (0x0600, 0x06FF)


def contains_arabic(text: str) -> bool:
    """Check whether text holds a character of the Arabic Unicode block."""
    low, high = ARABIC_BLOCK
    return any(low <= ord(ch) <= high for ch in text)


class TextDirection(Enum):
    """Resolved direction of a text run."""

    LTR = auto()
    RTL = auto()


@dataclass(frozen=True, slots=True)
class TextRun:
    """A contiguous substring with a single resolved direction.

    Attributes:
        text: Characters of the run in logical (reading) order
        direction: Resolved direction
        level: Bidi embedding level the run was resolved to
    """

    text: str
    direction: TextDirection
    level: int = 0

    @property
    def is_rtl(self) -> bool:
        """True for right-to-left runs."""
        return self.direction is TextDirection.RTL

    @property
    def has_arabic(self) -> bool:
        """True if the run needs Arabic reshaping and glyph reversal."""
        return contains_arabic(self.text)


@dataclass(frozen=True, slots=True)
class ShapedLine:
    """Final visual-order string for one logical line.

    Attributes:
        text: Visual-order string; paints correctly left to right
        runs: Resolved runs in visual order
    """

    text: str
    runs: tuple[TextRun, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.text)

    def is_empty(self) -> bool:
        """Check if the line holds no characters."""
        return not self.text
