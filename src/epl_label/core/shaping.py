"""Bidirectional run resolution and Arabic reshaping.

The rasterizer paints strictly left to right and knows nothing about
scripts, so text is converted to visual order here first:

1. Embedding levels come from python-bidi's implementation of the Unicode
   Bidirectional Algorithm (one paragraph, one line, base direction
   detected from the first strong character).
2. Characters are reordered into visual order and grouped into runs of
   equal level.
3. Right-to-left runs are reshaped into contextual presentation forms.
   Runs holding Arabic letters are then reversed so their glyphs paint in
   visual order; right-to-left runs of digits or punctuation only keep
   their order so numerals stay readable.
"""

from arabic_reshaper import ArabicReshaper
from bidi import algorithm as bidi_algorithm

from epl_label.domain.text import ShapedLine, TextDirection, TextRun


def _visual_levels(text: str) -> list[tuple[str, int]]:
    """Run the bidi algorithm and return (char, level) pairs in visual order."""
    storage = bidi_algorithm.get_empty_storage()
    base_level = bidi_algorithm.get_base_level(text, False)
    storage["base_level"] = base_level
    storage["base_dir"] = ("L", "R")[base_level]

    bidi_algorithm.get_embedding_levels(text, storage, False, False)
    bidi_algorithm.explicit_embed_and_overrides(storage, False)
    bidi_algorithm.resolve_weak_types(storage, False)
    bidi_algorithm.resolve_neutral_types(storage, False)
    bidi_algorithm.resolve_implicit_levels(storage, False)
    bidi_algorithm.reorder_resolved_levels(storage, False)

    return [(ch["ch"], ch["level"]) for ch in storage["chars"]]


class TextShaper:
    """Converts logical text into a visual-order, reshaped line.

    The shaper holds one Arabic reshaper and can be reused for any number
    of lines.

    Example:
        shaper = TextShaper()
        line = shaper.resolve("شاي 25")
        print(line.text)
    """

    def __init__(self, reshaper: ArabicReshaper | None = None) -> None:
        self._reshaper = reshaper if reshaper is not None else ArabicReshaper()

    @staticmethod
    def base_direction(text: str) -> TextDirection:
        """Paragraph direction of text, taken from its first strong character."""
        if text and bidi_algorithm.get_base_level(text, False) == 1:
            return TextDirection.RTL
        return TextDirection.LTR

    def visual_runs(self, text: str) -> list[TextRun]:
        """Resolve text into directional runs in visual order.

        Args:
            text: Logical-order text of one line

        Returns:
            Runs in visual order; each run's text is in logical order
        """
        if not text:
            return []

        runs: list[TextRun] = []
        chars: list[str] = []
        current_level: int | None = None

        for ch, level in _visual_levels(text):
            if current_level is not None and level != current_level:
                runs.append(self._make_run(chars, current_level))
                chars = []
            chars.append(ch)
            current_level = level

        if chars and current_level is not None:
            runs.append(self._make_run(chars, current_level))
        return runs

    @staticmethod
    def _make_run(visual_chars: list[str], level: int) -> TextRun:
        if level % 2:
            # odd levels were reversed into visual order; undo for reshaping
            return TextRun("".join(reversed(visual_chars)), TextDirection.RTL, level)
        return TextRun("".join(visual_chars), TextDirection.LTR, level)

    def resolve(self, text: str) -> ShapedLine:
        """Build the visual-order string for one line.

        Args:
            text: Logical-order text

        Returns:
            ShapedLine that paints correctly left to right
        """
        runs = self.visual_runs(text)
        parts: list[str] = []
        for run in runs:
            if not run.is_rtl:
                parts.append(run.text)
                continue
            shaped = self._reshaper.reshape(run.text)
            if run.has_arabic:
                # brackets are reversed too, not mirrored
                shaped = shaped[::-1]
            parts.append(shaped)
        return ShapedLine("".join(parts), tuple(runs))


_default_shaper: TextShaper | None = None


def resolve(text: str) -> ShapedLine:
    """Resolve text with a shared default TextShaper."""
    global _default_shaper
    if _default_shaper is None:
        _default_shaper = TextShaper()
    return _default_shaper.resolve(text)
