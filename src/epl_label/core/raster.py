"""Rasterization of shaped text into tight monochrome bitmaps.

Glyph coverage comes from Pillow's FreeType binding; every painted pixel is
binarized against a fixed ink threshold because thermal heads cannot print
gray. Bold is emulated by repeating the paint pass at small offsets and
taking the union of the inked pixels.
"""

import math
from dataclasses import dataclass
from enum import Enum

from PIL import Image, ImageChops, ImageDraw

from epl_label.core.shaping import TextShaper
from epl_label.domain.bitmap import Bitmap
from epl_label.domain.text import TextDirection
from epl_label.io.font import FontResource

MIN_LINE_HEIGHT = 30
MIN_WIDTH = 2


class StrokeWeight(Enum):
    """Paint passes used to emulate heavier strokes.

    Each value lists the (dx, dy) offsets of the passes.
    """

    REGULAR = ((0, 0),)
    BOLD = ((0, 0), (1, 0))
    EXTRA_BOLD = ((0, 0), (1, 0), (2, 0), (0, 1))

    @property
    def offsets(self) -> tuple[tuple[int, int], ...]:
        return self.value


@dataclass(frozen=True, slots=True)
class LineMetrics:
    """Vertical metrics of one text line in pixels.

    Attributes:
        ascent: Baseline distance from the top, rounded up
        descent: Descender below the baseline, rounded down (negative)
        line_height: Bitmap height, at least MIN_LINE_HEIGHT
    """

    ascent: int
    descent: int
    line_height: int


class TextRasterizer:
    """Paints one line of text into a tight 1-bit bitmap.

    Input text is logical-order Unicode; it is resolved into visual order
    by the TextShaper before painting.

    Example:
        rasterizer = TextRasterizer(FontResource.from_path(path))
        bitmap = rasterizer.rasterize("شاي", size_px=42, side_padding=3)
    """

    def __init__(
        self,
        font: FontResource,
        ink_threshold: float = 0.5,
        shaper: TextShaper | None = None,
    ) -> None:
        """Initialize the rasterizer.

        Args:
            font: Font resource (read-only, may be shared)
            ink_threshold: Coverage in (0, 1) above which a pixel is ink
            shaper: Bidi/reshaping normalizer; a new one if None
        """
        if not 0.0 < ink_threshold < 1.0:
            raise ValueError(f"ink_threshold must be in (0, 1), got {ink_threshold}")
        self.font = font
        self.ink_threshold = ink_threshold
        self.shaper = shaper if shaper is not None else TextShaper()

    def metrics(self, size_px: int) -> LineMetrics:
        """Compute line metrics from the font's hhea table."""
        scale = size_px / self.font.units_per_em
        ascent = math.ceil(self.font.ascender * scale)
        descent = math.floor(self.font.descender * scale)
        line_height = max(MIN_LINE_HEIGHT, math.ceil(ascent - descent))
        return LineMetrics(ascent, descent, line_height)

    def measure(self, visual_text: str, size_px: int) -> int:
        """Measure the tight width of visual-order text.

        Returns the rightmost ink bound of the laid-out glyphs with the
        origin at 0, so trailing spaces and advance widths do not count.
        """
        if not visual_text:
            return 0
        face = self.font.image_font(size_px)
        metrics = self.metrics(size_px)
        # margins keep overhanging glyphs on the canvas
        width = math.ceil(face.getlength(visual_text)) + 2 * size_px
        height = metrics.line_height + 2 * size_px

        coverage = Image.new("L", (width, height), 0)
        ImageDraw.Draw(coverage).text(
            (0, metrics.ascent + size_px), visual_text, font=face, fill=255, anchor="ls"
        )
        bbox = coverage.getbbox()
        return bbox[2] if bbox else 0

    def _paint(
        self,
        size: tuple[int, int],
        visual_text: str,
        size_px: int,
        origin_x: int,
        baseline: int,
        weight: StrokeWeight,
    ) -> Image.Image:
        """Paint text onto a new "L" layer; ink is 255, everything else 0."""
        face = self.font.image_font(size_px)
        cutoff = self.ink_threshold * 255
        layer = Image.new("L", size, 0)
        if not visual_text:
            return layer

        for dx, dy in weight.offsets:
            coverage = Image.new("L", size, 0)
            ImageDraw.Draw(coverage).text(
                (origin_x + dx, baseline + dy),
                visual_text,
                font=face,
                fill=255,
                anchor="ls",
            )
            ink = coverage.point(lambda v: 255 if v > cutoff else 0)
            layer = ImageChops.lighter(layer, ink)
        return layer

    def rasterize(
        self,
        text: str,
        size_px: int,
        side_padding: int = 0,
        weight: StrokeWeight = StrokeWeight.BOLD,
    ) -> Bitmap:
        """Render one line as a tight bitmap.

        Args:
            text: Logical-order text
            size_px: Font size in pixels
            side_padding: Blank pixels added left and right
            weight: Bold emulation passes

        Returns:
            Bitmap of width max(2, tight width + 2 * side_padding) and the
            line height
        """
        visual = self.shaper.resolve(text).text
        metrics = self.metrics(size_px)
        width = max(MIN_WIDTH, self.measure(visual, size_px) + 2 * side_padding)

        layer = self._paint(
            (width, metrics.line_height), visual, size_px, side_padding, metrics.ascent, weight
        )
        return Bitmap.from_image(layer)

    def rasterize_name_price(
        self,
        name: str,
        price: str,
        size_px: int,
        max_width: int,
        weight: StrokeWeight = StrokeWeight.BOLD,
        currency: str = "",
        left_padding: int = 5,
        min_gap: int = 10,
    ) -> Bitmap:
        """Render a name/price line of exactly max_width pixels.

        The price (with its currency marker) is left-aligned at left_padding
        and always keeps its full width. The name is right-aligned and gets
        whatever is left after the price and min_gap; a longer name is
        clipped. Right-to-left names keep their beginning (right end) when
        clipped, left-to-right names keep their left end.

        Args:
            name: Product name, logical order
            price: Price string
            size_px: Font size in pixels
            max_width: Total width of the produced bitmap
            weight: Bold emulation passes
            currency: Marker appended to the price after a space
            left_padding: Price offset from the left edge
            min_gap: Minimum blank space between price and name

        Returns:
            Bitmap of width max(2, max_width)
        """
        price_text = f"{price} {currency}" if currency else price
        price_visual = self.shaper.resolve(price_text).text
        name_visual = self.shaper.resolve(name).text

        metrics = self.metrics(size_px)
        total_width = max(MIN_WIDTH, max_width)
        size = (total_width, metrics.line_height)

        price_width = self.measure(price_visual, size_px)
        name_full = self.measure(name_visual, size_px)
        available = max(0, total_width - (price_width + min_gap + left_padding))
        name_width = min(name_full, available)

        canvas = self._paint(size, price_visual, size_px, left_padding, metrics.ascent, weight)

        if name_width > 0:
            keep_right = self.shaper.base_direction(name) is TextDirection.RTL
            origin = name_width - name_full if keep_right else 0
            name_layer = self._paint(
                (name_width, metrics.line_height),
                name_visual,
                size_px,
                origin,
                metrics.ascent,
                weight,
            )
            canvas.paste(name_layer, (total_width - name_width, 0), mask=name_layer)

        return Bitmap.from_image(canvas)
