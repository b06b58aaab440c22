"""Shared fixtures: a synthetic TrueType font built with fontTools.

Every printable ASCII character, the Arabic block and the Arabic
presentation forms map to one box glyph; space maps to an empty glyph.
At 42 px the box covers x 2.1..18.9 of a 21 px advance.
"""

from io import BytesIO

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from epl_label.io import FontResource

UPM = 1000
ASCENT = 800
DESCENT = -200
BOX_ADVANCE = 500
SPACE_ADVANCE = 300

MAPPED_RANGES = [
    (0x21, 0x7E),
    (0x0600, 0x06FF),
    (0xFB50, 0xFDFF),
    (0xFE70, 0xFEFC),
]


def _box_glyph(x0: int, y0: int, x1: int, y1: int):
    pen = TTGlyphPen(None)
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()
    return pen.glyph()


def build_box_font() -> bytes:
    """Build the synthetic test font and return its bytes."""
    cmap = {0x20: "space"}
    for low, high in MAPPED_RANGES:
        for codepoint in range(low, high + 1):
            cmap[codepoint] = "box"

    builder = FontBuilder(UPM, isTTF=True)
    builder.setupGlyphOrder([".notdef", "space", "box"])
    builder.setupCharacterMap(cmap)
    builder.setupGlyf(
        {
            ".notdef": TTGlyphPen(None).glyph(),
            "space": TTGlyphPen(None).glyph(),
            "box": _box_glyph(50, 0, 450, 700),
        }
    )
    builder.setupHorizontalMetrics(
        {
            ".notdef": (BOX_ADVANCE, 0),
            "space": (SPACE_ADVANCE, 0),
            "box": (BOX_ADVANCE, 50),
        }
    )
    builder.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    builder.setupNameTable({"familyName": "TestBoxes", "styleName": "Regular"})
    builder.setupOS2(
        sTypoAscender=ASCENT,
        sTypoDescender=DESCENT,
        usWinAscent=ASCENT,
        usWinDescent=-DESCENT,
    )
    builder.setupPost()

    buf = BytesIO()
    builder.save(buf)
    return buf.getvalue()


@pytest.fixture(scope="session")
def box_font_bytes() -> bytes:
    """Raw bytes of the synthetic box font."""
    return build_box_font()


@pytest.fixture(scope="session")
def box_font(box_font_bytes: bytes) -> FontResource:
    """Synthetic box font as a FontResource."""
    return FontResource.from_bytes(box_font_bytes, "TestBoxes.ttf")
