"""Domain models for epl-label.

This module contains the data exchanged between pipeline stages. All models
are frozen dataclasses: each stage produces new values and never mutates
what an earlier stage produced.

Key classes:
- TextRun: A resolved bidi run
- ShapedLine: Visual-order text for one line
- Bitmap: A monochrome pixel grid
- PackedRows: Row-packed bitmap bytes
- Product: Input data of one product cell
- PlacedImage / PlacedBarcode: Elements with canvas coordinates
- LabelLayout: All placed elements of one label
"""

from epl_label.domain.bitmap import Bitmap, PackedRows
from epl_label.domain.label import (
    Element,
    LabelLayout,
    PlacedBarcode,
    PlacedImage,
    Product,
)
from epl_label.domain.text import ShapedLine, TextDirection, TextRun, contains_arabic

__all__: list[str] = [
    # Enums
    "TextDirection",
    # Text
    "TextRun",
    "ShapedLine",
    "contains_arabic",
    # Pixels
    "Bitmap",
    "PackedRows",
    # Labels
    "Product",
    "PlacedImage",
    "PlacedBarcode",
    "Element",
    "LabelLayout",
]
