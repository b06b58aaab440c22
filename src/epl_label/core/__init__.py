"""Core label pipeline for epl-label.

This module contains the stages of the label pipeline, leaf first:

- EAN-13 codec (checksum, normalization)
- Bidi/shaping normalizer (visual-order Arabic/Latin text)
- Text rasterizer (tight 1-bit bitmaps with bold emulation)
- Bit-packing codec (MSB-first packed rows, optional inversion)
- Layout engine (1/2/4-slot grids)
- EPL2 protocol encoder
- Label builder (orchestration)

All stages are pure computations over in-memory values; none performs I/O.

Key functions:
- normalize: Validate or complete an EAN-13 code
- pack: Pack a bitmap into printer rows
- ean13_center_x: Center an EAN-13 symbol in a region
- encode_label: Serialize a placed label into EPL2

Key classes:
- TextShaper: Resolves and reshapes mixed-direction text
- TextRasterizer: Paints shaped text into bitmaps
- LayoutEngine: Places elements for one template
- LabelBuilder: Runs the full pipeline
"""

from epl_label.core.builder import (
    LabelBuilder,
    build_four_product_label,
    build_two_product_label,
)
from epl_label.core.ean13 import coerce_payload, compute_check_digit, is_valid, normalize
from epl_label.core.epl import barcode_command, encode_label, epl_line, gw_block
from epl_label.core.layout import Cell, LayoutEngine, ean13_center_x
from epl_label.core.packing import pack, rotate_packed, unpack
from epl_label.core.raster import LineMetrics, StrokeWeight, TextRasterizer
from epl_label.core.shaping import TextShaper, resolve

__all__ = [
    # Builder
    "LabelBuilder",
    "build_four_product_label",
    "build_two_product_label",
    # Layout
    "Cell",
    "LayoutEngine",
    "ean13_center_x",
    # Raster
    "LineMetrics",
    "StrokeWeight",
    "TextRasterizer",
    # Shaping
    "TextShaper",
    "resolve",
    # Codecs
    "barcode_command",
    "coerce_payload",
    "compute_check_digit",
    "encode_label",
    "epl_line",
    "gw_block",
    "is_valid",
    "normalize",
    "pack",
    "rotate_packed",
    "unpack",
]
