"""Bit packing of monochrome bitmaps.

Rows are packed MSB-first and padded to a byte boundary: bit 7 of each byte
is the leftmost of its eight pixels. Ink packs as 1. Polarity inversion, if
configured, is one final complement of every byte so earlier stages never
need to know which polarity the printer driver expects.
"""

from epl_label.domain.bitmap import Bitmap, PackedRows


def bytes_per_row(width: int) -> int:
    """Number of bytes holding one row of width pixels."""
    return (width + 7) // 8


def pack(bitmap: Bitmap, invert: bool = False) -> PackedRows:
    """Pack a bitmap into row-aligned bytes.

    Args:
        bitmap: Source bitmap
        invert: Complement every byte after packing

    Returns:
        PackedRows with height * ceil(width / 8) bytes
    """
    bpr = bytes_per_row(bitmap.width)
    out = bytearray(bpr * bitmap.height)

    for y in range(bitmap.height):
        base = y * bpr
        for x, pixel in enumerate(bitmap.row(y)):
            if pixel:
                out[base + (x >> 3)] |= 0x80 >> (x & 7)

    if invert:
        out = bytearray(b ^ 0xFF for b in out)

    return PackedRows(bitmap.width, bitmap.height, bytes(out))


def unpack(rows: PackedRows, invert: bool = False) -> Bitmap:
    """Recover a bitmap from packed rows; padding bits are ignored."""
    bpr = rows.bytes_per_row
    data = rows.data
    if invert:
        data = bytes(b ^ 0xFF for b in data)

    pixels = bytearray(rows.width * rows.height)
    for y in range(rows.height):
        base = y * bpr
        for x in range(rows.width):
            if data[base + (x >> 3)] & (0x80 >> (x & 7)):
                pixels[y * rows.width + x] = 1
    return Bitmap(rows.width, rows.height, bytes(pixels))


def rotate_packed(rows: PackedRows, invert: bool = False) -> PackedRows:
    """Rotate packed image data 90 degrees clockwise, keeping its polarity."""
    return pack(unpack(rows, invert).rotate90(), invert)
