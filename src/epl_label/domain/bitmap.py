"""Monochrome bitmap types.

- Bitmap: A width x height grid of ink/no-ink pixels
- PackedRows: Row-packed binary form of a bitmap, as sent to the printer
"""

from dataclasses import dataclass

from PIL import Image

INK = 1
NO_INK = 0


@dataclass(frozen=True, slots=True)
class Bitmap:
    """A monochrome pixel grid.

    Pixels are stored row-major, one byte per pixel: 1 is ink, 0 is no ink.
    Bitmaps are never mutated after creation.

    Attributes:
        width: Width in pixels (>= 1)
        height: Height in pixels (>= 1)
        pixels: Row-major pixel bytes of length width * height
    """

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Bitmap must be at least 1x1, got {self.width}x{self.height}"
            )
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"Expected {self.width * self.height} pixels, got {len(self.pixels)}"
            )

    @classmethod
    def blank(cls, width: int, height: int) -> "Bitmap":
        """Create a bitmap without ink."""
        return cls(width, height, bytes(width * height))

    @classmethod
    def from_rows(cls, rows: list[list[int]]) -> "Bitmap":
        """Create a bitmap from nested rows of 0/1 values."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        if any(len(row) != width for row in rows):
            raise ValueError("All rows must have the same width")
        return cls(width, height, bytes(1 if v else 0 for row in rows for v in row))

    @classmethod
    def from_image(cls, image: Image.Image) -> "Bitmap":
        """Create a bitmap from a Pillow image; non-zero pixels are ink.

        Args:
            image: Image in mode "L" or "1"

        Returns:
            Bitmap with the image's dimensions
        """
        if image.mode not in ("L", "1"):
            raise ValueError(f"Unsupported image mode: {image.mode}")
        gray = image.convert("L")
        data = gray.point(lambda v: INK if v else NO_INK).tobytes()
        return cls(gray.width, gray.height, data)

    def to_image(self) -> Image.Image:
        """Render as a mode "L" image with ink as 255."""
        return Image.frombytes(
            "L", (self.width, self.height), bytes(255 if p else 0 for p in self.pixels)
        )

    def row(self, y: int) -> bytes:
        """Get one row of pixels."""
        start = y * self.width
        return self.pixels[start : start + self.width]

    def ink_at(self, x: int, y: int) -> bool:
        """Check whether the pixel at (x, y) is ink."""
        return self.pixels[y * self.width + x] == INK

    def ink_count(self) -> int:
        """Count ink pixels."""
        return self.pixels.count(INK)

    def ink_columns(self) -> tuple[int, int] | None:
        """Get the leftmost and rightmost inked columns, or None if blank."""
        columns = [
            x for x in range(self.width)
            if any(self.ink_at(x, y) for y in range(self.height))
        ]
        if not columns:
            return None
        return columns[0], columns[-1]

    def rotate90(self) -> "Bitmap":
        """Rotate 90 degrees clockwise."""
        rotated = [
            [self.pixels[(self.height - 1 - x) * self.width + y] for x in range(self.height)]
            for y in range(self.width)
        ]
        return Bitmap.from_rows(rotated)


@dataclass(frozen=True, slots=True)
class PackedRows:
    """Row-packed monochrome image data.

    Each row occupies ceil(width / 8) bytes. Bit 7 of each byte is the
    leftmost pixel of its 8-pixel group.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        data: Packed bytes, height * bytes_per_row long
    """

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        expected = self.height * self.bytes_per_row
        if len(self.data) != expected:
            raise ValueError(f"Expected {expected} packed bytes, got {len(self.data)}")

    @property
    def bytes_per_row(self) -> int:
        """Bytes per packed row."""
        return (self.width + 7) // 8
