"""Tests for domain models to verify they work correctly."""

import pytest
from PIL import Image

from epl_label.domain import (
    Bitmap,
    LabelLayout,
    PackedRows,
    PlacedBarcode,
    PlacedImage,
    Product,
)


class TestBitmap:
    """Tests for Bitmap class."""

    def test_blank(self) -> None:
        bitmap = Bitmap.blank(3, 2)
        assert bitmap.pixels == bytes(6)
        assert bitmap.ink_count() == 0
        assert bitmap.ink_columns() is None

    def test_from_rows(self) -> None:
        """Test construction from nested rows."""
        bitmap = Bitmap.from_rows([[0, 1, 0], [1, 1, 0]])
        assert (bitmap.width, bitmap.height) == (3, 2)
        assert bitmap.row(1) == bytes([1, 1, 0])
        assert bitmap.ink_at(1, 0)
        assert not bitmap.ink_at(2, 1)
        assert bitmap.ink_count() == 3
        assert bitmap.ink_columns() == (0, 1)

    def test_ragged_rows(self) -> None:
        with pytest.raises(ValueError):
            Bitmap.from_rows([[0, 1], [1]])

    @pytest.mark.parametrize("width,height", [(0, 1), (1, 0), (0, 0)])
    def test_minimum_size(self, width: int, height: int) -> None:
        """Test that every bitmap is at least 1x1."""
        with pytest.raises(ValueError):
            Bitmap(width, height, b"")

    def test_pixel_count_must_match(self) -> None:
        with pytest.raises(ValueError):
            Bitmap(2, 2, bytes(3))

    def test_rotate90(self) -> None:
        """Test clockwise rotation."""
        source = Bitmap.from_rows([[1, 0, 0], [0, 0, 1]])
        rotated = source.rotate90()
        assert (rotated.width, rotated.height) == (2, 3)
        assert rotated == Bitmap.from_rows([[0, 1], [0, 0], [1, 0]])

    def test_four_rotations_are_identity(self) -> None:
        source = Bitmap.from_rows([[1, 0, 0], [0, 1, 1]])
        assert source.rotate90().rotate90().rotate90().rotate90() == source

    def test_image_round_trip(self) -> None:
        source = Bitmap.from_rows([[1, 0], [0, 1]])
        image = source.to_image()
        assert image.mode == "L"
        assert Bitmap.from_image(image) == source

    def test_from_image_rejects_rgb(self) -> None:
        with pytest.raises(ValueError):
            Bitmap.from_image(Image.new("RGB", (2, 2)))


class TestPlacement:
    """Tests for placed elements and layouts."""

    def test_negative_image_position(self) -> None:
        rows = PackedRows(8, 1, b"\x00")
        with pytest.raises(ValueError):
            PlacedImage(-1, 0, rows)

    def test_negative_barcode_position(self) -> None:
        with pytest.raises(ValueError):
            PlacedBarcode(0, -5, "1" * 12)

    def test_layout_filters(self) -> None:
        rows = PackedRows(8, 1, b"\x00")
        layout = LabelLayout(
            440,
            320,
            (PlacedImage(0, 0, rows), PlacedBarcode(1, 2, "1" * 12), PlacedImage(3, 4, rows)),
        )
        assert [(i.x, i.y) for i in layout.images] == [(0, 0), (3, 4)]
        assert [b.data for b in layout.barcodes] == ["1" * 12]

    def test_to_landscape(self) -> None:
        """Test that axes are swapped and content rotated."""
        rows = PackedRows(8, 1, b"\xff")
        layout = LabelLayout(
            440,
            320,
            (PlacedImage(10, 20, rows), PlacedBarcode(30, 40, "1" * 12)),
        )
        rotated_rows = PackedRows(1, 8, b"\x80" * 8)
        landscape = layout.to_landscape(lambda _: rotated_rows)

        image, barcode = landscape.elements
        assert (image.x, image.y, image.rows) == (20, 10, rotated_rows)
        assert (barcode.x, barcode.y, barcode.rotated) == (40, 30, True)

    def test_product(self) -> None:
        product = Product("شاي", "25", "400638133393")
        assert product.name == "شاي"
