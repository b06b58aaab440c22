"""End-to-end tests: products in, EPL2 command stream out.

The stream is parsed back with a GW-aware reader, since image blocks carry
raw bytes that may contain CR and LF.
"""

import re
from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest

from epl_label.config import (
    BarcodeConfig,
    LabelSettings,
    LabelTemplate,
    PrinterConfig,
    TextConfig,
)
from epl_label.core import LabelBuilder, build_four_product_label, build_two_product_label
from epl_label.domain import Product
from epl_label.exceptions import BarcodeError, LayoutError
from epl_label.io import FontResource

GW_HEADER = re.compile(r"GW(\d+),(\d+),(\d+),(\d+)")
B_COMMAND = re.compile(r'B(\d+),(\d+),([01]),E30,(\d+),(\d+),(\d+),([BN]),"(\d+)"')


@dataclass
class GraphicBlock:
    x: int
    y: int
    bytes_per_row: int
    height: int
    data: bytes


def parse_stream(stream: bytes) -> tuple[list[str], list[GraphicBlock]]:
    """Split a job into command lines and graphic blocks."""
    lines: list[str] = []
    blocks: list[GraphicBlock] = []
    pos = 0
    while pos < len(stream):
        end = stream.index(b"\r\n", pos)
        line = stream[pos:end].decode("ascii")
        pos = end + 2
        lines.append(line)
        match = GW_HEADER.fullmatch(line)
        if match:
            x, y, bpr, height = (int(v) for v in match.groups())
            data = stream[pos : pos + bpr * height]
            pos += bpr * height
            assert stream[pos : pos + 2] == b"\r\n"
            pos += 2
            blocks.append(GraphicBlock(x, y, bpr, height, data))
    return lines, blocks


def barcode_fields(lines: list[str]) -> list[tuple[str, ...]]:
    return [B_COMMAND.fullmatch(line).groups() for line in lines if line.startswith("B")]


@pytest.fixture
def products() -> list[Product]:
    return [
        Product("شاي أخضر", "25", "400638133393"),
        Product("قهوة تركي", "40", "6221100001115"),
        Product("Sugar 1kg", "18.5", "590123412345"),
        Product("أرز", "30", "0000000000000"),
    ]


class TestTwoProductLabel:
    """Tests for the two-product template."""

    def test_stream_structure(self, box_font: FontResource, products: list[Product]) -> None:
        stream = build_two_product_label(box_font, products[:2])
        lines, blocks = parse_stream(stream)

        assert stream.startswith(b"N\r\n")
        assert stream.endswith(b"P1\r\n")
        assert lines[:5] == ["N", "q440", "Q320,24", "D8", "S2"]
        assert lines.count("q440") == 1
        assert lines.count("Q320,24") == 1
        assert len(blocks) == 2
        assert len(barcode_fields(lines)) == 2

    def test_text_blocks_span_the_text_width(
        self, box_font: FontResource, products: list[Product]
    ) -> None:
        _, blocks = parse_stream(build_two_product_label(box_font, products[:2]))
        assert [b.bytes_per_row for b in blocks] == [53, 53]
        assert [b.x for b in blocks] == [10, 10]

    def test_with_brand(self, box_font: FontResource, products: list[Product]) -> None:
        lines, blocks = parse_stream(
            build_two_product_label(box_font, products[:2], brand="متجري")
        )
        assert len(blocks) == 4
        assert len(barcode_fields(lines)) == 2
        # the brand sits above its row's text
        assert blocks[0].y < blocks[1].y < blocks[2].y < blocks[3].y

    def test_barcode_payloads(self, box_font: FontResource, products: list[Product]) -> None:
        """Test that the printer receives 12 digits and computes the check digit."""
        lines, _ = parse_stream(build_two_product_label(box_font, products[:2]))
        fields = barcode_fields(lines)
        assert [f[-1] for f in fields] == ["400638133393", "622110000111"]
        assert all(f[2] == "0" and f[6] == "B" for f in fields)
        assert [(f[0], f[1]) for f in fields] == [("125", "65"), ("125", "229")]


class TestFourProductLabel:
    """Tests for the 2x2 template."""

    def test_stream_structure(self, box_font: FontResource, products: list[Product]) -> None:
        lines, blocks = parse_stream(
            build_four_product_label(box_font, products, brand="متجري")
        )
        assert len(blocks) == 8
        assert len(barcode_fields(lines)) == 4
        assert lines[-1] == "P1"

    def test_quadrant_text_width(self, box_font: FontResource, products: list[Product]) -> None:
        _, blocks = parse_stream(build_four_product_label(box_font, products))
        assert [b.bytes_per_row for b in blocks] == [27, 27, 27, 27]
        assert [b.x for b in blocks] == [5, 224, 5, 224]

    def test_wrong_product_count(self, box_font: FontResource, products: list[Product]) -> None:
        with pytest.raises(LayoutError):
            build_four_product_label(box_font, products[:3])


class TestBarcodeHandling:
    """Tests for invalid barcodes and check digit options."""

    def test_invalid_barcode_falls_back(self, box_font: FontResource) -> None:
        builder = LabelBuilder(box_font)
        items = [Product("Tea", "25", "12345"), Product("Rice", "30", "400638133393")]
        job, stats = builder.build_job(LabelTemplate.TWO, items)

        fields = barcode_fields(parse_stream(job)[0])
        assert fields[0][-1] == "123450000000"
        assert len(stats.barcode_fallbacks) == 1
        assert stats.barcode_fallbacks[0][0] == "12345"

    def test_checksum_mismatch_falls_back(self, box_font: FontResource) -> None:
        builder = LabelBuilder(box_font)
        assert builder.barcode_payload("4006381333930") == "400638133393"

    def test_strict_mode_raises(self, box_font: FontResource) -> None:
        settings = LabelSettings(barcode=BarcodeConfig(strict=True))
        items = [Product("Tea", "25", "12345"), Product("Rice", "30", "400638133393")]
        with pytest.raises(BarcodeError):
            build_two_product_label(box_font, items, settings=settings)

    def test_include_check_digit(self, box_font: FontResource, products: list[Product]) -> None:
        settings = LabelSettings(barcode=BarcodeConfig(include_check_digit=True))
        job = build_two_product_label(box_font, products[:2], settings=settings)
        fields = barcode_fields(parse_stream(job)[0])
        assert [f[-1] for f in fields] == ["4006381333931", "6221100001115"]


class TestPrinterOptions:
    """Tests for polarity, orientation and build statistics."""

    def test_inversion_complements_image_data(
        self, box_font: FontResource, products: list[Product]
    ) -> None:
        inverted = LabelSettings(printer=PrinterConfig(invert_bits=True))
        plain = LabelSettings(printer=PrinterConfig(invert_bits=False))
        _, inv_blocks = parse_stream(build_two_product_label(box_font, products[:2], settings=inverted))
        _, plain_blocks = parse_stream(build_two_product_label(box_font, products[:2], settings=plain))

        for inv, pl in zip(inv_blocks, plain_blocks, strict=True):
            assert (inv.x, inv.y, inv.bytes_per_row, inv.height) == (pl.x, pl.y, pl.bytes_per_row, pl.height)
            assert inv.data == bytes(b ^ 0xFF for b in pl.data)

    def test_landscape(self, box_font: FontResource, products: list[Product]) -> None:
        """Test that landscape output swaps axes and rotates barcodes."""
        portrait_job = build_two_product_label(box_font, products[:2])
        landscape_job = build_two_product_label(
            box_font,
            products[:2],
            settings=LabelSettings(printer=PrinterConfig(landscape=True)),
        )
        p_lines, p_blocks = parse_stream(portrait_job)
        l_lines, l_blocks = parse_stream(landscape_job)

        assert [(b.x, b.y) for b in l_blocks] == [(b.y, b.x) for b in p_blocks]
        assert [b.height for b in l_blocks] == [420, 420]
        p_fields, l_fields = barcode_fields(p_lines), barcode_fields(l_lines)
        assert all(f[2] == "1" for f in l_fields)
        assert [(f[0], f[1]) for f in l_fields] == [(f[1], f[0]) for f in p_fields]

    def test_build_stats(self, box_font: FontResource, products: list[Product]) -> None:
        job, stats = LabelBuilder(box_font).build_job(
            LabelTemplate.FOUR, products, brand="متجري"
        )
        assert stats.template == "four"
        assert stats.images == 8
        assert stats.barcodes == 4
        assert stats.total_bytes == len(job)
        assert stats.barcode_fallbacks == []
        assert stats.duration_seconds >= 0.0

    def test_single_template(self, box_font: FontResource, products: list[Product]) -> None:
        job = LabelBuilder(box_font).build("single", products[:1])
        lines, blocks = parse_stream(job)
        assert len(blocks) == 1
        assert len(barcode_fields(lines)) == 1


class TestBuildDiagnostics:
    """Tests for what a build reports, and where."""

    def test_build_prints_nothing(
        self, box_font: FontResource, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that an unconfigured library build leaves stdout to the caller."""
        items = [Product("Tea", "25", "400638133393"), Product("X", "1", "12")]
        build_two_product_label(box_font, items, brand="متجري")
        assert capsys.readouterr().out == ""

    def test_missing_currency_glyphs_are_reported(self, box_font: FontResource) -> None:
        settings = LabelSettings(text=TextConfig(currency="₪"))
        build_log = MagicMock()
        items = [Product("Tea", "25", "400638133393"), Product("Rice", "30", "622110000111")]
        LabelBuilder(box_font, settings).layout(LabelTemplate.TWO, items, build_log=build_log)

        reported = [c.args for c in build_log.log_missing_glyphs.call_args_list]
        assert reported == [("Tea25₪", ["₪"]), ("Rice30₪", ["₪"])]

    def test_supported_text_reports_nothing(
        self, box_font: FontResource, products: list[Product]
    ) -> None:
        build_log = MagicMock()
        LabelBuilder(box_font).layout(
            LabelTemplate.TWO, products[:2], brand="متجري", build_log=build_log
        )
        build_log.log_missing_glyphs.assert_not_called()
