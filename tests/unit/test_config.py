"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from epl_label.config import (
    BarcodeConfig,
    LabelSettings,
    LabelTemplate,
    PrinterConfig,
    TemplateGeometry,
    TemplatesConfig,
    TextConfig,
    get_default_settings,
)


class TestDefaults:
    """Tests for default values."""

    def test_printer_defaults(self) -> None:
        printer = PrinterConfig()
        assert (printer.label_width, printer.label_height, printer.gap_length) == (440, 320, 24)
        assert (printer.darkness, printer.speed) == (8, 2)
        assert printer.invert_bits
        assert not printer.landscape

    def test_barcode_defaults(self) -> None:
        barcode = BarcodeConfig()
        assert (barcode.narrow, barcode.wide, barcode.height) == (2, 3, 35)
        assert barcode.symbology == "E30"
        assert not barcode.include_check_digit
        assert not barcode.strict

    def test_text_defaults(self) -> None:
        text = TextConfig()
        assert text.brand_px == 40
        assert text.currency == "ج.م"

    def test_get_default_settings(self) -> None:
        assert get_default_settings() == LabelSettings()


class TestTemplates:
    """Tests for template geometry."""

    def test_for_template(self) -> None:
        templates = TemplatesConfig()
        assert templates.for_template(LabelTemplate.SINGLE).slots == 1
        assert templates.for_template(LabelTemplate.TWO).slots == 2
        assert templates.for_template("four").slots == 4

    def test_four_quadrant_geometry(self) -> None:
        four = TemplatesConfig().four
        assert (four.columns, four.rows, four.font_px) == (2, 2, 36)
        assert four.nudge(0) == 4
        assert four.nudge(1) == 0

    def test_single_nudge_applies_to_all_columns(self) -> None:
        geometry = TemplateGeometry(columns=2, rows=1, barcode_nudge=(3,))
        assert geometry.nudge(0) == geometry.nudge(1) == 3

    def test_nudge_length_is_checked(self) -> None:
        with pytest.raises(ValidationError):
            TemplateGeometry(columns=2, rows=2, barcode_nudge=(1, 2, 3))

    def test_unknown_template(self) -> None:
        with pytest.raises(ValueError):
            TemplatesConfig().for_template("eight")


class TestValidation:
    """Tests for range checks."""

    @pytest.mark.parametrize("darkness", [-1, 16])
    def test_darkness_range(self, darkness: int) -> None:
        with pytest.raises(ValidationError):
            PrinterConfig(darkness=darkness)

    @pytest.mark.parametrize("speed", [0, 7])
    def test_speed_range(self, speed: int) -> None:
        with pytest.raises(ValidationError):
            PrinterConfig(speed=speed)

    @pytest.mark.parametrize("threshold", [0.0, 1.0])
    def test_ink_threshold_range(self, threshold: float) -> None:
        with pytest.raises(ValidationError):
            TextConfig(ink_threshold=threshold)

    def test_settings_are_frozen(self) -> None:
        settings = LabelSettings()
        with pytest.raises(ValidationError):
            settings.printer.darkness = 3
