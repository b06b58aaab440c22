"""Configuration settings for epl-label."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LabelTemplate(str, Enum):
    """Label grid templates."""

    SINGLE = "single"
    TWO = "two"
    FOUR = "four"


class PrinterConfig(BaseModel):
    """Printer and canvas settings.

    Dimensions are in printer dots (203 dpi: 440 x 320 dots is about
    55 x 40 mm).
    """

    model_config = ConfigDict(frozen=True)

    label_width: int = Field(
        default=440,
        ge=1,
        description="Canvas width in dots (EPL q command)",
    )
    label_height: int = Field(
        default=320,
        ge=1,
        description="Canvas height in dots (EPL Q command)",
    )
    gap_length: int = Field(
        default=24,
        ge=0,
        description="Gap between labels in dots (second Q argument)",
    )
    darkness: int = Field(
        default=8,
        ge=0,
        le=15,
        description="Print contrast (EPL D command)",
    )
    speed: int = Field(
        default=2,
        ge=1,
        le=6,
        description="Print speed (EPL S command), lower is sharper",
    )
    invert_bits: bool = Field(
        default=True,
        description="Complement packed image bytes to match the driver's GW polarity",
    )
    landscape: bool = Field(
        default=False,
        description="Rotate content in code for drivers locked to landscape",
    )
    copies: int = Field(
        default=1,
        ge=1,
        description="Number of copies requested by the P command",
    )


class BarcodeConfig(BaseModel):
    """EAN-13 barcode field settings."""

    model_config = ConfigDict(frozen=True)

    narrow: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Module (narrow bar) width in dots",
    )
    wide: int = Field(
        default=3,
        ge=1,
        le=30,
        description="Wide bar width or ratio code",
    )
    height: int = Field(
        default=35,
        ge=1,
        description="Bar height in dots",
    )
    symbology: str = Field(
        default="E30",
        description="EPL symbology selector (E30 = EAN-13)",
    )
    human_readable: bool = Field(
        default=True,
        description="Print the human-readable digits below the bars",
    )
    include_check_digit: bool = Field(
        default=False,
        description="Send all 13 digits instead of letting the printer compute the check digit",
    )
    strict: bool = Field(
        default=False,
        description="Fail the build on invalid barcodes instead of printing a padded payload",
    )


class TextConfig(BaseModel):
    """Text rendering settings."""

    model_config = ConfigDict(frozen=True)

    brand_px: int = Field(
        default=40,
        ge=1,
        description="Brand mark font size in pixels",
    )
    brand_padding: int = Field(
        default=2,
        ge=0,
        description="Side padding around the brand bitmap",
    )
    ink_threshold: float = Field(
        default=0.5,
        gt=0.0,
        lt=1.0,
        description="Glyph coverage above which a pixel is printed",
    )
    bold: bool = Field(
        default=True,
        description="Paint product text twice with a 1 px offset",
    )
    currency: str = Field(
        default="ج.م",
        description="Currency marker appended to prices",
    )
    price_left_padding: int = Field(
        default=5,
        ge=0,
        description="Left padding of the price inside the name/price line",
    )
    name_price_gap: int = Field(
        default=10,
        ge=0,
        description="Minimum gap kept between price and name",
    )


class TemplateGeometry(BaseModel):
    """Per-template layout constants.

    Vertical offsets accumulate top-down in every cell: brand, gap, text,
    gap, barcode. Negative gaps pull elements closer together.
    """

    model_config = ConfigDict(frozen=True)

    columns: int = Field(ge=1, le=2)
    rows: int = Field(ge=1, le=2)
    font_px: int = Field(default=52, ge=1, description="Name/price font size")
    grid_offset_y: int = Field(default=0, description="Shift of the whole grid")
    column_gap: int = Field(default=0, description="Signed gap between quadrants")
    brand_top: int = Field(default=8, description="Brand offset from the row top")
    brand_to_text_gap: int = Field(default=-6)
    row_gap: int = Field(default=4, description="Extra text offset per row index")
    text_to_barcode_gap: int = Field(default=4)
    text_inset: int = Field(default=20, ge=0, description="Cell width kept free of text")
    barcode_nudge: tuple[int, ...] = Field(
        default=(0,),
        description="Extra barcode x offset per column",
    )

    @model_validator(mode="after")
    def _check_nudge(self) -> "TemplateGeometry":
        if len(self.barcode_nudge) not in (1, self.columns):
            raise ValueError("barcode_nudge needs one entry or one per column")
        return self

    @property
    def slots(self) -> int:
        """Number of product cells."""
        return self.columns * self.rows

    def nudge(self, column: int) -> int:
        """Barcode x offset for a column."""
        if len(self.barcode_nudge) == 1:
            return self.barcode_nudge[0]
        return self.barcode_nudge[column]


class TemplatesConfig(BaseModel):
    """Geometry of each label template."""

    model_config = ConfigDict(frozen=True)

    single: TemplateGeometry = Field(
        default_factory=lambda: TemplateGeometry(columns=1, rows=1)
    )
    two: TemplateGeometry = Field(
        default_factory=lambda: TemplateGeometry(columns=1, rows=2)
    )
    four: TemplateGeometry = Field(
        default_factory=lambda: TemplateGeometry(
            columns=2,
            rows=2,
            font_px=36,
            grid_offset_y=18,
            column_gap=-2,
            brand_top=4,
            brand_to_text_gap=-4,
            row_gap=0,
            text_to_barcode_gap=3,
            text_inset=10,
            barcode_nudge=(4, 0),
        )
    )

    def for_template(self, template: LabelTemplate) -> TemplateGeometry:
        """Get the geometry of a template."""
        return getattr(self, LabelTemplate(template).value)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class LabelSettings(BaseModel):
    """Main application settings."""

    model_config = ConfigDict(frozen=True)

    printer: PrinterConfig = Field(default_factory=PrinterConfig)
    barcode: BarcodeConfig = Field(default_factory=BarcodeConfig)
    text: TextConfig = Field(default_factory=TextConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> LabelSettings:
    """Get default application settings."""
    return LabelSettings()
