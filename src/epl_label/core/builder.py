"""Label building orchestration.

The LabelBuilder runs the full pipeline for one label:

1. Validate barcodes (EAN-13)
2. Rasterize the brand mark and each product's name/price line
3. Pack bitmaps into printer rows
4. Place everything with the template's layout engine
5. Encode the EPL2 command stream

Templates differ only in their geometry (config data); all of them go
through the same code path.
"""

import time
from collections.abc import Sequence

from epl_label.config import LabelSettings, LabelTemplate
from epl_label.core import ean13
from epl_label.core.epl import encode_label
from epl_label.core.layout import LayoutEngine
from epl_label.core.packing import pack, rotate_packed
from epl_label.core.raster import StrokeWeight, TextRasterizer
from epl_label.core.shaping import TextShaper
from epl_label.domain.bitmap import Bitmap
from epl_label.domain.label import LabelLayout, PlacedImage, Product
from epl_label.exceptions import BarcodeError, LayoutError
from epl_label.io.font import FontResource
from epl_label.utils import BuildLogger, BuildStats, get_logger


class LabelBuilder:
    """Builds EPL2 print jobs for product labels.

    The builder is stateless between builds apart from its read-only font
    and shaper, so one instance can serve any number of labels.

    Example:
        builder = LabelBuilder(FontResource.from_path(Path("Amiri-Bold.ttf")))
        job = builder.build(
            LabelTemplate.TWO,
            [Product("شاي", "25", "400638133393"), Product("قهوة", "40", "622110000111")],
            brand="متجري",
        )
    """

    def __init__(
        self,
        font: FontResource,
        settings: LabelSettings | None = None,
        shaper: TextShaper | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            font: Font used for all text on the label
            settings: Label settings (defaults if None)
            shaper: Bidi/reshaping normalizer (new one if None)
        """
        self.settings = settings if settings is not None else LabelSettings()
        self.font = font
        self.rasterizer = TextRasterizer(
            font,
            ink_threshold=self.settings.text.ink_threshold,
            shaper=shaper,
        )
        self.logger = get_logger("epl_label.builder")

    def engine(self, template: LabelTemplate) -> LayoutEngine:
        """Get the layout engine of a template."""
        return LayoutEngine(
            self.settings.templates.for_template(template),
            self.settings.printer,
            self.settings.barcode,
        )

    def render_brand(self, brand: str) -> Bitmap:
        """Render the brand mark, extra bold."""
        text = self.settings.text
        return self.rasterizer.rasterize(
            brand,
            size_px=text.brand_px,
            side_padding=text.brand_padding,
            weight=StrokeWeight.EXTRA_BOLD,
        )

    def render_product_text(self, product: Product, max_width: int, size_px: int) -> Bitmap:
        """Render a product's name/price line at a fixed width."""
        text = self.settings.text
        return self.rasterizer.rasterize_name_price(
            product.name,
            product.price,
            size_px=size_px,
            max_width=max_width,
            weight=StrokeWeight.BOLD if text.bold else StrokeWeight.REGULAR,
            currency=text.currency,
            left_padding=text.price_left_padding,
            min_gap=text.name_price_gap,
        )

    def barcode_payload(self, code: str, build_log: BuildLogger | None = None) -> str:
        """Turn a raw barcode into the digits sent to the printer.

        Valid codes are normalized to 13 digits; the check digit is dropped
        unless include_check_digit is set, since E30 computes it on the
        printer.

        Raises:
            BarcodeError: If the code is invalid and strict mode is on
        """
        config = self.settings.barcode
        try:
            normalized = ean13.normalize(code)
        except BarcodeError as e:
            if config.strict:
                raise
            payload = ean13.coerce_payload(code)
            if build_log is not None:
                build_log.log_barcode_fallback(code, e, payload)
            return payload

        if config.include_check_digit:
            return normalized
        return normalized[: ean13.PAYLOAD_DIGITS]

    def layout(
        self,
        template: LabelTemplate,
        products: Sequence[Product],
        brand: str | None = None,
        build_log: BuildLogger | None = None,
    ) -> LabelLayout:
        """Render and place every element of one label.

        Args:
            template: Grid template
            products: One product per slot, row-major
            brand: Brand mark repeated at the top of every cell

        Returns:
            LabelLayout in emission order

        Raises:
            LayoutError: If the product count does not match the template
            BarcodeError: In strict mode, for an invalid barcode
        """
        template = LabelTemplate(template)
        engine = self.engine(template)
        geometry = engine.geometry
        invert = self.settings.printer.invert_bits

        if len(products) != engine.slots:
            raise LayoutError(
                f"Template '{template.value}' holds {engine.slots} products, got {len(products)}"
            )

        if build_log is not None:
            currency = self.settings.text.currency
            for text in [brand or ""] + [f"{p.name}{p.price}{currency}" for p in products]:
                missing = self.font.missing_characters(text)
                if missing:
                    build_log.log_missing_glyphs(text, missing)

        barcodes = [self.barcode_payload(p.barcode, build_log) for p in products]
        brand_rows = pack(self.render_brand(brand), invert) if brand else None
        max_width = engine.text_max_width
        texts = [
            pack(self.render_product_text(p, max_width, geometry.font_px), invert)
            for p in products
        ]

        layout = engine.place(texts, barcodes, brand=brand_rows)
        if self.settings.printer.landscape:
            layout = layout.to_landscape(lambda rows: rotate_packed(rows, invert))
        return layout

    def build_job(
        self,
        template: LabelTemplate,
        products: Sequence[Product],
        brand: str | None = None,
    ) -> tuple[bytes, BuildStats]:
        """Build the EPL2 job for one label and report what went into it.

        Args:
            template: Grid template
            products: One product per slot, row-major
            brand: Optional brand mark

        Returns:
            Tuple of (command stream bytes, build statistics)
        """
        template = LabelTemplate(template)
        build_log = BuildLogger(self.logger, template.value)
        build_log.stats.start_time = time.time()

        layout = self.layout(template, products, brand, build_log)
        for element in layout.elements:
            if isinstance(element, PlacedImage):
                build_log.log_image_placed(
                    element.x, element.y, element.width, element.height, len(element.rows.data)
                )
            else:
                build_log.log_barcode_placed(element.x, element.y, element.data)

        job = encode_label(layout, self.settings.printer, self.settings.barcode)
        build_log.stats.end_time = time.time()
        build_log.log_label_complete(len(job))
        return job, build_log.stats

    def build(
        self,
        template: LabelTemplate,
        products: Sequence[Product],
        brand: str | None = None,
    ) -> bytes:
        """Build the complete EPL2 job for one label.

        Returns:
            Command stream bytes for the print transport
        """
        job, _ = self.build_job(template, products, brand)
        return job


def build_two_product_label(
    font: FontResource,
    products: Sequence[Product],
    brand: str | None = None,
    settings: LabelSettings | None = None,
) -> bytes:
    """Build a label with two products stacked in two rows."""
    return LabelBuilder(font, settings).build(LabelTemplate.TWO, products, brand)


def build_four_product_label(
    font: FontResource,
    products: Sequence[Product],
    brand: str | None = None,
    settings: LabelSettings | None = None,
) -> bytes:
    """Build a label with four products in a 2x2 grid."""
    return LabelBuilder(font, settings).build(LabelTemplate.FOUR, products, brand)
