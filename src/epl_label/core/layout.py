"""Layout of label elements on the printer canvas.

The canvas is split into a grid of product cells (1, 2 or 4 slots). Each
cell stacks, top-down, an optional brand mark, the name/price line and the
barcode field. Vertical offsets accumulate within the cell:

    brand_y   = row_top + brand_top
    text_y    = brand_y + brand_h + brand_to_text_gap + row * row_gap
    barcode_y = text_y + text_h + text_to_barcode_gap

The printer prints human-readable digits below the bars, so nothing is
placed under a barcode within its cell.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from epl_label.config import BarcodeConfig, PrinterConfig, TemplateGeometry
from epl_label.core.ean13 import MODULES
from epl_label.domain.bitmap import PackedRows
from epl_label.domain.label import Element, LabelLayout, PlacedBarcode, PlacedImage
from epl_label.exceptions import LayoutError


def ean13_center_x(region_width: int, narrow: int) -> int:
    """Left edge that centers an EAN-13 symbol in a region.

    Args:
        region_width: Width of the region in dots
        narrow: Module width in dots

    Returns:
        Offset from the region's left edge, never negative
    """
    return max(0, (region_width - MODULES * narrow) // 2)


def _half(value: int) -> int:
    """Halve, truncating toward zero."""
    return int(value / 2)


@dataclass(frozen=True, slots=True)
class Cell:
    """One product cell of the label grid.

    Attributes:
        row: Row index, top row is 0
        column: Column index, left column is 0
        left: Left edge in dots
        top: Top edge in dots
        width: Usable width in dots
        height: Usable height in dots
    """

    row: int
    column: int
    left: int
    top: int
    width: int
    height: int

    def center(self, width: int) -> int:
        """X coordinate that centers an element of width in this cell."""
        return self.left + max(0, (self.width - width) // 2)


class LayoutEngine:
    """Computes absolute positions for one label template.

    Example:
        engine = LayoutEngine(settings.templates.four, settings.printer, settings.barcode)
        texts = [rasterize(p, engine.text_max_width) for p in products]
        layout = engine.place(texts, barcodes, brand=brand_rows)
    """

    def __init__(
        self,
        geometry: TemplateGeometry,
        printer: PrinterConfig,
        barcode: BarcodeConfig,
    ) -> None:
        self.geometry = geometry
        self.printer = printer
        self.barcode = barcode

    @property
    def slots(self) -> int:
        return self.geometry.slots

    def cells(self) -> list[Cell]:
        """Cells in row-major order.

        Quadrants are separated by the signed column gap: each cell's usable
        size is its grid share minus half the gap, and every cell after the
        first is shifted by half the gap. A negative gap makes neighbouring
        cells overlap slightly.
        """
        geo = self.geometry
        column_width = self.printer.label_width // geo.columns
        row_height = self.printer.label_height // geo.rows
        half_gap = _half(geo.column_gap)

        cells = []
        for row in range(geo.rows):
            for column in range(geo.columns):
                cells.append(
                    Cell(
                        row=row,
                        column=column,
                        left=column * (column_width + half_gap),
                        top=geo.grid_offset_y + row * (row_height + half_gap),
                        width=max(0, column_width - half_gap),
                        height=max(0, row_height - half_gap),
                    )
                )
        return cells

    @property
    def text_max_width(self) -> int:
        """Width available to a cell's name/price line."""
        usable = self.cells()[0].width
        return max(1, usable - self.geometry.text_inset)

    def barcode_x(self, cell: Cell) -> int:
        """Left edge of a cell's centered barcode."""
        x = cell.left + ean13_center_x(cell.width, self.barcode.narrow)
        return max(0, x + self.geometry.nudge(cell.column))

    def place(
        self,
        texts: Sequence[PackedRows],
        barcodes: Sequence[str],
        brand: PackedRows | None = None,
    ) -> LabelLayout:
        """Place all elements of one label.

        Args:
            texts: Name/price bitmaps, one per cell in row-major order
            barcodes: Barcode payloads, one per cell
            brand: Brand bitmap drawn at the top of every cell, if any

        Returns:
            LabelLayout with elements in emission order: per row, the brand
            marks left to right, then each cell's text and barcode

        Raises:
            LayoutError: If the number of texts or barcodes differs from the
                number of cells
        """
        if len(texts) != self.slots or len(barcodes) != self.slots:
            raise LayoutError(
                f"Template has {self.slots} slots, got {len(texts)} texts "
                f"and {len(barcodes)} barcodes"
            )

        geo = self.geometry
        elements: list[Element] = []
        cells = self.cells()

        for row in range(geo.rows):
            row_cells = [c for c in cells if c.row == row]
            brand_y = max(0, row_cells[0].top + geo.brand_top)

            if brand is not None:
                for cell in row_cells:
                    elements.append(PlacedImage(cell.center(brand.width), brand_y, brand))
                text_top = brand_y + brand.height + geo.brand_to_text_gap
            else:
                text_top = brand_y

            for cell in row_cells:
                index = row * geo.columns + cell.column
                text = texts[index]
                text_y = max(0, text_top + row * geo.row_gap)
                barcode_y = max(0, text_y + text.height + geo.text_to_barcode_gap)

                elements.append(PlacedImage(cell.center(text.width), text_y, text))
                elements.append(PlacedBarcode(self.barcode_x(cell), barcode_y, barcodes[index]))

        return LabelLayout(self.printer.label_width, self.printer.label_height, tuple(elements))
