"""Label content and placement types.

- Product: One product cell's input data
- PlacedImage: A packed bitmap at an absolute canvas position
- PlacedBarcode: An EAN-13 barcode field at an absolute canvas position
- LabelLayout: All placed elements of one label, in emission order
"""

from collections.abc import Callable
from dataclasses import dataclass, field, replace

from epl_label.domain.bitmap import PackedRows


@dataclass(frozen=True, slots=True)
class Product:
    """Input data for one product cell.

    Attributes:
        name: Product name (UTF-8, Arabic and/or Latin)
        price: Price string, printed with the currency marker
        barcode: Raw barcode digits (12 or 13 after filtering)
    """

    name: str
    price: str
    barcode: str


@dataclass(frozen=True, slots=True)
class PlacedImage:
    """A packed bitmap placed at (x, y), its top-left corner."""

    x: int
    y: int
    rows: PackedRows

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Negative image position ({self.x}, {self.y})")

    @property
    def width(self) -> int:
        return self.rows.width

    @property
    def height(self) -> int:
        return self.rows.height


@dataclass(frozen=True, slots=True)
class PlacedBarcode:
    """An EAN-13 barcode field placed at (x, y).

    Attributes:
        x: Left edge in dots
        y: Top edge in dots
        data: Digit payload sent to the printer
        rotated: True when the field is printed rotated 90 degrees
    """

    x: int
    y: int
    data: str
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Negative barcode position ({self.x}, {self.y})")


Element = PlacedImage | PlacedBarcode


@dataclass(frozen=True)
class LabelLayout:
    """Placed elements of one label.

    Attributes:
        width: Canvas width in dots
        height: Canvas height in dots
        elements: Elements in the order they are sent to the printer
    """

    width: int
    height: int
    elements: tuple[Element, ...] = field(default_factory=tuple)

    @property
    def images(self) -> list[PlacedImage]:
        """Placed bitmaps, in order."""
        return [e for e in self.elements if isinstance(e, PlacedImage)]

    @property
    def barcodes(self) -> list[PlacedBarcode]:
        """Placed barcode fields, in order."""
        return [e for e in self.elements if isinstance(e, PlacedBarcode)]

    def to_landscape(self, rotate: Callable[[PackedRows], PackedRows]) -> "LabelLayout":
        """Swap every element's axes for drivers locked to landscape.

        Args:
            rotate: Rotates packed image data 90 degrees clockwise

        Returns:
            New layout with swapped coordinates and rotated content
        """
        swapped: list[Element] = []
        for element in self.elements:
            if isinstance(element, PlacedImage):
                swapped.append(PlacedImage(element.y, element.x, rotate(element.rows)))
            else:
                swapped.append(
                    replace(element, x=element.y, y=element.x, rotated=not element.rotated)
                )
        return LabelLayout(self.width, self.height, tuple(swapped))
