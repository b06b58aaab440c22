"""EPL2 command stream encoding.

Every command is an ASCII line terminated by CRLF. Image data is embedded
raw after its GW header line and followed by CRLF; the printer knows where
the binary block ends from the header's byte count, not from a delimiter.

Stream layout:

    N                 clear image buffer
    q<width>          label width
    Q<height>,<gap>   label height and gap
    D<darkness>
    S<speed>
    GW...             one per bitmap
    B...              one per barcode
    P<copies>
"""

from epl_label.config import BarcodeConfig, PrinterConfig
from epl_label.domain.label import LabelLayout, PlacedBarcode, PlacedImage
from epl_label.exceptions import EncodingError

CRLF = b"\r\n"


def epl_line(buf: bytearray, text: str) -> None:
    """Append an ASCII command line terminated by CRLF.

    Raises:
        EncodingError: If the command holds non-ASCII characters
    """
    try:
        buf += text.encode("ascii")
    except UnicodeEncodeError as e:
        raise EncodingError(f"EPL command is not ASCII: {text!r}") from e
    buf += CRLF


def gw_block(buf: bytearray, image: PlacedImage) -> None:
    """Append a GW graphic block: header line, raw rows, CRLF."""
    rows = image.rows
    epl_line(buf, f"GW{image.x},{image.y},{rows.bytes_per_row},{rows.height}")
    buf += rows.data
    buf += CRLF


def barcode_command(barcode: PlacedBarcode, config: BarcodeConfig) -> str:
    """Format a B (barcode) command for a placed barcode."""
    rotation = 1 if barcode.rotated else 0
    readable = "B" if config.human_readable else "N"
    return (
        f"B{barcode.x},{barcode.y},{rotation},{config.symbology},"
        f"{config.narrow},{config.wide},{config.height},{readable},"
        f'"{barcode.data}"'
    )


def header_commands(printer: PrinterConfig) -> list[str]:
    """Setup commands sent before any element."""
    return [
        "N",
        f"q{printer.label_width}",
        f"Q{printer.label_height},{printer.gap_length}",
        f"D{printer.darkness}",
        f"S{printer.speed}",
    ]


def encode_label(
    layout: LabelLayout,
    printer: PrinterConfig,
    barcode: BarcodeConfig,
) -> bytes:
    """Serialize a placed label into one EPL2 job.

    Args:
        layout: Placed elements in emission order
        printer: Canvas and print settings
        barcode: Barcode field settings

    Returns:
        Complete command stream, ready for the print transport
    """
    buf = bytearray()
    for command in header_commands(printer):
        epl_line(buf, command)

    for element in layout.elements:
        if isinstance(element, PlacedImage):
            gw_block(buf, element)
        else:
            epl_line(buf, barcode_command(element, barcode))

    epl_line(buf, f"P{printer.copies}")
    return bytes(buf)
