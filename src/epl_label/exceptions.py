"""Exception hierarchy for epl-label."""


class LabelError(Exception):
    """Base exception for all epl-label errors."""

    pass


class ValidationError(LabelError):
    """Input data failed validation."""

    pass


class BarcodeError(ValidationError):
    """Errors related to barcode payloads."""

    pass


class InvalidLengthError(BarcodeError):
    """Barcode does not hold 12 or 13 digits after filtering."""

    def __init__(self, code: str, length: int) -> None:
        self.code = code
        self.length = length
        super().__init__(
            f"Barcode '{code}' must have 12 or 13 digits, found {length}"
        )


class ChecksumMismatchError(BarcodeError):
    """13-digit barcode whose last digit is not the EAN-13 check digit."""

    def __init__(self, code: str, expected: int, actual: int) -> None:
        self.code = code
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid checksum for barcode '{code}': expected {expected}, got {actual}"
        )


class FontError(LabelError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font resource."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load font '{source}': {reason}")


class LayoutError(LabelError):
    """Label content does not fit the requested template."""

    pass


class EncodingError(LabelError):
    """Command text cannot be encoded for the printer."""

    pass


class TransportError(LabelError):
    """Errors handing a print job to the printer spooler."""

    stage = "Print"

    def __init__(self, printer_name: str, reason: str) -> None:
        self.printer_name = printer_name
        self.reason = reason
        super().__init__(f"{self.stage} failed for printer '{printer_name}': {reason}")


class PrinterOpenError(TransportError):
    """The printer could not be opened. Nothing was sent."""

    stage = "Open printer"


class JobStartError(TransportError):
    """The spooler refused to start a document. Nothing was sent."""

    stage = "Start job"


class PageStartError(TransportError):
    """The spooler refused to start a page. The empty job was closed."""

    stage = "Start page"


class PrinterWriteError(TransportError):
    """Writing the job data failed or was incomplete."""

    stage = "Write"


class UnsupportedPlatformError(TransportError):
    """Raw printing is not available on this platform."""

    stage = "Raw printing"
