"""Print transports that hand a finished job to the printer.

Jobs are sent raw and fire-and-forget: a transport never retries, because
a repeated raw job may feed a second physical label. Each transport
undoes whatever it opened when a step fails, so no half-open job is left
in the spooler.

Key classes:
- PrintTransport: Interface of all transports
- WindowsSpoolerTransport: RAW job through the Win32 print spooler
- UnsupportedTransport: Placeholder for platforms without raw printing
"""

import sys
from typing import Any, Protocol

from epl_label.exceptions import (
    JobStartError,
    PageStartError,
    PrinterOpenError,
    PrinterWriteError,
    UnsupportedPlatformError,
)
from epl_label.utils import get_logger

logger = get_logger("epl_label.transport")

DOCUMENT_NAME = "EPL Job"


class PrintTransport(Protocol):
    """Anything that can deliver a raw job to a named printer."""

    def send(self, printer_name: str, data: bytes) -> None:
        """Send data to the printer.

        Raises:
            TransportError: On any failure; nothing is retried
        """
        ...


class WindowsSpoolerTransport:
    """Sends raw jobs through the Windows print spooler (pywin32).

    Example:
        WindowsSpoolerTransport().send("Zebra LP2824", job)
    """

    def __init__(self, spooler: Any | None = None) -> None:
        """Initialize the transport.

        Args:
            spooler: Module exposing the win32print API; imported if None
        """
        if spooler is None:
            import win32print as spooler
        self._spooler = spooler

    def send(self, printer_name: str, data: bytes) -> None:
        """Send data as a single-page RAW document.

        Raises:
            PrinterOpenError: If the printer cannot be opened
            JobStartError: If the document cannot be started
            PageStartError: If the page cannot be started
            PrinterWriteError: If writing fails or is incomplete
        """
        spooler = self._spooler

        try:
            handle = spooler.OpenPrinter(printer_name)
        except Exception as e:
            raise PrinterOpenError(printer_name, str(e)) from e

        try:
            try:
                spooler.StartDocPrinter(handle, 1, (DOCUMENT_NAME, None, "RAW"))
            except Exception as e:
                raise JobStartError(printer_name, str(e)) from e

            try:
                try:
                    spooler.StartPagePrinter(handle)
                except Exception as e:
                    raise PageStartError(printer_name, str(e)) from e

                try:
                    written = spooler.WritePrinter(handle, data)
                except Exception as e:
                    raise PrinterWriteError(printer_name, str(e)) from e
                finally:
                    spooler.EndPagePrinter(handle)

                if written is not None and written != len(data):
                    raise PrinterWriteError(
                        printer_name, f"wrote {written} of {len(data)} bytes"
                    )
            finally:
                spooler.EndDocPrinter(handle)
        finally:
            spooler.ClosePrinter(handle)

        logger.info("Job sent", printer=printer_name, bytes=len(data))


class UnsupportedTransport:
    """Transport for platforms without a raw spooler binding."""

    def __init__(self, platform: str = sys.platform) -> None:
        self.platform = platform

    def send(self, printer_name: str, data: bytes) -> None:  # noqa: ARG002
        raise UnsupportedPlatformError(
            printer_name,
            f"raw printing is only supported on Windows, not '{self.platform}'",
        )


def get_transport(platform: str = sys.platform) -> PrintTransport:
    """Select the transport for a platform."""
    if platform == "win32":
        return WindowsSpoolerTransport()
    return UnsupportedTransport(platform)
