"""I/O layer for epl-label.

This module handles the two external collaborators of the label pipeline:
the font file (parsed with fonttools, painted through Pillow) and the
printer spooler.

Key classes:
- FontResource: Parsed, reusable font
- PrintTransport: Interface for sending raw jobs
- WindowsSpoolerTransport: Win32 spooler transport
- UnsupportedTransport: Placeholder for other platforms
"""

from epl_label.io.font import FontResource
from epl_label.io.transport import (
    PrintTransport,
    UnsupportedTransport,
    WindowsSpoolerTransport,
    get_transport,
)

__all__ = [
    "FontResource",
    "PrintTransport",
    "UnsupportedTransport",
    "WindowsSpoolerTransport",
    "get_transport",
]
