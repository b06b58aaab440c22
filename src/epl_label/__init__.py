"""epl-label - Render bilingual product labels for EPL2 thermal printers.

epl-label turns short Arabic/Latin product labels (name, price, EAN-13
barcode and an optional brand mark) into a ready-to-send EPL2 command stream
for a fixed-geometry 203 dpi thermal label printer.

Example:
    $ epl-label build --template two --font Amiri-Bold.ttf \\
        --product "شاي أخضر|25|400638133393" --product "قهوة|40|622110000111" \\
        --output label.epl

This writes one label holding two products, each with its own barcode.
"""

import logging

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]

logging.getLogger(__name__).addHandler(logging.NullHandler())
