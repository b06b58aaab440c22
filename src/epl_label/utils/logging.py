"""Logging utilities for epl-label."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by configure_logging, replaced on every call
_installed_handlers: list[logging.Handler] = []


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger backed by the stdlib logger of the same name.

    Events go through stdlib logging, so nothing is printed until
    configure_logging installs handlers.
    """
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )


@dataclass
class BuildStats:
    """Statistics from one label build."""

    template: str = ""
    images: int = 0
    barcodes: int = 0
    image_bytes: int = 0
    total_bytes: int = 0
    barcode_fallbacks: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and an optional file.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = get_logger("epl_label")
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None)

    return logger


class BuildLogger:
    """Logger for tracking label build progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, template: str) -> None:
        self._logger = logger
        self._stats = BuildStats(template=template)

    def log_image_placed(self, x: int, y: int, width: int, height: int, size: int) -> None:
        """Log a placed bitmap."""
        self._logger.debug("Image placed", x=x, y=y, width=width, height=height, bytes=size)
        self._stats.images += 1
        self._stats.image_bytes += size

    def log_barcode_placed(self, x: int, y: int, data: str) -> None:
        """Log a placed barcode field."""
        self._logger.debug("Barcode placed", x=x, y=y, data=data)
        self._stats.barcodes += 1

    def log_barcode_fallback(self, code: str, error: Exception, payload: str) -> None:
        """Log a barcode that failed validation and was coerced."""
        self._logger.warning(
            "Invalid barcode, printing padded payload",
            code=code,
            error=str(error),
            error_type=type(error).__name__,
            payload=payload,
        )
        self._stats.barcode_fallbacks.append((code, str(error)))

    def log_missing_glyphs(self, text: str, missing: list[str]) -> None:
        """Log characters the font cannot render."""
        self._logger.warning("Font has no glyphs for text", text=text, missing="".join(missing))

    def log_label_complete(self, total_bytes: int) -> None:
        """Log a finished command stream."""
        self._stats.total_bytes = total_bytes
        self._logger.info(
            "Label built",
            template=self._stats.template,
            images=self._stats.images,
            barcodes=self._stats.barcodes,
            bytes=total_bytes,
            fallbacks=len(self._stats.barcode_fallbacks),
        )

    @property
    def stats(self) -> BuildStats:
        """Get current build statistics."""
        return self._stats
