"""Configuration management for epl-label.

This module provides configuration management using Pydantic models.
Every tunable constant of the label pipeline lives in one immutable
settings value that is passed to the builder.

Key classes:
- PrinterConfig: Canvas size, darkness, speed and bit polarity
- BarcodeConfig: EAN-13 field settings
- TextConfig: Font sizes, thresholds and bold emulation
- TemplateGeometry: Per-template layout constants
- LabelSettings: Main application settings
"""

from epl_label.config.settings import (
    BarcodeConfig,
    LabelSettings,
    LabelTemplate,
    LoggingConfig,
    PrinterConfig,
    TemplateGeometry,
    TemplatesConfig,
    TextConfig,
    get_default_settings,
)

__all__ = [
    "BarcodeConfig",
    "LabelSettings",
    "LabelTemplate",
    "LoggingConfig",
    "PrinterConfig",
    "TemplateGeometry",
    "TemplatesConfig",
    "TextConfig",
    "get_default_settings",
]
