"""Utility functions for epl-label.

This module provides utility functions including:

- Logging setup and configuration
- Per-build statistics tracking
"""

from epl_label.utils.logging import (
    BuildLogger,
    BuildStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "BuildLogger",
    "BuildStats",
    "configure_logging",
    "get_logger",
]
