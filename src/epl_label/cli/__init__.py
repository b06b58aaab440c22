"""Command-line interface for epl-label.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Build one-, two- or four-product labels from the command line
- Write the EPL2 job to a file or send it to a printer
- Validate EAN-13 barcodes
"""

from epl_label.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
