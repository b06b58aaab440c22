"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted step, summary and error messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]epl-label[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, family: str | None, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        family: Family name from the name table, if any
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    line = Text("  ")
    line.append(font_path)
    if family:
        line.append(f" ({family})")
    console.print(line)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_products(products: list[tuple[str, str, str]]) -> None:
    """Print the products going onto the label as a table."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Price", justify="right")
    table.add_column("Barcode")
    for index, (name, price, barcode) in enumerate(products, start=1):
        table.add_row(str(index), name, price, barcode)
    console.print(table)


def print_success(
    destination: str,
    total_bytes: int,
    images: int,
    barcodes: int,
    fallbacks: int,
    total_time_s: float,
) -> None:
    """Print success message with summary.

    Args:
        destination: Output file or printer name
        total_bytes: Size of the command stream
        images: Number of GW image blocks
        barcodes: Number of barcode fields
        fallbacks: Number of barcodes printed with a padded payload
        total_time_s: Build time in seconds
    """
    console.print(f"\n[bold green]{SYM_OK} Label ready[/bold green] in {total_time_s * 1000:.0f}ms")

    line = Text("  ")
    line.append(destination, style="bold")
    line.append(f" ({total_bytes:,} bytes)")
    console.print(line)

    fallback_style = "yellow" if fallbacks > 0 else "green"
    console.print(
        f"  {images} images {SYM_DOT} {barcodes} barcodes {SYM_DOT} "
        f"[{fallback_style}]{fallbacks} padded barcodes[/{fallback_style}]"
    )


def print_barcode_result(code: str, normalized: str) -> None:
    """Print a validated barcode."""
    console.print(f"[bold green]{SYM_OK}[/bold green] {code} {SYM_DOT} [bold]{normalized}[/bold]")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
