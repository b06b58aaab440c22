"""CLI application entry point for epl-label.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from epl_label import __version__
from epl_label.cli.output import (
    console,
    print_barcode_result,
    print_error,
    print_font_info,
    print_header,
    print_products,
    print_step,
    print_success,
)
from epl_label.config import (
    BarcodeConfig,
    LabelSettings,
    LabelTemplate,
    LoggingConfig,
    PrinterConfig,
)
from epl_label.core import LabelBuilder, normalize
from epl_label.domain import Product
from epl_label.exceptions import (
    BarcodeError,
    FontLoadError,
    LabelError,
    TransportError,
)
from epl_label.io import FontResource, get_transport
from epl_label.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="epl-label",
    help="Render bilingual product labels with EAN-13 barcodes for EPL2 thermal printers.",
    add_completion=False,
    no_args_is_help=True,
)

PRODUCT_SEPARATOR = "|"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]epl-label[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render bilingual product labels for EPL2 thermal printers."""


def parse_product(spec: str) -> Product:
    """Parse a "name|price|barcode" product argument.

    Raises:
        typer.BadParameter: If the argument does not have three fields
    """
    parts = spec.split(PRODUCT_SEPARATOR)
    if len(parts) != 3:
        raise typer.BadParameter(
            f"Expected 'name{PRODUCT_SEPARATOR}price{PRODUCT_SEPARATOR}barcode', got '{spec}'"
        )
    name, price, barcode = (part.strip() for part in parts)
    return Product(name=name, price=price, barcode=barcode)


@app.command()
def build(
    font: Annotated[
        Path,
        typer.Option(
            "--font",
            "-f",
            help="Path to a TTF/OTF font with Arabic coverage",
            show_default=False,
        ),
    ],
    products: Annotated[
        list[str],
        typer.Option(
            "--product",
            "-p",
            help="Product as 'name|price|barcode' (repeat once per slot)",
            show_default=False,
        ),
    ],
    template: Annotated[
        LabelTemplate,
        typer.Option(
            "--template",
            "-t",
            help="Label grid template",
            case_sensitive=False,
        ),
    ] = LabelTemplate.TWO,
    brand: Annotated[
        str | None,
        typer.Option(
            "--brand",
            "-b",
            help="Brand mark printed at the top of every product cell",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the EPL2 job to this file",
        ),
    ] = None,
    printer: Annotated[
        str | None,
        typer.Option(
            "--printer",
            help="Send the job to this printer (Windows spooler)",
        ),
    ] = None,
    darkness: Annotated[
        int,
        typer.Option(
            "--darkness",
            "-d",
            help="Print darkness (0-15)",
            min=0,
            max=15,
        ),
    ] = 8,
    speed: Annotated[
        int,
        typer.Option(
            "--speed",
            "-s",
            help="Print speed (1-6)",
            min=1,
            max=6,
        ),
    ] = 2,
    invert: Annotated[
        bool,
        typer.Option(
            "--invert/--no-invert",
            help="Complement image bits for drivers with inverted GW polarity",
        ),
    ] = True,
    landscape: Annotated[
        bool,
        typer.Option(
            "--landscape",
            help="Rotate content for drivers locked to landscape",
        ),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail on invalid barcodes instead of printing padded payloads",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Build one label and write it to a file and/or send it to a printer.

    Example:
        epl-label build -f Amiri-Bold.ttf -b "متجري" \\
            -p "شاي أخضر|25|400638133393" -p "قهوة|40|622110000111" -o label.epl
    """
    if output is None and printer is None:
        print_error(
            "Nothing to do",
            details="Pass --output to write the job to a file or --printer to print it.",
        )
        raise typer.Exit(code=1)

    if not font.is_file():
        print_error(
            f"Font not found: {font}",
            details=f"The file '{font}' does not exist or is not a file.",
        )
        raise typer.Exit(code=1)

    try:
        parsed = [parse_product(spec) for spec in products]
    except typer.BadParameter as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    settings = LabelSettings(
        printer=PrinterConfig(
            darkness=darkness,
            speed=speed,
            invert_bits=invert,
            landscape=landscape,
        ),
        barcode=BarcodeConfig(strict=strict),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    try:
        if not quiet:
            print_step("Loading font")
        resource = FontResource.from_path(font)
        if not quiet:
            print_font_info(
                font_path=str(font),
                family=resource.family_name,
                glyph_count=resource.glyph_count,
                upm=resource.units_per_em,
            )
            print_step(f"Building {template.value} label")
            print_products([(p.name, p.price, p.barcode) for p in parsed])

        builder = LabelBuilder(resource, settings)
        job, stats = builder.build_job(template, parsed, brand=brand)

        destinations = []
        if output is not None:
            output.write_bytes(job)
            destinations.append(str(output))
        if printer is not None:
            if not quiet:
                print_step(f"Sending to {printer}")
            get_transport().send(printer, job)
            destinations.append(printer)

        if not quiet:
            print_success(
                destination=", ".join(destinations),
                total_bytes=len(job),
                images=stats.images,
                barcodes=stats.barcodes,
                fallbacks=len(stats.barcode_fallbacks),
                total_time_s=stats.duration_seconds,
            )

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except BarcodeError as e:
        print_error(str(e), details="Fix the barcode or drop --strict to print a padded code.")
        raise typer.Exit(code=1)
    except TransportError as e:
        print_error(str(e), details="The job was not retried.")
        raise typer.Exit(code=1)
    except LabelError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not write output: {e}")
        raise typer.Exit(code=1)


@app.command("check-barcode")
def check_barcode(
    codes: Annotated[
        list[str],
        typer.Argument(
            help="Barcodes to validate (12 digits get a check digit appended)",
            show_default=False,
        ),
    ],
) -> None:
    """Validate EAN-13 barcodes and print their 13-digit form."""
    failed = 0
    for code in codes:
        try:
            print_barcode_result(code, normalize(code))
        except BarcodeError as e:
            print_error(str(e))
            failed += 1
    if failed:
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
