"""
lseq CLI - Main application entry point.

Diagnostic commands for looking inside the identifier space.
"""

import logging
import sys

import typer
from rich.console import Console

from lseq import __version__
from lseq.cli import decode, simulate, widths

app = typer.Typer(
    name="lseq",
    help="Dense, coordination-free identifiers for replicated sequences",
    no_args_is_help=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, log every allocation at DEBUG level
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    lseq - identifier generator diagnostics.

    Examples:
        lseq widths                  # Bit layout per depth
        lseq decode 0b100011         # Split a digit into fields
        lseq simulate -c 10000       # Measure identifier growth
    """
    setup_logging(debug)

    ctx.obj = {"debug": debug}


@app.command()
def version() -> None:
    """Show lseq version."""
    console.print(f"lseq version {__version__}")


app.command(name="widths")(widths.main)
app.command(name="decode")(decode.main)
app.command(name="simulate")(simulate.main)


def cli_main() -> None:
    """Entry point for the lseq console script."""
    app()


__all__ = ["app", "cli_main"]
