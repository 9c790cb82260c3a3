"""
lseq CLI - Decode command.

Split a guard-bit digit into its per-depth fields.
"""

import typer
from rich.console import Console
from rich.table import Table

from lseq.cli.errors import ExitCode, print_error, report_lseq_error
from lseq.core.base import DoubleBase, digit_length, strip_guard
from lseq.core.config import load_config
from lseq.core.exceptions import LSEQError

console = Console()


def parse_digit(raw: str) -> int:
    """
    Parse a digit written in decimal, 0b binary, 0o octal or 0x hex.

    Raises:
        ValueError: If the string is not an integer literal
    """
    return int(raw.replace("_", ""), 0)


def main(
    digit: str = typer.Argument(
        ...,
        help="Digit with guard bit (decimal, 0b..., 0o... or 0x...)",
    ),
    initial_width: int | None = typer.Option(
        None,
        "--initial-width",
        "-w",
        help="Field width at depth 0 (default: from config)",
    ),
) -> None:
    """
    Decode a digit into the field value chosen at each depth.

    Examples:
        lseq decode 0b100011             # depth 0 field 3
        lseq decode 2145                 # depth 0 field 1, depth 1 field 33
    """
    try:
        value = parse_digit(digit)
    except ValueError:
        print_error(
            f"'{digit}' is not an integer",
            solution="lseq decode 0b100011",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    if initial_width is None:
        initial_width = load_config().generator.initial_width

    try:
        base = DoubleBase(initial_width)
        fields = base.decode(value)
    except LSEQError as e:
        raise typer.Exit(report_lseq_error(e))

    length = digit_length(value)
    console.print(
        f"[bold]Digit[/bold] {value} "
        f"([dim]{length} bits, value {strip_guard(value)}[/dim])"
    )

    table = Table()
    table.add_column("Depth", justify="right", style="cyan")
    table.add_column("Bits", justify="right")
    table.add_column("Field", justify="right", style="green")
    table.add_column("Binary")

    for depth, field in enumerate(fields):
        width = base.field_width(depth)
        table.add_row(str(depth), str(width), str(field), format(field, f"0{width}b"))

    console.print(table)
