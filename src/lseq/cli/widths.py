"""
lseq CLI - Widths command.

Show how the bit-width policy carves up the identifier space.
"""

import typer
from rich.console import Console
from rich.table import Table

from lseq.cli.errors import report_lseq_error
from lseq.core.base import DoubleBase
from lseq.core.config import load_config
from lseq.core.exceptions import LSEQError

console = Console()


def main(
    depths: int = typer.Option(
        8,
        "--depths",
        "-n",
        min=1,
        help="Number of depths to show",
    ),
    initial_width: int | None = typer.Option(
        None,
        "--initial-width",
        "-w",
        help="Field width at depth 0 (default: from config)",
    ),
) -> None:
    """
    Show field width, cumulative width and max value per depth.

    Examples:
        lseq widths                      # First 8 depths, configured width
        lseq widths -n 20 -w 4           # 20 depths starting at 4 bits
    """
    if initial_width is None:
        initial_width = load_config().generator.initial_width

    try:
        base = DoubleBase(initial_width)
    except LSEQError as e:
        raise typer.Exit(report_lseq_error(e))

    table = Table(title=f"Bit widths (initial width {base.initial})")
    table.add_column("Depth", justify="right", style="cyan")
    table.add_column("Field bits", justify="right")
    table.add_column("Cumulative bits", justify="right")
    table.add_column("Max value", justify="right", style="green")

    for depth in range(depths):
        table.add_row(
            str(depth),
            str(base.field_width(depth)),
            str(base.cumulative_width(depth)),
            str(base.max_value(depth)),
        )

    console.print(table)
