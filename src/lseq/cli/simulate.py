"""
lseq CLI - Simulate command.

Run a batch of insertions against a fresh generator and report how deep
and how long the identifiers grew.
"""

import random

import typer
from rich.console import Console
from rich.table import Table

from lseq.cli.errors import report_lseq_error
from lseq.core.config import load_config
from lseq.core.exceptions import LSEQError
from lseq.core.generator import new_generator
from lseq.core.simulate import InsertPattern, SimulationReport, simulate

console = Console()


def render_report(report: SimulationReport) -> None:
    """Print a simulation report as a summary plus a per-depth table."""
    console.print(
        f"[bold]{report.count}[/bold] insertions "
        f"([cyan]{report.pattern.value}[/cyan], {report.replicas} replica(s))"
    )
    console.print(
        f"Max depth [green]{report.max_depth}[/green], "
        f"max length [green]{report.max_length}[/green] bits, "
        f"mean length [green]{report.mean_length:.1f}[/green] bits"
    )

    table = Table(title="Allocations per depth")
    table.add_column("Depth", justify="right", style="cyan")
    table.add_column("Identifiers", justify="right")
    table.add_column("Strategy")

    for depth, allocated in report.depth_histogram.items():
        strategy = report.strategies.get(depth)
        table.add_row(str(depth), str(allocated), strategy.value if strategy else "-")

    console.print(table)


def main(
    count: int = typer.Option(
        1000,
        "--count",
        "-c",
        min=0,
        help="Number of identifiers to insert",
    ),
    pattern: InsertPattern = typer.Option(
        InsertPattern.RANDOM,
        "--pattern",
        "-p",
        help="Insertion position: random, append or prepend",
    ),
    replicas: int = typer.Option(
        1,
        "--replicas",
        "-r",
        min=1,
        help="Number of owner tags to spread insertions across",
    ),
    seed: int | None = typer.Option(
        None,
        "--seed",
        "-s",
        help="Seed for a reproducible run",
    ),
    initial_width: int | None = typer.Option(
        None,
        "--initial-width",
        "-w",
        help="Field width at depth 0 (default: from config)",
    ),
    boundary: int | None = typer.Option(
        None,
        "--boundary",
        "-b",
        help="Maximum random step (default: from config)",
    ),
) -> None:
    """
    Simulate a sequence of insertions and report identifier growth.

    Examples:
        lseq simulate                        # 1000 random insertions
        lseq simulate -c 10000 -p append     # Worst case for one flank
        lseq simulate -r 3 --seed 42         # Three replicas, reproducible
    """
    settings = load_config().generator
    if initial_width is None:
        initial_width = settings.initial_width
    if boundary is None:
        boundary = settings.boundary

    rng = random.Random(seed) if seed is not None else None

    try:
        generator = new_generator(initial_width, boundary, rng=rng)
        report = simulate(generator, count, pattern=pattern, replicas=replicas, rng=rng)
    except LSEQError as e:
        raise typer.Exit(report_lseq_error(e))

    render_report(report)
