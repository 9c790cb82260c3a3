"""
Standardized error handling and exit codes for the lseq CLI.

Consistent error messages with actionable guidance and standardized exit
codes across all commands.
"""

from enum import IntEnum

from rich.console import Console

from lseq.core.exceptions import (
    ConfigurationError,
    InvalidDigitError,
    LSEQError,
    PreconditionError,
)

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for lseq CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Internal error (an invariant was broken)."""

    USER_ERROR = 2
    """Configuration or input error (actionable by user)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def report_lseq_error(error: LSEQError) -> ExitCode:
    """
    Print an LSEQError and return the exit code that matches its kind.

    Configuration, precondition and digit errors are input problems;
    anything else means an invariant broke inside the generator.
    """
    if isinstance(error, ConfigurationError):
        print_error(
            error.message,
            reason="Initial width and boundary must both be positive integers",
            solution="lseq widths --initial-width 5",
        )
        return ExitCode.USER_ERROR

    if isinstance(error, InvalidDigitError):
        print_error(
            error.message,
            reason="A digit carries a guard bit above a value whose length "
            "matches one depth's cumulative width",
            solution="lseq widths  # list the valid digit lengths",
        )
        return ExitCode.USER_ERROR

    if isinstance(error, PreconditionError):
        print_error(error.message, reason="The left neighbor must sort before the right one")
        return ExitCode.USER_ERROR

    print_error(error.message, reason="This is a bug in identifier generation")
    return ExitCode.GENERAL_ERROR
