"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/typmark/cli/output.py
import argparse
import sys
from importlib.util import find_spec
from typing import IO, Iterable

from typmark.exceptions import DependencyError
from typmark.math.diagnostics import Diagnostic


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    return find_spec("rich") is not None


def should_use_rich_output(args: argparse.Namespace, stream: IO[str] | None = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    stream : optional, default None
        Uses sys.stderr unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Raises
    ------
    DependencyError
        If --rich is set but Rich is not installed

    Notes
    -----
    Rich output is used when:
    - The --rich flag is set
    - AND either --force-rich is set OR the stream is a TTY

    """
    if not args.rich:
        return False

    if not check_rich_available():
        raise DependencyError(
            component_name="rich-output",
            missing_packages=[("rich", "")],
            message="Rich output requires the optional 'rich' dependency. Install with: pip install typmark[rich]",
        )

    if args.force_rich:
        return True

    target = stream or sys.stderr
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def print_diagnostics(diagnostics: Iterable[Diagnostic], use_rich: bool = False) -> None:
    """Print math diagnostics to stderr, one per entry."""
    if not use_rich:
        for diagnostic in diagnostics:
            print(str(diagnostic), file=sys.stderr)
        return

    from rich.console import Console
    from rich.table import Table
    from rich.text import Text

    console = Console(stderr=True)
    table = Table(title="Math Diagnostics")
    table.add_column("Severity", no_wrap=True)
    table.add_column("Message", style="white")
    table.add_column("Hints", style="cyan")

    for diagnostic in diagnostics:
        style = "red" if diagnostic.severity == "error" else "yellow"
        table.add_row(Text(diagnostic.severity, style=style), Text(diagnostic.message), Text("\n".join(diagnostic.hints)))

    console.print(table)
