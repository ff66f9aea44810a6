#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/cli/builder.py
"""Argument parser and exit codes for the typmark command line."""

from __future__ import annotations

import argparse

from typmark.constants import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_VALIDATION_ERROR,
)
from typmark.exceptions import DependencyError, RenderingError, ValidationError


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``typmark`` command."""
    from typmark import __version__

    parser = argparse.ArgumentParser(
        prog="typmark",
        description="Render markup with Typst math to HTML or to a JSON content tree.",
    )
    parser.add_argument("input", help="Markup file to render, or '-' for stdin")
    parser.add_argument("-o", "--out", dest="output", help="Output file (default: stdout)")
    parser.add_argument(
        "--format",
        choices=["html", "content"],
        default="html",
        help="Output target (default: html)",
    )
    parser.add_argument("--standalone", action="store_true", help="Emit a complete HTML document")
    parser.add_argument("--title", default=None, help="Document title when --standalone is set")
    parser.add_argument("--no-highlight", action="store_true", help="Disable syntax highlighting of code blocks")
    parser.add_argument(
        "--keep-partial",
        action="store_true",
        help="Write the HTML even when math spans failed (failing spans are left empty)",
    )
    parser.add_argument(
        "--font-path",
        action="append",
        default=[],
        metavar="DIR",
        help="Extra font directory for math typesetting (repeatable)",
    )
    parser.add_argument("--rich", action="store_true", help="Show math diagnostics as a Rich table on a terminal")
    parser.add_argument(
        "--force-rich",
        action="store_true",
        help="Use Rich formatting even when stderr is not a terminal",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", default=None, help="Also write log output to this file")
    parser.add_argument("--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR
