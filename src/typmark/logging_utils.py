"""Logging setup for the typmark command line."""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "typmark"

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Route log records to stderr and, optionally, a file.

    The requested level applies to the ``typmark`` loggers. Records from
    other libraries (markdown-it, pygments, the Typst bindings) are shown
    from WARNING up, unless ``trace_mode`` is set, in which case they follow
    the requested level too.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Append log output to this file as well.
    trace_mode : bool, default False
        Timestamps and logger names in every record; third-party loggers
        are no longer held at WARNING.

    Returns
    -------
    logging.Logger
        The ``typmark`` package logger.

    """
    level = _resolve_level(log_level)
    library_level = level if trace_mode else max(level, logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(library_level)
    root_logger.handlers.clear()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    if trace_mode:
        formatter = logging.Formatter(_TRACE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter(_PLAIN_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            package_logger.info("Logging to file: %s", log_file)

    return package_logger
