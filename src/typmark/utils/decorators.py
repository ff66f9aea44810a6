#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/utils/decorators.py
"""Dependency guards and timing helpers for typmark components.

Math spans are compiled one at a time, so a guarded entry point may be hit
hundreds of times per document. A dependency set that passed its check once
is remembered for the life of the process and not imported again.

"""

from __future__ import annotations

import importlib
import logging
import threading
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Optional, Tuple

from typmark.exceptions import DependencyError
from typmark.utils.packages import check_version_requirement

PackageSpec = Tuple[str, str, str]

_satisfied: set[Tuple[PackageSpec, ...]] = set()
_satisfied_lock = threading.Lock()


def _find_problems(
    packages: Tuple[PackageSpec, ...],
) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str, str]], Optional[ImportError]]:
    missing: List[Tuple[str, str]] = []
    mismatches: List[Tuple[str, str, str]] = []
    first_error: Optional[ImportError] = None

    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            first_error = first_error or e
            continue

        if version_spec:
            ok, installed = check_version_requirement(install_name, version_spec)
            if not ok:
                mismatches.append((install_name, version_spec, installed or "unknown"))

    return missing, mismatches, first_error


def requires_dependencies(component_name: str, packages: List[PackageSpec]) -> Callable:
    """Raise ``DependencyError`` before the call if ``packages`` are unusable.

    Parameters
    ----------
    component_name : str
        Component named in the error message (e.g., "math", "highlight").
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` tuples. An empty
        version spec accepts any installed version.

    Examples
    --------
        >>> @requires_dependencies("math", [("typst", "typst", ">=0.13.0")])
        ... def compile_svg(source):
        ...     import typst
        ...     return typst.compile(source, format="svg")

    """
    key = tuple(packages)

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if key not in _satisfied:
                missing, mismatches, first_error = _find_problems(key)
                if missing or mismatches:
                    raise DependencyError(
                        component_name=component_name,
                        missing_packages=missing,
                        version_mismatches=mismatches,
                        original_import_error=first_error,
                    ) from first_error
                with _satisfied_lock:
                    _satisfied.add(key)
            return method(*args, **kwargs)

        return wrapper

    return decorator


def clear_dependency_cache() -> None:
    """Forget every dependency set that has passed its check."""
    with _satisfied_lock:
        _satisfied.clear()


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log the wall time of the enclosed block in milliseconds, at DEBUG only."""
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.debug("%s took %.1f ms", operation, (time.perf_counter() - start) * 1000.0)
