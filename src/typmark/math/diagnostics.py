#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/math/diagnostics.py
"""Diagnostics reported by the expression evaluator."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Tuple

from typmark.constants import Severity

# A compiler message starts a new diagnostic at every "error:" / "warning:" line
_DIAGNOSTIC_START = re.compile(r"^(error|warning):\s*(.*)$")
_HINT_LINE = re.compile(r"^\s*=\s*hint:\s*(.*)$")
_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


@dataclass(frozen=True)
class Diagnostic:
    """One failure or warning reported while compiling an expression.

    Parameters
    ----------
    severity : {"error", "warning"}
        Diagnostic severity
    message : str
        Main message, without the severity prefix
    hints : tuple of str, default ()
        Follow-up hints attached by the compiler

    """

    severity: Severity
    message: str
    hints: Tuple[str, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        text = f"{self.severity}: {self.message}"
        for hint in self.hints:
            text += f"\n  hint: {hint}"
        return text


DiagnosticList = Tuple[Diagnostic, ...]


def parse_compiler_output(text: str) -> DiagnosticList:
    """Split the compiler's rendered error report into diagnostics.

    Every ``error:`` or ``warning:`` line opens a new diagnostic; ``= hint:``
    lines attach to the diagnostic above them. Source excerpt lines are
    dropped. Text with no recognisable header becomes a single error.

    Parameters
    ----------
    text : str
        Report as produced by the Typst compiler

    Returns
    -------
    DiagnosticList
        Never empty

    """
    diagnostics: list[Diagnostic] = []
    severity: Severity | None = None
    message = ""
    text = _ANSI_ESCAPE.sub("", text)
    hints: list[str] = []

    def flush() -> None:
        if severity is not None:
            diagnostics.append(Diagnostic(severity=severity, message=message, hints=tuple(hints)))

    for line in text.splitlines():
        header = _DIAGNOSTIC_START.match(line.strip())
        if header:
            flush()
            severity = header.group(1)  # type: ignore[assignment]
            message = header.group(2).strip()
            hints = []
            continue
        hint = _HINT_LINE.match(line)
        if hint and severity is not None:
            hints.append(hint.group(1).strip())

    flush()

    if not diagnostics:
        diagnostics.append(Diagnostic(severity="error", message=text.strip() or "unknown compiler error"))
    return tuple(diagnostics)


def diagnostics_from_exception(exc: BaseException) -> DiagnosticList:
    """Convert an exception raised by the Typst bindings into diagnostics.

    ``TypstError`` carries the full rendered report in ``diagnostic`` and only
    the first error in ``message``/``hints``, so the report is preferred.
    Exceptions without either attribute are parsed from their text.
    """
    report = getattr(exc, "diagnostic", None)
    if isinstance(report, str) and report.strip():
        return parse_compiler_output(report)

    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        parsed = parse_compiler_output(message)
        extra_hints = tuple(str(hint) for hint in (getattr(exc, "hints", None) or ()))
        if extra_hints and len(parsed) == 1 and not parsed[0].hints:
            parsed = (Diagnostic(parsed[0].severity, parsed[0].message, extra_hints),)
        return parsed
    return parse_compiler_output(str(exc))
