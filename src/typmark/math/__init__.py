#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/math/__init__.py
"""Math evaluation for typmark.

Examples
--------
    >>> from typmark.math import MathEvaluator
    >>> evaluator = MathEvaluator()
    >>> value = evaluator.evaluate_display("e^(pi i) + 1 = 0")
    >>> svg = evaluator.evaluate_svg("x^2", "inline")

"""

from typmark.math.context import ContentValue, EvaluationContext, Scope, TypstContent, TypstContext
from typmark.math.diagnostics import Diagnostic, DiagnosticList, diagnostics_from_exception, parse_compiler_output
from typmark.math.gateway import (
    MathEvaluator,
    evaluate_display,
    evaluate_inline,
    evaluate_svg,
    get_default_evaluator,
)

__all__ = [
    "ContentValue",
    "Diagnostic",
    "DiagnosticList",
    "EvaluationContext",
    "MathEvaluator",
    "Scope",
    "TypstContent",
    "TypstContext",
    "diagnostics_from_exception",
    "evaluate_display",
    "evaluate_inline",
    "evaluate_svg",
    "get_default_evaluator",
    "parse_compiler_output",
]
