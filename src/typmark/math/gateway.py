#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/math/gateway.py
"""Entry points for evaluating math spans.

Both renderers go through ``MathEvaluator``: the content-tree renderer asks
for structured content (``evaluate_inline`` / ``evaluate_display``), the
HTML renderer asks for an SVG image (``evaluate_svg``). Every call is
independent and a failure is final for that call.

"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from typmark.constants import TYPST_PAGE_PREAMBLE, EvalMode, MathMode
from typmark.exceptions import InternalInvariantError
from typmark.math.context import ContentValue, EvaluationContext, Scope, TypstContext

logger = logging.getLogger(__name__)


def wrap_display(expr: str) -> str:
    """Wrap display math as a block equation, ``$ expr $``."""
    return f"$ {expr.strip()} $"


def wrap_inline(expr: str) -> str:
    """Wrap inline math tightly, ``$expr$``."""
    return f"${expr}$"


class MathEvaluator:
    """Evaluate math expressions through an evaluation context.

    Parameters
    ----------
    context : EvaluationContext, optional
        Engine used for evaluation. Defaults to a new ``TypstContext``.

    Raises
    ------
    EvaluationError
        From any ``evaluate_*`` method, carrying every diagnostic of the
        failed compilation.

    """

    def __init__(self, context: Optional[EvaluationContext] = None):
        self.context: EvaluationContext = context if context is not None else TypstContext()

    def _evaluate(self, expression: str, mode: EvalMode, scope: Scope) -> ContentValue:
        value = self.context.compile(expression, mode, scope)
        if not isinstance(value, ContentValue):
            raise InternalInvariantError(
                f"Evaluation context returned {type(value).__name__}, expected a single content value"
            )
        return value

    def evaluate_inline(self, expr: str) -> ContentValue:
        """Evaluate ``expr`` on its own, in math mode, with an empty scope."""
        return self._evaluate(expr, "math", Scope.empty())

    def evaluate_display(self, expr: str) -> ContentValue:
        """Evaluate ``expr`` as a block equation in markup mode.

        The expression is trimmed and wrapped in ``$ ... $``. The context's
        scope is used, so math operators and functions resolve by bare name.
        """
        return self._evaluate(wrap_display(expr), "markup", self.context.scope)

    def evaluate_svg(self, expr: str, mode: MathMode = "inline") -> bytes:
        """Typeset ``expr`` on an auto-sized page and return the SVG of page 1.

        Parameters
        ----------
        expr : str
            Expression source
        mode : {"inline", "display"}, default "inline"
            Inline math is wrapped tightly, display math with surrounding
            spaces so the engine lays it out as a block equation

        Returns
        -------
        bytes
            SVG document

        """
        if mode not in ("inline", "display"):
            raise ValueError(f"Unknown math mode: {mode!r}")
        body = wrap_display(expr) if mode == "display" else wrap_inline(expr)
        return self.context.compile_svg(TYPST_PAGE_PREAMBLE + body)


# Global singleton instance
_default_evaluator: MathEvaluator | None = None
_default_evaluator_lock = threading.Lock()


def get_default_evaluator() -> MathEvaluator:
    """Get or create the evaluator used by the module-level functions."""
    global _default_evaluator
    if _default_evaluator is None:
        with _default_evaluator_lock:
            if _default_evaluator is None:
                _default_evaluator = MathEvaluator()
    return _default_evaluator


def evaluate_inline(expr: str) -> ContentValue:
    """Evaluate inline math with the default evaluator."""
    return get_default_evaluator().evaluate_inline(expr)


def evaluate_display(expr: str) -> ContentValue:
    """Evaluate display math with the default evaluator."""
    return get_default_evaluator().evaluate_display(expr)


def evaluate_svg(expr: str, mode: MathMode = "inline") -> bytes:
    """Typeset math to SVG with the default evaluator."""
    return get_default_evaluator().evaluate_svg(expr, mode)
