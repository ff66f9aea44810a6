#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/math/context.py
"""Evaluation contexts for math expressions.

An evaluation context owns the expression engine. Each ``compile`` call
builds a fresh, single-use document from a symbol scope and one expression
and discards it afterwards; nothing is shared between calls except the
process-wide font and grammar resources.

``TypstContext`` is the default context, backed by the ``typst`` Python
bindings. Tests and embedders may supply any object satisfying the
``EvaluationContext`` protocol.

"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Protocol, Tuple, runtime_checkable

from typmark.constants import DEPS_TYPST, TYPST_PAGE_PREAMBLE, EvalMode
from typmark.exceptions import EvaluationError, InternalInvariantError
from typmark.math.diagnostics import diagnostics_from_exception
from typmark.options.math import MathOptions
from typmark.resources import get_resources
from typmark.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


@dataclass(frozen=True)
class Scope:
    """Symbols visible to an expression.

    A scope is rendered as a Typst preamble: one ``#import <module>: *`` line
    per imported module followed by one ``#let`` line per binding.

    Parameters
    ----------
    imports : tuple of str
        Modules whose members are brought into scope
    bindings : tuple of (str, str)
        ``(name, typst_value)`` pairs

    """

    imports: Tuple[str, ...] = field(default_factory=tuple)
    bindings: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for module in self.imports:
            if not _IDENTIFIER.match(module):
                raise ValueError(f"Invalid module name in scope: {module!r}")
        for name, _value in self.bindings:
            if not _IDENTIFIER.match(name):
                raise ValueError(f"Invalid binding name in scope: {name!r}")

    @classmethod
    def empty(cls) -> "Scope":
        """No symbols beyond the engine's defaults."""
        return cls()

    @classmethod
    def math(cls) -> "Scope":
        """The math module's operators and functions, usable by bare name."""
        return cls(imports=("math",))

    def with_binding(self, name: str, value: str) -> "Scope":
        """Return a copy with one more ``#let`` binding."""
        return Scope(imports=self.imports, bindings=self.bindings + ((name, value),))

    def preamble(self) -> str:
        """Render the scope as Typst source lines."""
        lines = [f"#import {module}: *" for module in self.imports]
        lines.extend(f"#let {name} = {value}" for name, value in self.bindings)
        return "".join(f"{line}\n" for line in lines)


class ContentValue(ABC):
    """Structured content produced by a successful evaluation."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible data."""


@dataclass(frozen=True)
class TypstContent(ContentValue):
    """Content value of an expression the Typst engine accepted.

    Parameters
    ----------
    markup : str
        Typst markup reproducing the content (``$x$`` for inline math,
        ``$ x $`` for display math)
    mode : {"math", "markup"}
        Mode the expression was evaluated in
    preamble : str, default ""
        Scope preamble the markup depends on

    """

    markup: str
    mode: EvalMode
    preamble: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "typst", "markup": self.markup, "mode": self.mode, "preamble": self.preamble}


@runtime_checkable
class EvaluationContext(Protocol):
    """Protocol for objects that compile math expressions.

    Implementations must treat every call independently. Failures are raised
    as ``EvaluationError`` carrying every diagnostic the engine reported.
    """

    @property
    def scope(self) -> Scope:
        """Scope used for display math."""
        ...

    def compile(self, expression: str, mode: EvalMode, scope: Scope) -> Any:
        """Evaluate ``expression`` and return a ``ContentValue``."""
        ...

    def compile_svg(self, document: str) -> bytes:
        """Compile a whole document and return the SVG of its first page."""
        ...


class TypstContext:
    """Evaluation context backed by the ``typst`` Python bindings.

    Parameters
    ----------
    options : MathOptions, optional
        Font configuration. Used to initialise the shared resource cache
        if this is the first context created in the process.

    Examples
    --------
        >>> context = TypstContext()
        >>> svg = context.compile_svg(TYPST_PAGE_PREAMBLE + "$x^2$")

    """

    def __init__(self, options: MathOptions | None = None):
        self.options = options or MathOptions()
        self._scope = Scope.math()

    @property
    def scope(self) -> Scope:
        return self._scope

    def _document(self, expression: str, mode: EvalMode, scope: Scope) -> tuple[str, str]:
        markup = f"${expression}$" if mode == "math" else expression
        return markup, TYPST_PAGE_PREAMBLE + scope.preamble() + markup

    def compile(self, expression: str, mode: EvalMode, scope: Scope) -> TypstContent:
        """Evaluate an expression by compiling it in a throwaway document.

        Parameters
        ----------
        expression : str
            Expression source. In ``"math"`` mode it is wrapped in ``$...$``;
            in ``"markup"`` mode it is used verbatim.
        mode : {"math", "markup"}
            Evaluation mode
        scope : Scope
            Symbols visible to the expression

        Returns
        -------
        TypstContent
            The accepted content

        Raises
        ------
        EvaluationError
            If the engine reports any error

        """
        markup, document = self._document(expression, mode, scope)
        self.compile_svg(document)
        return TypstContent(markup=markup, mode=mode, preamble=scope.preamble())

    @requires_dependencies("math", DEPS_TYPST)
    def compile_svg(self, document: str) -> bytes:
        """Compile ``document`` to SVG and return page 1.

        Raises
        ------
        EvaluationError
            If compilation fails
        InternalInvariantError
            If the engine produced no pages

        """
        import typst

        resources = get_resources(self.options)
        try:
            result = typst.compile(
                document.encode("utf-8"),
                format="svg",
                font_paths=list(resources.font_paths),
                ignore_system_fonts=resources.ignore_system_fonts,
            )
        except RuntimeError as e:
            # TypstError subclasses RuntimeError in recent bindings
            diagnostics = diagnostics_from_exception(e)
            logger.debug("Typst rejected document with %d diagnostic(s)", len(diagnostics))
            raise EvaluationError(diagnostics, expression=document) from e

        # Multi-page documents come back as one SVG per page
        if isinstance(result, list):
            if not result:
                raise InternalInvariantError("Typst produced a document without pages")
            result = result[0]
        return bytes(result)


__all__ = ["Scope", "ContentValue", "TypstContent", "EvaluationContext", "TypstContext"]
