#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_typst_math.py
"""Integration tests running math through the real Typst engine.

Skipped when the ``typst`` bindings are not installed.
"""

import re

import pytest

typst = pytest.importorskip("typst")

from typmark import TypesettingError, render_content, render_html_result  # noqa: E402
from typmark.content import nodes as content  # noqa: E402
from typmark.exceptions import EvaluationError  # noqa: E402
from typmark.math import MathEvaluator, TypstContent, TypstContext  # noqa: E402

EULER = "e^(pi i) + 1 = 0"
INVALID = "sqrt(x + undefinedvar"
MULTI_ERROR_DOCUMENT = "#let = 1\n#let = 2\n"


@pytest.fixture(scope="module")
def evaluator():
    return MathEvaluator()


@pytest.mark.integration
class TestGateway:
    """Tests for the gateway entry points against Typst."""

    def test_display(self, evaluator):
        """Test that a valid display expression evaluates."""
        value = evaluator.evaluate_display(EULER)
        assert isinstance(value, TypstContent)
        assert value.markup == f"$ {EULER} $"

    def test_inline(self, evaluator):
        """Test that a valid inline expression evaluates."""
        assert evaluator.evaluate_inline("x^2").markup == "$x^2$"

    def test_svg(self, evaluator):
        """Test that SVG output is produced."""
        svg = evaluator.evaluate_svg(EULER, "display")
        assert b"<svg" in svg

    def test_invalid(self, evaluator):
        """Test that an invalid expression reports diagnostics."""
        with pytest.raises(EvaluationError) as exc_info:
            evaluator.evaluate_inline(INVALID)
        assert exc_info.value.diagnostics
        assert all(d.severity in ("error", "warning") for d in exc_info.value.diagnostics)

    def test_every_error_reported(self):
        """Test that a document with several errors yields one diagnostic per error."""
        with pytest.raises(RuntimeError) as engine_error:
            typst.compile(MULTI_ERROR_DOCUMENT.encode("utf-8"), format="svg")
        report = getattr(engine_error.value, "diagnostic", None) or str(engine_error.value)
        report = re.sub(r"\x1b\[[0-9;]*m", "", report)
        expected = len(re.findall(r"^\s*error:", report, flags=re.MULTILINE))
        assert expected >= 2

        with pytest.raises(EvaluationError) as exc_info:
            TypstContext().compile_svg(MULTI_ERROR_DOCUMENT)
        errors = [d for d in exc_info.value.diagnostics if d.severity == "error"]
        assert len(errors) == expected


@pytest.mark.integration
class TestBothTargets:
    """Tests for the two renderers with real math."""

    def test_valid_content(self):
        """Test the content target with a valid display equation."""
        tree = render_content(f"$$\n{EULER}\n$$\n")
        math = tree.children[0]
        assert isinstance(math, content.Math)
        assert math.display is True

    def test_valid_html(self):
        """Test the HTML target with a valid display equation."""
        result = render_html_result(f"$$\n{EULER}\n$$\n")
        assert result.ok
        assert '<div class="math math-display"><svg' in result.html

    def test_invalid_content(self):
        """Test that the content target raises for invalid math."""
        with pytest.raises(TypesettingError):
            render_content(f"${INVALID}$")

    def test_invalid_html(self):
        """Test that the HTML target keeps going and rejects the result."""
        result = render_html_result(f"before ${INVALID}$ after $x$")
        assert not result.ok
        assert '<span class="math math-inline"></span>' in result.html
        assert result.html.count("<svg") >= 1
        with pytest.raises(TypesettingError):
            result.unwrap()
