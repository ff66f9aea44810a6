#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_api.py
"""Unit tests for the top-level rendering functions."""

import json

import pytest

from typmark import (
    TypesettingError,
    render_content,
    render_content_json,
    render_html,
    render_html_result,
)
from typmark.content import nodes as content
from typmark.math import Scope
from typmark.options import ContentRendererOptions, HtmlRendererOptions, MarkdownParserOptions


@pytest.mark.unit
class TestRenderContent:
    """Tests for render_content and render_content_json."""

    def test_with_context(self, fake_context):
        """Test that a supplied context is used for math."""
        tree = render_content("$x$", context=fake_context)
        assert isinstance(tree, content.Sequence)
        assert fake_context.calls == [("x", "math", Scope.empty())]

    def test_options_are_passed(self, fake_context):
        """Test that renderer options take effect."""
        options = ContentRendererOptions(code_block_figure=False)
        tree = render_content("```\nx\n```", context=fake_context, options=options)
        assert tree.children[0] == content.CodeBlock(text="x\n")

    def test_parser_options_are_passed(self, fake_context):
        """Test that tokenizer options take effect."""
        tree = render_content("$x$", context=fake_context, parser_options=MarkdownParserOptions(parse_math=False))
        assert fake_context.calls == []
        assert tree.children[0].children[1] == content.Text("$x$")

    def test_json(self, fake_context):
        """Test JSON output."""
        data = json.loads(render_content_json("**b**", context=fake_context))
        assert data["children"][0]["children"][1]["type"] == "strong"


@pytest.mark.unit
class TestRenderHtml:
    """Tests for render_html and render_html_result."""

    def test_fragment(self, fake_evaluator):
        """Test a plain fragment."""
        assert render_html("*x*", evaluator=fake_evaluator) == "<p><em>x</em></p>\n"

    def test_options(self, fake_evaluator):
        """Test that HTML options take effect."""
        html = render_html("# x", options=HtmlRendererOptions(standalone=True), evaluator=fake_evaluator)
        assert html.startswith("<!DOCTYPE html>")

    def test_result_never_raises_for_math(self, fake_evaluator):
        """Test the collect-all form."""
        result = render_html_result("$BAD1$", evaluator=fake_evaluator)
        assert len(result.diagnostics) == 1

    def test_strict_form_raises(self, fake_evaluator):
        """Test the strict form."""
        with pytest.raises(TypesettingError) as exc_info:
            render_html("$BAD1$ $BAD2$", evaluator=fake_evaluator)
        assert len(exc_info.value.diagnostics) == 2
        assert exc_info.value.partial_html is not None
