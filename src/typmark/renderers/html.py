#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/renderers/html.py
"""HTML rendering from the event stream.

This module provides the HtmlStreamRenderer class which converts the flat
event stream into HTML in a single forward pass. Only a few pieces of local
state are kept: the code block being accumulated, the alignments of the
table being written, and the diagnostics collected so far.

Math spans are typeset to SVG and embedded inline. A span that fails to
typeset does not stop the pass: it is replaced by an empty placeholder and
its diagnostics are collected, so one render reports every failing span.
The finished HTML is only accepted when no diagnostics were collected.

Raw HTML passes through verbatim.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, Optional, Union, cast

from typmark.ast.events import Event
from typmark.ast.nodes import (
    Code,
    CodeBlock,
    DisplayMath,
    HardBreak,
    Heading,
    Html,
    InlineHtml,
    InlineMath,
    Link,
    List,
    Leaf,
    Rule,
    SoftBreak,
    Table,
    Tag,
    Text,
)
from typmark.ast.visitors import EventHandler
from typmark.constants import MathMode
from typmark.exceptions import EvaluationError, InternalInvariantError, TypesettingError, UnsupportedFeatureError
from typmark.math.diagnostics import Diagnostic
from typmark.math.gateway import MathEvaluator, get_default_evaluator
from typmark.options.html import HtmlRendererOptions
from typmark.options.markdown import MarkdownParserOptions
from typmark.parsers.markdown import parse_events
from typmark.renderers.base import BaseRenderer
from typmark.renderers.highlight import CodeHighlighter, stylesheet
from typmark.utils.decorators import debug_timer
from typmark.utils.html_utils import escape_attribute, escape_html, svg_fragment

logger = logging.getLogger(__name__)

# Stands in for a math span that failed to typeset
MATH_PLACEHOLDER = ""


@dataclass(frozen=True)
class HtmlRenderResult:
    """Outcome of a collect-all HTML pass.

    Parameters
    ----------
    html : str
        Complete HTML. Failing math spans are empty placeholders.
    diagnostics : tuple of Diagnostic
        Every diagnostic collected during the pass

    """

    html: str
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        """True when no diagnostics were collected."""
        return not self.diagnostics

    def unwrap(self) -> str:
        """Return the HTML, or raise if any span failed.

        Raises
        ------
        TypesettingError
            Carrying every diagnostic and the placeholder HTML as
            ``partial_html``

        """
        if self.diagnostics:
            raise TypesettingError(self.diagnostics, partial_html=self.html)
        return self.html


@dataclass
class _TableState:
    alignments: tuple[str, ...]
    cell_index: int = 0
    in_head: bool = False
    body_open: bool = False


class HtmlStreamRenderer(EventHandler, BaseRenderer):
    """Render the markup event stream to HTML.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options
    evaluator : MathEvaluator, optional
        Math evaluator. Defaults to the process-wide evaluator.
    parser_options : MarkdownParserOptions, optional
        Tokenizer options used when rendering text

    Examples
    --------
    Basic usage:

        >>> renderer = HtmlStreamRenderer()
        >>> result = renderer.render_result("Euler: $e^(pi i) + 1 = 0$")
        >>> result.ok
        True

    Strict usage, raising on math errors:

        >>> html = renderer.render_to_string("# Title")

    """

    def __init__(
        self,
        options: HtmlRendererOptions | None = None,
        evaluator: Optional[MathEvaluator] = None,
        parser_options: Optional[MarkdownParserOptions] = None,
    ):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self.evaluator = evaluator if evaluator is not None else get_default_evaluator()
        self.parser_options = parser_options
        self._output: list[str] = []
        self._diagnostics: list[Diagnostic] = []
        self._code: CodeHighlighter | None = None
        self._tables: list[_TableState] = []

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def render_events(self, events: Iterable[Event]) -> HtmlRenderResult:
        """Run the pass over an event stream.

        Parameters
        ----------
        events : iterable of Event
            Balanced event stream

        Returns
        -------
        HtmlRenderResult
            HTML and every math diagnostic collected

        Raises
        ------
        UnsupportedFeatureError
            If the stream contains an image
        InternalInvariantError
            If a disabled-feature event appears or the stream is unbalanced

        """
        self._output = []
        self._diagnostics = []
        self._code = None
        self._tables = []

        with debug_timer(logger, "HTML render"):
            self.run(events)

        if self._code is not None or self._tables:
            raise InternalInvariantError("Event stream ended inside an open code block or table")

        html = "".join(self._output)
        if self.options.standalone:
            html = self._wrap_in_document(html)

        diagnostics = tuple(self._diagnostics)
        if diagnostics:
            logger.warning(f"HTML rendered with {len(diagnostics)} math diagnostic(s)")
        return HtmlRenderResult(html=html, diagnostics=diagnostics)

    def render_result(self, text: str) -> HtmlRenderResult:
        """Tokenize ``text`` and run the pass, collecting math diagnostics."""
        return self.render_events(parse_events(text, self.parser_options))

    def render_to_string(self, text: str) -> str:
        """Render ``text`` to HTML.

        Raises
        ------
        TypesettingError
            If any math span failed; ``partial_html`` holds the rejected HTML

        """
        return self.render_result(text).unwrap()

    def render(self, text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render ``text`` to HTML and write it to ``output``."""
        self.write_text_output(self.render_to_string(text), output)

    def _wrap_in_document(self, content: str) -> str:
        """Wrap the fragment in a complete HTML document with the highlighter stylesheet."""
        parts = [
            "<!DOCTYPE html>",
            f'<html lang="{escape_attribute(self.options.language)}">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape_html(self.options.title)}</title>",
        ]
        if self.options.highlight_code:
            parts.append("<style>")
            parts.append(
                stylesheet(
                    f".{self.options.code_css_class}",
                    style=self.options.pygments_style,
                    class_prefix=self.options.css_class_prefix,
                )
            )
            parts.append("</style>")
        parts.append("</head>")
        parts.append("<body>")
        parts.append(content.rstrip("\n"))
        parts.append("</body>")
        parts.append("</html>")
        return "\n".join(parts) + "\n"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _typeset(self, source: str, mode: MathMode) -> str:
        try:
            svg = self.evaluator.evaluate_svg(source, mode)
        except EvaluationError as e:
            logger.debug("Math span failed, continuing with placeholder: %r", source)
            self._diagnostics.extend(e.diagnostics)
            return MATH_PLACEHOLDER
        return svg_fragment(svg)

    def _leaf_in_code(self, node: Leaf) -> None:
        if self._code is not None:
            raise InternalInvariantError(f"Code block may only contain text, found '{node.visit_name}'")

    def _current_table(self) -> _TableState:
        if not self._tables:
            raise InternalInvariantError("Table content outside of a table")
        return self._tables[-1]

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def start_paragraph(self, tag: Tag) -> None:
        self._output.append("<p>")

    def end_paragraph(self, tag: Tag) -> None:
        self._output.append("</p>\n")

    def start_heading(self, tag: Tag) -> None:
        self._output.append(f"<h{cast(Heading, tag).level}>")

    def end_heading(self, tag: Tag) -> None:
        self._output.append(f"</h{cast(Heading, tag).level}>\n")

    def start_block_quote(self, tag: Tag) -> None:
        self._output.append("<blockquote>\n")

    def end_block_quote(self, tag: Tag) -> None:
        self._output.append("</blockquote>\n")

    def start_code_block(self, tag: Tag) -> None:
        lang = cast(CodeBlock, tag).lang
        self._code = CodeHighlighter(
            lang,
            enabled=self.options.highlight_code,
            class_prefix=self.options.css_class_prefix,
        )

    def end_code_block(self, tag: Tag) -> None:
        if self._code is None:
            raise InternalInvariantError("Code block closed without being opened")
        code, self._code = self._code, None

        lang = cast(CodeBlock, tag).lang
        code_class = f' class="language-{escape_attribute(lang)}"' if lang else ""
        body = code.finish()
        self._output.append(f'<pre class="{self.options.code_css_class}"><code{code_class}>{body}</code></pre>\n')

    def start_html_block(self, tag: Tag) -> None:
        pass

    def end_html_block(self, tag: Tag) -> None:
        pass

    def start_list(self, tag: Tag) -> None:
        list_tag = cast(List, tag)
        if list_tag.ordered:
            start_attr = f' start="{list_tag.start}"' if list_tag.start != 1 else ""
            self._output.append(f"<ol{start_attr}>\n")
        else:
            self._output.append("<ul>\n")

    def end_list(self, tag: Tag) -> None:
        self._output.append("</ol>\n" if cast(List, tag).ordered else "</ul>\n")

    def start_item(self, tag: Tag) -> None:
        self._output.append("<li>")

    def end_item(self, tag: Tag) -> None:
        self._output.append("</li>\n")

    def start_table(self, tag: Tag) -> None:
        self._tables.append(_TableState(alignments=tuple(cast(Table, tag).column_alignment)))
        self._output.append("<table>\n")

    def end_table(self, tag: Tag) -> None:
        state = self._tables.pop()
        if state.body_open:
            self._output.append("</tbody>\n")
        self._output.append("</table>\n")

    def start_table_head(self, tag: Tag) -> None:
        state = self._current_table()
        state.in_head = True
        state.cell_index = 0
        self._output.append("<thead>\n<tr>")

    def end_table_head(self, tag: Tag) -> None:
        self._current_table().in_head = False
        self._output.append("</tr>\n</thead>\n")

    def start_table_row(self, tag: Tag) -> None:
        state = self._current_table()
        if not state.body_open:
            state.body_open = True
            self._output.append("<tbody>\n")
        state.cell_index = 0
        self._output.append("<tr>")

    def end_table_row(self, tag: Tag) -> None:
        self._output.append("</tr>\n")

    def start_table_cell(self, tag: Tag) -> None:
        state = self._current_table()
        cell = "th" if state.in_head else "td"
        align = ""
        if state.cell_index < len(state.alignments) and state.alignments[state.cell_index] != "none":
            align = f' style="text-align: {state.alignments[state.cell_index]}"'
        self._output.append(f"<{cell}{align}>")

    def end_table_cell(self, tag: Tag) -> None:
        state = self._current_table()
        self._output.append("</th>" if state.in_head else "</td>")
        state.cell_index += 1

    # ------------------------------------------------------------------
    # Inline
    # ------------------------------------------------------------------

    def start_emphasis(self, tag: Tag) -> None:
        self._output.append("<em>")

    def end_emphasis(self, tag: Tag) -> None:
        self._output.append("</em>")

    def start_strong(self, tag: Tag) -> None:
        self._output.append("<strong>")

    def end_strong(self, tag: Tag) -> None:
        self._output.append("</strong>")

    def start_strikethrough(self, tag: Tag) -> None:
        self._output.append("<del>")

    def end_strikethrough(self, tag: Tag) -> None:
        self._output.append("</del>")

    def start_link(self, tag: Tag) -> None:
        link = cast(Link, tag)
        title_attr = f' title="{escape_attribute(link.title)}"' if link.title else ""
        self._output.append(f'<a href="{escape_attribute(link.dest_url)}"{title_attr}>')

    def end_link(self, tag: Tag) -> None:
        self._output.append("</a>")

    def start_image(self, tag: Tag) -> None:
        raise UnsupportedFeatureError("images")

    def end_image(self, tag: Tag) -> None:
        raise UnsupportedFeatureError("images")

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        if self._code is not None:
            self._code.feed(node.text)
            return
        self._output.append(escape_html(node.text))

    def visit_code(self, node: Code) -> None:
        self._leaf_in_code(node)
        self._output.append(f"<code>{escape_html(node.text)}</code>")

    def visit_html(self, node: Html) -> None:
        self._leaf_in_code(node)
        self._output.append(node.text)

    def visit_inline_html(self, node: InlineHtml) -> None:
        self._leaf_in_code(node)
        self._output.append(node.text)

    def visit_soft_break(self, node: SoftBreak) -> None:
        self._leaf_in_code(node)
        self._output.append("\n")

    def visit_hard_break(self, node: HardBreak) -> None:
        self._leaf_in_code(node)
        self._output.append("<br />\n")

    def visit_rule(self, node: Rule) -> None:
        self._leaf_in_code(node)
        self._output.append("<hr />\n")

    def visit_inline_math(self, node: InlineMath) -> None:
        self._leaf_in_code(node)
        fragment = self._typeset(node.source, "inline")
        css = self.options.math_css_class
        self._output.append(f'<span class="{css} {css}-inline">{fragment}</span>')

    def visit_display_math(self, node: DisplayMath) -> None:
        self._leaf_in_code(node)
        fragment = self._typeset(node.source, "display")
        css = self.options.math_css_class
        self._output.append(f'<div class="{css} {css}-display">{fragment}</div>\n')
