#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/renderers/content.py
"""Content tree rendering from the markup tree.

This module provides the ContentTreeRenderer class which converts the nested
markup tree into a content tree for a downstream layout engine. Rendering is
depth-first, left to right, and fail-fast: the first error raised anywhere
in the traversal aborts the whole call.

Raw HTML has no representation in the content tree and is rejected with
``UnsupportedHtmlError``. Math spans go through the math evaluator; an
evaluation failure becomes ``TypesettingError``.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Iterable, Optional, Union, cast

from typmark.ast.nodes import (
    Code,
    CodeBlock,
    DisplayMath,
    Group,
    HardBreak,
    Heading,
    Html,
    InlineHtml,
    InlineMath,
    Item,
    Link,
    List,
    Node,
    Rule,
    SoftBreak,
    Table,
    TableCell,
    TableHead,
    TableRow,
    Text,
)
from typmark.ast.visitors import NodeVisitor
from typmark.content import nodes as content
from typmark.content.serialization import content_to_json
from typmark.exceptions import (
    EvaluationError,
    InternalInvariantError,
    MalformedTableError,
    TypesettingError,
    UnsupportedFeatureError,
    UnsupportedHtmlError,
)
from typmark.math.gateway import MathEvaluator, get_default_evaluator
from typmark.options.content import ContentRendererOptions
from typmark.options.markdown import MarkdownParserOptions
from typmark.parsers.markdown import parse_tree
from typmark.renderers.base import BaseRenderer
from typmark.utils.decorators import debug_timer

logger = logging.getLogger(__name__)


class ContentTreeRenderer(NodeVisitor, BaseRenderer):
    """Render markup to a content tree.

    Every ``visit_*`` method returns the content node for its input, so the
    tree is built bottom-up as the recursion unwinds.

    Parameters
    ----------
    options : ContentRendererOptions or None, default = None
        Content rendering options
    evaluator : MathEvaluator, optional
        Math evaluator. Defaults to the process-wide evaluator.
    parser_options : MarkdownParserOptions, optional
        Tokenizer options used by ``render_content``

    Examples
    --------
        >>> renderer = ContentTreeRenderer()
        >>> tree = renderer.render_content("# Title\\n\\nSome *text*.")

    """

    def __init__(
        self,
        options: ContentRendererOptions | None = None,
        evaluator: Optional[MathEvaluator] = None,
        parser_options: Optional[MarkdownParserOptions] = None,
    ):
        """Initialize the content renderer with options."""
        BaseRenderer._validate_options_type(options, ContentRendererOptions, "content")
        options = options or ContentRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: ContentRendererOptions = options
        self.evaluator = evaluator if evaluator is not None else get_default_evaluator()
        self.parser_options = parser_options

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def render_tree(self, nodes: Iterable[Node]) -> content.ContentNode:
        """Render top-level markup nodes into one content sequence.

        Raises
        ------
        UnsupportedHtmlError
            If the markup contains raw HTML
        TypesettingError
            If a math span fails to evaluate
        MalformedTableError
            If a table does not have the head-then-rows structure
        UnsupportedFeatureError
            If the markup contains an image
        InternalInvariantError
            If a disabled-feature node appears

        """
        with debug_timer(logger, "Content render"):
            return self._sequence(nodes)

    def render_content(self, text: str) -> content.ContentNode:
        """Tokenize ``text`` and render it to a content tree."""
        return self.render_tree(parse_tree(text, self.parser_options))

    def render_to_string(self, text: str) -> str:
        """Render ``text`` and serialize the content tree to JSON."""
        return content_to_json(self.render_content(text))

    def render(self, text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render ``text`` and write the JSON content tree to ``output``."""
        self.write_text_output(self.render_to_string(text), output)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _sequence(self, children: Iterable[Node]) -> content.Sequence:
        return content.Sequence(tuple(self.visit(child) for child in children))

    def _paragraph(self, children: Iterable[Node]) -> content.Sequence:
        body = [self.visit(child) for child in children]
        return content.Sequence((content.ParBreak(), *body, content.ParBreak()))

    def _cells(self, group: Group, child_index: int) -> tuple[content.TableCell, ...]:
        cells = []
        for cell in group.children:
            if not (isinstance(cell, Group) and isinstance(cell.tag, TableCell)):
                raise MalformedTableError(
                    f"Table {group.tag.visit_name} may only contain cells, found '{cell.visit_name}'",
                    child_index=child_index,
                )
            cells.append(self.visit_table_cell(cell))
        return tuple(cells)

    def _evaluate(self, source: str, display: bool) -> content.Math:
        try:
            if display:
                value = self.evaluator.evaluate_display(source.strip())
            else:
                value = self.evaluator.evaluate_inline(source)
        except EvaluationError as e:
            logger.debug("Math span failed: %r", source)
            raise TypesettingError(e.diagnostics) from e
        return content.Math(value=value, display=display)

    # ------------------------------------------------------------------
    # Block groups
    # ------------------------------------------------------------------

    def visit_paragraph(self, node: Group) -> content.ContentNode:
        return self._paragraph(node.children)

    def visit_heading(self, node: Group) -> content.ContentNode:
        tag = cast(Heading, node.tag)
        return content.Heading(level=tag.level, body=self._sequence(node.children))

    def visit_block_quote(self, node: Group) -> content.ContentNode:
        return content.Figure(body=self._paragraph(node.children), align="left")

    def visit_code_block(self, node: Group) -> content.ContentNode:
        """Concatenate the block's text lines into one raw block.

        Raises
        ------
        InternalInvariantError
            If the block holds anything other than text leaves

        """
        tag = cast(CodeBlock, node.tag)
        parts = []
        for child in node.children:
            if not isinstance(child, Text):
                raise InternalInvariantError(f"Code block may only contain text, found '{child.visit_name}'")
            parts.append(child.text)

        block = content.CodeBlock(text="".join(parts), lang=tag.lang or None)
        if self.options.code_block_figure:
            return content.Figure(body=block)
        return block

    def visit_html_block(self, node: Group) -> content.ContentNode:
        html = "".join(child.text for child in node.children if isinstance(child, Html))
        raise UnsupportedHtmlError(html)

    def visit_list(self, node: Group) -> content.ContentNode:
        """Render a list, numbering ordered items from the list's start.

        Numbers are assigned to the direct children only; a nested list
        numbers its own items from its own start.
        """
        tag = cast(List, node.tag)
        items = []
        for index, child in enumerate(node.children):
            if not (isinstance(child, Group) and isinstance(child.tag, Item)):
                raise InternalInvariantError(f"List may only contain items, found '{child.visit_name}'")
            number = tag.start + index if tag.start is not None else None
            items.append(content.ListItem(body=self._sequence(child.children), number=number))
        return content.List(items=tuple(items), ordered=tag.ordered, start=tag.start)

    def visit_item(self, node: Group) -> content.ContentNode:
        return content.ListItem(body=self._sequence(node.children))

    def visit_table(self, node: Group) -> content.ContentNode:
        """Render a table.

        The first child must be the head; every later child must be a row.
        Rows may be shorter than the head but never longer.

        Raises
        ------
        MalformedTableError
            If the structure does not hold

        """
        tag = cast(Table, node.tag)
        if not node.children:
            raise MalformedTableError("Table has no head", child_index=0)

        head = node.children[0]
        if not (isinstance(head, Group) and isinstance(head.tag, TableHead)):
            raise MalformedTableError(f"Table must start with its head, found '{head.visit_name}'", child_index=0)

        header_row = self._cells(head, 0)
        column_count = len(header_row)
        if len(tag.column_alignment) != column_count:
            raise MalformedTableError(
                f"Table has {column_count} header cells but {len(tag.column_alignment)} column alignments"
            )

        body_rows = []
        for index, row in enumerate(node.children[1:], start=1):
            if not (isinstance(row, Group) and isinstance(row.tag, TableRow)):
                raise MalformedTableError(f"Expected a table row, found '{row.visit_name}'", child_index=index)
            cells = self._cells(row, index)
            if len(cells) > column_count:
                raise MalformedTableError(
                    f"Table row has {len(cells)} cells but the header has {column_count}", child_index=index
                )
            body_rows.append(cells)

        table = content.Table(
            column_count=column_count,
            alignments=tuple(tag.column_alignment),
            header_row=header_row,
            body_rows=tuple(body_rows),
        )
        return content.Figure(body=table)

    def visit_table_head(self, node: Group) -> content.ContentNode:
        raise MalformedTableError("Table head outside of a table")

    def visit_table_row(self, node: Group) -> content.ContentNode:
        raise MalformedTableError("Table row outside of a table")

    def visit_table_cell(self, node: Group) -> content.TableCell:
        return content.TableCell(body=self._sequence(node.children))

    # ------------------------------------------------------------------
    # Inline groups
    # ------------------------------------------------------------------

    def visit_emphasis(self, node: Group) -> content.ContentNode:
        return content.Emphasis(body=self._sequence(node.children))

    def visit_strong(self, node: Group) -> content.ContentNode:
        return content.Strong(body=self._sequence(node.children))

    def visit_strikethrough(self, node: Group) -> content.ContentNode:
        return content.Strike(body=self._sequence(node.children))

    def visit_link(self, node: Group) -> content.ContentNode:
        tag = cast(Link, node.tag)
        return content.Link(url=tag.dest_url, body=self._sequence(node.children))

    def visit_image(self, node: Group) -> content.ContentNode:
        raise UnsupportedFeatureError("images")

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> content.ContentNode:
        return content.Text(node.text)

    def visit_code(self, node: Code) -> content.ContentNode:
        return content.Code(node.text)

    def visit_html(self, node: Html) -> content.ContentNode:
        raise UnsupportedHtmlError(node.text)

    def visit_inline_html(self, node: InlineHtml) -> content.ContentNode:
        raise UnsupportedHtmlError(node.text, inline=True)

    def visit_soft_break(self, node: SoftBreak) -> content.ContentNode:
        return content.Space()

    def visit_hard_break(self, node: HardBreak) -> content.ContentNode:
        return content.LineBreak()

    def visit_rule(self, node: Rule) -> content.ContentNode:
        return content.Rule()

    def visit_inline_math(self, node: InlineMath) -> content.ContentNode:
        return self._evaluate(node.source, display=False)

    def visit_display_math(self, node: DisplayMath) -> content.ContentNode:
        return self._evaluate(node.source, display=True)
