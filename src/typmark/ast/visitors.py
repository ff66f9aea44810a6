#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/ast/visitors.py
"""Visitor base classes for the two traversal styles.

``NodeVisitor`` walks the nested tree: each group or leaf is handed to one
``visit_*`` method, which decides whether and how to recurse.

``EventHandler`` walks the flat event stream: containers arrive as a
``start_*`` / ``end_*`` pair, leaves as ``visit_*``.

Both classes share the dispatch names defined on the node and tag classes and
declare one abstract method per name, so a renderer that misses a tag cannot
be instantiated. Disabled-feature variants are handled once here: reaching
one raises ``InternalInvariantError``.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from typmark.ast.events import Event, dispatch_event
from typmark.ast.nodes import (
    Code,
    DisplayMath,
    FootnoteDefinition,
    FootnoteReference,
    Group,
    HardBreak,
    Html,
    InlineHtml,
    InlineMath,
    MetadataBlock,
    Node,
    Rule,
    SoftBreak,
    Tag,
    TaskListMarker,
    Text,
)
from typmark.exceptions import InternalInvariantError


def disabled_feature(node: Node | Tag) -> InternalInvariantError:
    """Build the error raised when a disabled-feature variant shows up."""
    name = node.tag.visit_name if isinstance(node, Group) else node.visit_name
    return InternalInvariantError(
        f"'{name}' is disabled in the tokenizer configuration but appeared in the markup; "
        "the tokenizer and renderer configurations do not match"
    )


class LeafVisitor(ABC):
    """Leaf handling shared by tree visitors and event handlers."""

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text leaf."""

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit an inline Code leaf."""

    @abstractmethod
    def visit_html(self, node: Html) -> Any:
        """Visit an Html leaf (content of an HTML block)."""

    @abstractmethod
    def visit_inline_html(self, node: InlineHtml) -> Any:
        """Visit an InlineHtml leaf."""

    @abstractmethod
    def visit_soft_break(self, node: SoftBreak) -> Any:
        """Visit a SoftBreak leaf."""

    @abstractmethod
    def visit_hard_break(self, node: HardBreak) -> Any:
        """Visit a HardBreak leaf."""

    @abstractmethod
    def visit_rule(self, node: Rule) -> Any:
        """Visit a Rule leaf."""

    @abstractmethod
    def visit_inline_math(self, node: InlineMath) -> Any:
        """Visit an InlineMath leaf."""

    @abstractmethod
    def visit_display_math(self, node: DisplayMath) -> Any:
        """Visit a DisplayMath leaf."""

    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        """Footnotes are disabled."""
        raise disabled_feature(node)

    def visit_task_list_marker(self, node: TaskListMarker) -> Any:
        """Task lists are disabled."""
        raise disabled_feature(node)


class NodeVisitor(LeafVisitor):
    """Abstract base class for markup tree visitors.

    Each ``visit_*`` method for a tag receives the whole ``Group`` and is
    responsible for visiting its children, typically with
    ``[self.visit(child) for child in node.children]``.

    """

    def visit(self, node: Node) -> Any:
        """Dispatch ``node`` to its ``visit_*`` method."""
        return node.accept(self)

    @abstractmethod
    def visit_paragraph(self, node: Group) -> Any:
        """Visit a Paragraph group."""

    @abstractmethod
    def visit_heading(self, node: Group) -> Any:
        """Visit a Heading group."""

    @abstractmethod
    def visit_block_quote(self, node: Group) -> Any:
        """Visit a BlockQuote group."""

    @abstractmethod
    def visit_code_block(self, node: Group) -> Any:
        """Visit a CodeBlock group."""

    @abstractmethod
    def visit_html_block(self, node: Group) -> Any:
        """Visit an HtmlBlock group."""

    @abstractmethod
    def visit_list(self, node: Group) -> Any:
        """Visit a List group."""

    @abstractmethod
    def visit_item(self, node: Group) -> Any:
        """Visit an Item group."""

    @abstractmethod
    def visit_table(self, node: Group) -> Any:
        """Visit a Table group."""

    @abstractmethod
    def visit_table_head(self, node: Group) -> Any:
        """Visit a TableHead group."""

    @abstractmethod
    def visit_table_row(self, node: Group) -> Any:
        """Visit a TableRow group."""

    @abstractmethod
    def visit_table_cell(self, node: Group) -> Any:
        """Visit a TableCell group."""

    @abstractmethod
    def visit_emphasis(self, node: Group) -> Any:
        """Visit an Emphasis group."""

    @abstractmethod
    def visit_strong(self, node: Group) -> Any:
        """Visit a Strong group."""

    @abstractmethod
    def visit_strikethrough(self, node: Group) -> Any:
        """Visit a Strikethrough group."""

    @abstractmethod
    def visit_link(self, node: Group) -> Any:
        """Visit a Link group."""

    @abstractmethod
    def visit_image(self, node: Group) -> Any:
        """Visit an Image group."""

    def visit_footnote_definition(self, node: Group) -> Any:
        """Footnotes are disabled."""
        raise disabled_feature(node)

    def visit_metadata_block(self, node: Group) -> Any:
        """Metadata blocks are disabled."""
        raise disabled_feature(node)


class EventHandler(LeafVisitor):
    """Abstract base class for event stream consumers.

    Subclasses implement a ``start_*`` and ``end_*`` method per tag. Feed
    events one at a time with ``handle`` or a whole stream with ``run``.

    """

    def handle(self, event: Event) -> Any:
        """Dispatch one event."""
        return dispatch_event(event, self)

    def run(self, events: Iterable[Event]) -> None:
        """Dispatch every event of a stream in order."""
        for event in events:
            self.handle(event)

    @abstractmethod
    def start_paragraph(self, tag: Tag) -> Any:
        """Open a Paragraph."""

    @abstractmethod
    def end_paragraph(self, tag: Tag) -> Any:
        """Close a Paragraph."""

    @abstractmethod
    def start_heading(self, tag: Tag) -> Any:
        """Open a Heading."""

    @abstractmethod
    def end_heading(self, tag: Tag) -> Any:
        """Close a Heading."""

    @abstractmethod
    def start_block_quote(self, tag: Tag) -> Any:
        """Open a BlockQuote."""

    @abstractmethod
    def end_block_quote(self, tag: Tag) -> Any:
        """Close a BlockQuote."""

    @abstractmethod
    def start_code_block(self, tag: Tag) -> Any:
        """Open a CodeBlock."""

    @abstractmethod
    def end_code_block(self, tag: Tag) -> Any:
        """Close a CodeBlock."""

    @abstractmethod
    def start_html_block(self, tag: Tag) -> Any:
        """Open an HtmlBlock."""

    @abstractmethod
    def end_html_block(self, tag: Tag) -> Any:
        """Close an HtmlBlock."""

    @abstractmethod
    def start_list(self, tag: Tag) -> Any:
        """Open a List."""

    @abstractmethod
    def end_list(self, tag: Tag) -> Any:
        """Close a List."""

    @abstractmethod
    def start_item(self, tag: Tag) -> Any:
        """Open an Item."""

    @abstractmethod
    def end_item(self, tag: Tag) -> Any:
        """Close an Item."""

    @abstractmethod
    def start_table(self, tag: Tag) -> Any:
        """Open a Table."""

    @abstractmethod
    def end_table(self, tag: Tag) -> Any:
        """Close a Table."""

    @abstractmethod
    def start_table_head(self, tag: Tag) -> Any:
        """Open a TableHead."""

    @abstractmethod
    def end_table_head(self, tag: Tag) -> Any:
        """Close a TableHead."""

    @abstractmethod
    def start_table_row(self, tag: Tag) -> Any:
        """Open a TableRow."""

    @abstractmethod
    def end_table_row(self, tag: Tag) -> Any:
        """Close a TableRow."""

    @abstractmethod
    def start_table_cell(self, tag: Tag) -> Any:
        """Open a TableCell."""

    @abstractmethod
    def end_table_cell(self, tag: Tag) -> Any:
        """Close a TableCell."""

    @abstractmethod
    def start_emphasis(self, tag: Tag) -> Any:
        """Open an Emphasis."""

    @abstractmethod
    def end_emphasis(self, tag: Tag) -> Any:
        """Close an Emphasis."""

    @abstractmethod
    def start_strong(self, tag: Tag) -> Any:
        """Open a Strong."""

    @abstractmethod
    def end_strong(self, tag: Tag) -> Any:
        """Close a Strong."""

    @abstractmethod
    def start_strikethrough(self, tag: Tag) -> Any:
        """Open a Strikethrough."""

    @abstractmethod
    def end_strikethrough(self, tag: Tag) -> Any:
        """Close a Strikethrough."""

    @abstractmethod
    def start_link(self, tag: Tag) -> Any:
        """Open a Link."""

    @abstractmethod
    def end_link(self, tag: Tag) -> Any:
        """Close a Link."""

    @abstractmethod
    def start_image(self, tag: Tag) -> Any:
        """Open an Image."""

    @abstractmethod
    def end_image(self, tag: Tag) -> Any:
        """Close an Image."""

    def start_footnote_definition(self, tag: FootnoteDefinition) -> Any:
        """Footnotes are disabled."""
        raise disabled_feature(tag)

    def end_footnote_definition(self, tag: FootnoteDefinition) -> Any:
        """Footnotes are disabled."""
        raise disabled_feature(tag)

    def start_metadata_block(self, tag: MetadataBlock) -> Any:
        """Metadata blocks are disabled."""
        raise disabled_feature(tag)

    def end_metadata_block(self, tag: MetadataBlock) -> Any:
        """Metadata blocks are disabled."""
        raise disabled_feature(tag)
