#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/ast/nodes.py
"""Markup tree node classes.

This module defines the tagged-union data contract produced at the tokenizer
boundary. The tree is made of two kinds of nodes:

- ``Group`` nodes, which pair a ``Tag`` with an ordered tuple of children
- Leaf nodes, which carry text or mark a break

Node Hierarchy
--------------
Tags (carried by ``Group``):
    - Block: Paragraph, Heading, BlockQuote, CodeBlock, HtmlBlock, List,
      Item, Table, TableHead, TableRow, TableCell
    - Inline: Emphasis, Strong, Strikethrough, Link, Image
    - Disabled: FootnoteDefinition, MetadataBlock

Leaves:
    - Text, Code, Html, InlineHtml, SoftBreak, HardBreak, Rule,
      InlineMath, DisplayMath
    - Disabled: FootnoteReference, TaskListMarker

Disabled variants exist so that a misconfigured tokenizer is reported as an
internal invariant violation rather than silently dropped. With the fixed
dialect they never appear.

Every tag and leaf class has a ``visit_name``. Visitors dispatch on it, so
adding a tag means adding one abstract method to each visitor base class.

All nodes are frozen: a tree is built once per render call and never mutated.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union

from typmark.constants import Alignment

# ============================================================================
# Tags
# ============================================================================


class Tag(ABC):
    """Base class for the tags carried by ``Group`` nodes and start/end events."""

    visit_name: ClassVar[str]
    disabled: ClassVar[bool] = False


@dataclass(frozen=True)
class Paragraph(Tag):
    """A paragraph of inline content."""

    visit_name: ClassVar[str] = "paragraph"


@dataclass(frozen=True)
class Heading(Tag):
    """An ATX or setext heading.

    Parameters
    ----------
    level : int
        Heading level, 1 through 6

    """

    level: int
    visit_name: ClassVar[str] = "heading"

    def __post_init__(self) -> None:
        """Reject levels outside 1..6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}")


@dataclass(frozen=True)
class BlockQuote(Tag):
    """A block quote containing block-level children."""

    visit_name: ClassVar[str] = "block_quote"


@dataclass(frozen=True)
class CodeBlock(Tag):
    """A fenced or indented code block.

    Parameters
    ----------
    fenced : bool
        True for fenced blocks, False for indented ones
    lang : str or None
        First word of the fence info string, None when absent or empty

    """

    fenced: bool = True
    lang: Optional[str] = None
    visit_name: ClassVar[str] = "code_block"


@dataclass(frozen=True)
class HtmlBlock(Tag):
    """A block of raw HTML. Its children are ``Html`` leaves."""

    visit_name: ClassVar[str] = "html_block"


@dataclass(frozen=True)
class List(Tag):
    """An ordered or unordered list.

    Parameters
    ----------
    start : int or None
        Number of the first item for ordered lists, None for bullet lists

    """

    start: Optional[int] = None
    visit_name: ClassVar[str] = "list"

    @property
    def ordered(self) -> bool:
        """Whether the list is numbered."""
        return self.start is not None


@dataclass(frozen=True)
class Item(Tag):
    """A list item."""

    visit_name: ClassVar[str] = "item"


@dataclass(frozen=True)
class Table(Tag):
    """A pipe table.

    The first child of a table group is a ``TableHead``; every later child is
    a ``TableRow``.

    Parameters
    ----------
    column_alignment : tuple of Alignment
        One entry per header cell

    """

    column_alignment: tuple[Alignment, ...] = ()
    visit_name: ClassVar[str] = "table"


@dataclass(frozen=True)
class TableHead(Tag):
    """The header of a table. Its children are ``TableCell`` groups."""

    visit_name: ClassVar[str] = "table_head"


@dataclass(frozen=True)
class TableRow(Tag):
    """A body row of a table."""

    visit_name: ClassVar[str] = "table_row"


@dataclass(frozen=True)
class TableCell(Tag):
    """A header or body cell."""

    visit_name: ClassVar[str] = "table_cell"


@dataclass(frozen=True)
class Emphasis(Tag):
    """Emphasized inline content."""

    visit_name: ClassVar[str] = "emphasis"


@dataclass(frozen=True)
class Strong(Tag):
    """Strongly emphasized inline content."""

    visit_name: ClassVar[str] = "strong"


@dataclass(frozen=True)
class Strikethrough(Tag):
    """Struck-through inline content."""

    visit_name: ClassVar[str] = "strikethrough"


@dataclass(frozen=True)
class Link(Tag):
    """A hyperlink.

    Parameters
    ----------
    dest_url : str
        Link destination
    title : str, default = ""
        Optional link title

    """

    dest_url: str
    title: str = ""
    visit_name: ClassVar[str] = "link"


@dataclass(frozen=True)
class Image(Tag):
    """An image. Parsed but not rendered by either backend."""

    dest_url: str
    title: str = ""
    visit_name: ClassVar[str] = "image"


@dataclass(frozen=True)
class FootnoteDefinition(Tag):
    """Footnote definition. Disabled in the dialect."""

    label: str
    visit_name: ClassVar[str] = "footnote_definition"
    disabled: ClassVar[bool] = True


@dataclass(frozen=True)
class MetadataBlock(Tag):
    """Front-matter metadata block. Disabled in the dialect."""

    kind: str = "yaml"
    visit_name: ClassVar[str] = "metadata_block"
    disabled: ClassVar[bool] = True


# ============================================================================
# Nodes
# ============================================================================


class Node(ABC):
    """Base class for all markup tree nodes."""

    visit_name: ClassVar[str]
    disabled: ClassVar[bool] = False

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """


@dataclass(frozen=True)
class Group(Node):
    """A tagged container node.

    Parameters
    ----------
    tag : Tag
        What kind of container this is
    children : tuple of Node
        Ordered child nodes

    """

    tag: Tag
    children: tuple[Node, ...] = field(default_factory=tuple)

    @property
    def visit_name(self) -> str:  # type: ignore[override]
        """Dispatch name of the carried tag."""
        return self.tag.visit_name

    @property
    def disabled(self) -> bool:  # type: ignore[override]
        """Whether the carried tag belongs to a disabled feature."""
        return self.tag.disabled

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_<tag name>(self)``."""
        return getattr(visitor, f"visit_{self.tag.visit_name}")(self)


class Leaf(Node):
    """Base class for nodes without children."""

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_<leaf name>(self)``."""
        return getattr(visitor, f"visit_{self.visit_name}")(self)


@dataclass(frozen=True)
class Text(Leaf):
    """Plain text."""

    text: str
    visit_name: ClassVar[str] = "text"


@dataclass(frozen=True)
class Code(Leaf):
    """An inline code span."""

    text: str
    visit_name: ClassVar[str] = "code"


@dataclass(frozen=True)
class Html(Leaf):
    """Raw HTML inside an ``HtmlBlock``."""

    text: str
    visit_name: ClassVar[str] = "html"


@dataclass(frozen=True)
class InlineHtml(Leaf):
    """Raw HTML inside inline content."""

    text: str
    visit_name: ClassVar[str] = "inline_html"


@dataclass(frozen=True)
class SoftBreak(Leaf):
    """A line ending inside a paragraph."""

    visit_name: ClassVar[str] = "soft_break"


@dataclass(frozen=True)
class HardBreak(Leaf):
    """A forced line break."""

    visit_name: ClassVar[str] = "hard_break"


@dataclass(frozen=True)
class Rule(Leaf):
    """A thematic break."""

    visit_name: ClassVar[str] = "rule"


@dataclass(frozen=True)
class InlineMath(Leaf):
    """An inline math span, ``$...$``. Holds the raw expression source."""

    source: str
    visit_name: ClassVar[str] = "inline_math"


@dataclass(frozen=True)
class DisplayMath(Leaf):
    """A display math block, ``$$...$$``. Holds the raw expression source."""

    source: str
    visit_name: ClassVar[str] = "display_math"


@dataclass(frozen=True)
class FootnoteReference(Leaf):
    """Footnote reference. Disabled in the dialect."""

    label: str
    visit_name: ClassVar[str] = "footnote_reference"
    disabled: ClassVar[bool] = True


@dataclass(frozen=True)
class TaskListMarker(Leaf):
    """Task list checkbox. Disabled in the dialect."""

    checked: bool
    visit_name: ClassVar[str] = "task_list_marker"
    disabled: ClassVar[bool] = True


MarkupNode = Node

LeafNode = Union[
    Text,
    Code,
    Html,
    InlineHtml,
    SoftBreak,
    HardBreak,
    Rule,
    InlineMath,
    DisplayMath,
    FootnoteReference,
    TaskListMarker,
]
