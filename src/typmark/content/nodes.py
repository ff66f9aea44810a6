#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/content/nodes.py
"""Content tree handed to a downstream layout engine.

The content tree is the structured output of the content-tree renderer. It
mirrors the markup tags but carries layout-oriented data: resolved list item
numbers, table column counts and evaluated math. Raw HTML never appears in
it.

All nodes are immutable. Each node class has a ``kind`` used as the
``"type"`` key when serialized.

"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple

from typmark.constants import Alignment
from typmark.math.context import ContentValue


class ContentNode(ABC):
    """Base class for all content tree nodes."""

    kind: ClassVar[str]


@dataclass(frozen=True)
class Sequence(ContentNode):
    """Ordered run of sibling nodes."""

    children: Tuple[ContentNode, ...] = field(default_factory=tuple)
    kind: ClassVar[str] = "sequence"


@dataclass(frozen=True)
class ParBreak(ContentNode):
    """Paragraph boundary."""

    kind: ClassVar[str] = "parbreak"


@dataclass(frozen=True)
class Text(ContentNode):
    text: str
    kind: ClassVar[str] = "text"


@dataclass(frozen=True)
class Space(ContentNode):
    """Inter-word space standing in for a soft line break."""

    kind: ClassVar[str] = "space"


@dataclass(frozen=True)
class LineBreak(ContentNode):
    kind: ClassVar[str] = "linebreak"


@dataclass(frozen=True)
class Rule(ContentNode):
    """Full-width horizontal line."""

    kind: ClassVar[str] = "rule"


@dataclass(frozen=True)
class Code(ContentNode):
    """Inline raw text."""

    text: str
    kind: ClassVar[str] = "code"


@dataclass(frozen=True)
class CodeBlock(ContentNode):
    """Raw text block.

    Parameters
    ----------
    text : str
        Concatenated block content, line terminators included
    lang : str, optional
        Language tag from the fence info string

    """

    text: str
    lang: Optional[str] = None
    kind: ClassVar[str] = "code_block"


@dataclass(frozen=True)
class Heading(ContentNode):
    level: int
    body: ContentNode
    kind: ClassVar[str] = "heading"

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}")


@dataclass(frozen=True)
class Figure(ContentNode):
    """Framed block container used for block quotes, tables and code blocks.

    Parameters
    ----------
    body : ContentNode
        Framed content
    align : Alignment, default "none"
        Horizontal alignment of the body inside the frame

    """

    body: ContentNode
    align: Alignment = "none"
    kind: ClassVar[str] = "figure"


@dataclass(frozen=True)
class ListItem(ContentNode):
    """List entry. ``number`` is set for ordered lists only."""

    body: ContentNode
    number: Optional[int] = None
    kind: ClassVar[str] = "list_item"


@dataclass(frozen=True)
class List(ContentNode):
    """Bullet or numbered list.

    Parameters
    ----------
    items : tuple of ListItem
        Entries in document order
    ordered : bool, default False
        Whether entries are numbered
    start : int, optional
        Number of the first entry, ordered lists only

    """

    items: Tuple[ListItem, ...]
    ordered: bool = False
    start: Optional[int] = None
    kind: ClassVar[str] = "list"


@dataclass(frozen=True)
class TableCell(ContentNode):
    body: ContentNode
    kind: ClassVar[str] = "table_cell"


@dataclass(frozen=True)
class Table(ContentNode):
    """Grid of cells with one header row.

    Parameters
    ----------
    column_count : int
        Number of header cells
    alignments : tuple of Alignment
        One alignment per column
    header_row : tuple of TableCell
        Header cells
    body_rows : tuple of tuple of TableCell
        Body rows; a row may hold fewer cells than ``column_count``

    """

    column_count: int
    alignments: Tuple[Alignment, ...]
    header_row: Tuple[TableCell, ...]
    body_rows: Tuple[Tuple[TableCell, ...], ...] = field(default_factory=tuple)
    kind: ClassVar[str] = "table"


@dataclass(frozen=True)
class Emphasis(ContentNode):
    body: ContentNode
    kind: ClassVar[str] = "emphasis"


@dataclass(frozen=True)
class Strong(ContentNode):
    body: ContentNode
    kind: ClassVar[str] = "strong"


@dataclass(frozen=True)
class Strike(ContentNode):
    body: ContentNode
    kind: ClassVar[str] = "strike"


@dataclass(frozen=True)
class Link(ContentNode):
    url: str
    body: ContentNode
    kind: ClassVar[str] = "link"


@dataclass(frozen=True)
class Math(ContentNode):
    """Evaluated math.

    Parameters
    ----------
    value : ContentValue
        Result of the evaluator
    display : bool, default False
        Whether this is a display (block) equation

    """

    value: ContentValue
    display: bool = False
    kind: ClassVar[str] = "math"
