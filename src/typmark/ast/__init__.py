#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/ast/__init__.py
"""Markup tree model for typmark.

This package holds the data contract between the tokenizer and the
renderers: tag and node classes, the flat event stream, the builder that
folds events into a tree, and the visitor base classes both renderers derive
from.

Examples
--------
    >>> from typmark.ast import Group, Paragraph, Text
    >>> para = Group(tag=Paragraph(), children=(Text("Hello"),))

"""

from typmark.ast.builder import TreeBuilder, build_tree
from typmark.ast.events import End, Event, Start, dispatch_event, iter_events
from typmark.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    DisplayMath,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Group,
    HardBreak,
    Heading,
    Html,
    HtmlBlock,
    Image,
    InlineHtml,
    InlineMath,
    Item,
    Leaf,
    Link,
    List,
    MarkupNode,
    MetadataBlock,
    Node,
    Paragraph,
    Rule,
    SoftBreak,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableHead,
    TableRow,
    Tag,
    TaskListMarker,
    Text,
)
from typmark.ast.visitors import EventHandler, NodeVisitor

__all__ = [
    # Tags
    "Tag",
    "Paragraph",
    "Heading",
    "BlockQuote",
    "CodeBlock",
    "HtmlBlock",
    "List",
    "Item",
    "Table",
    "TableHead",
    "TableRow",
    "TableCell",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Link",
    "Image",
    "FootnoteDefinition",
    "MetadataBlock",
    # Nodes
    "Node",
    "MarkupNode",
    "Group",
    "Leaf",
    "Text",
    "Code",
    "Html",
    "InlineHtml",
    "SoftBreak",
    "HardBreak",
    "Rule",
    "InlineMath",
    "DisplayMath",
    "FootnoteReference",
    "TaskListMarker",
    # Events
    "Event",
    "Start",
    "End",
    "dispatch_event",
    "iter_events",
    # Building and traversal
    "TreeBuilder",
    "build_tree",
    "NodeVisitor",
    "EventHandler",
]
