#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/content/__init__.py
"""Content tree model produced by the content-tree renderer."""

from typmark.content.nodes import (
    Code,
    CodeBlock,
    ContentNode,
    Emphasis,
    Figure,
    Heading,
    LineBreak,
    Link,
    List,
    ListItem,
    Math,
    ParBreak,
    Rule,
    Sequence,
    Space,
    Strike,
    Strong,
    Table,
    TableCell,
    Text,
)
from typmark.content.serialization import content_to_dict, content_to_json

__all__ = [
    "ContentNode",
    "Sequence",
    "ParBreak",
    "Text",
    "Space",
    "LineBreak",
    "Rule",
    "Code",
    "CodeBlock",
    "Heading",
    "Figure",
    "List",
    "ListItem",
    "Table",
    "TableCell",
    "Emphasis",
    "Strong",
    "Strike",
    "Link",
    "Math",
    "content_to_dict",
    "content_to_json",
]
