#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/content/serialization.py
"""JSON serialization of the content tree."""

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any

from typmark.content.nodes import ContentNode
from typmark.math.context import ContentValue


def _convert(value: Any) -> Any:
    if isinstance(value, ContentNode):
        return content_to_dict(value)
    if isinstance(value, ContentValue):
        return value.to_dict()
    if isinstance(value, (tuple, list)):
        return [_convert(item) for item in value]
    return value


def content_to_dict(node: ContentNode) -> dict[str, Any]:
    """Convert a content node and its descendants to plain data.

    Parameters
    ----------
    node : ContentNode
        Root of the tree to convert

    Returns
    -------
    dict
        ``{"type": node.kind, <field>: <value>, ...}``, with nested nodes
        converted the same way and tuples turned into lists

    Examples
    --------
        >>> from typmark.content.nodes import Text, Strong
        >>> content_to_dict(Strong(body=Text("hi")))
        {'type': 'strong', 'body': {'type': 'text', 'text': 'hi'}}

    """
    data: dict[str, Any] = {"type": node.kind}
    for f in fields(node):  # type: ignore[arg-type]
        data[f.name] = _convert(getattr(node, f.name))
    return data


def content_to_json(node: ContentNode, indent: int | None = 2) -> str:
    """Serialize a content tree to a JSON string."""
    return json.dumps(content_to_dict(node), indent=indent, ensure_ascii=False)


__all__ = ["content_to_dict", "content_to_json"]
