#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/options/__init__.py
"""Option classes for typmark components."""

from typmark.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from typmark.options.content import ContentRendererOptions
from typmark.options.html import HtmlRendererOptions
from typmark.options.markdown import MarkdownParserOptions
from typmark.options.math import MathOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "ContentRendererOptions",
    "HtmlRendererOptions",
    "MarkdownParserOptions",
    "MathOptions",
]
