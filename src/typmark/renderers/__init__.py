#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/renderers/__init__.py
"""Renderers for the two typmark output targets."""

from typmark.renderers.base import BaseRenderer
from typmark.renderers.content import ContentTreeRenderer
from typmark.renderers.highlight import CodeHighlighter, resolve_lexer, stylesheet
from typmark.renderers.html import HtmlRenderResult, HtmlStreamRenderer

__all__ = [
    "BaseRenderer",
    "CodeHighlighter",
    "ContentTreeRenderer",
    "HtmlRenderResult",
    "HtmlStreamRenderer",
    "resolve_lexer",
    "stylesheet",
]
