#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/parsers/__init__.py
"""Tokenizer adapters producing the typmark event stream and markup tree."""

from typmark.parsers.markdown import MarkdownTokenizer, parse_events, parse_tree

__all__ = ["MarkdownTokenizer", "parse_events", "parse_tree"]
