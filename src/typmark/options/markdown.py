#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the markup tokenizer.

The dialect is fixed: footnotes, task lists and front matter are never
enabled, and no option here can turn them on.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from typmark.constants import (
    DEFAULT_PARSE_MATH,
    DEFAULT_PARSE_STRIKETHROUGH,
    DEFAULT_PARSE_TABLES,
    DEFAULT_TYPOGRAPHER,
)
from typmark.options.base import BaseParserOptions


# src/typmark/options/markdown.py
@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for tokenizing markup.

    Parameters
    ----------
    parse_tables : bool, default True
        Recognize pipe tables.
    parse_strikethrough : bool, default True
        Recognize ``~~struck~~`` text.
    parse_math : bool, default True
        Recognize ``$inline$`` and ``$$display$$`` math.
    typographer : bool, default True
        Apply smart quotes and typographic replacements to text.

    """

    parse_tables: bool = field(
        default=DEFAULT_PARSE_TABLES,
        metadata={"help": "Recognize pipe tables", "importance": "core"},
    )
    parse_strikethrough: bool = field(
        default=DEFAULT_PARSE_STRIKETHROUGH,
        metadata={"help": "Recognize ~~strikethrough~~ text", "importance": "core"},
    )
    parse_math: bool = field(
        default=DEFAULT_PARSE_MATH,
        metadata={"help": "Recognize $inline$ and $$display$$ math", "importance": "core"},
    )
    typographer: bool = field(
        default=DEFAULT_TYPOGRAPHER,
        metadata={"help": "Smart quotes and typographic replacements", "importance": "advanced"},
    )
