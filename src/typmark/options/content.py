#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the content-tree renderer."""

from __future__ import annotations

from dataclasses import dataclass, field

from typmark.constants import DEFAULT_CODE_BLOCK_FIGURE
from typmark.options.base import BaseRendererOptions


# src/typmark/options/content.py
@dataclass(frozen=True)
class ContentRendererOptions(BaseRendererOptions):
    """Configuration options for rendering markup to a content tree.

    Parameters
    ----------
    code_block_figure : bool, default True
        Wrap code blocks in a ``Figure`` container, as tables are.

    """

    code_block_figure: bool = field(
        default=DEFAULT_CODE_BLOCK_FIGURE,
        metadata={"help": "Wrap code blocks in a figure container", "importance": "advanced"},
    )
