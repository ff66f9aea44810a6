#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from typmark.constants import (
    DEFAULT_HTML_CODE_CSS_CLASS,
    DEFAULT_HTML_CSS_CLASS_PREFIX,
    DEFAULT_HTML_HIGHLIGHT_CODE,
    DEFAULT_HTML_LANGUAGE,
    DEFAULT_HTML_MATH_CSS_CLASS,
    DEFAULT_HTML_PYGMENTS_STYLE,
    DEFAULT_HTML_STANDALONE,
    DEFAULT_HTML_TITLE,
)
from typmark.options.base import BaseRendererOptions

_CSS_IDENTIFIER = re.compile(r"^-?[_a-zA-Z][_a-zA-Z0-9-]*$")


# src/typmark/options/html.py
@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for rendering markup to HTML.

    Parameters
    ----------
    highlight_code : bool, default True
        Run fenced code through the syntax highlighter. When False, code is
        escaped and emitted without spans.
    code_css_class : str, default "highlight"
        Class of the ``<pre>`` element wrapping a code block.
    css_class_prefix : str, default ""
        Prefix for the token classes emitted by the highlighter
        (e.g. ``"tok-"`` gives ``tok-k`` instead of ``k``).
    math_css_class : str, default "math"
        Base class of the elements wrapping rendered math.
    standalone : bool, default False
        Wrap the fragment in a complete HTML document with an embedded
        stylesheet for the highlighter classes.
    title : str, default "Document"
        Document title used when standalone.
    language : str, default "en"
        ``lang`` attribute used when standalone.
    pygments_style : str, default "default"
        Highlighter style used for the embedded stylesheet.

    """

    highlight_code: bool = field(
        default=DEFAULT_HTML_HIGHLIGHT_CODE,
        metadata={"help": "Syntax highlight fenced code blocks", "importance": "core"},
    )
    code_css_class: str = field(
        default=DEFAULT_HTML_CODE_CSS_CLASS,
        metadata={"help": "CSS class of the <pre> around code blocks", "importance": "advanced"},
    )
    css_class_prefix: str = field(
        default=DEFAULT_HTML_CSS_CLASS_PREFIX,
        metadata={"help": "Prefix for highlighter token classes", "importance": "advanced"},
    )
    math_css_class: str = field(
        default=DEFAULT_HTML_MATH_CSS_CLASS,
        metadata={"help": "CSS class of the elements wrapping math", "importance": "advanced"},
    )
    standalone: bool = field(
        default=DEFAULT_HTML_STANDALONE,
        metadata={"help": "Emit a complete HTML document", "importance": "core"},
    )
    title: str = field(
        default=DEFAULT_HTML_TITLE,
        metadata={"help": "Document title when standalone", "importance": "core"},
    )
    language: str = field(
        default=DEFAULT_HTML_LANGUAGE,
        metadata={"help": "Document language when standalone", "importance": "advanced"},
    )
    pygments_style: str = field(
        default=DEFAULT_HTML_PYGMENTS_STYLE,
        metadata={"help": "Highlighter style for the embedded stylesheet", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate CSS class names.

        Raises
        ------
        ValueError
            If a class name is not a valid CSS identifier.

        """
        for name in ("code_css_class", "math_css_class"):
            value = getattr(self, name)
            if not _CSS_IDENTIFIER.match(value):
                raise ValueError(f"{name} must be a CSS identifier, got {value!r}")
        if self.css_class_prefix and not re.match(r"^[_a-zA-Z0-9-]*$", self.css_class_prefix):
            raise ValueError(f"css_class_prefix contains invalid characters: {self.css_class_prefix!r}")
