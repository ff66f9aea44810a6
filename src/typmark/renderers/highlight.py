#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/renderers/highlight.py
"""Syntax highlighting for code blocks on the HTML path.

Code block lines are fed one at a time while the HTML pass walks the event
stream and highlighted as a whole when the block closes, so that multi-line
constructs (strings, comments) keep their state across lines. Output uses
CSS classes only; ``stylesheet`` returns matching rules.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from typmark.constants import DEPS_HIGHLIGHT, PLAIN_TEXT_LEXER
from typmark.resources import ResourceCache, get_resources
from typmark.utils.decorators import requires_dependencies
from typmark.utils.html_utils import escape_html

logger = logging.getLogger(__name__)


def resolve_lexer(lang: Optional[str], resources: ResourceCache | None = None) -> Any:
    """Find the grammar for a fence language.

    Lookup goes by grammar name, then by file extension, and falls back to
    plain text. Line terminators are kept exactly as given.

    Parameters
    ----------
    lang : str or None
        Language tag from the fence info string
    resources : ResourceCache, optional
        Grammar index; the shared cache when omitted

    Returns
    -------
    pygments.lexer.Lexer
        Lexer instance

    """
    from pygments.lexers import get_lexer_by_name
    from pygments.util import ClassNotFound

    resources = resources or get_resources()
    alias = resources.resolve_lexer_alias(lang)
    if alias is None:
        if lang:
            logger.warning(f"Unknown code block language '{lang}', highlighting as plain text")
        alias = PLAIN_TEXT_LEXER

    try:
        return get_lexer_by_name(alias, stripnl=False, ensurenl=False)
    except ClassNotFound:
        logger.warning(f"Grammar '{alias}' could not be loaded, highlighting as plain text")
        return get_lexer_by_name(PLAIN_TEXT_LEXER, stripnl=False, ensurenl=False)


class CodeHighlighter:
    """Accumulate the lines of one code block and highlight them.

    Parameters
    ----------
    lang : str or None
        Language tag of the block
    enabled : bool, default True
        When False the code is only escaped
    class_prefix : str, default ""
        Prefix for the token classes

    """

    def __init__(self, lang: Optional[str], enabled: bool = True, class_prefix: str = ""):
        self.lang = lang
        self.enabled = enabled
        self.class_prefix = class_prefix
        self._lines: list[str] = []

    def feed(self, line: str) -> None:
        """Add one line, terminator included."""
        self._lines.append(line)

    @property
    def source(self) -> str:
        return "".join(self._lines)

    @requires_dependencies("highlight", DEPS_HIGHLIGHT)
    def finish(self) -> str:
        """Return the highlighted block as HTML with class-annotated spans."""
        if not self.enabled:
            return escape_html(self.source)

        from pygments import highlight
        from pygments.formatters import HtmlFormatter

        lexer = resolve_lexer(self.lang)
        formatter = HtmlFormatter(nowrap=True, classprefix=self.class_prefix)
        return highlight(self.source, lexer, formatter)


@requires_dependencies("highlight", DEPS_HIGHLIGHT)
def stylesheet(selector: str, style: str = "default", class_prefix: str = "") -> str:
    """CSS rules for the token classes, scoped under ``selector``.

    Examples
    --------
        >>> css = stylesheet(".highlight")
        >>> ".highlight .k" in css
        True

    """
    from pygments.formatters import HtmlFormatter

    return HtmlFormatter(style=style, classprefix=class_prefix).get_style_defs(selector)


__all__ = ["CodeHighlighter", "resolve_lexer", "stylesheet"]
