"""HTML-related utility helpers."""

from __future__ import annotations

import re
from html import escape as _html_escape

_XML_PROLOG = re.compile(r"^\s*<\?xml[^>]*\?>\s*")
_DOCTYPE = re.compile(r"^\s*<!DOCTYPE[^>]*>\s*", re.IGNORECASE)


def escape_html(text: str, *, quote: bool = False) -> str:
    """Escape HTML special characters in element content.

    Quotes are left alone unless ``quote`` is set, matching CommonMark's
    reference output for text nodes.
    """
    return _html_escape(text, quote=quote)


def escape_attribute(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return _html_escape(value, quote=True)


def svg_fragment(svg: bytes | str) -> str:
    """Turn a standalone SVG document into an embeddable fragment.

    Strips the XML prolog and any doctype so the markup can be placed
    directly inside an HTML element.
    """
    text = svg.decode("utf-8") if isinstance(svg, bytes) else svg
    text = _XML_PROLOG.sub("", text, count=1)
    text = _DOCTYPE.sub("", text, count=1)
    return text.strip()
