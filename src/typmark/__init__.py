"""typmark - Markup with Typst math, rendered to HTML or to a content tree.

typmark reads a CommonMark dialect with pipe tables, strikethrough, smart
punctuation and ``$...$`` / ``$$...$$`` math, and renders it to one of two
targets:

- **HTML**: a single pass over the event stream. Code blocks are highlighted
  with CSS classes, math is typeset to inline SVG and raw HTML passes
  through. Math failures are collected across the whole document.
- **Content tree**: a structured tree for a downstream layout engine. Math is
  evaluated to content values. Raw HTML is rejected and the first error
  aborts the render.

Requirements
------------
- Python 3.10+
- markdown-it-py and mdit-py-plugins (tokenizer), pygments (highlighting),
  typst (math)

Examples
--------
Render HTML:

    >>> from typmark import render_html
    >>> html = render_html("Euler: $e^(pi i) + 1 = 0$")

Collect every math diagnostic instead of raising:

    >>> from typmark import render_html_result
    >>> result = render_html_result("$a + $ and $(b$")
    >>> len(result.diagnostics) > 0
    True

Render a content tree:

    >>> from typmark import render_content
    >>> tree = render_content("# Title\\n\\n1. one\\n2. two")

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "typmark requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from typing import Optional  # noqa: E402

from typmark.content import ContentNode, content_to_dict, content_to_json  # noqa: E402
from typmark.exceptions import (  # noqa: E402
    DependencyError,
    EvaluationError,
    InternalInvariantError,
    InvalidOptionsError,
    MalformedTableError,
    RenderingError,
    TypesettingError,
    TypmarkError,
    UnsupportedFeatureError,
    UnsupportedHtmlError,
    ValidationError,
)
from typmark.math import Diagnostic, EvaluationContext, MathEvaluator  # noqa: E402
from typmark.options import (  # noqa: E402
    ContentRendererOptions,
    HtmlRendererOptions,
    MarkdownParserOptions,
    MathOptions,
)
from typmark.parsers import parse_events, parse_tree  # noqa: E402
from typmark.renderers import ContentTreeRenderer, HtmlRenderResult, HtmlStreamRenderer  # noqa: E402


def _evaluator_for(context: Optional[EvaluationContext]) -> Optional[MathEvaluator]:
    return MathEvaluator(context) if context is not None else None


def render_content(
    text: str,
    context: Optional[EvaluationContext] = None,
    options: Optional[ContentRendererOptions] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> ContentNode:
    """Render markup to a content tree.

    Parameters
    ----------
    text : str
        Markup source
    context : EvaluationContext, optional
        Evaluation context for math spans. The default Typst context is used
        when omitted.
    options : ContentRendererOptions, optional
        Rendering options
    parser_options : MarkdownParserOptions, optional
        Tokenizer options

    Returns
    -------
    ContentNode
        Root sequence of the content tree

    Raises
    ------
    UnsupportedHtmlError
        If the markup contains raw HTML
    TypesettingError
        If a math span fails to evaluate (the first failure aborts)
    MalformedTableError
        If a table is structurally malformed
    UnsupportedFeatureError
        If the markup contains an image

    """
    renderer = ContentTreeRenderer(options, evaluator=_evaluator_for(context), parser_options=parser_options)
    return renderer.render_content(text)


def render_content_json(
    text: str,
    context: Optional[EvaluationContext] = None,
    options: Optional[ContentRendererOptions] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> str:
    """Render markup to a content tree serialized as JSON."""
    return content_to_json(render_content(text, context, options, parser_options))


def render_html_result(
    text: str,
    options: Optional[HtmlRendererOptions] = None,
    evaluator: Optional[MathEvaluator] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> HtmlRenderResult:
    """Render markup to HTML, collecting every math diagnostic.

    Never raises for math failures: failing spans are left empty and their
    diagnostics are returned alongside the HTML.
    """
    renderer = HtmlStreamRenderer(options, evaluator=evaluator, parser_options=parser_options)
    return renderer.render_result(text)


def render_html(
    text: str,
    options: Optional[HtmlRendererOptions] = None,
    evaluator: Optional[MathEvaluator] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> str:
    """Render markup to HTML.

    Parameters
    ----------
    text : str
        Markup source
    options : HtmlRendererOptions, optional
        Rendering options
    evaluator : MathEvaluator, optional
        Math evaluator; the process-wide evaluator when omitted
    parser_options : MarkdownParserOptions, optional
        Tokenizer options

    Returns
    -------
    str
        HTML fragment, or a full document if ``options.standalone`` is set

    Raises
    ------
    TypesettingError
        If any math span failed. The exception carries every diagnostic of
        the pass and the rejected HTML as ``partial_html``.

    """
    return render_html_result(text, options, evaluator, parser_options).unwrap()


__all__ = [
    "__version__",
    # Rendering
    "render_content",
    "render_content_json",
    "render_html",
    "render_html_result",
    "parse_events",
    "parse_tree",
    "content_to_dict",
    "content_to_json",
    "ContentTreeRenderer",
    "HtmlStreamRenderer",
    "HtmlRenderResult",
    "MathEvaluator",
    "EvaluationContext",
    "Diagnostic",
    "ContentNode",
    # Options
    "ContentRendererOptions",
    "HtmlRendererOptions",
    "MarkdownParserOptions",
    "MathOptions",
    # Exceptions
    "TypmarkError",
    "ValidationError",
    "InvalidOptionsError",
    "RenderingError",
    "UnsupportedHtmlError",
    "TypesettingError",
    "MalformedTableError",
    "UnsupportedFeatureError",
    "EvaluationError",
    "InternalInvariantError",
    "DependencyError",
]
