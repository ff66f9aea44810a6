#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for typmark.

This module centralizes hardcoded values and default configuration constants
used across the library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markup Dialect - Tokenizer configuration
3. Math Evaluation - Typst templates and evaluation defaults
4. HTML Rendering - HTML output settings
5. Dependencies - Third-party package requirements
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Alignment = Literal["none", "left", "center", "right"]
EvalMode = Literal["math", "markup"]
MathMode = Literal["inline", "display"]
Severity = Literal["error", "warning"]
OutputFormat = Literal["html", "content"]

# =============================================================================
# Markup Dialect
# =============================================================================

# markdown-it preset the dialect is built on
DEFAULT_MARKDOWN_PRESET = "commonmark"
DEFAULT_PARSE_TABLES = True
DEFAULT_PARSE_STRIKETHROUGH = True
DEFAULT_PARSE_MATH = True
DEFAULT_TYPOGRAPHER = True

# markdown-it rules switched on for the typographer
TYPOGRAPHER_RULES = ("replacements", "smartquotes")

# =============================================================================
# Math Evaluation
# =============================================================================

# Auto-sized, zero-margin single page
TYPST_PAGE_PREAMBLE = "#set page(width: auto, height: auto, margin: 0pt)\n"

# Environment variable listing extra font directories (os.pathsep separated)
FONT_PATHS_ENV_VAR = "TYPMARK_FONT_PATHS"

DEFAULT_IGNORE_SYSTEM_FONTS = True

# =============================================================================
# HTML Rendering
# =============================================================================

DEFAULT_HTML_CODE_CSS_CLASS = "highlight"
DEFAULT_HTML_CSS_CLASS_PREFIX = ""
DEFAULT_HTML_HIGHLIGHT_CODE = True
DEFAULT_HTML_MATH_CSS_CLASS = "math"
DEFAULT_HTML_STANDALONE = False
DEFAULT_HTML_TITLE = "Document"
DEFAULT_HTML_PYGMENTS_STYLE = "default"
DEFAULT_HTML_LANGUAGE = "en"

# Fallback grammar when a fence language cannot be resolved
PLAIN_TEXT_LEXER = "text"

# =============================================================================
# Content Rendering
# =============================================================================

DEFAULT_CODE_BLOCK_FIGURE = True

# =============================================================================
# Dependencies
# =============================================================================
# Each entry is a list of tuples: (pip_package, import_name, version_constraint)

DEPS_MARKDOWN = [("markdown-it-py", "markdown_it", ">=3.0.0"), ("mdit-py-plugins", "mdit_py_plugins", ">=0.4.0")]
DEPS_HIGHLIGHT = [("pygments", "pygments", ">=2.15.0")]
DEPS_TYPST = [("typst", "typst", ">=0.13.0")]

# =============================================================================
# CLI
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_RENDERING_ERROR = 7
