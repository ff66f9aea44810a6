#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/parsers/markdown.py
"""Markup tokenizer adapter.

This module runs markdown-it-py, configured for the fixed typmark dialect,
and converts its token stream into typmark's flat event stream. The nested
markup tree is obtained by folding those events.

The dialect is CommonMark plus pipe tables, strikethrough, ``$``/``$$`` math
and typographic replacements. Footnotes, task lists and front matter are
never enabled; a token belonging to any feature outside the dialect is a
configuration mismatch and raises ``InternalInvariantError``.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional, Sequence

from typmark.ast.builder import build_tree
from typmark.ast.events import End, Event, Start
from typmark.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    DisplayMath,
    Emphasis,
    HardBreak,
    Heading,
    Html,
    HtmlBlock,
    Image,
    InlineHtml,
    InlineMath,
    Item,
    Link,
    List,
    Node,
    Paragraph,
    Rule,
    SoftBreak,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableHead,
    TableRow,
    Tag,
    Text,
)
from typmark.constants import DEFAULT_MARKDOWN_PRESET, DEPS_MARKDOWN, TYPOGRAPHER_RULES, Alignment
from typmark.exceptions import InternalInvariantError
from typmark.options.markdown import MarkdownParserOptions
from typmark.utils.decorators import debug_timer, requires_dependencies

logger = logging.getLogger(__name__)

_TEXT_ALIGN = re.compile(r"text-align:\s*(left|center|right)")


def _cell_alignment(token: Any) -> Alignment:
    style = token.attrGet("style") or ""
    match = _TEXT_ALIGN.search(str(style))
    if match:
        return match.group(1)  # type: ignore[return-value]
    return "none"


def _fence_language(info: str) -> Optional[str]:
    parts = info.strip().split(maxsplit=1)
    return parts[0] if parts else None


class MarkdownTokenizer:
    r"""Tokenize markup into typmark events.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Tokenizer configuration

    Examples
    --------
        >>> tokenizer = MarkdownTokenizer()
        >>> events = tokenizer.parse_events("# Hello\\n\\nThis is **bold**.")
        >>> tree = tokenizer.parse_tree("$e^(pi i) + 1 = 0$")

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the tokenizer with options."""
        self.options = options or MarkdownParserOptions()
        self._md: Any = None
        # Per-call state, reset by parse_events
        self._events: list[Event] = []
        self._open_lists: list[List] = []
        self._open_tables: list[Table] = []
        self._in_table_head = False

    def _create_parser(self) -> Any:
        from markdown_it import MarkdownIt
        from mdit_py_plugins.dollarmath import dollarmath_plugin

        md = MarkdownIt(DEFAULT_MARKDOWN_PRESET, {"typographer": self.options.typographer})
        if self.options.parse_tables:
            md.enable("table")
        if self.options.parse_strikethrough:
            md.enable("strikethrough")
        if self.options.typographer:
            md.enable(list(TYPOGRAPHER_RULES))
        if self.options.parse_math:
            dollarmath_plugin(md, allow_labels=False, double_inline=False)
        return md

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse_events(self, text: str) -> list[Event]:
        """Tokenize ``text`` into the flat event stream.

        Parameters
        ----------
        text : str
            Markup source

        Returns
        -------
        list of Event
            Balanced event stream

        Raises
        ------
        InternalInvariantError
            If the tokenizer produced a token outside the dialect

        """
        if self._md is None:
            self._md = self._create_parser()

        self._events = []
        self._open_lists = []
        self._open_tables = []
        self._in_table_head = False

        with debug_timer(logger, "Tokenizing"):
            tokens = self._md.parse(text)
            self._process_tokens(tokens)

        events = self._events
        self._events = []
        logger.debug("Tokenized %d characters into %d events", len(text), len(events))
        return events

    def parse_tree(self, text: str) -> tuple[Node, ...]:
        """Tokenize ``text`` and fold the events into the nested tree."""
        return build_tree(self.parse_events(text))

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _emit(self, *events: Event) -> None:
        self._events.extend(events)

    def _process_tokens(self, tokens: Sequence[Any]) -> None:
        handler_map: dict[str, Callable[[Sequence[Any], int], None]] = {
            "paragraph_open": self._handle_paragraph,
            "paragraph_close": self._handle_paragraph,
            "heading_open": self._handle_heading,
            "heading_close": self._handle_heading,
            "blockquote_open": lambda toks, i: self._emit(Start(BlockQuote())),
            "blockquote_close": lambda toks, i: self._emit(End(BlockQuote())),
            "bullet_list_open": self._handle_list_open,
            "ordered_list_open": self._handle_list_open,
            "bullet_list_close": self._handle_list_close,
            "ordered_list_close": self._handle_list_close,
            "list_item_open": lambda toks, i: self._emit(Start(Item())),
            "list_item_close": lambda toks, i: self._emit(End(Item())),
            "fence": self._handle_code,
            "code_block": self._handle_code,
            "html_block": self._handle_html_block,
            "hr": lambda toks, i: self._emit(Rule()),
            "table_open": self._handle_table_open,
            "table_close": self._handle_table_close,
            "thead_open": self._handle_table_head,
            "thead_close": self._handle_table_head,
            "tbody_open": lambda toks, i: None,
            "tbody_close": lambda toks, i: None,
            "tr_open": self._handle_table_row,
            "tr_close": self._handle_table_row,
            "th_open": lambda toks, i: self._emit(Start(TableCell())),
            "th_close": lambda toks, i: self._emit(End(TableCell())),
            "td_open": lambda toks, i: self._emit(Start(TableCell())),
            "td_close": lambda toks, i: self._emit(End(TableCell())),
            "math_block": lambda toks, i: self._emit(DisplayMath(source=toks[i].content)),
            "inline": lambda toks, i: self._process_inline_tokens(toks[i].children or []),
        }

        for index, token in enumerate(tokens):
            handler = handler_map.get(token.type)
            if handler is None:
                raise InternalInvariantError(f"Token type '{token.type}' is outside the configured dialect")
            handler(tokens, index)

    def _handle_paragraph(self, tokens: Sequence[Any], index: int) -> None:
        token = tokens[index]
        # Paragraphs inside tight lists are hidden; their content belongs to the item
        if token.hidden:
            return
        self._emit(Start(Paragraph()) if token.nesting == 1 else End(Paragraph()))

    def _handle_heading(self, tokens: Sequence[Any], index: int) -> None:
        token = tokens[index]
        tag = Heading(level=int(token.tag[1:]))
        self._emit(Start(tag) if token.nesting == 1 else End(tag))

    def _handle_list_open(self, tokens: Sequence[Any], index: int) -> None:
        token = tokens[index]
        if token.type == "ordered_list_open":
            start = token.attrGet("start")
            tag = List(start=int(start) if start is not None else 1)
        else:
            tag = List(start=None)
        self._open_lists.append(tag)
        self._emit(Start(tag))

    def _handle_list_close(self, tokens: Sequence[Any], index: int) -> None:
        self._emit(End(self._open_lists.pop()))

    def _handle_code(self, tokens: Sequence[Any], index: int) -> None:
        token = tokens[index]
        if token.type == "fence":
            tag = CodeBlock(fenced=True, lang=_fence_language(token.info or ""))
        else:
            tag = CodeBlock(fenced=False, lang=None)

        self._emit(Start(tag))
        # One leaf per line, terminators kept for line-oriented highlighting
        for line in (token.content or "").splitlines(keepends=True):
            self._emit(Text(text=line))
        self._emit(End(tag))

    def _handle_html_block(self, tokens: Sequence[Any], index: int) -> None:
        self._emit(Start(HtmlBlock()), Html(text=tokens[index].content), End(HtmlBlock()))

    def _handle_table_open(self, tokens: Sequence[Any], index: int) -> None:
        alignments: list[Alignment] = []
        for token in tokens[index + 1 :]:
            if token.type == "thead_close":
                break
            if token.type == "th_open":
                alignments.append(_cell_alignment(token))
        tag = Table(column_alignment=tuple(alignments))
        self._open_tables.append(tag)
        self._emit(Start(tag))

    def _handle_table_close(self, tokens: Sequence[Any], index: int) -> None:
        self._emit(End(self._open_tables.pop()))

    def _handle_table_head(self, tokens: Sequence[Any], index: int) -> None:
        opening = tokens[index].nesting == 1
        self._in_table_head = opening
        self._emit(Start(TableHead()) if opening else End(TableHead()))

    def _handle_table_row(self, tokens: Sequence[Any], index: int) -> None:
        # Head cells sit directly under the TableHead
        if self._in_table_head:
            return
        self._emit(Start(TableRow()) if tokens[index].nesting == 1 else End(TableRow()))

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: Sequence[Any]) -> None:
        wrappers: dict[str, Tag] = {
            "em": Emphasis(),
            "strong": Strong(),
            "s": Strikethrough(),
        }

        for token in tokens:
            token_type = token.type

            if token_type in ("text", "text_special"):
                if token.content:
                    self._emit(Text(text=token.content))
            elif token_type == "softbreak":
                self._emit(SoftBreak())
            elif token_type == "hardbreak":
                self._emit(HardBreak())
            elif token_type == "code_inline":
                self._emit(Code(text=token.content))
            elif token_type == "html_inline":
                self._emit(InlineHtml(text=token.content))
            elif token_type == "math_inline":
                self._emit(InlineMath(source=token.content))
            elif token_type.endswith(("_open", "_close")) and token_type.rsplit("_", 1)[0] in wrappers:
                tag = wrappers[token_type.rsplit("_", 1)[0]]
                self._emit(Start(tag) if token.nesting == 1 else End(tag))
            elif token_type == "link_open":
                tag = Link(dest_url=token.attrGet("href") or "", title=token.attrGet("title") or "")
                self._emit(Start(tag))
            elif token_type == "link_close":
                self._emit(End(Link(dest_url="")))
            elif token_type == "image":
                tag = Image(dest_url=token.attrGet("src") or "", title=token.attrGet("title") or "")
                self._emit(Start(tag))
                self._process_inline_tokens(token.children or [])
                self._emit(End(tag))
            else:
                raise InternalInvariantError(f"Inline token type '{token_type}' is outside the configured dialect")


def parse_events(text: str, options: MarkdownParserOptions | None = None) -> list[Event]:
    r"""Tokenize markup into the flat event stream.

    Examples
    --------
    >>> from typmark.parsers.markdown import parse_events
    >>> events = parse_events("# Hello\\n\\nWorld")

    """
    return MarkdownTokenizer(options).parse_events(text)


def parse_tree(text: str, options: MarkdownParserOptions | None = None) -> tuple[Node, ...]:
    r"""Tokenize markup into the nested markup tree.

    Examples
    --------
    >>> from typmark.parsers.markdown import parse_tree
    >>> nodes = parse_tree("# Hello\\n\\nWorld")
    >>> len(nodes)
    2

    """
    return MarkdownTokenizer(options).parse_tree(text)
