#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_content_renderer.py
"""Unit tests for ContentTreeRenderer.

Tests cover:
- Paragraph, heading, quote and code block shapes
- Ordered list numbering, including nested lists
- Table structure checks
- Raw HTML and image rejection
- Fail-fast math evaluation
- Determinism and serialization

"""

import json

import pytest

from typmark.ast import (
    Code,
    CodeBlock,
    Group,
    Item,
    List,
    Table,
    TableCell,
    TableHead,
    TableRow,
    Text,
)
from typmark.content import nodes as content
from typmark.content.serialization import content_to_dict, content_to_json
from typmark.exceptions import (
    InternalInvariantError,
    InvalidOptionsError,
    MalformedTableError,
    TypesettingError,
    UnsupportedFeatureError,
    UnsupportedHtmlError,
)
from typmark.math import Scope, TypstContent
from typmark.options import ContentRendererOptions, HtmlRendererOptions
from typmark.renderers import ContentTreeRenderer


def _seq(*children):
    return content.Sequence(tuple(children))


def _cell(text):
    return Group(TableCell(), (Text(text),))


def _head(*texts):
    return Group(TableHead(), tuple(_cell(t) for t in texts))


def _row(*texts):
    return Group(TableRow(), tuple(_cell(t) for t in texts))


def _table(*children, alignment=("none", "none")):
    return Group(Table(column_alignment=alignment), tuple(children))


def _item(*children):
    return Group(Item(), tuple(children))


@pytest.fixture
def renderer(fake_evaluator):
    return ContentTreeRenderer(evaluator=fake_evaluator)


@pytest.mark.unit
class TestBlocks:
    """Tests for block structure."""

    def test_paragraph_is_bracketed_by_breaks(self, renderer):
        """Test that a paragraph is a sequence between two paragraph breaks."""
        tree = renderer.render_content("Hello *world*")
        expected = _seq(
            _seq(
                content.ParBreak(),
                content.Text("Hello "),
                content.Emphasis(body=_seq(content.Text("world"))),
                content.ParBreak(),
            )
        )
        assert tree == expected

    def test_heading(self, renderer):
        """Test heading level and body."""
        tree = renderer.render_content("## Title")
        assert tree == _seq(content.Heading(level=2, body=_seq(content.Text("Title"))))

    def test_breaks(self, renderer):
        """Test that soft breaks become spaces and hard breaks line breaks."""
        paragraph = renderer.render_content("a\nb  \nc").children[0]
        kinds = [child.kind for child in paragraph.children]
        assert kinds == ["parbreak", "text", "space", "text", "linebreak", "text", "parbreak"]

    def test_block_quote_is_left_aligned_figure(self, renderer):
        """Test that a block quote becomes a left-aligned figure around a paragraph."""
        tree = renderer.render_content("> quoted")
        figure = tree.children[0]
        assert isinstance(figure, content.Figure)
        assert figure.align == "left"
        inner = _seq(content.ParBreak(), content.Text("quoted"), content.ParBreak())
        assert figure.body == _seq(content.ParBreak(), inner, content.ParBreak())

    def test_rule(self, renderer):
        """Test thematic breaks."""
        assert renderer.render_content("---") == _seq(content.Rule())

    def test_inline_wrappers(self, renderer):
        """Test strong, strikethrough, inline code and links."""
        paragraph = renderer.render_content("**b** ~~s~~ `c` [l](https://example.com)").children[0]
        body = [child for child in paragraph.children if child.kind not in ("parbreak", "text")]
        assert body == [
            content.Strong(body=_seq(content.Text("b"))),
            content.Strike(body=_seq(content.Text("s"))),
            content.Code("c"),
            content.Link(url="https://example.com", body=_seq(content.Text("l"))),
        ]


@pytest.mark.unit
class TestCodeBlocks:
    """Tests for code blocks."""

    def test_fenced_block_in_figure(self, renderer):
        """Test that lines are concatenated and the block is framed."""
        tree = renderer.render_content("```python\nx = 1\ny = 2\n```")
        assert tree == _seq(content.Figure(body=content.CodeBlock(text="x = 1\ny = 2\n", lang="python")))

    def test_without_figure(self, fake_evaluator):
        """Test that the frame can be turned off."""
        options = ContentRendererOptions(code_block_figure=False)
        tree = ContentTreeRenderer(options, evaluator=fake_evaluator).render_content("    indented\n")
        assert tree == _seq(content.CodeBlock(text="indented\n", lang=None))

    def test_non_text_content_is_invariant_violation(self, renderer):
        """Test that a code block holding anything but text is rejected."""
        block = Group(CodeBlock(lang=None), (Text("a"), Code("b")))
        with pytest.raises(InternalInvariantError, match="only contain text"):
            renderer.render_tree([block])


@pytest.mark.unit
class TestLists:
    """Tests for list numbering."""

    def test_ordered_from_markup(self, renderer):
        """Test that items are numbered from the list start."""
        tree = renderer.render_content("3. a\n4. b\n")
        rendered = tree.children[0]
        assert rendered.ordered is True
        assert rendered.start == 3
        assert [item.number for item in rendered.items] == [3, 4]
        assert rendered.items[0].body == _seq(content.Text("a"))

    def test_bullet_items_have_no_number(self, renderer):
        """Test bullet lists."""
        rendered = renderer.render_content("- a\n- b\n").children[0]
        assert rendered.ordered is False
        assert [item.number for item in rendered.items] == [None, None]

    def test_nested_list_numbers_its_own_items(self, renderer):
        """Test that numbering covers direct children only."""
        nested = Group(List(start=7), (_item(Text("c")), _item(Text("d"))))
        outer = Group(List(start=3), (_item(Text("a")), _item(Text("b"), nested)))

        rendered = renderer.render_tree([outer]).children[0]
        assert [item.number for item in rendered.items] == [3, 4]

        inner = rendered.items[1].body.children[1]
        assert isinstance(inner, content.List)
        assert inner.start == 7
        assert [item.number for item in inner.items] == [7, 8]

    def test_non_item_child_is_invariant_violation(self, renderer):
        """Test that lists may only hold items."""
        with pytest.raises(InternalInvariantError):
            renderer.render_tree([Group(List(start=None), (Text("stray"),))])


@pytest.mark.unit
class TestTables:
    """Tests for table structure checks."""

    def test_table_from_markup(self, renderer):
        """Test a well-formed pipe table."""
        tree = renderer.render_content("| a | b |\n|:--|--:|\n| 1 | 2 |\n")
        figure = tree.children[0]
        assert isinstance(figure, content.Figure)
        table = figure.body
        assert table.column_count == 2
        assert table.alignments == ("left", "right")
        assert table.header_row[0] == content.TableCell(body=_seq(content.Text("a")))
        assert len(table.body_rows) == 1
        assert table.body_rows[0][1] == content.TableCell(body=_seq(content.Text("2")))

    def test_short_row_is_kept(self, renderer):
        """Test that a row with fewer cells than the head is accepted as-is."""
        table = renderer.render_tree([_table(_head("a", "b"), _row("1"))]).children[0].body
        assert len(table.body_rows[0]) == 1

    def test_long_row(self, renderer):
        """Test that a row longer than the head is rejected."""
        with pytest.raises(MalformedTableError) as exc_info:
            renderer.render_tree([_table(_head("a", "b"), _row("1", "2"), _row("1", "2", "3"))])
        assert exc_info.value.child_index == 2

    def test_missing_head(self, renderer):
        """Test that a table must start with its head."""
        with pytest.raises(MalformedTableError) as exc_info:
            renderer.render_tree([_table(_row("1", "2"))])
        assert exc_info.value.child_index == 0

    def test_empty_table(self, renderer):
        """Test that a table without children is rejected."""
        with pytest.raises(MalformedTableError):
            renderer.render_tree([_table()])

    def test_non_row_child(self, renderer):
        """Test that only rows may follow the head."""
        with pytest.raises(MalformedTableError) as exc_info:
            renderer.render_tree([_table(_head("a", "b"), Text("stray"))])
        assert exc_info.value.child_index == 1

    def test_second_head(self, renderer):
        """Test that a repeated head is rejected."""
        with pytest.raises(MalformedTableError):
            renderer.render_tree([_table(_head("a", "b"), _head("c", "d"))])

    def test_non_cell_in_row(self, renderer):
        """Test that rows may only hold cells."""
        with pytest.raises(MalformedTableError):
            renderer.render_tree([_table(_head("a", "b"), Group(TableRow(), (Text("x"),)))])

    def test_alignment_count_mismatch(self, renderer):
        """Test that the alignment list must match the header width."""
        with pytest.raises(MalformedTableError):
            renderer.render_tree([_table(_head("a", "b"), alignment=("left",))])

    def test_row_outside_table(self, renderer):
        """Test that table parts are only valid inside a table."""
        with pytest.raises(MalformedTableError):
            renderer.render_tree([_row("a")])
        with pytest.raises(MalformedTableError):
            renderer.render_tree([_head("a")])


@pytest.mark.unit
class TestUnsupported:
    """Tests for markup without a content representation."""

    def test_html_block(self, renderer):
        """Test that an HTML block is rejected."""
        with pytest.raises(UnsupportedHtmlError) as exc_info:
            renderer.render_content("<div>hi</div>\n")
        assert "<div>" in exc_info.value.html
        assert exc_info.value.inline is False

    def test_inline_html(self, renderer):
        """Test that inline HTML is rejected."""
        with pytest.raises(UnsupportedHtmlError) as exc_info:
            renderer.render_content("a <b>bold</b> word")
        assert exc_info.value.inline is True

    def test_image(self, renderer):
        """Test that images are reported as not yet supported."""
        with pytest.raises(UnsupportedFeatureError, match="images are not yet supported"):
            renderer.render_content("![alt](image.png)")


@pytest.mark.unit
class TestMath:
    """Tests for math evaluation."""

    def test_inline_math(self, fake_context, renderer):
        """Test that inline math is evaluated in math mode with an empty scope."""
        paragraph = renderer.render_content("Euler $e^(pi i)$").children[0]
        assert paragraph.children[2] == content.Math(
            value=TypstContent(markup="$e^(pi i)$", mode="math"), display=False
        )
        assert fake_context.calls == [("e^(pi i)", "math", Scope.empty())]

    def test_display_math_is_trimmed(self, fake_context, renderer):
        """Test that display math is trimmed and evaluated as a block equation."""
        tree = renderer.render_content("$$\n  x + y \n$$\n")
        assert fake_context.calls == [("$ x + y $", "markup", Scope.math())]
        math = tree.children[0]
        assert math.display is True

    def test_first_failure_aborts(self, fake_context, renderer):
        """Test fail-fast behavior."""
        with pytest.raises(TypesettingError) as exc_info:
            renderer.render_content("$BAD1$ then $BAD2$")
        assert [d.message for d in exc_info.value.diagnostics] == ["unknown variable: BAD1"]
        assert len(fake_context.calls) == 1
        assert exc_info.value.partial_html is None


@pytest.mark.unit
class TestRendererSurface:
    """Tests for options, determinism and output."""

    def test_wrong_options_type(self, fake_evaluator):
        """Test that options for another target are rejected."""
        with pytest.raises(InvalidOptionsError):
            ContentTreeRenderer(HtmlRendererOptions(), evaluator=fake_evaluator)

    def test_deterministic(self, renderer):
        """Test that equal input yields equal trees."""
        text = "# T\n\n- a\n- b\n\n| x |\n|---|\n| 1 |\n\n$y$\n"
        assert renderer.render_content(text) == renderer.render_content(text)
        assert renderer.render_to_string(text) == renderer.render_to_string(text)

    def test_render_to_file(self, renderer, tmp_path):
        """Test writing the JSON tree to a path."""
        target = tmp_path / "out.json"
        renderer.render("Hello", target)
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["type"] == "sequence"
        assert data["children"][0]["children"][1] == {"type": "text", "text": "Hello"}


@pytest.mark.unit
class TestSerialization:
    """Tests for content tree serialization."""

    def test_nested_nodes(self):
        """Test conversion of nested nodes."""
        assert content_to_dict(content.Strong(body=content.Text("hi"))) == {
            "type": "strong",
            "body": {"type": "text", "text": "hi"},
        }

    def test_math_value(self):
        """Test that math values serialize through their own converter."""
        node = content.Math(value=TypstContent(markup="$x$", mode="math"))
        assert content_to_dict(node) == {
            "type": "math",
            "value": {"kind": "typst", "markup": "$x$", "mode": "math", "preamble": ""},
            "display": False,
        }

    def test_json_keeps_unicode(self):
        """Test that non-ASCII text is written as-is."""
        assert "π" in content_to_json(content.Text("π"), indent=None)
