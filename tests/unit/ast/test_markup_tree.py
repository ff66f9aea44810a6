#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_markup_tree.py
"""Unit tests for the markup tree model.

Tests cover:
- Tag validation
- Folding the event stream into a tree and flattening it back
- Unbalanced event streams
- Visitor dispatch and disabled-feature variants

"""

import pytest

from typmark.ast import (
    Emphasis,
    End,
    FootnoteDefinition,
    FootnoteReference,
    Group,
    Heading,
    List,
    MetadataBlock,
    Paragraph,
    SoftBreak,
    Start,
    TaskListMarker,
    Text,
    TreeBuilder,
    build_tree,
    iter_events,
)
from typmark.exceptions import InternalInvariantError
from typmark.renderers.content import ContentTreeRenderer
from typmark.renderers.html import HtmlStreamRenderer


@pytest.mark.unit
class TestTags:
    """Tests for tag construction."""

    def test_heading_level_range(self):
        """Test that heading levels outside 1..6 are rejected."""
        assert Heading(level=1).level == 1
        assert Heading(level=6).level == 6
        with pytest.raises(ValueError):
            Heading(level=0)
        with pytest.raises(ValueError):
            Heading(level=7)

    def test_list_ordered_follows_start(self):
        """Test that a list is ordered exactly when it has a start."""
        assert List(start=3).ordered
        assert List(start=1).ordered
        assert not List(start=None).ordered

    def test_disabled_variants_are_flagged(self):
        """Test that disabled-feature variants carry the disabled flag."""
        assert FootnoteDefinition(label="1").disabled
        assert MetadataBlock().disabled
        assert FootnoteReference(label="1").disabled
        assert TaskListMarker(checked=True).disabled
        assert not Paragraph().disabled

    def test_group_dispatch_name(self):
        """Test that groups report the visit name of their tag."""
        group = Group(tag=Emphasis(), children=(Text("x"),))
        assert group.visit_name == "emphasis"
        assert not group.disabled


@pytest.mark.unit
class TestTreeBuilder:
    """Tests for folding events into a tree."""

    def test_build_nested_tree(self):
        """Test that nested Start/End pairs become nested groups."""
        events = [
            Start(Paragraph()),
            Text("a "),
            Start(Emphasis()),
            Text("b"),
            End(Emphasis()),
            SoftBreak(),
            End(Paragraph()),
        ]
        nodes = build_tree(events)

        assert len(nodes) == 1
        para = nodes[0]
        assert isinstance(para, Group)
        assert isinstance(para.tag, Paragraph)
        assert para.children[0] == Text("a ")
        assert para.children[1] == Group(tag=Emphasis(), children=(Text("b"),))
        assert para.children[2] == SoftBreak()

    def test_iter_events_restores_stream(self):
        """Test that flattening a built tree gives back the same events."""
        events = [
            Start(Heading(level=2)),
            Text("Title"),
            End(Heading(level=2)),
            Start(Paragraph()),
            Text("Body"),
            End(Paragraph()),
        ]
        assert list(iter_events(build_tree(events))) == events

    def test_end_without_start(self):
        """Test that a stray End is an internal invariant violation."""
        with pytest.raises(InternalInvariantError):
            build_tree([End(Paragraph())])

    def test_mismatched_end(self):
        """Test that End must close the innermost open tag."""
        builder = TreeBuilder()
        builder.feed(Start(Paragraph()))
        with pytest.raises(InternalInvariantError):
            builder.feed(End(Emphasis()))

    def test_unclosed_start(self):
        """Test that open containers at the end of the stream are rejected."""
        with pytest.raises(InternalInvariantError, match="open containers"):
            build_tree([Start(Paragraph()), Text("x")])


@pytest.mark.unit
class TestDisabledFeatures:
    """Tests that disabled-feature variants are rejected by both renderers."""

    def test_tree_visitor_rejects_footnote_reference(self, fake_evaluator):
        """Test that the content renderer treats footnote references as a configuration defect."""
        renderer = ContentTreeRenderer(evaluator=fake_evaluator)
        tree = (Group(tag=Paragraph(), children=(FootnoteReference(label="1"),)),)
        with pytest.raises(InternalInvariantError, match="footnote_reference"):
            renderer.render_tree(tree)

    def test_tree_visitor_rejects_metadata_block(self, fake_evaluator):
        """Test that the content renderer rejects metadata blocks."""
        renderer = ContentTreeRenderer(evaluator=fake_evaluator)
        with pytest.raises(InternalInvariantError, match="metadata_block"):
            renderer.render_tree((Group(tag=MetadataBlock(), children=()),))

    def test_event_handler_rejects_task_list_marker(self, fake_evaluator):
        """Test that the HTML renderer rejects task list markers."""
        renderer = HtmlStreamRenderer(evaluator=fake_evaluator)
        events = [Start(Paragraph()), TaskListMarker(checked=False), End(Paragraph())]
        with pytest.raises(InternalInvariantError, match="task_list_marker"):
            renderer.render_events(events)

    def test_event_handler_rejects_footnote_definition(self, fake_evaluator):
        """Test that the HTML renderer rejects footnote definitions."""
        renderer = HtmlStreamRenderer(evaluator=fake_evaluator)
        events = [Start(FootnoteDefinition(label="1")), End(FootnoteDefinition(label="1"))]
        with pytest.raises(InternalInvariantError):
            renderer.render_events(events)
