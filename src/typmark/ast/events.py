#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/ast/events.py
"""Flat event stream representation of parsed markup.

The tokenizer boundary produces a flat sequence of events: ``Start(tag)``
opens a container, ``End(tag)`` closes it, and leaf nodes appear in between
as events of their own. Folding the stream gives the nested tree (see
``typmark.ast.builder``); ``iter_events`` goes the other way.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Union

from typmark.ast.nodes import Group, Leaf, Node, Tag


@dataclass(frozen=True)
class Start:
    """Opens a container."""

    tag: Tag

    def dispatch(self, handler: Any) -> Any:
        """Call ``handler.start_<tag name>(tag)``."""
        return getattr(handler, f"start_{self.tag.visit_name}")(self.tag)


@dataclass(frozen=True)
class End:
    """Closes the container opened by the matching ``Start``."""

    tag: Tag

    def dispatch(self, handler: Any) -> Any:
        """Call ``handler.end_<tag name>(tag)``."""
        return getattr(handler, f"end_{self.tag.visit_name}")(self.tag)


Event = Union[Start, End, Leaf]


def dispatch_event(event: Event, handler: Any) -> Any:
    """Route one event to the matching handler method."""
    if isinstance(event, (Start, End)):
        return event.dispatch(handler)
    return event.accept(handler)


def iter_events(nodes: Iterable[Node]) -> Iterator[Event]:
    """Flatten a markup tree back into its event stream, depth-first.

    Parameters
    ----------
    nodes : iterable of Node
        Top-level nodes of the tree

    Yields
    ------
    Event
        Start/End pairs around each group's children, leaves as-is

    """
    for node in nodes:
        if isinstance(node, Group):
            yield Start(node.tag)
            yield from iter_events(node.children)
            yield End(node.tag)
        else:
            yield node  # type: ignore[misc]
