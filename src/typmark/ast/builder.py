#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/ast/builder.py
"""Fold a flat event stream into the nested markup tree.

The builder keeps a stack of open containers. Leaves are appended to the
innermost open container; an ``End`` closes it and appends the finished
``Group`` to its parent.

"""

from __future__ import annotations

import logging
from typing import Iterable

from typmark.ast.events import End, Event, Start
from typmark.ast.nodes import Group, Node, Tag
from typmark.exceptions import InternalInvariantError

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Incrementally build a markup tree from events.

    Examples
    --------
        >>> builder = TreeBuilder()
        >>> for event in events:
        ...     builder.feed(event)
        >>> nodes = builder.finish()

    """

    def __init__(self) -> None:
        """Start with an empty root."""
        self._root: list[Node] = []
        self._stack: list[tuple[Tag, list[Node]]] = []

    def _current(self) -> list[Node]:
        return self._stack[-1][1] if self._stack else self._root

    def feed(self, event: Event) -> None:
        """Consume one event.

        Raises
        ------
        InternalInvariantError
            If an ``End`` does not match the innermost open ``Start``

        """
        if isinstance(event, Start):
            self._stack.append((event.tag, []))
        elif isinstance(event, End):
            if not self._stack:
                raise InternalInvariantError(f"End({event.tag!r}) without a matching Start")
            tag, children = self._stack.pop()
            if type(tag) is not type(event.tag):
                raise InternalInvariantError(f"End({event.tag!r}) closes Start({tag!r})")
            self._current().append(Group(tag=tag, children=tuple(children)))
        else:
            self._current().append(event)

    def finish(self) -> tuple[Node, ...]:
        """Return the top-level nodes.

        Raises
        ------
        InternalInvariantError
            If containers are still open

        """
        if self._stack:
            open_tags = ", ".join(repr(tag) for tag, _ in self._stack)
            raise InternalInvariantError(f"Event stream ended with open containers: {open_tags}")
        return tuple(self._root)


def build_tree(events: Iterable[Event]) -> tuple[Node, ...]:
    """Fold an event stream into top-level markup nodes.

    Parameters
    ----------
    events : iterable of Event
        Balanced event stream

    Returns
    -------
    tuple of Node
        Top-level nodes

    """
    builder = TreeBuilder()
    for event in events:
        builder.feed(event)
    nodes = builder.finish()
    logger.debug("Built markup tree with %d top-level nodes", len(nodes))
    return nodes
