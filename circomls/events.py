"""Parser events and the event-to-tree conversion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from circomls.token_kind import TokenKind


@dataclass(frozen=True)
class Open:
    """Start of a node of the given kind."""

    kind: TokenKind


@dataclass(frozen=True)
class Close:
    """End of the most recently opened node."""


@dataclass(frozen=True)
class TokenPosition:
    """A token, given by its index in the token table."""

    index: int


Event = Union[Open, Close, TokenPosition]


@dataclass
class Tree:
    """A parse tree node: its kind and its children.

    A child is either a token index (int) or a nested Tree.
    """

    kind: TokenKind
    children: list[int | Tree] = field(default_factory=list)


def build_tree(events: Iterable[Event]) -> Tree:
    """Turn a flat event list into a tree.

    The event list must end with Close; otherwise an empty ParserError tree
    is returned. Unbalanced events raise ValueError.
    """
    events = list(events)
    if not events:
        raise ValueError("no events to build a tree from")
    *body, last = events
    if not isinstance(last, Close):
        return Tree(TokenKind.ParserError)

    stack: list[Tree] = []
    for event in body:
        if isinstance(event, Open):
            stack.append(Tree(event.kind))
        elif isinstance(event, Close):
            if len(stack) < 2:
                raise ValueError("close event without a matching open")
            finished = stack.pop()
            stack[-1].children.append(finished)
        elif isinstance(event, TokenPosition):
            if not stack:
                raise ValueError("token event outside of any node")
            stack[-1].children.append(event.index)
        else:
            raise TypeError(f"not a parser event: {event!r}")

    if not stack:
        raise ValueError("events hold no root node")
    return stack.pop()