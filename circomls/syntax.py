"""Lossless syntax trees built from parser output.

A GreenNode is an immutable tree holding token text. A SyntaxNode is a view
of a green node that knows its parent and its absolute offset in the source.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from circomls.events import Tree
from circomls.grammar import parsing
from circomls.lexer import Input
from circomls.token_kind import TokenKind


@dataclass(frozen=True)
class TextRange:
    """A half-open [start, end) range of source offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"invalid text range {self.start}..{self.end}")

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class GreenToken:
    """A leaf of the green tree: a token kind and its text."""

    kind: TokenKind
    text: str

    @property
    def text_len(self) -> int:
        return len(self.text)


GreenChild = Union["GreenNode", GreenToken]


class GreenNode:
    """An immutable tree node; equal when kind and children are equal."""

    __slots__ = ("kind", "children", "text_len", "_hash")

    def __init__(self, kind: TokenKind, children: Iterable[GreenChild] = ()) -> None:
        self.kind = kind
        self.children: tuple[GreenChild, ...] = tuple(children)
        self.text_len = sum(child.text_len for child in self.children)
        self._hash = hash((kind, self.children))

    def text(self) -> str:
        """The source text covered by this node."""
        return "".join(
            child.text() if isinstance(child, GreenNode) else child.text
            for child in self.children
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GreenNode):
            return NotImplemented
        if self is other:
            return True
        return (
            self._hash == other._hash
            and self.kind == other.kind
            and self.text_len == other.text_len
            and self.children == other.children
        )

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return f"GreenNode({self.kind.name}, len={self.text_len})"


class SyntaxNode:
    """A positioned view of a green node inside a whole tree.

    Two nodes are equal only when they are the same place in the same tree,
    so identical subtrees at different offsets stay distinct.
    """

    __slots__ = ("green", "parent", "offset", "_index")

    def __init__(
        self,
        green: GreenNode,
        parent: SyntaxNode | None = None,
        offset: int = 0,
        index: int = 0,
    ) -> None:
        self.green = green
        self.parent = parent
        self.offset = offset
        self._index = index

    @property
    def kind(self) -> TokenKind:
        return self.green.kind

    def children(self) -> Iterator[SyntaxNode]:
        """Child nodes, in source order; bare tokens are left out."""
        offset = self.offset
        for index, child in enumerate(self.green.children):
            if isinstance(child, GreenNode):
                yield SyntaxNode(child, self, offset, index)
            offset += child.text_len

    def first_child(self) -> SyntaxNode | None:
        return next(self.children(), None)

    def last_child(self) -> SyntaxNode | None:
        last = None
        for last in self.children():
            pass
        return last

    def next_siblings(self) -> Iterator[SyntaxNode]:
        """This node followed by the sibling nodes after it."""
        if self.parent is None:
            yield self
            return
        for sibling in self.parent.children():
            if sibling._index >= self._index:
                yield sibling

    def text(self) -> str:
        return self.green.text()

    def text_range(self) -> TextRange:
        return TextRange(self.offset, self.offset + self.green.text_len)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyntaxNode):
            return NotImplemented
        return self.green is other.green and self.offset == other.offset

    def __hash__(self) -> int:
        return hash((id(self.green), self.offset))

    def __repr__(self) -> str:
        rng = self.text_range()
        return f"SyntaxNode({self.kind.name}@{rng.start}..{rng.end})"


class SyntaxTreeBuilder:
    """Turns a parse tree over an Input into a green tree."""

    def __init__(self, input: Input) -> None:
        self.input = input
        self._stack: list[tuple[TokenKind, list[GreenChild]]] = []
        self._root: GreenNode | None = None

    def _start_node(self, kind: TokenKind) -> None:
        self._stack.append((kind, []))

    def _token(self, kind: TokenKind, text: str) -> None:
        if not self._stack:
            raise ValueError("token outside of any node")
        self._stack[-1][1].append(GreenToken(kind, text))

    def _finish_node(self) -> None:
        if not self._stack:
            raise ValueError("no node to finish")
        kind, children = self._stack.pop()
        node = GreenNode(kind, children)
        if self._stack:
            self._stack[-1][1].append(node)
        elif self._root is not None:
            raise ValueError("tree already has a root")
        else:
            self._root = node

    def build_rec(self, tree: Tree) -> None:
        """Add tree and its children; each token gets a node of its own kind."""
        self._start_node(tree.kind)
        for child in tree.children:
            if isinstance(child, Tree):
                self.build_rec(child)
                continue
            value = self.input.token_value(child)
            if value is None:
                raise ValueError(f"token index {child} is out of range")
            kind = self.input.kind_of(child)
            self._start_node(kind)
            self._token(kind, value)
            self._finish_node()
        self._finish_node()

    def build(self, tree: Tree) -> None:
        self.build_rec(tree)

    def finish(self) -> GreenNode:
        """The finished green tree."""
        if self._stack or self._root is None:
            raise ValueError("syntax tree is not complete")
        return self._root


def syntax_tree(source: str) -> SyntaxNode:
    """Parse source as a Circom program and return the root syntax node."""
    input = Input(source)
    output = parsing(input)
    builder = SyntaxTreeBuilder(input)
    builder.build(output)
    return SyntaxNode(builder.finish())