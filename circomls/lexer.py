"""Lexer turning Circom source text into a table of tokens."""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple

from circomls.token_kind import TokenKind


class Token(NamedTuple):
    """A raw token: its kind and its [start, end) span in the source."""

    kind: TokenKind
    start: int
    end: int


_LITERALS: dict[str, TokenKind] = {
    "/*": TokenKind.CommentBlockOpen,
    "*/": TokenKind.CommentBlockClose,
    "pragma": TokenKind.Pragma,
    "circom": TokenKind.Circom,
    "template": TokenKind.TemplateKw,
    "function": TokenKind.FunctionKw,
    "component": TokenKind.ComponentKw,
    "main": TokenKind.MainKw,
    "public": TokenKind.PublicKw,
    "signal": TokenKind.SignalKw,
    "var": TokenKind.VarKw,
    "include": TokenKind.IncludeKw,
    "input": TokenKind.InputKw,
    "output": TokenKind.OutputKw,
    "log": TokenKind.LogKw,
    "(": TokenKind.LParen,
    ")": TokenKind.RParen,
    "{": TokenKind.LCurly,
    "}": TokenKind.RCurly,
    "[": TokenKind.LBracket,
    "]": TokenKind.RBracket,
    ";": TokenKind.Semicolon,
    ",": TokenKind.Comma,
    "=": TokenKind.Assign,
    "===": TokenKind.EqualSignal,
    "-->": TokenKind.LAssignSignal,
    "==>": TokenKind.LAssignContraintSignal,
    "<--": TokenKind.RAssignSignal,
    "<==": TokenKind.RAssignConstraintSignal,
    "+": TokenKind.Add,
    "-": TokenKind.Sub,
    "/": TokenKind.Div,
    "*": TokenKind.Mul,
    "!": TokenKind.Not,
    "~": TokenKind.BitNot,
    "**": TokenKind.Power,
    "\\": TokenKind.IntDiv,
    "%": TokenKind.Mod,
    "<<": TokenKind.ShiftL,
    ">>": TokenKind.ShiftR,
    "&": TokenKind.BitAnd,
    "|": TokenKind.BitOr,
    "^": TokenKind.BitXor,
    "==": TokenKind.Equal,
    "!=": TokenKind.NotEqual,
    "<": TokenKind.LessThan,
    ">": TokenKind.GreaterThan,
    "<=": TokenKind.LessThanAndEqual,
    ">=": TokenKind.GreaterThanAndEqual,
    "&&": TokenKind.BoolAnd,
    "||": TokenKind.BoolOr,
    "?": TokenKind.MarkQuestion,
    ":": TokenKind.Colon,
    ".": TokenKind.Dot,
    "if": TokenKind.IfKw,
    "else": TokenKind.ElseKw,
    "for": TokenKind.ForKw,
    "while": TokenKind.WhileKw,
    "return": TokenKind.ReturnKw,
    "assert": TokenKind.AssertKw,
}

# Ordered by priority: on a tie in length an earlier pattern wins.
_PATTERNS: tuple[tuple[re.Pattern[str], TokenKind], ...] = (
    (re.compile(r"//[^\n]*"), TokenKind.CommentLine),
    (re.compile(r"2.[0-9].[0-9]"), TokenKind.Version),
    (re.compile(r"[0-9]+"), TokenKind.Number),
    (re.compile(r"[$_]*[a-zA-Z][a-zA-Z0-9_$]*"), TokenKind.Identifier),
    (re.compile(r'"[^"]*"'), TokenKind.CircomString),
    (re.compile(r"[ \t]+"), TokenKind.WhiteSpace),
    (re.compile(r"\n"), TokenKind.EndLine),
)


def _longest_match(source: str, pos: int) -> tuple[TokenKind, int]:
    """Kind and end of the longest token at pos; literals win ties."""
    best_kind, best_end = TokenKind.Error, pos + 1
    best_len = 0
    for text, kind in _LITERALS.items():
        if len(text) > best_len and source.startswith(text, pos):
            best_kind, best_len = kind, len(text)
    for pattern, kind in _PATTERNS:
        match = pattern.match(source, pos)
        if match and match.end() - pos > best_len:
            best_kind, best_len = kind, match.end() - pos
    if best_len:
        best_end = pos + best_len
    return best_kind, best_end


def tokenize(source: str) -> Iterator[Token]:
    """Yield the raw tokens of source; unknown characters become Error tokens."""
    pos = 0
    while pos < len(source):
        kind, end = _longest_match(source, pos)
        yield Token(kind, pos, end)
        pos = end


def _join_block_comments(tokens: Iterator[Token]) -> Iterator[Token]:
    """Merge each '/* ... */' run into one BlockComment, or Error if unclosed."""
    for token in tokens:
        if token.kind != TokenKind.CommentBlockOpen:
            yield token
            continue
        end = token.end
        closed = False
        for inner in tokens:
            end = inner.end
            if inner.kind == TokenKind.CommentBlockClose:
                closed = True
                break
        kind = TokenKind.BlockComment if closed else TokenKind.Error
        yield Token(kind, token.start, end)


class Input:
    """Token table of a source text: kinds and spans, indexed by position."""

    __slots__ = ("source", "kinds", "positions")

    def __init__(self, source: str) -> None:
        self.source = source
        self.kinds: list[TokenKind] = []
        self.positions: list[tuple[int, int]] = []
        for token in _join_block_comments(tokenize(source)):
            self.kinds.append(token.kind)
            self.positions.append((token.start, token.end))

    def token_value(self, index: int) -> str | None:
        """Text of the token at index, or None past the end."""
        if 0 <= index < len(self.kinds):
            start, end = self.positions[index]
            return self.source[start:end]
        return None

    def kind_of(self, index: int) -> TokenKind:
        """Kind of the token at index, or EOF past the end."""
        if 0 <= index < len(self.kinds):
            return self.kinds[index]
        return TokenKind.EOF

    def position_of(self, index: int) -> tuple[int, int] | None:
        """Span of the token at index, or None past the end."""
        if 0 <= index < len(self.kinds):
            return self.positions[index]
        return None

    def size(self) -> int:
        """Number of tokens."""
        return len(self.kinds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Input):
            return NotImplemented
        return (
            self.source == other.source
            and self.kinds == other.kinds
            and self.positions == other.positions
        )

    def __repr__(self) -> str:
        return f"Input(kinds={self.kinds!r}, positions={self.positions!r})"