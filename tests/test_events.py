import pytest

from circomls.events import Close, Open, TokenPosition, Tree, build_tree
from circomls.token_kind import TokenKind


def test_single_node_with_tokens():
    events = [Open(TokenKind.Pragma), TokenPosition(0), TokenPosition(1), Close()]
    tree = build_tree(events)
    assert tree == Tree(TokenKind.Pragma, [0, 1])


def test_nested_nodes():
    events = [
        Open(TokenKind.CircomProgram),
        TokenPosition(0),
        Open(TokenKind.Pragma),
        TokenPosition(1),
        Close(),
        TokenPosition(2),
        Close(),
    ]
    tree = build_tree(events)
    assert tree.kind == TokenKind.CircomProgram
    assert tree.children == [0, Tree(TokenKind.Pragma, [1]), 2]


def test_last_event_not_close_gives_empty_error_tree():
    tree = build_tree([Open(TokenKind.Pragma), TokenPosition(0)])
    assert tree.kind == TokenKind.ParserError
    assert tree.children == []


def test_empty_events_raise():
    with pytest.raises(ValueError):
        build_tree([])


def test_unbalanced_close_raises():
    with pytest.raises(ValueError):
        build_tree([Open(TokenKind.Pragma), Close(), Close()])


def test_lone_close_raises():
    with pytest.raises(ValueError):
        build_tree([Close()])


def test_events_compare_by_value():
    first = build_tree([Open(TokenKind.Block), TokenPosition(3), Close()])
    second = build_tree([Open(TokenKind.Block), TokenPosition(3), Close()])
    assert first == second
    assert first == Tree(TokenKind.Block, [3])
    assert Open(TokenKind.Block) == Open(TokenKind.Block)
    assert (Open(TokenKind.Block) == Open(TokenKind.Pragma)) is False
    assert (TokenPosition(3) == TokenPosition(4)) is False