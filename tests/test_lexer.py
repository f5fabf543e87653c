from circomls.lexer import Input, Token, tokenize
from circomls.token_kind import TokenKind
from circomls.token_kind import TokenKind as K


def check(source, expected_kinds, expected_positions):
    inp = Input(source)

    assert inp.kinds == expected_kinds
    assert inp.positions == expected_positions

    assert inp.size() == len(inp.kinds)

    index = len(inp.kinds)
    assert inp.token_value(index) is None
    assert inp.kind_of(index) == TokenKind.EOF
    assert inp.position_of(index) is None

    if inp.size() == 0:
        return

    index = inp.size() // 2
    start, end = inp.positions[index]
    assert inp.token_value(index) == source[start:end]
    assert inp.kind_of(index) == inp.kinds[index]
    assert inp.position_of(index) == inp.positions[index]


def test_comment_block():
    source = "\n        /*a + b == 10*/\n        a + 10\n    "
    kinds = [
        K.EndLine, K.WhiteSpace, K.BlockComment, K.EndLine, K.WhiteSpace,
        K.Identifier, K.WhiteSpace, K.Add, K.WhiteSpace, K.Number,
        K.EndLine, K.WhiteSpace,
    ]
    positions = [
        (0, 1), (1, 9), (9, 24), (24, 25), (25, 33), (33, 34),
        (34, 35), (35, 36), (36, 37), (37, 39), (39, 40), (40, 44),
    ]
    check(source, kinds, positions)


def test_comment_error():
    source = (
        "\n"
        "        pragma 2.1.1;\n"
        "        /*a + b == 10*\n"
        "        a + 10\n"
        "        template\n"
        "\n"
        "        /*\n"
        "    "
    )
    kinds = [
        K.EndLine, K.WhiteSpace, K.Pragma, K.WhiteSpace, K.Version,
        K.Semicolon, K.EndLine, K.WhiteSpace, K.Error,
    ]
    positions = [
        (0, 1), (1, 9), (9, 15), (15, 16), (16, 21),
        (21, 22), (22, 23), (23, 31), (31, 94),
    ]
    check(source, kinds, positions)


def test_pragma():
    source = "\n        /* test pragma token kinds */\n\n    pragma circom 2.0.0;\n\n    "
    kinds = [
        K.EndLine, K.WhiteSpace, K.BlockComment, K.EndLine, K.EndLine,
        K.WhiteSpace, K.Pragma, K.WhiteSpace, K.Circom, K.WhiteSpace,
        K.Version, K.Semicolon, K.EndLine, K.EndLine, K.WhiteSpace,
    ]
    positions = [
        (0, 1), (1, 9), (9, 38), (38, 39), (39, 40), (40, 44), (44, 50),
        (50, 51), (51, 57), (57, 58), (58, 63), (63, 64), (64, 65),
        (65, 66), (66, 70),
    ]
    check(source, kinds, positions)


def test_function():
    source = (
        "\n"
        "    function nbits(a) {\n"
        "        var n = 1;\n"
        "        var r = 0;\n"
        "        while (n-1<a) {\n"
        "            r++;\n"
        "            n *= 2;\n"
        "        }\n"
        "        return r;\n"
        "    }"
    )
    kinds = [
        K.EndLine, K.WhiteSpace, K.FunctionKw, K.WhiteSpace, K.Identifier, K.LParen,
        K.Identifier, K.RParen, K.WhiteSpace, K.LCurly, K.EndLine, K.WhiteSpace,
        K.VarKw, K.WhiteSpace, K.Identifier, K.WhiteSpace, K.Assign, K.WhiteSpace,
        K.Number, K.Semicolon, K.EndLine, K.WhiteSpace, K.VarKw, K.WhiteSpace,
        K.Identifier, K.WhiteSpace, K.Assign, K.WhiteSpace, K.Number, K.Semicolon,
        K.EndLine, K.WhiteSpace, K.WhileKw, K.WhiteSpace, K.LParen, K.Identifier,
        K.Sub, K.Number, K.LessThan, K.Identifier, K.RParen, K.WhiteSpace,
        K.LCurly, K.EndLine, K.WhiteSpace, K.Identifier, K.Add, K.Add,
        K.Semicolon, K.EndLine, K.WhiteSpace, K.Identifier, K.WhiteSpace, K.Mul,
        K.Assign, K.WhiteSpace, K.Number, K.Semicolon, K.EndLine, K.WhiteSpace,
        K.RCurly, K.EndLine, K.WhiteSpace, K.ReturnKw, K.WhiteSpace, K.Identifier,
        K.Semicolon, K.EndLine, K.WhiteSpace, K.RCurly,
    ]
    positions = [
        (0, 1), (1, 5), (5, 13), (13, 14), (14, 19), (19, 20), (20, 21),
        (21, 22), (22, 23), (23, 24), (24, 25), (25, 33), (33, 36), (36, 37),
        (37, 38), (38, 39), (39, 40), (40, 41), (41, 42), (42, 43), (43, 44),
        (44, 52), (52, 55), (55, 56), (56, 57), (57, 58), (58, 59), (59, 60),
        (60, 61), (61, 62), (62, 63), (63, 71), (71, 76), (76, 77), (77, 78),
        (78, 79), (79, 80), (80, 81), (81, 82), (82, 83), (83, 84), (84, 85),
        (85, 86), (86, 87), (87, 99), (99, 100), (100, 101), (101, 102),
        (102, 103), (103, 104), (104, 116), (116, 117), (117, 118), (118, 119),
        (119, 120), (120, 121), (121, 122), (122, 123), (123, 124), (124, 132),
        (132, 133), (133, 134), (134, 142), (142, 148), (148, 149), (149, 150),
        (150, 151), (151, 152), (152, 156), (156, 157),
    ]
    check(source, kinds, positions)


def test_empty_source():
    inp = Input("")
    assert inp.size() == 0
    assert inp.kind_of(0) == TokenKind.EOF
    assert inp.token_value(0) is None


def test_keyword_beats_identifier_only_on_exact_text():
    kinds = [token.kind for token in tokenize("main mainx")]
    assert kinds == [K.MainKw, K.WhiteSpace, K.Identifier]


def test_longest_operator_wins():
    kinds = [token.kind for token in tokenize("a<==b===c")]
    assert kinds == [
        K.Identifier, K.RAssignConstraintSignal, K.Identifier,
        K.EqualSignal, K.Identifier,
    ]


def test_string_and_unknown_character():
    tokens = list(tokenize('include "lib.circom";#'))
    assert tokens[2] == Token(K.CircomString, 8, 20)
    assert tokens[-1] == Token(K.Error, 21, 22)


def test_tokens_cover_source_contiguously():
    source = "template T(a) { signal input x; x <== a * 2; } // end"
    tokens = list(tokenize(source))
    assert tokens[0].start == 0
    assert tokens[-1].end == len(source)
    assert all(prev.end == nxt.start for prev, nxt in zip(tokens, tokens[1:]))
    assert "".join(source[t.start:t.end] for t in tokens) == source
    assert tokens[-1].kind == K.CommentLine


def test_input_equality():
    assert Input("a + b") == Input("a + b")
    assert not (Input("a + b") == Input("a - b"))