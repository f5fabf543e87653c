"""Token and syntax node kinds of the Circom language."""

from __future__ import annotations

from enum import IntEnum, auto


class TokenKind(IntEnum):
    """Kind of a lexical token or of a syntax tree node."""

    Error = 0
    CommentLine = auto()
    CommentBlockOpen = auto()
    CommentBlockClose = auto()
    WhiteSpace = auto()
    EndLine = auto()
    Pragma = auto()
    Circom = auto()
    Version = auto()
    Number = auto()
    Identifier = auto()
    CircomString = auto()
    TemplateKw = auto()
    FunctionKw = auto()
    ComponentKw = auto()
    MainKw = auto()
    PublicKw = auto()
    SignalKw = auto()
    VarKw = auto()
    IncludeKw = auto()
    InputKw = auto()
    OutputKw = auto()
    LogKw = auto()
    LParen = auto()
    RParen = auto()
    LCurly = auto()
    RCurly = auto()
    LBracket = auto()
    RBracket = auto()
    Semicolon = auto()
    Comma = auto()
    Assign = auto()
    EqualSignal = auto()
    LAssignSignal = auto()
    LAssignContraintSignal = auto()
    RAssignSignal = auto()
    RAssignConstraintSignal = auto()
    Add = auto()
    Sub = auto()
    Div = auto()
    Mul = auto()
    Not = auto()
    BitNot = auto()
    Power = auto()
    IntDiv = auto()
    Mod = auto()
    ShiftL = auto()
    ShiftR = auto()
    BitAnd = auto()
    BitOr = auto()
    BitXor = auto()
    Equal = auto()
    NotEqual = auto()
    LessThan = auto()
    GreaterThan = auto()
    LessThanAndEqual = auto()
    GreaterThanAndEqual = auto()
    BoolAnd = auto()
    BoolOr = auto()
    MarkQuestion = auto()
    Colon = auto()
    Dot = auto()
    IfKw = auto()
    ElseKw = auto()
    ForKw = auto()
    WhileKw = auto()
    ReturnKw = auto()
    AssertKw = auto()
    ForLoop = auto()
    AssignStatement = auto()
    CircomProgram = auto()
    SignalOfComponent = auto()
    SignalHeader = auto()
    Block = auto()
    Tuple = auto()
    TupleInit = auto()
    Call = auto()
    TenaryConditional = auto()
    Condition = auto()
    Expression = auto()
    FunctionDef = auto()
    Statement = auto()
    StatementList = auto()
    ComponentDecl = auto()
    TemplateDef = auto()
    TemplateName = auto()
    FunctionName = auto()
    ParameterList = auto()
    SignalDecl = auto()
    VarDecl = auto()
    InputSignalDecl = auto()
    OutputSignalDecl = auto()
    ComponentCall = auto()
    ComponentIdentifier = auto()
    SignalIdentifier = auto()
    ArrayQuery = auto()
    ParserError = auto()
    BlockComment = auto()
    EOF = auto()
    ROOT = auto()
    LAST = auto()

    def is_literal(self) -> bool:
        """True for numbers and identifiers."""
        return self in (TokenKind.Number, TokenKind.Identifier)

    def infix(self) -> tuple[int, int] | None:
        """Left and right binding power of an infix operator, or None."""
        return _INFIX.get(self)

    def prefix(self) -> int | None:
        """Binding power of a prefix operator, or None."""
        return _PREFIX.get(self)

    def postfix(self) -> int | None:
        """Binding power of a postfix operator, or None."""
        return _POSTFIX.get(self)

    def is_declaration_kw(self) -> bool:
        """True for the keywords that start a declaration."""
        return self in (TokenKind.VarKw, TokenKind.ComponentKw, TokenKind.SignalKw)

    def is_trivial(self) -> bool:
        """True for tokens the parser passes over: blanks, comments, errors."""
        return self in _TRIVIAL


_INFIX: dict[TokenKind, tuple[int, int]] = {
    TokenKind.BoolOr: (78, 79),
    TokenKind.BoolAnd: (80, 81),
    **{
        kind: (82, 83)
        for kind in (
            TokenKind.Equal,
            TokenKind.NotEqual,
            TokenKind.LessThan,
            TokenKind.GreaterThan,
            TokenKind.LessThanAndEqual,
            TokenKind.GreaterThanAndEqual,
        )
    },
    TokenKind.BitOr: (84, 85),
    TokenKind.BitXor: (86, 87),
    TokenKind.BitAnd: (88, 89),
    TokenKind.ShiftL: (90, 91),
    TokenKind.ShiftR: (90, 91),
    TokenKind.Add: (92, 93),
    TokenKind.Sub: (92, 93),
    TokenKind.Mul: (94, 95),
    TokenKind.Div: (94, 95),
    TokenKind.IntDiv: (94, 95),
    TokenKind.Mod: (94, 95),
    TokenKind.Power: (96, 97),
}

_PREFIX: dict[TokenKind, int] = {
    TokenKind.Sub: 100,
    TokenKind.Not: 99,
    TokenKind.BitNot: 98,
}

_POSTFIX: dict[TokenKind, int] = {
    TokenKind.Dot: 200,
    TokenKind.LBracket: 201,
}

_TRIVIAL = frozenset(
    {
        TokenKind.WhiteSpace,
        TokenKind.EndLine,
        TokenKind.CommentLine,
        TokenKind.BlockComment,
        TokenKind.Error,
    }
)