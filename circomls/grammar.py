"""Recursive-descent grammar of the Circom language, driving a Parser."""

from __future__ import annotations

from enum import Enum

from circomls.events import Tree, build_tree
from circomls.lexer import Input
from circomls.parser import Marker, Parser
from circomls.token_kind import TokenKind

_ASSIGN_OPS = (
    TokenKind.Assign,
    TokenKind.RAssignSignal,
    TokenKind.RAssignConstraintSignal,
)

_STATEMENT_ASSIGN_OPS = (
    TokenKind.Assign,
    TokenKind.RAssignSignal,
    TokenKind.RAssignConstraintSignal,
    TokenKind.LAssignContraintSignal,
    TokenKind.LAssignSignal,
    TokenKind.EqualSignal,
)


# --- program ---------------------------------------------------------------


def circom_program(p: Parser) -> None:
    """Parse a whole Circom source file."""
    marker = p.open()

    while p.at_any(
        (
            TokenKind.BlockComment,
            TokenKind.CommentLine,
            TokenKind.EndLine,
            TokenKind.WhiteSpace,
        )
    ):
        p.skip()

    while not p.eof():
        kind = p.current()
        if kind == TokenKind.Pragma:
            pragma(p)
        elif kind == TokenKind.TemplateKw:
            template(p)
        elif kind == TokenKind.IncludeKw:
            include(p)
        elif kind == TokenKind.ComponentKw:
            main_component(p)
        elif kind == TokenKind.FunctionKw:
            function_parse(p)
        else:
            p.advance_with_error("invalid token")
    p.close(marker, TokenKind.CircomProgram)


def pragma(p: Parser) -> None:
    """pragma circom <version>;"""
    marker = p.open()
    p.expect(TokenKind.Pragma)
    p.expect(TokenKind.Circom)
    p.expect(TokenKind.Version)
    p.expect(TokenKind.Semicolon)
    p.close(marker, TokenKind.Pragma)


def include(p: Parser) -> None:
    """include "<path>";"""
    marker = p.open()
    p.expect(TokenKind.IncludeKw)
    p.expect(TokenKind.CircomString)
    p.expect(TokenKind.Semicolon)
    p.close(marker, TokenKind.IncludeKw)


def identity_list(p: Parser) -> None:
    """A comma separated list of identifiers: a, b, c."""
    while p.at(TokenKind.Identifier) and not p.eof():
        p.expect(TokenKind.Identifier)
        if p.at(TokenKind.Comma):
            p.expect(TokenKind.Comma)
        else:
            break


def template(p: Parser) -> None:
    """template Name(param, ...) { body }"""
    marker = p.open()
    p.expect(TokenKind.TemplateKw)

    name_marker = p.open()
    p.expect(TokenKind.Identifier)
    p.close(name_marker, TokenKind.TemplateName)

    p.expect(TokenKind.LParen)
    arg_marker = p.open()
    identity_list(p)
    p.close(arg_marker, TokenKind.ParameterList)
    p.expect(TokenKind.RParen)

    block(p)
    p.close(marker, TokenKind.TemplateDef)


def function_parse(p: Parser) -> None:
    """function name(param, ...) { body }"""
    marker = p.open()
    p.expect(TokenKind.FunctionKw)

    name_marker = p.open()
    p.expect(TokenKind.Identifier)
    p.close(name_marker, TokenKind.FunctionName)

    p.expect(TokenKind.LParen)
    arg_marker = p.open()
    identity_list(p)
    p.close(arg_marker, TokenKind.ParameterList)
    p.expect(TokenKind.RParen)

    block(p)
    p.close(marker, TokenKind.FunctionDef)


def main_component(p: Parser) -> None:
    """component main {public [signals]} = Template(args);"""
    p.expect(TokenKind.ComponentKw)
    p.expect(TokenKind.MainKw)

    if p.at(TokenKind.LCurly):
        p.expect(TokenKind.LCurly)
        p.expect(TokenKind.PublicKw)
        p.expect(TokenKind.LBracket)
        identity_list(p)
        p.expect(TokenKind.RBracket)

    p.expect(TokenKind.Assign)
    expression(p)


def block(p: Parser) -> None:
    """{ declarations and statements }"""
    p.inc_rcurly()

    if not p.at(TokenKind.LCurly):
        p.advance_with_error("Miss {")
        return

    marker = p.open()
    p.eat(TokenKind.LCurly)
    stmt_marker = p.open()
    while not p.at(TokenKind.RCurly) and not p.eof():
        kind = p.current()
        if kind == TokenKind.SignalKw:
            signal_declaration(p)
            p.expect(TokenKind.Semicolon)
        elif kind == TokenKind.VarKw:
            var_declaration(p)
            p.expect(TokenKind.Semicolon)
        elif kind == TokenKind.ComponentKw:
            component_declaration(p)
            p.expect(TokenKind.Semicolon)
        else:
            statement(p)

    p.close(stmt_marker, TokenKind.StatementList)
    p.eat(TokenKind.RCurly)
    p.close(marker, TokenKind.Block)
    p.dec_rcurly()


# --- declarations ----------------------------------------------------------


def _signal_header(p: Parser) -> bool | None:
    """Parse 'signal [input|output]'; True for input, False for output."""
    result: bool | None = None
    marker = p.open()
    p.expect(TokenKind.SignalKw)
    if p.at_any((TokenKind.InputKw, TokenKind.OutputKw)):
        result = p.at(TokenKind.InputKw)
        p.advance()

        if p.at(TokenKind.LCurly):
            p.expect(TokenKind.Identifier)
            p.expect(TokenKind.RCurly)
    p.close(marker, TokenKind.SignalHeader)
    return result


def var_declaration(p: Parser) -> None:
    """var a = expr, b, ... or var (a, b) = expr"""
    marker = p.open()
    p.expect(TokenKind.VarKw)

    if p.at(TokenKind.LParen):
        tuple_(p)
        if p.at(TokenKind.Assign):
            tuple_init(p)
    else:
        p.expect(TokenKind.Identifier)
        if p.at(TokenKind.Assign):
            p.expect(TokenKind.Assign)
            expression(p)
        while p.at(TokenKind.Comma) and not p.eof():
            p.expect(TokenKind.Comma)
            p.expect(TokenKind.Identifier)
            if p.at(TokenKind.Assign):
                p.expect(TokenKind.Assign)
                expression(p)
    p.close(marker, TokenKind.VarDecl)


def signal_declaration(p: Parser) -> None:
    """signal [input|output] name, ... or a tuple form."""
    if not p.at(TokenKind.SignalKw):
        p.advance_with_error("Signal error")
        return

    marker = p.open()
    io_signal = _signal_header(p)

    if p.at(TokenKind.LParen):
        tuple_(p)
        if p.at_any(_ASSIGN_OPS):
            tuple_init(p)
    else:
        p.expect(TokenKind.Identifier)
        while p.at(TokenKind.Comma) and not p.eof():
            p.skip()
            p.expect(TokenKind.Identifier)

    if io_signal is None:
        p.close(marker, TokenKind.SignalDecl)
    elif io_signal:
        p.close(marker, TokenKind.InputSignalDecl)
    else:
        p.close(marker, TokenKind.OutputSignalDecl)


def component_declaration(p: Parser) -> None:
    """component name = Template(args)"""
    marker = p.open()
    p.expect(TokenKind.ComponentKw)
    id_marker = p.open()
    p.expect(TokenKind.Identifier)
    p.close(id_marker, TokenKind.ComponentIdentifier)

    p.expect(TokenKind.Assign)
    name_marker = p.open()
    p.expect(TokenKind.Identifier)
    p.close(name_marker, TokenKind.TemplateName)
    p.expect(TokenKind.LParen)

    if p.at(TokenKind.Identifier):
        expression(p)
        while not p.at(TokenKind.RParen) and not p.eof():
            p.expect(TokenKind.Comma)
            expression(p)

    p.expect(TokenKind.RParen)
    p.close(marker, TokenKind.ComponentDecl)


def declaration(p: Parser) -> None:
    """A signal, var or component declaration."""
    kind = p.current()
    if kind == TokenKind.SignalKw:
        signal_declaration(p)
    elif kind == TokenKind.VarKw:
        var_declaration(p)
    elif kind == TokenKind.ComponentKw:
        component_declaration(p)
    else:
        raise ValueError(f"not the start of a declaration: {kind.name}")


# --- expressions -----------------------------------------------------------


def expression(p: Parser) -> None:
    """An expression wrapped in an Expression node."""
    marker = p.open()
    _circom_expression(p)
    p.close(marker, TokenKind.Expression)


def tuple_(p: Parser) -> None:
    """(a, b, ..., n)"""
    marker = p.open()
    p.expect(TokenKind.LParen)
    p.expect(TokenKind.Identifier)
    while p.at(TokenKind.Comma) and not p.eof():
        p.expect(TokenKind.Comma)
        p.expect(TokenKind.Identifier)
    p.expect(TokenKind.RParen)
    p.close(marker, TokenKind.Tuple)


def tuple_init(p: Parser) -> None:
    """(= | <== | <--) expression"""
    marker = p.open()
    p.expect_any(_ASSIGN_OPS)
    expression(p)
    p.close(marker, TokenKind.TupleInit)


def _expression_atom(p: Parser) -> Marker | None:
    kind = p.current()
    if kind in (TokenKind.Number, TokenKind.Identifier):
        marker = p.open()
        p.advance()
        return p.close(marker, kind)
    if kind == TokenKind.LParen:
        marker = p.open()
        p.expect(TokenKind.LParen)
        expression_rec(p, 0)
        p.expect(TokenKind.RParen)
        return p.close(marker, TokenKind.Tuple)
    p.advance_with_error("Invalid Token")
    return None


def expression_rec(p: Parser, pb: int) -> Marker | None:
    """Parse an operator expression binding tighter than pb.

    Returns the closed marker of the expression, or None when the atom is
    invalid or an operator binds too loosely to continue at this level.
    """
    kind = p.current()
    power = kind.prefix()
    if power is not None:
        marker = p.open()
        p.advance()
        expression_rec(p, power)
        lhs = p.close(marker, kind)
    else:
        atom = _expression_atom(p)
        if atom is None:
            return None
        lhs = atom

    if p.at(TokenKind.LParen):
        marker = p.open_before(lhs)
        tuple_(p)
        lhs = p.close(marker, TokenKind.Call)

    while not p.eof():
        kind = p.current()
        binding = kind.infix()
        if binding is not None:
            left, right = binding
            if right <= pb:
                return None
            marker = p.open_before(lhs)
            p.advance()
            expression_rec(p, left)
            lhs = p.close(marker, kind)
            continue

        power = kind.postfix()
        if power is not None:
            if power <= pb:
                return None
            marker = p.open_before(lhs)
            p.advance()
            if kind == TokenKind.LBracket:
                expression_rec(p, 0)
                p.expect(TokenKind.RBracket)
            else:
                p.expect(TokenKind.Identifier)
            node = TokenKind.ComponentCall if kind == TokenKind.Dot else TokenKind.ArrayQuery
            lhs = p.close(marker, node)
            continue
        break
    return lhs


def _circom_expression(p: Parser) -> None:
    """expr ? expr : expr | expr"""
    lhs = expression_rec(p, 0)
    if lhs is None:
        return
    if p.current() != TokenKind.MarkQuestion:
        return
    marker = p.open_before(lhs)
    lhs = p.close(marker, TokenKind.Condition)

    marker = p.open_before(lhs)
    p.advance()

    first = p.open()
    expression_rec(p, 0)
    p.close(first, TokenKind.Expression)

    p.expect(TokenKind.Colon)

    last = p.open()
    expression_rec(p, 0)
    p.close(last, TokenKind.Expression)

    p.close(marker, TokenKind.TenaryConditional)


# --- statements ------------------------------------------------------------


def statement(p: Parser) -> None:
    """A statement wrapped in a Statement node."""
    marker = p.open()
    if p.current() == TokenKind.IfKw:
        _if_statement(p)
    else:
        _statement_no_condition(p)
    p.close(marker, TokenKind.Statement)


def _if_statement(p: Parser) -> None:
    marker = p.open()
    p.expect(TokenKind.IfKw)
    p.expect(TokenKind.LParen)
    expression(p)
    p.expect(TokenKind.RParen)
    statement(p)
    if p.at(TokenKind.ElseKw):
        p.expect(TokenKind.ElseKw)
        statement(p)
    p.close(marker, TokenKind.IfKw)


def _statement_no_condition(p: Parser) -> None:
    kind = p.current()
    if kind == TokenKind.ForKw:
        _for_statement(p)
    elif kind == TokenKind.WhileKw:
        _while_statement(p)
    elif kind == TokenKind.ReturnKw:
        _return_statement(p)
        p.expect(TokenKind.Semicolon)
    elif kind == TokenKind.LCurly:
        block(p)
    elif kind == TokenKind.LogKw:
        _log_statement(p)
        p.expect(TokenKind.Semicolon)
    elif kind == TokenKind.AssertKw:
        _assert_statement(p)
        p.expect(TokenKind.Semicolon)
    else:
        _assignment_statement(p)
        p.expect(TokenKind.Semicolon)


def _for_statement(p: Parser) -> None:
    marker = p.open()
    p.expect(TokenKind.ForKw)
    p.expect(TokenKind.LParen)
    if p.current().is_declaration_kw():
        declaration(p)
    else:
        _assignment_statement(p)
    p.expect(TokenKind.Semicolon)
    expression(p)
    p.expect(TokenKind.Semicolon)

    _assignment_statement(p)
    p.expect(TokenKind.RParen)

    _statement_no_condition(p)
    p.close(marker, TokenKind.ForLoop)


def _while_statement(p: Parser) -> None:
    p.expect(TokenKind.WhileKw)
    p.expect(TokenKind.LParen)
    expression(p)
    p.expect(TokenKind.RParen)
    statement(p)


def _assert_statement(p: Parser) -> None:
    marker = p.open()
    p.expect(TokenKind.AssertKw)
    p.expect(TokenKind.LParen)
    expression(p)
    p.expect(TokenKind.RParen)
    p.close(marker, TokenKind.AssertKw)


def _log_statement(p: Parser) -> None:
    marker = p.open()
    p.expect(TokenKind.LogKw)
    p.expect(TokenKind.LParen)
    while not p.eof():
        if p.at(TokenKind.RParen):
            break
        if p.current() == TokenKind.CircomString:
            p.advance()
        else:
            expression(p)
        if not p.at(TokenKind.Comma):
            break
        p.advance()
    p.expect(TokenKind.RParen)
    p.close(marker, TokenKind.LogKw)


def _return_statement(p: Parser) -> None:
    marker = p.open()
    p.expect(TokenKind.ReturnKw)
    expression(p)
    p.close(marker, TokenKind.ReturnKw)


def _assignment_statement(p: Parser) -> None:
    marker = p.open()

    if p.at(TokenKind.Identifier):
        id_marker = p.open()
        name_marker = p.open()
        p.expect(TokenKind.Identifier)
        p.close(name_marker, TokenKind.ComponentIdentifier)
        if p.at(TokenKind.LBracket):
            p.expect(TokenKind.LBracket)
            expression(p)
            p.expect(TokenKind.RBracket)
        if p.at(TokenKind.Dot):
            p.expect(TokenKind.Dot)
            p.expect(TokenKind.Identifier)
            p.close(id_marker, TokenKind.ComponentCall)
        else:
            p.close(id_marker, TokenKind.Expression)
    else:
        expression(p)

    if p.at_any(_STATEMENT_ASSIGN_OPS):
        p.advance()
        expression(p)
        p.close(marker, TokenKind.AssignStatement)
    else:
        p.close(marker, TokenKind.Error)


# --- entry points ----------------------------------------------------------


class Scope(Enum):
    """Grammar rule a parse starts from."""

    Block = "block"
    CircomProgram = "circom_program"
    Pragma = "pragma"
    Template = "template"

    def parse(self, p: Parser) -> None:
        """Run this scope's rule on p."""
        rules = {
            Scope.Block: block,
            Scope.CircomProgram: circom_program,
            Scope.Pragma: pragma,
            Scope.Template: template,
        }
        rules[self](p)


def parsing_with_scope(input: Input, scope: Scope) -> Tree:
    """Parse input starting from scope and return the parse tree."""
    p = Parser(input)
    scope.parse(p)
    return build_tree(p.events)


def parsing(input: Input) -> Tree:
    """Parse input as a whole Circom program."""
    return parsing_with_scope(input, Scope.CircomProgram)