"""Typed views over the syntax nodes of a Circom program."""

from __future__ import annotations

from typing import ClassVar, Iterator, TypeVar

from circomls.syntax import SyntaxNode
from circomls.token_kind import TokenKind

N = TypeVar("N", bound="AstNode")


class AstNode:
    """A syntax node seen as a node of one particular kind."""

    KIND: ClassVar[TokenKind | None] = None

    def __init_subclass__(cls, kind: TokenKind | None = None, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if kind is not None:
            cls.KIND = kind

    def __init__(self, syntax: SyntaxNode) -> None:
        if not self.can_cast(syntax.kind):
            raise ValueError(
                f"{type(self).__name__} cannot wrap a {syntax.kind.name} node"
            )
        self.syntax = syntax

    @classmethod
    def can_cast(cls, kind: TokenKind) -> bool:
        """True when a node of kind can be seen as this AST type."""
        return cls.KIND is not None and kind == cls.KIND

    @classmethod
    def cast(cls: type[N], syntax: SyntaxNode) -> N | None:
        """Wrap syntax, or return None if its kind does not fit."""
        if cls.can_cast(syntax.kind):
            return cls(syntax)
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AstNode):
            return NotImplemented
        return type(self) is type(other) and self.syntax == other.syntax

    def __hash__(self) -> int:
        return hash((type(self), self.syntax))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.syntax!r})"


def _children(syntax: SyntaxNode, node_type: type[N]) -> Iterator[N]:
    """Direct children of syntax that cast to node_type."""
    for child in syntax.children():
        node = node_type.cast(child)
        if node is not None:
            yield node


def _child(syntax: SyntaxNode, node_type: type[N]) -> N | None:
    """First direct child of syntax that casts to node_type."""
    return next(_children(syntax, node_type), None)


class AstIdentifier(AstNode, kind=TokenKind.Identifier):
    def equal(self, other: str) -> bool:
        """True when the identifier's text is other."""
        return self.syntax.text() == other


class AstSignalHeader(AstNode, kind=TokenKind.SignalHeader):
    pass


class AstInputSignalDecl(AstNode, kind=TokenKind.InputSignalDecl):
    def name(self) -> AstIdentifier | None:
        return _child(self.syntax, AstIdentifier)

    def same_name(self, other: str) -> bool:
        """True when the signal is named other."""
        name = self.name()
        return name is not None and name.equal(other)


class AstOutputSignalDecl(AstNode, kind=TokenKind.OutputSignalDecl):
    def name(self) -> AstIdentifier | None:
        return _child(self.syntax, AstIdentifier)


class AstSignalDecl(AstNode, kind=TokenKind.SignalDecl):
    def name(self) -> AstIdentifier | None:
        return _child(self.syntax, AstIdentifier)


class AstVarDecl(AstNode, kind=TokenKind.VarDecl):
    def name(self) -> AstIdentifier | None:
        return _child(self.syntax, AstIdentifier)


class AstComponentIdentifier(AstNode, kind=TokenKind.ComponentIdentifier):
    def name(self) -> AstIdentifier | None:
        return _child(self.syntax, AstIdentifier)


class AstTemplateName(AstNode, kind=TokenKind.TemplateName):
    def name(self) -> AstIdentifier | None:
        return _child(self.syntax, AstIdentifier)

    def same_name(self, other: AstNode) -> bool:
        """True when this name and other cover the same text."""
        return self.syntax.text() == other.syntax.text()


class AstComponentDecl(AstNode, kind=TokenKind.ComponentDecl):
    def template(self) -> AstTemplateName | None:
        return _child(self.syntax, AstTemplateName)

    def component_identifier(self) -> AstComponentIdentifier | None:
        return _child(self.syntax, AstComponentIdentifier)


class AstStatement(AstNode, kind=TokenKind.Statement):
    pass


class AstStatementList(AstNode, kind=TokenKind.StatementList):
    def statement_list(self) -> Iterator[AstStatement]:
        """The Statement children, in source order."""
        return _children(self.syntax, AstStatement)

    def find_children(self, node_type: type[N]) -> list[N]:
        """All direct children of node_type, in source order."""
        return list(_children(self.syntax, node_type))


class AstBlock(AstNode, kind=TokenKind.Block):
    def statement_list(self) -> AstStatementList | None:
        return _child(self.syntax, AstStatementList)


class AstVersion(AstNode, kind=TokenKind.Version):
    pass


class AstPragma(AstNode, kind=TokenKind.Pragma):
    def version(self) -> AstVersion | None:
        return _child(self.syntax, AstVersion)


class AstParameterList(AstNode, kind=TokenKind.ParameterList):
    pass


class AstFunctionName(AstNode, kind=TokenKind.FunctionName):
    pass


class AstFunctionDef(AstNode, kind=TokenKind.FunctionDef):
    def body(self) -> AstBlock | None:
        return _child(self.syntax, AstBlock)

    def function_name(self) -> AstFunctionName | None:
        return _child(self.syntax, AstFunctionName)

    def argument_list(self) -> AstParameterList | None:
        return _child(self.syntax, AstParameterList)


class AstComponentCall(AstNode, kind=TokenKind.ComponentCall):
    def component_name(self) -> AstComponentIdentifier | None:
        return _child(self.syntax, AstComponentIdentifier)

    def signal(self) -> AstIdentifier | None:
        return _child(self.syntax, AstIdentifier)


class AstCircomString(AstNode, kind=TokenKind.CircomString):
    def value(self) -> str:
        """The string's text without its quotes."""
        text = self.syntax.text()
        if len(text) < 2:
            raise ValueError(f"malformed string literal: {text!r}")
        return text[1:-1]


class AstInclude(AstNode, kind=TokenKind.IncludeKw):
    def lib(self) -> AstCircomString | None:
        return _child(self.syntax, AstCircomString)


class AstTemplateDef(AstNode, kind=TokenKind.TemplateDef):
    def name(self) -> AstTemplateName | None:
        return _child(self.syntax, AstTemplateName)

    def func_body(self) -> AstBlock | None:
        return _child(self.syntax, AstBlock)

    def parameter_list(self) -> AstParameterList | None:
        return _child(self.syntax, AstParameterList)

    def statements(self) -> AstStatementList | None:
        body = self.func_body()
        return body.statement_list() if body is not None else None

    def _find_named(self, node_type: type[N], name: str) -> N | None:
        statements = self.statements()
        if statements is None:
            return None
        for decl in statements.find_children(node_type):
            ident = decl.name()
            if ident is not None and ident.equal(name):
                return decl
        return None

    def find_input_signal(self, name: str) -> AstInputSignalDecl | None:
        return self._find_named(AstInputSignalDecl, name)

    def find_output_signal(self, name: str) -> AstOutputSignalDecl | None:
        return self._find_named(AstOutputSignalDecl, name)

    def find_internal_signal(self, name: str) -> AstSignalDecl | None:
        return self._find_named(AstSignalDecl, name)

    def find_component(self, name: str) -> AstComponentDecl | None:
        statements = self.statements()
        if statements is None:
            return None
        for component in statements.find_children(AstComponentDecl):
            identifier = component.component_identifier()
            if identifier is None:
                continue
            ident = identifier.name()
            if ident is not None and ident.syntax.text() == name:
                return component
        return None


class AstCircomProgram(AstNode, kind=TokenKind.CircomProgram):
    def pragma(self) -> AstPragma | None:
        return _child(self.syntax, AstPragma)

    def libs(self) -> list[AstInclude]:
        return list(_children(self.syntax, AstInclude))

    def template_list(self) -> list[AstTemplateDef]:
        return list(_children(self.syntax, AstTemplateDef))

    def function_list(self) -> list[AstFunctionDef]:
        return list(_children(self.syntax, AstFunctionDef))

    def get_template_by_name(
        self, ast_template_name: AstTemplateName
    ) -> AstTemplateDef | None:
        """The template whose name has the same text as ast_template_name."""
        for template in self.template_list():
            name = template.name()
            if name is not None and name.same_name(ast_template_name):
                return template
        return None