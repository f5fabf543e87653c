"""Per-file line tables and the semantic index of templates and their names."""

from __future__ import annotations

import hashlib
import os
from bisect import bisect_left
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import NewType, Protocol
from urllib.parse import urlsplit
from urllib.request import url2pathname

from circomls.ast import (
    AstCircomProgram,
    AstComponentDecl,
    AstInputSignalDecl,
    AstOutputSignalDecl,
    AstSignalDecl,
    AstTemplateDef,
    AstVarDecl,
)
from circomls.syntax import SyntaxNode

FileId = NewType("FileId", int)
Id = NewType("Id", int)


class _HasText(Protocol):
    def text(self) -> str: ...


def _hash64(text: str) -> int:
    digest = hashlib.blake2b(text.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


def token_id(node: _HasText) -> Id:
    """Identifier of a node, derived from its text alone."""
    return Id(_hash64(node.text()))


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based line and character in a document."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """A span of a document between two positions."""

    start: Position
    end: Position


def _file_url_to_path(file_path: str) -> str:
    parts = urlsplit(file_path)
    if parts.scheme != "file":
        raise ValueError(f"not a file URL: {file_path!r}")
    return url2pathname(parts.path)


class FileDB:
    """A file's identity and the offsets of its line ends."""

    def __init__(self, file_id: int, content: str, file_path: str) -> None:
        self.file_id = FileId(file_id)
        self.file_path = file_path
        self.end_line_vec: list[int] = [
            index for index, char in enumerate(content) if char == "\n"
        ]

    @classmethod
    def create(cls, content: str, file_path: str) -> FileDB:
        """Build a FileDB whose id is derived from the file's absolute path."""
        absolute = os.path.abspath(_file_url_to_path(file_path))
        return cls(FileId(_hash64(absolute)), content, file_path)

    def get_path(self) -> Path:
        """The path component of the file URL."""
        return Path(urlsplit(self.file_path).path)

    def off_set(self, position: Position) -> int:
        """Offset in the content of a line/character position."""
        if position.line == 0:
            return position.character
        return self.end_line_vec[position.line - 1] + position.character + 1

    def position(self, off_set: int) -> Position:
        """Line/character position of an offset in the content."""
        line = bisect_left(self.end_line_vec, off_set)
        if line > 0:
            return Position(line, off_set - self.end_line_vec[line - 1] - 1)
        return Position(line, off_set)

    def range(self, syntax: SyntaxNode) -> Range:
        """The range a syntax node covers."""
        text_range = syntax.text_range()
        return Range(self.position(text_range.start), self.position(text_range.end))

    def __repr__(self) -> str:
        return f"FileDB(file_id={self.file_id!r}, file_path={self.file_path!r})"


class SemanticLocations(dict):
    """Ranges recorded for each token id."""

    def insert(self, token_id: int, range: Range) -> None:
        """Record one more range for token_id."""
        self.setdefault(token_id, []).append(range)


class TemplateDataKind(Enum):
    """The sort of name declared inside a template."""

    SIGNAL = "signal"
    VARIABLE = "variable"
    COMPONENT = "component"


@dataclass
class TemplateDataSemantic:
    """Declared signals, variables and components of one template."""

    signal: SemanticLocations = field(default_factory=SemanticLocations)
    variable: SemanticLocations = field(default_factory=SemanticLocations)
    component: SemanticLocations = field(default_factory=SemanticLocations)

    def locations(self, kind: TemplateDataKind) -> SemanticLocations:
        """The table holding names of kind."""
        if kind is TemplateDataKind.SIGNAL:
            return self.signal
        if kind is TemplateDataKind.VARIABLE:
            return self.variable
        return self.component


@dataclass
class SemanticData:
    """Templates of one file and the names declared in them."""

    template: SemanticLocations = field(default_factory=SemanticLocations)
    template_data_semantic: dict[int, TemplateDataSemantic] = field(
        default_factory=dict
    )

    def _lookup(
        self, template_id: int, kind: TemplateDataKind, node: _HasText
    ) -> list[Range] | None:
        semantic_template = self.template_data_semantic.get(template_id)
        if semantic_template is None:
            return None
        return semantic_template.locations(kind).get(token_id(node))

    def lookup_signal(self, template_id: int, signal: _HasText) -> list[Range] | None:
        """Declaration ranges of a signal in a template."""
        return self._lookup(template_id, TemplateDataKind.SIGNAL, signal)

    def lookup_variable(
        self, template_id: int, variable: _HasText
    ) -> list[Range] | None:
        """Declaration ranges of a variable in a template."""
        return self._lookup(template_id, TemplateDataKind.VARIABLE, variable)

    def lookup_component(
        self, template_id: int, component: _HasText
    ) -> list[Range] | None:
        """Declaration ranges of a component in a template."""
        return self._lookup(template_id, TemplateDataKind.COMPONENT, component)


@dataclass
class SemanticDB:
    """Semantic data of every known file."""

    semantic: dict[int, SemanticData] = field(default_factory=dict)

    def _file(self, file_id: int) -> SemanticData:
        return self.semantic.setdefault(file_id, SemanticData())

    def insert_template(self, file_id: int, template_id: int, range: Range) -> None:
        """Record where a template is defined."""
        self._file(file_id).template.insert(template_id, range)

    def insert_template_data(
        self,
        file_id: int,
        template_id: int,
        kind: TemplateDataKind,
        token_id: int,
        range: Range,
    ) -> None:
        """Record a name of kind declared inside a template."""
        data = self._file(file_id).template_data_semantic.setdefault(
            template_id, TemplateDataSemantic()
        )
        data.locations(kind).insert(token_id, range)

    def circom_program_semantic(
        self, file_db: FileDB, abstract_syntax_tree: AstCircomProgram
    ) -> None:
        """Index every named template of a program and its declarations."""
        for template in abstract_syntax_tree.template_list():
            name = template.name()
            if name is None:
                continue
            self.insert_template(
                file_db.file_id, token_id(name.syntax), file_db.range(template.syntax)
            )
            self.template_semantic(file_db, template)

    def template_semantic(self, file_db: FileDB, ast_template: AstTemplateDef) -> None:
        """Index the signals, variables and components declared in a template."""
        template_id = token_id(ast_template.syntax)
        statements = ast_template.statements()
        if statements is None:
            return

        def record(kind: TemplateDataKind, name, decl_syntax: SyntaxNode) -> None:
            if name is not None:
                self.insert_template_data(
                    file_db.file_id,
                    template_id,
                    kind,
                    token_id(name.syntax),
                    file_db.range(decl_syntax),
                )

        for signal_type in (AstInputSignalDecl, AstOutputSignalDecl, AstSignalDecl):
            for signal in statements.find_children(signal_type):
                record(TemplateDataKind.SIGNAL, signal.name(), signal.syntax)

        for var in statements.find_children(AstVarDecl):
            record(TemplateDataKind.VARIABLE, var.name(), var.syntax)

        for component in statements.find_children(AstComponentDecl):
            identifier = component.component_identifier()
            if identifier is not None:
                record(TemplateDataKind.COMPONENT, identifier.name(), component.syntax)