# circomls

`circomls` is a pure-Python front end for the Circom circuit language. It contains a
lexer, an error-tolerant parser, a syntax tree that keeps whitespace and comments, a
typed AST layer, and a small semantic index of templates and the signals, variables
and components they declare. It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

| Module                | Contents |
|-----------------------|----------|
| `circomls.token_kind` | `TokenKind`, with `infix`, `prefix`, `postfix` binding powers and `is_trivial`, `is_literal`, `is_declaration_kw` |
| `circomls.lexer`      | `tokenize(source)`, which yields raw `Token`s, and `Input`, the token table the parser reads |
| `circomls.events`     | Parser events `Open`, `Close`, `TokenPosition`, the `Tree` type and `build_tree(events)` |
| `circomls.parser`     | `Parser`, `Marker` and `ParserStuckError` |
| `circomls.grammar`    | Grammar rules, `Scope`, `parsing(input)` and `parsing_with_scope(input, scope)` |
| `circomls.syntax`     | `TextRange`, `GreenNode`, `SyntaxNode`, `SyntaxTreeBuilder` and `syntax_tree(source)` |
| `circomls.ast`        | Typed views over syntax nodes: `AstCircomProgram`, `AstTemplateDef`, `AstPragma`, ... |
| `circomls.vfs`        | `VirtualFile` and `FilePath` |
| `circomls.database`   | `Position`, `Range`, `FileDB`, `token_id`, `SemanticDB` and related tables |

## Parsing a program

```python
from circomls.syntax import syntax_tree
from circomls.ast import AstCircomProgram

source = """pragma circom 2.0.0;

template Multiplier2 () {
    signal input a;
    signal output c;
}
"""

program = AstCircomProgram.cast(syntax_tree(source))
print(program.pragma().version().syntax.text())          # 2.0.0
for template in program.template_list():
    print(template.name().name().syntax.text())          # Multiplier2
```

The parser does not stop at errors. It wraps tokens it cannot place in `Error` nodes,
and it keeps whitespace and comments in the tree as nodes of their own kind. A
`TemplateName` node can therefore start with the whitespace in front of the name;
its `AstIdentifier` child holds only the name. If the parser looks ahead too long
without consuming a token, it raises `ParserStuckError`.

## Parsing a fragment

`Scope` selects the rule that parsing starts from: `Scope.CircomProgram`,
`Scope.Block`, `Scope.Pragma` or `Scope.Template`.

```python
from circomls.lexer import Input
from circomls.grammar import Scope, parsing_with_scope
from circomls.syntax import SyntaxTreeBuilder, SyntaxNode
from circomls.ast import AstPragma

tokens = Input("pragma circom 2.0.1;")
builder = SyntaxTreeBuilder(tokens)
builder.build(parsing_with_scope(tokens, Scope.Pragma))
pragma = AstPragma.cast(SyntaxNode(builder.finish()))
print(pragma.version().syntax.text())                    # 2.0.1
```

## Offsets, positions and the semantic index

`FileDB` maps offsets in a file's content to zero-based line/character positions and
back:

```python
from circomls.database import FileDB, Position

db = FileDB.create(source, "file:///project/circuit.circom")
offset = db.off_set(Position(2, 9))
assert db.position(offset) == Position(2, 9)
```

`FileDB.create` takes a `file:` URL and derives the file's id from the absolute,
normalised path, so `/a/../a/c` and `/a/c` get the same id.

`SemanticDB.circom_program_semantic(file_db, program)` records, for each file, where
every named template is defined and where its signals, variables and components are
declared. `SemanticData.lookup_signal`, `lookup_variable` and `lookup_component`
return the recorded ranges. Ids come from `token_id(node)`, which hashes only the
node's text, so two templates with identical text share an id.

## What it does not do

`circomls` is a library. It provides no command-line program and no language server:
it does not speak the editor protocol, does not answer go-to-definition requests, and
does not read files from disk. `VirtualFile` only holds content that the caller
passes in.