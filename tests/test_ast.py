import pytest

from circomls.ast import (
    AstBlock,
    AstCircomProgram,
    AstComponentCall,
    AstInputSignalDecl,
    AstPragma,
    AstTemplateDef,
    AstVarDecl,
)
from circomls.grammar import Scope, parsing_with_scope
from circomls.lexer import Input
from circomls.syntax import SyntaxNode, SyntaxTreeBuilder, TextRange, syntax_tree
from circomls.token_kind import TokenKind

PARSER_TEST_1 = (
    "pragma circom 2.0.0;\n\n    \n"
    "    template Multiplier2 () {}\n"
    "    template Multiplier2 () {} \n    "
)
PARSER_TEST_3 = "\n\n// comment :>\n\n    pragma circom 2.0.0;\n\n    "
PARSER_TEST_4 = "\n\n/*\ncomment\nblocks\n*/\npragma circom 2.0.0;\n    "
PARSER_TEST_5 = "\n// no pragma here\n    template Multiplier2 () {} \n    "
PARSER_TEST_6 = "\n/* T _ T */\n    template Multiplier2 () {} \n    "

TEMPLATE_SOURCE = """template MultiplierN (N, P, QQ) {
            //Declaration of signals and components.
            signal input in[N];
            signal output out;
            component comp[N-1];
            
            //Statements.
            for(var i = 0; i < N-1; i++){
                comp[i] = Multiplier2();
                }
                
                // ... some more code (see below)
                
                }"""

DECL_SOURCE = """template T() {
    signal input a;
    signal output b;
    signal c;
    var x = 1;
    component m = Other();
}"""


def _parse(source, scope):
    input = Input(source)
    builder = SyntaxTreeBuilder(input)
    builder.build(parsing_with_scope(input, scope))
    return SyntaxNode(builder.finish())


def _program(source):
    program = AstCircomProgram.cast(syntax_tree(source))
    assert program is not None
    return program


def test_program_pragma_and_templates():
    program = _program(PARSER_TEST_1)
    assert program.pragma().syntax.text() == "pragma circom 2.0.0;"
    templates = program.template_list()
    assert len(templates) == 2
    assert templates[0].syntax.text_range() == TextRange(31, 57)
    assert templates[1].syntax.text_range() == TextRange(62, 88)
    assert templates[0].syntax.text() == templates[1].syntax.text()
    assert templates[0].syntax.green == templates[1].syntax.green
    assert templates[0] != templates[1]


def test_template_names_of_test_1():
    program = _program(PARSER_TEST_1)
    names = [t.name().name().syntax.text() for t in program.template_list()]
    assert names == ["Multiplier2", "Multiplier2"]
    statements = program.template_list()[0].statements()
    assert list(statements.statement_list()) == []


@pytest.mark.parametrize("source", [PARSER_TEST_3, PARSER_TEST_4])
def test_pragma_after_comments(source):
    pragma = _program(source).pragma()
    assert pragma.syntax.text() == "pragma circom 2.0.0;"
    assert pragma.version().syntax.text() == "2.0.0"


@pytest.mark.parametrize("source", [PARSER_TEST_5, PARSER_TEST_6])
def test_no_pragma(source):
    program = _program(source)
    assert program.pragma() is None
    assert len(program.template_list()) == 1


def test_pragma_scope():
    syntax = _parse("pragma circom 2.0.1;", Scope.Pragma)
    pragma = AstPragma.cast(syntax)
    assert pragma is not None
    assert pragma.version().syntax.kind == TokenKind.Version
    assert pragma.version().syntax.text() == "2.0.1"


def test_cast_rejects_other_kind():
    root = syntax_tree(PARSER_TEST_1)
    assert AstPragma.cast(root) is None
    assert AstPragma.can_cast(TokenKind.Pragma) is True
    assert AstPragma.can_cast(TokenKind.CircomProgram) is False
    with pytest.raises(ValueError):
        AstPragma(root)


def test_template_scope():
    template = AstTemplateDef.cast(_parse(TEMPLATE_SOURCE, Scope.Template))
    assert template is not None
    assert template.name().name().syntax.text() == "MultiplierN"
    params = template.parameter_list().syntax
    assert params.first_child().text() == "N"
    assert params.last_child().text() == "QQ"
    assert template.find_input_signal("in").name().syntax.text() == "in"
    assert template.find_output_signal("out").name().syntax.text() == "out"
    assert template.find_input_signal("out") is None
    component = template.find_component("comp")
    assert component.component_identifier().name().syntax.text() == "comp"


def test_template_declarations():
    template = AstTemplateDef.cast(_parse(DECL_SOURCE, Scope.Template))
    assert template.find_input_signal("a").same_name("a") is True
    assert template.find_input_signal("a").same_name("b") is False
    assert template.find_input_signal("b") is None
    assert template.find_output_signal("b").name().syntax.text() == "b"
    assert template.find_internal_signal("c").name().syntax.text() == "c"
    assert template.find_internal_signal("a") is None
    assert template.find_component("x") is None
    component = template.find_component("m")
    assert component.template().syntax.text() == " Other"
    assert component.template().name().syntax.text() == "Other"
    variables = template.statements().find_children(AstVarDecl)
    assert [v.name().syntax.text() for v in variables] == ["x"]
    inputs = template.statements().find_children(AstInputSignalDecl)
    assert len(inputs) == 1


def test_block_statements():
    block = AstBlock.cast(_parse("{\n    a = 1;\n    b <== a;\n}", Scope.Block))
    assert block is not None
    statements = [s.syntax.text() for s in block.statement_list().statement_list()]
    assert statements == ["a = 1;", "b <== a;"]


def test_component_call():
    block = AstBlock.cast(_parse("{\n    c.x <== 1;\n}", Scope.Block))
    statement = next(block.statement_list().statement_list())
    assign = statement.syntax.first_child()
    assert assign.kind == TokenKind.AssignStatement
    call = AstComponentCall.cast(assign.first_child())
    assert call is not None
    assert call.component_name().name().syntax.text() == "c"
    assert call.signal().syntax.text() == "x"


def test_functions():
    source = """pragma circom 2.0.0;

function nbits(a) {
    var n = 1;
    return n;
}

template BinSum(n, ops) {
    var nout = nbits(n);
}
"""
    program = _program(source)
    functions = program.function_list()
    assert len(functions) == 1
    function = functions[0]
    assert function.function_name().syntax.text() == " nbits"
    assert function.argument_list().syntax.text() == "a"
    body = [s.syntax.text() for s in function.body().statement_list().statement_list()]
    assert body == ["return n;"]
    templates = program.template_list()
    assert [t.name().name().syntax.text() for t in templates] == ["BinSum"]
    assert templates[0].parameter_list().syntax.text() == "n, ops"


def test_includes():
    program = _program('include "a.circom";\ninclude "b.circom";\n')
    assert [lib.lib().value() for lib in program.libs()] == ["a.circom", "b.circom"]


def test_get_template_by_name():
    source = """pragma circom 2.0.0;

template Other() {}

template Main() {
    component m = Other();
    component k = Missing();
}
"""
    program = _program(source)
    main = program.template_list()[1]
    found = program.get_template_by_name(main.find_component("m").template())
    assert found == program.template_list()[0]
    assert found.name().name().syntax.text() == "Other"
    assert program.get_template_by_name(main.find_component("k").template()) is None