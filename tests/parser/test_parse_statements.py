import pytest

from loxwalk.lexer.lexer import tokenize
from loxwalk.parser.parser import parse_program, parse_tokens
from tests.utils.assertion_helper import assert_asts_equal
from tests.utils.factory_helpers import *


def n(value: float):
    return get_number_literal(value)


def print_of(value):
    return get_print_statement(value)


@pytest.mark.parametrize(
    "code, expected",
    [
        pytest.param("var x;", [get_variable_declaration("x")], id="var_without_initializer"),
        pytest.param("var x = 5;", [get_variable_declaration("x", n(5))], id="var_with_initializer"),
        pytest.param("print 1;", [print_of(n(1))], id="print"),
        pytest.param("x = 1;", [get_expression_statement(get_assignment("x", n(1)))], id="expression_statement"),
        pytest.param("{}", [get_block([])], id="empty_block"),
        pytest.param(
            "{ var a = 1; { print a; } }",
            [get_block([get_variable_declaration("a", n(1)), get_block([print_of(get_identifier("a"))])])],
            id="nested_blocks",
        ),
        pytest.param(
            "if (a) print 1;",
            [get_if_statement(get_identifier("a"), print_of(n(1)))],
            id="if_without_else",
        ),
        pytest.param(
            "if (a) print 1; else print 2;",
            [get_if_statement(get_identifier("a"), print_of(n(1)), print_of(n(2)))],
            id="if_else",
        ),
        pytest.param(
            "if (a) if (b) print 1; else print 2;",
            [get_if_statement(get_identifier("a"), get_if_statement(get_identifier("b"), print_of(n(1)), print_of(n(2))))],
            id="dangling_else_binds_to_inner_if",
        ),
        pytest.param(
            "while (i < 3) { i = i + 1; }",
            [
                get_while_statement(
                    get_binary(get_identifier("i"), "<", n(3)),
                    get_block([get_expression_statement(get_assignment("i", get_binary(get_identifier("i"), "+", n(1))))]),
                )
            ],
            id="while",
        ),
        pytest.param(
            "for (var i = 0; i < 2; i = i + 1) print i;",
            [
                get_for_statement(
                    body=print_of(get_identifier("i")),
                    initializer=get_variable_declaration("i", n(0)),
                    condition=get_binary(get_identifier("i"), "<", n(2)),
                    increment=get_assignment("i", get_binary(get_identifier("i"), "+", n(1))),
                )
            ],
            id="for_full",
        ),
        pytest.param(
            "for (i = 0; ; ) print i;",
            [
                get_for_statement(
                    body=print_of(get_identifier("i")),
                    initializer=get_expression_statement(get_assignment("i", n(0))),
                )
            ],
            id="for_expression_initializer",
        ),
        pytest.param("for (;;) print 1;", [get_for_statement(body=print_of(n(1)))], id="for_all_clauses_empty"),
    ],
)
def test_statement_parsed_correctly(code, expected):
    assert_asts_equal(parse_program(code), get_program(expected))


@pytest.mark.parametrize("code", ["", "\n\n", "   \t  "])
def test_empty_input_is_an_empty_program(code):
    assert_asts_equal(parse_program(code), get_program([]))


def test_declarations_keep_source_order():
    program = parse_program("var a = 1;\nprint a;\n{ a = 2; }\n")
    assert [type(declaration).__name__ for declaration in program.declarations] == ["VariableDeclaration", "PrintStatement", "Block"]


def test_parse_tokens_accepts_a_token_list():
    tokens, _ = tokenize("var x = 5; print x + 1;")
    program = parse_tokens(tokens)
    assert_asts_equal(
        program,
        get_program([get_variable_declaration("x", n(5)), print_of(get_binary(get_identifier("x"), "+", n(1)))]),
    )
