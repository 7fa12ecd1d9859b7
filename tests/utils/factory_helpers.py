from typing import List, Optional

from loxwalk.parser.core.classes import *


def get_number_literal(value: float):
    return NumberLiteral(value=value)


def get_string_literal(value: str):
    return StringLiteral(value=value)


def get_boolean_literal(value: bool):
    return BooleanLiteral(value=value)


def get_nil_literal():
    return NilLiteral()


def get_identifier(name: str):
    return Identifier(name=name)


def get_grouping(expression: Expression):
    return Grouping(expression=expression)


def get_binary(left: Expression, operator: str, right: Expression):
    """`operator` is the operator's source text, e.g. "+" or "and"."""
    return Binary(left=left, operator=BinaryOperator(operator), right=right)


def get_unary(operator: str, operand: Expression):
    return Unary(operator=UnaryOperator(operator), operand=operand)


def get_call(callable: Expression, arguments: Optional[List[Expression]] = None):
    return Call(callable=callable, arguments=arguments or [])


def get_assignment(identifier: str, value: Expression):
    return Assignment(identifier=identifier, value=value)


def get_expression_statement(expression: Expression):
    return ExpressionStatement(expression=expression)


def get_print_statement(expression: Expression):
    return PrintStatement(expression=expression)


def get_variable_declaration(identifier: str, initializer: Optional[Expression] = None):
    return VariableDeclaration(identifier=identifier, initializer=initializer)


def get_block(declarations: List[Declaration]):
    return Block(declarations=declarations)


def get_if_statement(condition: Expression, then_branch: Statement, else_branch: Optional[Statement] = None):
    return IfStatement(condition=condition, then_branch=then_branch, else_branch=else_branch)


def get_while_statement(condition: Expression, body: Statement):
    return WhileStatement(condition=condition, body=body)


def get_for_statement(
    body: Statement,
    initializer: Optional[Declaration] = None,
    condition: Optional[Expression] = None,
    increment: Optional[Expression] = None,
):
    return ForStatement(initializer=initializer, condition=condition, increment=increment, body=body)


def get_program(declarations: List[Declaration]):
    return Program(declarations=declarations)
