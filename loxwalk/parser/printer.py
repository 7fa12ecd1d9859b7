"""
Renders an AST as parenthesized prefix notation, e.g. `(print (+ 1.0 x))`.
Used by the `--show-ast` flag of the CLI.
"""

from loxwalk.parser.core.classes import (
    Assignment,
    Binary,
    Block,
    BooleanLiteral,
    Call,
    ExpressionStatement,
    ForStatement,
    Grouping,
    Identifier,
    IfStatement,
    NilLiteral,
    NumberLiteral,
    PrintStatement,
    Program,
    StringLiteral,
    Unary,
    VariableDeclaration,
    WhileStatement,
)
from loxwalk.utils import raised_recursion_limit


def _sexpr(*parts) -> str:
    return "(" + " ".join(_format(part) for part in parts) + ")"


def _format(node) -> str:
    if node is None:
        return "nil"
    if isinstance(node, str):
        return node

    if isinstance(node, VariableDeclaration):
        return _sexpr("declare-variable", node.identifier, node.initializer)
    if isinstance(node, ExpressionStatement):
        return _format(node.expression)
    if isinstance(node, PrintStatement):
        return _sexpr("print", node.expression)
    if isinstance(node, Block):
        return _sexpr("block", *node.declarations)
    if isinstance(node, IfStatement):
        return _sexpr("if", node.condition, node.then_branch, node.else_branch)
    if isinstance(node, WhileStatement):
        return _sexpr("while", node.condition, node.body)
    if isinstance(node, ForStatement):
        return _sexpr("for", node.initializer, node.condition, node.increment, node.body)

    if isinstance(node, Assignment):
        return _sexpr("assign", node.identifier, node.value)
    if isinstance(node, Unary):
        return _sexpr(node.operator.value, node.operand)
    if isinstance(node, Binary):
        return _sexpr(node.operator.value, node.left, node.right)
    if isinstance(node, Call):
        return _sexpr("call", node.callable, *node.arguments)
    if isinstance(node, Grouping):
        return _sexpr("group", node.expression)
    if isinstance(node, BooleanLiteral):
        return "true" if node.value else "false"
    if isinstance(node, NilLiteral):
        return "nil"
    if isinstance(node, NumberLiteral):
        return repr(node.value)
    if isinstance(node, StringLiteral):
        return f'"{node.value}"'
    if isinstance(node, Identifier):
        return node.name

    raise TypeError(f"Cannot print node of type {type(node).__name__}")


def format_ast(program: Program) -> str:
    """One line per top-level declaration."""
    with raised_recursion_limit():
        return "\n".join(_format(declaration) for declaration in program.declarations)
