"""
Defines the formal data structures (contracts) for the Abstract Syntax Tree (AST)
produced by the parser stage.

Each node is a pydantic model that exclusively owns its children: the tree has
no sharing and no cycles. Nodes carry no source positions; diagnostics are
anchored to token indices instead (see `loxwalk.errors`).
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel


class ASTNode(BaseModel):
    """A base class for all AST nodes."""


# --- Operators ---


class BinaryOperator(Enum):
    EQUALITY = "=="
    INEQUALITY = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL_TO = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL_TO = "<="
    AND = "and"
    OR = "or"
    ADDITION = "+"
    SUBTRACTION = "-"
    MULTIPLICATION = "*"
    DIVISION = "/"


class UnaryOperator(Enum):
    NEGATE = "-"
    NOT = "!"


# --- Literals and Identifiers ---


class NumberLiteral(ASTNode):
    value: float


class StringLiteral(ASTNode):
    value: str


class BooleanLiteral(ASTNode):
    value: bool


class NilLiteral(ASTNode):
    pass


class Identifier(ASTNode):
    name: str


# --- Expressions ---
# A generic type hint for any expression node
Expression = Union["Assignment", "Unary", "Binary", "Call", "Grouping", NumberLiteral, StringLiteral, BooleanLiteral, NilLiteral, Identifier]


class Grouping(ASTNode):
    expression: Expression


class Call(ASTNode):
    callable: Expression
    arguments: List[Expression]


class Unary(ASTNode):
    operator: UnaryOperator
    operand: Expression


class Binary(ASTNode):
    left: Expression
    operator: BinaryOperator
    right: Expression


class Assignment(ASTNode):
    """Right-associative; only ever built when the target parsed as a bare identifier."""

    identifier: str
    value: Expression


# --- Statements ---
Statement = Union["ExpressionStatement", "Block", "IfStatement", "WhileStatement", "ForStatement", "PrintStatement"]


class ExpressionStatement(ASTNode):
    expression: Expression


class PrintStatement(ASTNode):
    expression: Expression


class VariableDeclaration(ASTNode):
    identifier: str
    initializer: Optional[Expression] = None


Declaration = Union[VariableDeclaration, Statement]


class Block(ASTNode):
    declarations: List[Declaration]


class IfStatement(ASTNode):
    condition: Expression
    then_branch: Statement
    else_branch: Optional[Statement] = None


class WhileStatement(ASTNode):
    condition: Expression
    body: Statement


class ForStatement(ASTNode):
    initializer: Optional[Union[VariableDeclaration, ExpressionStatement]] = None
    condition: Optional[Expression] = None
    increment: Optional[Expression] = None
    body: Statement


# --- Top-level Structures ---


class Program(ASTNode):
    """The root of the entire AST: the ordered declarations of one source text."""

    declarations: List[Declaration]


for _model in (Grouping, Call, Unary, Binary, Assignment, ExpressionStatement, PrintStatement, VariableDeclaration, Block, IfStatement, WhileStatement, ForStatement, Program):
    _model.model_rebuild()
