"""
Tree-walking evaluation of a parsed `Program`.

Unlike parsing, evaluation is fail-fast: the first `LoxRuntimeError` aborts the
remaining declarations of the call, since everything after it would build on
a result that does not exist. The environment keeps whatever state was reached.
"""

import math
import sys
from typing import Any, Iterable, Optional, TextIO, Union

from loxwalk.evaluator.environment import Environment
from loxwalk.evaluator.values import NativeCallable, is_boolean, is_numeric, stringify, type_name
from loxwalk.exceptions import InternalInterpreterError, LoxRuntimeError, RuntimeErrorKind
from loxwalk.parser.core.classes import (
    Assignment,
    Binary,
    BinaryOperator,
    Block,
    BooleanLiteral,
    Call,
    Declaration,
    Expression,
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
    UnaryOperator,
    VariableDeclaration,
    WhileStatement,
)
from loxwalk.utils import raised_recursion_limit

ARITHMETIC_OPERATORS = {
    BinaryOperator.SUBTRACTION: lambda left, right: left - right,
    BinaryOperator.MULTIPLICATION: lambda left, right: left * right,
}

COMPARISON_OPERATORS = {
    BinaryOperator.GREATER_THAN: lambda left, right: left > right,
    BinaryOperator.GREATER_THAN_OR_EQUAL_TO: lambda left, right: left >= right,
    BinaryOperator.LESS_THAN: lambda left, right: left < right,
    BinaryOperator.LESS_THAN_OR_EQUAL_TO: lambda left, right: left <= right,
}


def _type_error(operator: Union[BinaryOperator, UnaryOperator, str], *operands: Any) -> LoxRuntimeError:
    op = operator if isinstance(operator, str) else operator.value
    provided = " and ".join(f"a '{type_name(operand)}'" for operand in operands)
    return LoxRuntimeError(RuntimeErrorKind.TYPE_ERROR, op=op, provided=provided)


def _divide(left: float, right: float) -> float:
    """IEEE-754 division: dividing by zero gives an infinity or NaN, never an exception."""
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


class Evaluator:
    """
    Executes declarations against an `Environment`.

    The environment outlives a single `evaluate` call, so a REPL can feed one
    evaluator line after line. `print` output goes to `output` (stdout by default).
    """

    def __init__(self, environment: Optional[Environment] = None, output: Optional[TextIO] = None):
        self.environment = environment if environment is not None else Environment()
        self.output = output

        self._statement_handlers = {
            VariableDeclaration: self._execute_variable_declaration,
            ExpressionStatement: self._execute_expression_statement,
            PrintStatement: self._execute_print,
            Block: self._execute_block,
            IfStatement: self._execute_if,
            WhileStatement: self._execute_while,
            ForStatement: self._execute_for,
        }
        self._expression_handlers = {
            Assignment: self._evaluate_assignment,
            Unary: self._evaluate_unary,
            Binary: self._evaluate_binary,
            Call: self._evaluate_call,
            Grouping: lambda node: self.evaluate_expression(node.expression),
            Identifier: lambda node: self.environment.lookup(node.name),
            NumberLiteral: lambda node: node.value,
            StringLiteral: lambda node: node.value,
            BooleanLiteral: lambda node: node.value,
            NilLiteral: lambda node: None,
        }

    def evaluate(self, declarations: Union[Program, Iterable[Declaration]]):
        """Executes declarations in order. Raises `LoxRuntimeError` on the first failure."""
        if isinstance(declarations, Program):
            declarations = declarations.declarations

        with raised_recursion_limit():
            for declaration in declarations:
                self.execute(declaration)

    # --- Statements ---

    def execute(self, node: Declaration):
        handler = self._statement_handlers.get(type(node))
        if handler is None:
            raise InternalInterpreterError(f"No evaluation rule for statement '{type(node).__name__}'.")
        handler(node)

    def _execute_variable_declaration(self, node: VariableDeclaration):
        if node.initializer is None:
            self.environment.declare(node.identifier)
        else:
            self.environment.define(node.identifier, self.evaluate_expression(node.initializer))

    def _execute_expression_statement(self, node: ExpressionStatement):
        self.evaluate_expression(node.expression)

    def _execute_print(self, node: PrintStatement):
        text = stringify(self.evaluate_expression(node.expression))
        print(text, file=self.output if self.output is not None else sys.stdout)

    def _execute_block(self, node: Block):
        with self.environment.scope():
            for declaration in node.declarations:
                self.execute(declaration)

    def _condition(self, condition: Expression, keyword: str) -> bool:
        """Control-flow conditions must be booleans; there is no implicit truthiness."""
        value = self.evaluate_expression(condition)
        if not is_boolean(value):
            raise LoxRuntimeError(RuntimeErrorKind.TYPE_ERROR, op=keyword, provided=f"a '{type_name(value)}' condition")
        return value

    def _execute_if(self, node: IfStatement):
        if self._condition(node.condition, "if"):
            self.execute(node.then_branch)
        elif node.else_branch is not None:
            self.execute(node.else_branch)

    def _execute_while(self, node: WhileStatement):
        while self._condition(node.condition, "while"):
            self.execute(node.body)

    def _execute_for(self, node: ForStatement):
        # The initializer's variable belongs to the loop, not the enclosing scope.
        with self.environment.scope():
            if node.initializer is not None:
                self.execute(node.initializer)

            while node.condition is None or self._condition(node.condition, "for"):
                self.execute(node.body)
                if node.increment is not None:
                    self.evaluate_expression(node.increment)

    # --- Expressions ---

    def evaluate_expression(self, node: Expression) -> Any:
        handler = self._expression_handlers.get(type(node))
        if handler is None:
            raise InternalInterpreterError(f"No evaluation rule for expression '{type(node).__name__}'.")
        return handler(node)

    def _evaluate_assignment(self, node: Assignment) -> Any:
        value = self.evaluate_expression(node.value)
        self.environment.assign(node.identifier, value)
        return value

    def _evaluate_unary(self, node: Unary) -> Any:
        operand = self.evaluate_expression(node.operand)

        if node.operator is UnaryOperator.NEGATE:
            if not is_numeric(operand):
                raise _type_error(node.operator, operand)
            return -operand

        if not is_boolean(operand):
            raise _type_error(node.operator, operand)
        return not operand

    def _evaluate_logical(self, node: Binary) -> bool:
        """`and`/`or` short-circuit, but both operands must still be booleans."""
        left = self.evaluate_expression(node.left)
        if not is_boolean(left):
            raise _type_error(node.operator, left)

        if node.operator is BinaryOperator.AND and not left:
            return left
        if node.operator is BinaryOperator.OR and left:
            return left

        right = self.evaluate_expression(node.right)
        if not is_boolean(right):
            raise _type_error(node.operator, right)
        return right

    def _evaluate_binary(self, node: Binary) -> Any:
        operator = node.operator
        if operator in (BinaryOperator.AND, BinaryOperator.OR):
            return self._evaluate_logical(node)

        left = self.evaluate_expression(node.left)
        right = self.evaluate_expression(node.right)
        both_numeric = is_numeric(left) and is_numeric(right)

        if operator is BinaryOperator.ADDITION:
            if both_numeric:
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise _type_error(operator, left, right)

        if operator is BinaryOperator.DIVISION:
            if both_numeric:
                return _divide(left, right)
            raise _type_error(operator, left, right)

        if operator in ARITHMETIC_OPERATORS:
            if both_numeric:
                return ARITHMETIC_OPERATORS[operator](left, right)
            raise _type_error(operator, left, right)

        if operator in COMPARISON_OPERATORS:
            if both_numeric:
                return COMPARISON_OPERATORS[operator](left, right)
            raise _type_error(operator, left, right)

        if operator in (BinaryOperator.EQUALITY, BinaryOperator.INEQUALITY):
            # Mixed types are an error, not simply unequal.
            if not (both_numeric or (is_boolean(left) and is_boolean(right))):
                raise _type_error(operator, left, right)
            equal = left == right
            return equal if operator is BinaryOperator.EQUALITY else not equal

        raise InternalInterpreterError(f"Unknown binary operator '{operator.value}'.")

    def _evaluate_call(self, node: Call) -> Any:
        callee = self.evaluate_expression(node.callable)
        if not isinstance(callee, NativeCallable):
            raise LoxRuntimeError(RuntimeErrorKind.NOT_CALLABLE, provided=type_name(callee))

        if callee.arity != len(node.arguments):
            raise LoxRuntimeError(RuntimeErrorKind.WRONG_NUMBER_OF_ARGUMENTS, name=callee.name, expected=callee.arity, provided=len(node.arguments))

        arguments = [self.evaluate_expression(argument) for argument in node.arguments]
        return callee.call(arguments)
