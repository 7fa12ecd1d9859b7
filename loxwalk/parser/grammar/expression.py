"""
Expression grammar: one function per precedence level, loosest first.

    assignment -> logical_or -> logical_and -> equality -> comparison
               -> term -> factor -> unary -> call -> primary

Binary levels fold left-associatively; assignment is right-associative. The
grammar is LL(1) in this shape, so nothing ever backtracks.
"""

from typing import Callable, Dict, List

from loxwalk.config.config import (
    COMPARISON_OPERATOR_MAP,
    EQUALITY_OPERATOR_MAP,
    FACTOR_OPERATOR_MAP,
    LOGICAL_AND_OPERATOR_MAP,
    LOGICAL_OR_OPERATOR_MAP,
    TERM_OPERATOR_MAP,
    UNARY_OPERATOR_MAP,
)
from loxwalk.exceptions import ParseErrorKind
from loxwalk.lexer.tokens import FixedToken, FixedTokenKind, IdentifierToken, NumericToken, StringToken, is_fixed
from loxwalk.parser.core.classes import (
    Assignment,
    Binary,
    BinaryOperator,
    BooleanLiteral,
    Call,
    Expression,
    Grouping,
    Identifier,
    NilLiteral,
    NumberLiteral,
    StringLiteral,
    Unary,
)
from loxwalk.parser.core.context import ParseContext


def parse_expression(context: ParseContext) -> Expression:
    return _assignment(context)


def _assignment(context: ParseContext) -> Expression:
    expression = _logical_or(context)

    # Any other left-hand shape is left alone: the '=' stays in the stream and
    # the enclosing statement reports it.
    if isinstance(expression, Identifier) and context.match(FixedTokenKind.EQUAL):
        return Assignment(identifier=expression.name, value=_assignment(context))

    return expression


def _fold_binary(context: ParseContext, operand: Callable[[ParseContext], Expression], operator_map: Dict[FixedTokenKind, BinaryOperator]) -> Expression:
    """Helper to build a left-associative tree for one binary precedence level."""
    expression = operand(context)

    while True:
        token = context.peek()
        if not isinstance(token, FixedToken) or token.kind not in operator_map:
            return expression

        context.next()
        right = operand(context)
        expression = Binary(left=expression, operator=operator_map[token.kind], right=right)


def _logical_or(context: ParseContext) -> Expression:
    return _fold_binary(context, _logical_and, LOGICAL_OR_OPERATOR_MAP)


def _logical_and(context: ParseContext) -> Expression:
    return _fold_binary(context, _equality, LOGICAL_AND_OPERATOR_MAP)


def _equality(context: ParseContext) -> Expression:
    return _fold_binary(context, _comparison, EQUALITY_OPERATOR_MAP)


def _comparison(context: ParseContext) -> Expression:
    return _fold_binary(context, _term, COMPARISON_OPERATOR_MAP)


def _term(context: ParseContext) -> Expression:
    return _fold_binary(context, _factor, TERM_OPERATOR_MAP)


def _factor(context: ParseContext) -> Expression:
    return _fold_binary(context, _unary, FACTOR_OPERATOR_MAP)


def _unary(context: ParseContext) -> Expression:
    token = context.peek()
    if isinstance(token, FixedToken) and token.kind in UNARY_OPERATOR_MAP:
        context.next()
        return Unary(operator=UNARY_OPERATOR_MAP[token.kind], operand=_unary(context))

    return _call(context)


def _call(context: ParseContext) -> Expression:
    expression = _primary(context)

    while context.match(FixedTokenKind.LEFT_PARENTHESIS):
        expression = Call(callable=expression, arguments=_arguments(context))

    return expression


def _arguments(context: ParseContext) -> List[Expression]:
    """Parses a comma separated argument list; the '(' is already consumed."""
    arguments: List[Expression] = []
    if context.match(FixedTokenKind.RIGHT_PARENTHESIS):
        return arguments

    while True:
        arguments.append(parse_expression(context))

        token = context.next()
        if is_fixed(token, FixedTokenKind.COMMA):
            continue
        if is_fixed(token, FixedTokenKind.RIGHT_PARENTHESIS):
            return arguments
        raise context.fail(ParseErrorKind.UNEXPECTED_TOKEN)


def _primary(context: ParseContext) -> Expression:
    token = context.next()

    if isinstance(token, NumericToken):
        return NumberLiteral(value=token.value)
    if isinstance(token, StringToken):
        return StringLiteral(value=token.value)
    if isinstance(token, IdentifierToken):
        return Identifier(name=token.name)

    if isinstance(token, FixedToken):
        if token.kind is FixedTokenKind.TRUE:
            return BooleanLiteral(value=True)
        if token.kind is FixedTokenKind.FALSE:
            return BooleanLiteral(value=False)
        if token.kind is FixedTokenKind.NIL:
            return NilLiteral()
        if token.kind is FixedTokenKind.LEFT_PARENTHESIS:
            expression = parse_expression(context)
            if not is_fixed(context.next(), FixedTokenKind.RIGHT_PARENTHESIS):
                raise context.fail(ParseErrorKind.UNMATCHED_PARENTHESIS)
            return Grouping(expression=expression)

    # End of input, an error token, or a token that cannot start an expression.
    raise context.fail(ParseErrorKind.EXPECTED_PRIMARY_EXPRESSION)
