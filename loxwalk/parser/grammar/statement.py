from loxwalk.exceptions import ParseErrorKind
from loxwalk.lexer.tokens import FixedTokenKind
from loxwalk.parser.core.classes import Block, ExpressionStatement, ForStatement, IfStatement, PrintStatement, Statement, WhileStatement
from loxwalk.parser.core.context import ParseContext
from loxwalk.parser.grammar import declaration
from loxwalk.parser.grammar.expression import parse_expression


def parse_statement(context: ParseContext) -> Statement:
    if context.check(FixedTokenKind.LEFT_BRACE):
        return parse_block(context)
    if context.check(FixedTokenKind.IF):
        return _if_statement(context)
    if context.check(FixedTokenKind.WHILE):
        return _while_statement(context)
    if context.check(FixedTokenKind.FOR):
        return _for_statement(context)
    if context.check(FixedTokenKind.PRINT):
        return _print_statement(context)
    return parse_expression_statement(context)


def parse_block(context: ParseContext) -> Block:
    """`{ declaration* }`. No semicolon follows a block."""
    context.next()
    declarations = declaration.parse_declaration_list(context, terminator=FixedTokenKind.RIGHT_BRACE)
    return Block(declarations=declarations)


def parse_expression_statement(context: ParseContext) -> ExpressionStatement:
    expression = parse_expression(context)
    context.expect(FixedTokenKind.SEMICOLON, ParseErrorKind.EXPECTED_SEMICOLON)
    return ExpressionStatement(expression=expression)


def _print_statement(context: ParseContext) -> PrintStatement:
    context.next()
    expression = parse_expression(context)
    context.expect(FixedTokenKind.SEMICOLON, ParseErrorKind.EXPECTED_SEMICOLON)
    return PrintStatement(expression=expression)


def _parenthesized_condition(context: ParseContext):
    context.expect(FixedTokenKind.LEFT_PARENTHESIS, ParseErrorKind.UNEXPECTED_TOKEN)
    condition = parse_expression(context)
    context.expect(FixedTokenKind.RIGHT_PARENTHESIS, ParseErrorKind.UNEXPECTED_TOKEN)
    return condition


def _if_statement(context: ParseContext) -> IfStatement:
    context.next()
    condition = _parenthesized_condition(context)
    then_branch = parse_statement(context)

    else_branch = None
    if context.match(FixedTokenKind.ELSE):
        else_branch = parse_statement(context)

    return IfStatement(condition=condition, then_branch=then_branch, else_branch=else_branch)


def _while_statement(context: ParseContext) -> WhileStatement:
    context.next()
    condition = _parenthesized_condition(context)
    return WhileStatement(condition=condition, body=parse_statement(context))


def _for_statement(context: ParseContext) -> ForStatement:
    """
    `for (initializer; condition; increment) body`. The initializer is a variable
    declaration, an expression statement or empty; condition and increment may
    be left out.
    """
    context.next()
    context.expect(FixedTokenKind.LEFT_PARENTHESIS, ParseErrorKind.UNEXPECTED_TOKEN)

    if context.match(FixedTokenKind.SEMICOLON):
        initializer = None
    elif context.check(FixedTokenKind.VAR):
        initializer = declaration.parse_variable_declaration(context)
    else:
        initializer = parse_expression_statement(context)

    condition = None
    if not context.check(FixedTokenKind.SEMICOLON):
        condition = parse_expression(context)
    context.expect(FixedTokenKind.SEMICOLON, ParseErrorKind.EXPECTED_SEMICOLON)

    increment = None
    if not context.check(FixedTokenKind.RIGHT_PARENTHESIS):
        increment = parse_expression(context)
    context.expect(FixedTokenKind.RIGHT_PARENTHESIS, ParseErrorKind.UNEXPECTED_TOKEN)

    return ForStatement(initializer=initializer, condition=condition, increment=increment, body=parse_statement(context))
