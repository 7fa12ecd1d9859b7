"""
Declarations, and the declaration lists that own error recovery.

Both the program and every block are declaration lists. A list keeps parsing
after a failed declaration: when the failure asks for it, tokens are skipped
up to the next statement boundary so one malformed statement yields one error
instead of a cascade. A list with any failure fails as a whole, without asking
its own caller to synchronize again.
"""

from typing import List, Optional

from loxwalk.exceptions import ParseErrorKind
from loxwalk.lexer.tokens import FixedTokenKind, IdentifierToken
from loxwalk.parser.core.classes import Declaration, VariableDeclaration
from loxwalk.parser.core.context import ParseContext, ParseFailure, ShouldSynchronize, synchronize
from loxwalk.parser.grammar.expression import parse_expression
from loxwalk.parser.grammar import statement


def parse_declaration(context: ParseContext) -> Declaration:
    if context.check(FixedTokenKind.VAR):
        return parse_variable_declaration(context)
    return statement.parse_statement(context)


def parse_variable_declaration(context: ParseContext) -> VariableDeclaration:
    """`var name;` or `var name = expression;`"""
    context.next()

    token = context.next()
    if not isinstance(token, IdentifierToken):
        raise context.fail(ParseErrorKind.EXPECTED_IDENTIFIER)

    initializer = None
    if context.match(FixedTokenKind.EQUAL):
        initializer = parse_expression(context)

    context.expect(FixedTokenKind.SEMICOLON, ParseErrorKind.EXPECTED_SEMICOLON)
    return VariableDeclaration(identifier=token.name, initializer=initializer)


def parse_declaration_list(context: ParseContext, terminator: Optional[FixedTokenKind] = None) -> List[Declaration]:
    """
    Parses declarations until the end of input, or until `terminator` which is
    then consumed. Raises `ParseFailure(NO)` if any declaration failed.
    """
    declarations: List[Declaration] = []
    failed = False

    while not context.tokens.at_end() and not (terminator is not None and context.check(terminator)):
        try:
            declarations.append(parse_declaration(context))
        except ParseFailure as failure:
            failed = True
            if failure.should_synchronize is ShouldSynchronize.YES:
                synchronize(context, stop_before=terminator)

    if terminator is not None and not context.match(terminator):
        # Only reachable at the end of input: the list was never closed.
        context.record_error(ParseErrorKind.UNEXPECTED_TOKEN)
        failed = True

    if failed:
        raise ParseFailure(ShouldSynchronize.NO)

    return declarations
