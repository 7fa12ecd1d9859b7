from typing import List

from loxwalk.exceptions import LoxSyntaxError
from loxwalk.lexer.lexer import tokenize
from loxwalk.lexer.tokens import Token
from loxwalk.parser.core.classes import Program
from loxwalk.parser.core.context import ParseContext, ParseFailure
from loxwalk.parser.grammar.declaration import parse_declaration_list
from loxwalk.utils import raised_recursion_limit


def parse_tokens(tokens: List[Token], source: str = "") -> Program:
    """
    Parses a full token list into a `Program`.

    Parsing never stops at the first error: every malformed statement is
    recorded and skipped. If anything was recorded, a `LoxSyntaxError` carrying
    all of the errors is raised once the input is exhausted. `source` is only
    needed to resolve those errors to lines and columns.
    """
    context = ParseContext(tokens)

    try:
        with raised_recursion_limit():
            declarations = parse_declaration_list(context)
    except ParseFailure:
        declarations = None

    if declarations is None or context.recorder.has_errors():
        raise LoxSyntaxError(context.errors(), source)

    return Program(declarations=declarations)


def parse_program(source: str) -> Program:
    """High-level entry point: source text to `Program`, or `LoxSyntaxError`."""
    tokens, _ = tokenize(source)
    return parse_tokens(tokens, source)
