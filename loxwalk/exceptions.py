"""
Error kinds and exception types for the loxwalk interpreter.

The three phases treat failures differently:
- lex errors are data: they become `ErrorToken`s in the token list;
- parse errors are accumulated by an `ErrorRecorder` and only surface, all at
  once, as a `LoxSyntaxError` after the whole input has been parsed;
- runtime errors abort the current evaluation as a `LoxRuntimeError`.

Enum values are the stable tags shown in diagnostics (e.g. `ExpectedSemicolon, 8`).
"""

from enum import Enum
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from loxwalk.errors.context import ErrorContext
    from loxwalk.errors.recorder import Errors


class LexErrorKind(Enum):
    NO_TOKEN_KIND = "NoTokenKind"
    # Reserved: the numeric grammar stops a literal at the first non-digit,
    # so nothing produces this kind at the moment.
    NUMERIC_CONTAINS_ALPHA = "NumericContainsAlpha"
    UNCLOSED_STRING = "UnclosedString"


class ParseErrorKind(Enum):
    UNEXPECTED_TOKEN = "UnexpectedToken"
    UNMATCHED_PARENTHESIS = "UnmatchedParenthesis"
    EXPECTED_PRIMARY_EXPRESSION = "ExpectedPrimaryExpression"
    # Reserved, no grammar rule records it.
    EXPECTED_END_OF_EXPRESSION = "ExpectedEndOfExpression"
    EXPECTED_SEMICOLON = "ExpectedSemicolon"
    EXPECTED_IDENTIFIER = "ExpectedIdentifier"


class RuntimeErrorKind(Enum):
    VARIABLE_REDEFINITION = "VariableRedefinition"
    VARIABLE_DOES_NOT_EXIST = "VariableDoesNotExist"
    NOT_CALLABLE = "NotCallable"
    WRONG_NUMBER_OF_ARGUMENTS = "WrongNumberOfArguments"
    TYPE_ERROR = "TypeError"


PARSE_ERROR_MESSAGES = {
    ParseErrorKind.UNEXPECTED_TOKEN: "Unexpected token.",
    ParseErrorKind.UNMATCHED_PARENTHESIS: "Opening parenthesis '(' was never closed.",
    ParseErrorKind.EXPECTED_PRIMARY_EXPRESSION: "Expected an expression.",
    ParseErrorKind.EXPECTED_END_OF_EXPRESSION: "Expected the end of the expression.",
    ParseErrorKind.EXPECTED_SEMICOLON: "Expected ';' at the end of the statement.",
    ParseErrorKind.EXPECTED_IDENTIFIER: "Expected a variable name after 'var'.",
}

RUNTIME_ERROR_MESSAGES = {
    RuntimeErrorKind.VARIABLE_REDEFINITION: "Variable '{name}' is already declared in this scope.",
    RuntimeErrorKind.VARIABLE_DOES_NOT_EXIST: "Variable '{name}' does not exist.",
    RuntimeErrorKind.NOT_CALLABLE: "A '{provided}' value cannot be called.",
    RuntimeErrorKind.WRONG_NUMBER_OF_ARGUMENTS: "Function '{name}' expects {expected} argument(s), but got {provided}.",
    RuntimeErrorKind.TYPE_ERROR: "The '{op}' operator cannot be used with {provided}.",
}


class LoxRuntimeError(Exception):
    """Raised by the evaluator; aborts the evaluation call in progress."""

    def __init__(self, kind: RuntimeErrorKind, **details):
        self.kind = kind
        self.details = details

        # The template is only filled in when every placeholder was supplied.
        template = RUNTIME_ERROR_MESSAGES[kind]
        try:
            description = template.format(**details)
        except KeyError:
            description = kind.value

        self.message = f"{kind.value}: {description}"
        super().__init__(self.message)


class LoxSyntaxError(Exception):
    """
    Raised once parsing has consumed the whole input and at least one error was
    recorded. Carries every recorded error; no partial program is available.
    """

    def __init__(self, errors: "Errors", source: str):
        self.errors = errors
        self.source = source

        count = len(errors)
        plural = "error" if count == 1 else "errors"
        self.message = f"{count} syntax {plural}: " + ", ".join(kind.value for kind in errors.kinds())
        super().__init__(self.message)

    def contexts(self) -> List["ErrorContext"]:
        """Resolves each recorded error to its source line and column."""
        return self.errors.error_contexts(self.source)

    def render(self) -> str:
        return "\n".join(context.render() for context in self.contexts())


class InternalInterpreterError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
