"""
Token data structures produced by the lexer.

Tokens deliberately carry no position information: the token list is the only
bridge between source text and parser, and positions are recovered later by
replaying the lexer over the original text (see `loxwalk.errors.context`).
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel

from loxwalk.exceptions import LexErrorKind


class FixedTokenKind(Enum):
    # --- Symbols ---
    LEFT_PARENTHESIS = "LeftParenthesis"
    RIGHT_PARENTHESIS = "RightParenthesis"
    LEFT_BRACE = "LeftBrace"
    RIGHT_BRACE = "RightBrace"
    PLUS = "Plus"
    MINUS = "Minus"
    ASTERISK = "Asterisk"
    FORWARD_SLASH = "ForwardSlash"
    BANG = "Bang"
    BANG_EQUAL = "BangEqual"
    EQUAL = "Equal"
    EQUAL_EQUAL = "EqualEqual"
    GREATER = "Greater"
    GREATER_EQUAL = "GreaterEqual"
    LESS = "Less"
    LESS_EQUAL = "LessEqual"
    COMMA = "Comma"
    DOT = "Dot"
    SEMICOLON = "Semicolon"

    # --- Literals ---
    TRUE = "True"
    FALSE = "False"
    NIL = "Nil"

    # --- Keywords ---
    VAR = "Var"
    IF = "If"
    ELSE = "Else"
    FOR = "For"
    WHILE = "While"
    FUN = "Fun"
    RETURN = "Return"
    CLASS = "Class"
    THIS = "This"
    SUPER = "Super"
    AND = "And"
    OR = "Or"
    PRINT = "Print"

    # --- Misc ---
    NEWLINE = "Newline"


class FixedToken(BaseModel):
    """A punctuation or keyword token drawn from the closed fixed-token table."""

    kind: FixedTokenKind


class IdentifierToken(BaseModel):
    name: str


class StringToken(BaseModel):
    value: str


class NumericToken(BaseModel):
    value: float


class ErrorToken(BaseModel):
    """Text no rule could match. Lex errors are data, never exceptions."""

    kind: LexErrorKind


Token = Union[FixedToken, IdentifierToken, StringToken, NumericToken, ErrorToken]


def is_fixed(token, kind: FixedTokenKind) -> bool:
    """True if `token` is the fixed token `kind`. Accepts None for end of input."""
    return isinstance(token, FixedToken) and token.kind is kind


def format_token(token) -> str:
    """A compact, human-readable rendering of a token for `--show-tokens`."""
    if isinstance(token, FixedToken):
        return token.kind.value
    if isinstance(token, IdentifierToken):
        return f"Identifier({token.name})"
    if isinstance(token, StringToken):
        return f'StringLiteral("{token.value}")'
    if isinstance(token, NumericToken):
        return f"NumericLiteral({token.value!r})"
    if isinstance(token, ErrorToken):
        return f"Error({token.kind.value})"
    return repr(token)
