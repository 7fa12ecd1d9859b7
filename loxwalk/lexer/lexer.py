"""
Converts raw source text into a flat, ordered list of tokens.

Each call to `extract_token` consumes exactly one maximal match, trying in
priority order: the fixed-token table (symbols, then keywords), numeric
literals, string literals and identifiers. Text that matches nothing becomes an
`ErrorToken` and tokenization carries on, so the parser can report every
problem in one pass.

The same `extract_token` is replayed by the error context resolver, so token
boundaries must depend on nothing but the text itself.
"""

import re
from typing import Iterator, List, Optional, Tuple

from loxwalk.config.config import KEYWORD_TOKEN_TABLE, SYMBOL_TOKEN_TABLE
from loxwalk.exceptions import LexErrorKind
from loxwalk.lexer.tokens import ErrorToken, FixedToken, FixedTokenKind, IdentifierToken, NumericToken, StringToken, Token

DIGITS = "0123456789"
NUMERIC_LITERAL_REGEX = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")
IDENTIFIER_REGEX = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def is_skippable_whitespace(char: str) -> bool:
    """Whitespace between tokens. Newlines are significant and are not skipped."""
    return char.isspace() and char != "\n"


def skip_whitespace(source: str, position: int) -> int:
    while position < len(source) and is_skippable_whitespace(source[position]):
        position += 1
    return position


def _extract_fixed_token(source: str, position: int) -> Optional[Tuple[FixedToken, int]]:
    for text, kind in SYMBOL_TOKEN_TABLE:
        if source.startswith(text, position):
            return FixedToken(kind=kind), position + len(text)

    # '-' directly followed by a digit is the sign of a numeric literal.
    if source.startswith("-", position):
        following = source[position + 1 : position + 2]
        if not following or following not in DIGITS:
            return FixedToken(kind=FixedTokenKind.MINUS), position + 1

    match = IDENTIFIER_REGEX.match(source, position)
    if match and match.group() in KEYWORD_TOKEN_TABLE:
        return FixedToken(kind=KEYWORD_TOKEN_TABLE[match.group()]), match.end()

    return None


def _extract_numeric_literal(source: str, position: int) -> Optional[Tuple[NumericToken, int]]:
    match = NUMERIC_LITERAL_REGEX.match(source, position)
    if not match:
        return None
    return NumericToken(value=float(match.group())), match.end()


def _extract_string_literal(source: str, position: int) -> Optional[Tuple[Token, int]]:
    if not source.startswith('"', position):
        return None

    end = position + 1
    while end < len(source):
        char = source[end]
        if char == '"':
            return StringToken(value=source[position + 1 : end]), end + 1
        if char == "\n":
            # The newline is left for the next token so line tracking stays intact.
            return ErrorToken(kind=LexErrorKind.UNCLOSED_STRING), end
        end += 1

    return ErrorToken(kind=LexErrorKind.UNCLOSED_STRING), end


def _extract_identifier(source: str, position: int) -> Optional[Tuple[IdentifierToken, int]]:
    match = IDENTIFIER_REGEX.match(source, position)
    if not match:
        return None
    return IdentifierToken(name=match.group()), match.end()


TOKEN_EXTRACTORS = [_extract_fixed_token, _extract_numeric_literal, _extract_string_literal, _extract_identifier]


def extract_token(source: str, position: int = 0) -> Tuple[Optional[Token], int]:
    """
    Consumes one token starting at `position`, skipping leading whitespace.

    Returns the token and the position just past it, or `(None, position)` when
    only whitespace is left.
    """
    position = skip_whitespace(source, position)
    if position >= len(source):
        return None, position

    for extractor in TOKEN_EXTRACTORS:
        extracted = extractor(source, position)
        if extracted is not None:
            return extracted

    # Synchronize on whitespace: the whole unrecognised run is one error token.
    end = position
    while end < len(source) and not source[end].isspace():
        end += 1
    return ErrorToken(kind=LexErrorKind.NO_TOKEN_KIND), end


def iter_token_spans(source: str) -> Iterator[Tuple[Token, int, int]]:
    """Yields `(token, start, end)` for every token of `source`."""
    position = 0
    while True:
        start = skip_whitespace(source, position)
        token, position = extract_token(source, start)
        if token is None:
            return
        yield token, start, position


def tokenize(source: str) -> Tuple[List[Token], bool]:
    """
    Tokenizes the whole of `source`.

    Returns the token list and whether any `ErrorToken` was produced. Lex errors
    never stop tokenization.
    """
    tokens: List[Token] = []
    had_error = False

    for token, _, _ in iter_token_spans(source):
        had_error |= isinstance(token, ErrorToken)
        tokens.append(token)

    return tokens, had_error
