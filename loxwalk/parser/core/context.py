"""
Shared state threaded through every grammar function.

`ParseContext` couples a `TokenStream` with an `ErrorRecorder`. A grammar
function that hits a local failure records the error and raises a
`ParseFailure`; the nearest declaration list catches it and, when asked to,
synchronizes so that the following statements can still be parsed.
"""

from enum import Enum
from typing import List, Optional

from loxwalk.errors.recorder import ErrorRecorder, Errors
from loxwalk.exceptions import ParseErrorKind
from loxwalk.lexer.tokens import FixedTokenKind, Token, is_fixed


class ShouldSynchronize(Enum):
    YES = "yes"
    NO = "no"


class ParseFailure(Exception):
    """
    A failed grammar rule. The error itself has already been recorded; this only
    tells the caller whether it still has to skip tokens to recover.
    """

    def __init__(self, should_synchronize: ShouldSynchronize):
        self.should_synchronize = should_synchronize
        super().__init__(should_synchronize.value)


class TokenStream:
    """
    A cursor over the token list that hides newline tokens from the grammar.

    Skipped newlines still count as consumed, so `remaining()` always refers to
    the original, unfiltered list.
    """

    def __init__(self, tokens: List[Token]):
        self._tokens = tokens
        self._position = 0
        self.last_consumed: Optional[Token] = None

    def _skip_newlines(self):
        while self._position < len(self._tokens) and is_fixed(self._tokens[self._position], FixedTokenKind.NEWLINE):
            self._position += 1

    def peek(self) -> Optional[Token]:
        self._skip_newlines()
        if self._position >= len(self._tokens):
            return None
        return self._tokens[self._position]

    def next(self) -> Optional[Token]:
        token = self.peek()
        if token is not None:
            self._position += 1
            self.last_consumed = token
        return token

    def remaining(self) -> int:
        return len(self._tokens) - self._position

    def at_end(self) -> bool:
        return self.peek() is None


class ParseContext:
    def __init__(self, tokens: List[Token]):
        self.tokens = TokenStream(tokens)
        self.recorder: ErrorRecorder[ParseErrorKind] = ErrorRecorder(len(tokens))

    def peek(self) -> Optional[Token]:
        return self.tokens.peek()

    def next(self) -> Optional[Token]:
        return self.tokens.next()

    def check(self, kind: FixedTokenKind) -> bool:
        """True if the next token is the fixed token `kind`, without consuming it."""
        return is_fixed(self.tokens.peek(), kind)

    def match(self, kind: FixedTokenKind) -> bool:
        """Consumes the next token if it is the fixed token `kind`."""
        if self.check(kind):
            self.tokens.next()
            return True
        return False

    def record_error(self, kind: ParseErrorKind):
        self.recorder.record(self.tokens, kind)

    def fail(self, kind: ParseErrorKind, should_synchronize: ShouldSynchronize = ShouldSynchronize.YES) -> ParseFailure:
        """Records `kind` and returns the failure for the caller to raise."""
        self.record_error(kind)
        return ParseFailure(should_synchronize)

    def expect(self, kind: FixedTokenKind, error: ParseErrorKind):
        """Consumes the next token, failing with `error` unless it is `kind`."""
        if not is_fixed(self.tokens.next(), kind):
            raise self.fail(error)

    def errors(self) -> Errors[ParseErrorKind]:
        return self.recorder.errors()


def synchronize(context: ParseContext, stop_before: Optional[FixedTokenKind] = None):
    """
    Skips tokens up to and including the next semicolon, or to the end of input.

    A semicolon that was itself the offending token has already been consumed,
    in which case the boundary is already reached. With `stop_before`, that
    token is left in place (a block's closing brace).
    """
    tokens = context.tokens
    if is_fixed(tokens.last_consumed, FixedTokenKind.SEMICOLON):
        return

    while True:
        token = tokens.peek()
        if token is None:
            return
        if stop_before is not None and is_fixed(token, stop_before):
            return
        tokens.next()
        if is_fixed(token, FixedTokenKind.SEMICOLON):
            return
