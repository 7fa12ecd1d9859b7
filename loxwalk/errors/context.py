"""
Resolves recorded errors to human-readable source context.

Tokens carry no positions, so a recorded error only knows the index of the
token it was found at. This module recovers the line and column by replaying
the lexer over the original text, counting the same tokens the parser saw.
Errors arrive sorted by token index, which lets the replay run in a single
forward pass: each error only needs the distance from the previous one.
"""

from typing import TYPE_CHECKING, Any, Iterable, List, Tuple

from pydantic import BaseModel

from loxwalk.config.config import TAB_EXTRA_WIDTH
from loxwalk.lexer.lexer import extract_token, skip_whitespace
from loxwalk.lexer.tokens import FixedTokenKind, is_fixed

if TYPE_CHECKING:
    from loxwalk.errors.recorder import RecordedError


class ErrorContext(BaseModel):
    """An error anchored to the source line it occurred on."""

    kind: Any
    line: str
    column: int

    @property
    def kind_name(self) -> str:
        return getattr(self.kind, "value", str(self.kind))

    def render(self) -> str:
        """Kind and column, the offending line verbatim, then a caret under the column."""
        return f"{self.kind_name}, {self.column}\n{self.line}\n{' ' * self.column}^"

    def __str__(self) -> str:
        return self.render()


def visual_width(text: str) -> int:
    """Width of `text` in diagnostic columns; tabs count as wider than one character."""
    return len(text) + TAB_EXTRA_WIDTH * text.count("\t")


class _LexerReplay:
    """Re-tokenizes a source while tracking the current line and column."""

    def __init__(self, source: str):
        self.source = source
        self.position = 0
        self.line_start = 0
        self.column = 0
        self.partials: List[Tuple[Any, int]] = []
        self.contexts: List[ErrorContext] = []

    def skip_whitespace(self):
        end = skip_whitespace(self.source, self.position)
        self.column += visual_width(self.source[self.position : end])
        self.position = end

    def consume(self) -> bool:
        """Replays one token. Returns False once the input is exhausted."""
        self.skip_whitespace()
        token, end = extract_token(self.source, self.position)
        if token is None:
            return False

        if is_fixed(token, FixedTokenKind.NEWLINE):
            self.flush()
            self.line_start = end
            self.column = 0
        else:
            self.column += visual_width(self.source[self.position : end])

        self.position = end
        return True

    def current_line(self) -> str:
        end = self.source.find("\n", self.line_start)
        if end == -1:
            end = len(self.source)
        return self.source[self.line_start : end].rstrip("\r")

    def flush(self):
        """Emits every error found on the current line."""
        if not self.partials:
            return
        line = self.current_line()
        self.contexts.extend(ErrorContext(kind=kind, line=line, column=column) for kind, column in self.partials)
        self.partials = []

    def record_duplicate(self, kind: Any):
        if self.partials:
            self.partials.append((kind, self.partials[-1][1]))
        else:
            previous = self.contexts[-1]
            self.contexts.append(ErrorContext(kind=kind, line=previous.line, column=previous.column))


def get_error_contexts(source: str, errors: Iterable["RecordedError"]) -> List[ErrorContext]:
    """
    Converts errors, ordered by token index, into `ErrorContext`s.

    A recorded index `n` means `n` tokens had been consumed, so the error is
    anchored at the n-th token: the replay skips `advance - 1` tokens and
    captures the column of the next one before consuming it.
    """
    replay = _LexerReplay(source)
    previous_index = 0

    for error in errors:
        advance = error.token_index - previous_index
        previous_index = error.token_index

        if advance <= 0 and (replay.partials or replay.contexts):
            replay.record_duplicate(error.kind)
            continue

        for _ in range(advance - 1):
            if not replay.consume():
                break

        replay.skip_whitespace()
        replay.partials.append((error.kind, replay.column))
        if advance > 0:
            replay.consume()

    # The last line with errors ends at the next newline or the end of input.
    replay.flush()

    return replay.contexts
