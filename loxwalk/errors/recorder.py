"""
Bookkeeping for errors that must not stop the consumer that finds them.

An `ErrorRecorder` only remembers *where* an error happened: the absolute index
of the token being consumed when it was recorded. Deciding *what* is an error
is left to the caller (the grammar). Positions in the source text are worked
out afterwards, from the index alone, by `loxwalk.errors.context`.
"""

from typing import Generic, Iterator, List, Protocol, Tuple, TypeVar

from pydantic import BaseModel

from loxwalk.errors.context import ErrorContext, get_error_contexts

ErrorKindT = TypeVar("ErrorKindT")


class RemainingTokens(Protocol):
    def remaining(self) -> int: ...


class RecordedError(BaseModel, Generic[ErrorKindT]):
    kind: ErrorKindT
    token_index: int


class Errors(Generic[ErrorKindT]):
    """An ordered, immutable collection of recorded errors."""

    def __init__(self, errors: List[RecordedError[ErrorKindT]]):
        self._errors: Tuple[RecordedError[ErrorKindT], ...] = tuple(errors)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def kinds(self) -> List[ErrorKindT]:
        return [error.kind for error in self._errors]

    def error_contexts(self, source: str) -> List[ErrorContext]:
        return get_error_contexts(source, self._errors)

    def __iter__(self) -> Iterator[RecordedError[ErrorKindT]]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __getitem__(self, index: int) -> RecordedError[ErrorKindT]:
        return self._errors[index]

    def __repr__(self) -> str:
        return f"Errors({list(self._errors)!r})"


class ErrorRecorder(Generic[ErrorKindT]):
    """
    Tracks consumption against the original token count and records
    `(kind, token_index)` pairs without halting consumption.
    """

    def __init__(self, token_count: int):
        self.token_count = token_count
        self._errors: List[RecordedError[ErrorKindT]] = []

    def record(self, tokens: RemainingTokens, kind: ErrorKindT) -> RecordedError[ErrorKindT]:
        error = RecordedError(kind=kind, token_index=self.token_count - tokens.remaining())
        self._errors.append(error)
        return error

    def has_errors(self) -> bool:
        return bool(self._errors)

    def errors(self) -> Errors[ErrorKindT]:
        return Errors(self._errors)
