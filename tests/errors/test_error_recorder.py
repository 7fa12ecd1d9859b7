import pytest

from loxwalk.errors.recorder import ErrorRecorder, Errors, RecordedError
from loxwalk.exceptions import ParseErrorKind


class FakeStream:
    def __init__(self, remaining: int):
        self._remaining = remaining

    def remaining(self) -> int:
        return self._remaining


def test_token_index_counts_consumed_tokens():
    recorder = ErrorRecorder(10)
    error = recorder.record(FakeStream(7), ParseErrorKind.EXPECTED_SEMICOLON)
    assert error == RecordedError(kind=ParseErrorKind.EXPECTED_SEMICOLON, token_index=3)


def test_errors_keep_recording_order():
    recorder = ErrorRecorder(5)
    recorder.record(FakeStream(4), ParseErrorKind.EXPECTED_IDENTIFIER)
    recorder.record(FakeStream(0), ParseErrorKind.UNEXPECTED_TOKEN)

    errors = recorder.errors()
    assert errors.kinds() == [ParseErrorKind.EXPECTED_IDENTIFIER, ParseErrorKind.UNEXPECTED_TOKEN]
    assert [error.token_index for error in errors] == [1, 5]
    assert len(errors) == 2
    assert errors[1].kind is ParseErrorKind.UNEXPECTED_TOKEN


def test_empty_recorder():
    recorder = ErrorRecorder(3)
    assert recorder.has_errors() is False
    assert recorder.errors().has_errors() is False
    assert list(recorder.errors()) == []


def test_errors_is_a_snapshot():
    recorder = ErrorRecorder(3)
    recorder.record(FakeStream(2), ParseErrorKind.EXPECTED_SEMICOLON)
    snapshot = recorder.errors()

    recorder.record(FakeStream(1), ParseErrorKind.EXPECTED_SEMICOLON)

    assert len(snapshot) == 1
    assert len(recorder.errors()) == 2


def test_errors_cannot_be_mutated():
    errors = Errors([RecordedError(kind=ParseErrorKind.EXPECTED_SEMICOLON, token_index=1)])
    with pytest.raises(TypeError):
        errors[0] = RecordedError(kind=ParseErrorKind.UNEXPECTED_TOKEN, token_index=2)


def test_error_contexts_are_resolved_from_the_collection():
    recorder = ErrorRecorder(4)
    recorder.record(FakeStream(0), ParseErrorKind.EXPECTED_PRIMARY_EXPRESSION)

    contexts = recorder.errors().error_contexts("print 1 +;")
    assert [(context.kind, context.column) for context in contexts] == [(ParseErrorKind.EXPECTED_PRIMARY_EXPRESSION, 9)]
