import io
import json
import sys

import pytest

from loxwalk.evaluator.evaluator import Evaluator
from loxwalk.exceptions import InternalInterpreterError, LoxRuntimeError, LoxSyntaxError, RuntimeErrorKind
from loxwalk.interpreter import InterpreterPipeline, interpret_source
from loxwalk.lexer.tokens import FixedToken, FixedTokenKind
from loxwalk.parser.core.classes import Program
from loxwalk.utils import raised_recursion_limit


def test_full_pipeline_returns_the_environment_snapshot():
    output = io.StringIO()
    snapshot = interpret_source("var a = 1; print a + 1;", evaluator=Evaluator(output=output))
    assert snapshot == [{"time": "<native fn time>", "a": "1"}]
    assert output.getvalue() == "2\n"


def test_stop_after_tokens():
    tokens = interpret_source("print 1;", stop_after_stage="tokens")
    assert tokens[0] == FixedToken(kind=FixedTokenKind.PRINT)
    assert len(tokens) == 3


def test_stop_after_ast_does_not_evaluate():
    output = io.StringIO()
    program = interpret_source("print 1;", evaluator=Evaluator(output=output), stop_after_stage="ast")
    assert isinstance(program, Program)
    assert output.getvalue() == ""


def test_program_with_a_syntax_error_is_never_evaluated():
    output = io.StringIO()
    with pytest.raises(LoxSyntaxError):
        interpret_source("print 1; print ;", evaluator=Evaluator(output=output))
    assert output.getvalue() == ""


def test_runtime_errors_propagate_unchanged():
    with pytest.raises(LoxRuntimeError) as excinfo:
        interpret_source("print missing;", evaluator=Evaluator(output=io.StringIO()))
    assert excinfo.value.kind is RuntimeErrorKind.VARIABLE_DOES_NOT_EXIST


def test_stage_hook_sees_every_artifact():
    seen = []
    pipeline = InterpreterPipeline(
        "var a = 1;",
        evaluator=Evaluator(output=io.StringIO()),
        on_stage=lambda name, artifact: seen.append(name),
    )
    pipeline.run()
    assert seen == ["tokens", "ast", "evaluation"]
    assert set(pipeline.artifacts) == {"tokens", "ast", "evaluation"}


def test_unexpected_errors_are_wrapped():
    def explode(name, artifact):
        raise ValueError("boom")

    pipeline = InterpreterPipeline("print 1;", on_stage=explode)
    with pytest.raises(InternalInterpreterError):
        pipeline.run()


def test_artifacts_are_dumped_next_to_the_script(tmp_path):
    script = tmp_path / "script.lox"
    script.write_text("var x = 5;")

    interpret_source(
        script.read_text(),
        evaluator=Evaluator(output=io.StringIO()),
        file_path=str(script),
        dump_stages=["tokens", "ast"],
    )

    tokens = json.loads((tmp_path / "script.tokens.json").read_text())
    assert tokens[0] == {"kind": "Var"}
    assert tokens[3] == {"value": 5.0}

    ast = json.loads((tmp_path / "script.ast.json").read_text())
    assert ast["declarations"][0]["identifier"] == "x"
    assert ast["declarations"][0]["initializer"] == {"value": 5.0}


def test_recursion_limit_is_restored_after_the_guarded_block():
    previous = sys.getrecursionlimit()
    with raised_recursion_limit(previous + 500):
        assert sys.getrecursionlimit() == previous + 500
    assert sys.getrecursionlimit() == previous


def test_recursion_limit_is_never_lowered():
    previous = sys.getrecursionlimit()
    with raised_recursion_limit(10):
        assert sys.getrecursionlimit() == previous
