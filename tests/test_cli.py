import io
import json

import pytest

from loxwalk.cli import build_argument_parser, main, run_repl
from loxwalk.parser.printer import format_ast


@pytest.fixture
def write_script(tmp_path):
    def _write(source: str):
        path = tmp_path / "script.lox"
        path.write_text(source)
        return str(path)

    return _write


def test_runs_a_script(write_script, capsys):
    assert main([write_script("var x = 5; print x + 1;")]) == 0
    assert capsys.readouterr().out == "6\n"


def test_syntax_errors_are_rendered_with_a_caret(write_script, capsys):
    assert main([write_script("print 1 +;\nprint 2;")]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "ExpectedPrimaryExpression, 9\nprint 1 +;\n         ^" in captured.err


def test_runtime_error_is_reported(write_script, capsys):
    assert main([write_script("print 1; print missing;")]) == 1
    captured = capsys.readouterr()
    assert captured.out == "1\n"
    assert "VariableDoesNotExist" in captured.err
    assert "Variable 'missing' does not exist." in captured.err


def test_missing_script(tmp_path, capsys):
    assert main([str(tmp_path / "nope.lox")]) == 1
    assert "not found" in capsys.readouterr().err


def test_show_ast_then_evaluate(write_script, capsys):
    assert main([write_script("print 1 + 2;"), "--show-ast"]) == 0
    assert capsys.readouterr().out == "(print (+ 1.0 2.0))\n3\n"


def test_stop_after_ast(write_script, capsys):
    assert main([write_script("print 1 + 2;"), "--show-ast", "-c", "ast"]) == 0
    assert capsys.readouterr().out == "(print (+ 1.0 2.0))\n"


def test_show_tokens(write_script, capsys):
    main([write_script("print x;"), "--show-tokens", "-c", "tokens"])
    assert capsys.readouterr().out.splitlines() == ["0..5 Print", "6..7 Identifier(x)", "7..8 Semicolon"]


def test_show_environment(write_script, capsys):
    assert main([write_script("var a = 2;"), "--show-environment"]) == 0
    frames = json.loads(capsys.readouterr().out)
    assert frames == [{"time": "<native fn time>", "a": "2"}]


def test_reads_a_piped_script(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO('print "piped";'))
    assert main([]) == 0
    assert capsys.readouterr().out == "piped\n"


def test_repl_keeps_state_between_lines(monkeypatch, capsys):
    lines = iter(["var a = 1;", "print a;", "print b;", "", "a = a + 1; print a;"])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    assert run_repl(build_argument_parser().parse_args([])) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines()[1:] == ["1", "2", ""]
    assert "VariableDoesNotExist" in captured.err


def test_repl_survives_an_internal_error(monkeypatch, capsys):
    lines = iter(["print 1;", "print 2;"])
    calls = []

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    def flaky_format_ast(program):
        calls.append(program)
        if len(calls) == 1:
            raise ValueError("printer broke")
        return format_ast(program)

    monkeypatch.setattr("builtins.input", fake_input)
    monkeypatch.setattr("loxwalk.cli.format_ast", flaky_format_ast)
    assert run_repl(build_argument_parser().parse_args(["--show-ast"])) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines()[1:] == ["(print 2.0)", "2", ""]
    assert "UNEXPECTED INTERPRETER ERROR" in captured.err
    assert "printer broke" in captured.err


def test_stop_after_stage_is_announced(write_script, capsys):
    assert main([write_script("print 1;"), "-c", "tokens"]) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Stopped after stage 'tokens'" in captured.err
