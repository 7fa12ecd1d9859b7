import argparse
import json
import os
import sys

from .evaluator.evaluator import Evaluator
from .exceptions import InternalInterpreterError, LoxRuntimeError, LoxSyntaxError
from .interpreter import DUMPABLE_STAGES, STAGES, InterpreterPipeline
from .lexer.lexer import iter_token_spans
from .lexer.tokens import format_token
from .parser.printer import format_ast
from .utils import TerminalColors

REPL_PROMPT = "> "


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a loxwalk script, or start an interactive session.")
    parser.add_argument(
        "script",
        nargs="?",
        default=None,
        help="The script to execute. Omit to start the REPL (or to read a script from a pipe).",
    )
    parser.add_argument("--show-tokens", action="store_true", help="Print the tokens of each submission.")
    parser.add_argument("--show-ast", action="store_true", help="Print the syntax tree of each submission.")
    parser.add_argument("--show-environment", action="store_true", help="Print every variable frame after evaluation.")
    parser.add_argument(
        "-d",
        "--dump",
        dest="dump_stages",
        nargs="+",
        choices=DUMPABLE_STAGES,
        default=[],
        help="Save the artifact of the given stages as '<script>.<stage>.json'.",
    )
    parser.add_argument("-c", "--stop-after", dest="stop_after_stage", choices=STAGES[:-1], help="Stop after the given stage instead of evaluating.")
    return parser


def report_syntax_error(error: LoxSyntaxError):
    """Every error of the submission with its line and a caret under the column."""
    for context in error.contexts():
        print(context.render(), file=sys.stderr)


def report_runtime_error(error: LoxRuntimeError):
    print(f"{TerminalColors.RED}error: {error.kind.value}{TerminalColors.RESET}", file=sys.stderr)
    print(error.message, file=sys.stderr)


def report_internal_error(error: InternalInterpreterError):
    print(f"\n{TerminalColors.RED}--- UNEXPECTED INTERPRETER ERROR ---{TerminalColors.RESET}", file=sys.stderr)
    print("This may be a bug in the interpreter. Please report it.", file=sys.stderr)
    print(f"{type(error).__name__}: {error}", file=sys.stderr)


def run_submission(source: str, evaluator: Evaluator, args, file_path=None) -> bool:
    """Runs one script or REPL line. Returns False if it failed."""
    if args.show_tokens:
        for token, start, end in iter_token_spans(source):
            print(f"{start}..{end} {format_token(token)}")

    def on_stage(name, artifact):
        if name == "ast" and args.show_ast:
            print(format_ast(artifact))

    pipeline = InterpreterPipeline(
        source,
        file_path=file_path,
        evaluator=evaluator,
        dump_stages=args.dump_stages,
        stop_after_stage=args.stop_after_stage,
        on_stage=on_stage,
    )

    try:
        pipeline.run()
    except LoxSyntaxError as e:
        report_syntax_error(e)
        return False
    except LoxRuntimeError as e:
        report_runtime_error(e)
        return False
    except InternalInterpreterError as e:
        report_internal_error(e)
        return False
    finally:
        if args.show_environment:
            print(json.dumps(evaluator.environment.snapshot(), indent=2))

    if args.stop_after_stage:
        print(f"{TerminalColors.GREEN}--- Stopped after stage '{args.stop_after_stage}' ---{TerminalColors.RESET}", file=sys.stderr)
    return True


def run_repl(args) -> int:
    """Reads and runs one line at a time; the environment carries over between lines."""
    evaluator = Evaluator()
    print(f"{TerminalColors.CYAN}loxwalk REPL. Press Ctrl-D to quit.{TerminalColors.RESET}")

    while True:
        try:
            line = input(REPL_PROMPT)
        except EOFError:
            print()
            return 0
        except KeyboardInterrupt:
            print()
            continue

        if line.strip():
            run_submission(line + "\n", evaluator, args)


def main(argv=None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    if not args.script and sys.stdin.isatty():
        return run_repl(args)

    script_path_for_display = args.script or "stdin"

    try:
        if not args.script:
            source = sys.stdin.read()
            file_path = None
        else:
            file_path = os.path.abspath(args.script)
            with open(file_path, "r", encoding="utf-8") as f:
                source = f.read()

        succeeded = run_submission(source, Evaluator(), args, file_path=file_path)
        return 0 if succeeded else 1

    except FileNotFoundError:
        print(
            f"{TerminalColors.RED}ERROR: Script file '{script_path_for_display}' not found.{TerminalColors.RESET}",
            file=sys.stderr,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
