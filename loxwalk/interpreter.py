import json
import os
from typing import Any, Callable, Dict, List, Optional

from loxwalk.evaluator.evaluator import Evaluator
from loxwalk.exceptions import InternalInterpreterError, LoxRuntimeError, LoxSyntaxError
from loxwalk.lexer.lexer import tokenize
from loxwalk.parser.parser import parse_tokens
from loxwalk.utils import InterpreterArtifactEncoder

# Stages in pipeline order. Only the first two produce artifacts worth saving.
STAGES = ["tokens", "ast", "evaluation"]
DUMPABLE_STAGES = ["tokens", "ast"]


class InterpreterPipeline:
    """
    Orchestrates one submission from source text to evaluated program.
    Each stage's artifact is passed as input to the next one, and handed to
    `on_stage(name, artifact)` as soon as it exists.

    A program with any syntax error is never evaluated: `LoxSyntaxError` is
    raised after the parse stage with every error found. `LoxRuntimeError`
    propagates from the evaluation stage unchanged.
    """

    def __init__(
        self,
        source_content: str,
        file_path: Optional[str] = None,
        evaluator: Optional[Evaluator] = None,
        dump_stages: Optional[List[str]] = None,
        stop_after_stage: Optional[str] = None,
        on_stage: Optional[Callable[[str, Any], None]] = None,
    ):
        self.source_content = source_content
        self.file_path = os.path.abspath(file_path) if file_path else "<stdin>"
        self.evaluator = evaluator if evaluator is not None else Evaluator()
        self.dump_stages = dump_stages or []
        self.stop_after_stage = stop_after_stage
        self.on_stage = on_stage
        self.artifacts: Dict[str, Any] = {}
        self.results: List[Any] = []

    def run(self) -> Any:
        """
        Executes the pipeline stage by stage and returns the last artifact: the
        token list, the `Program`, or the environment snapshot after evaluation.
        """
        try:
            # --- Stage 1: Tokenizing ---
            # Lex errors stay in the token list as error tokens; the parser reports them.
            tokens, _ = tokenize(self.source_content)
            self._store("tokens", tokens)
            if self.stop_after_stage == "tokens":
                return self.results[-1]

            # --- Stage 2: Parsing ---
            self._run_simple_stage("ast", parse_tokens, self.results[-1], self.source_content)
            if self.stop_after_stage == "ast":
                return self.results[-1]

            # --- Stage 3: Evaluation ---
            self.evaluator.evaluate(self.results[-1])
            return self._store("evaluation", self.evaluator.environment.snapshot())

        except (LoxSyntaxError, LoxRuntimeError, InternalInterpreterError):
            raise
        except Exception as e:
            raise InternalInterpreterError(f"An unexpected internal error occurred: {e}") from e

    def _run_simple_stage(self, name: str, func, *args, **kwargs) -> Any:
        """Runs a single function as a stage, storing and returning its result."""
        return self._store(name, func(*args, **kwargs))

    def _store(self, name: str, result: Any) -> Any:
        self.artifacts[name] = result
        self.results.append(result)
        if name in self.dump_stages:
            self.save_artifact(name, result)
        if self.on_stage is not None:
            self.on_stage(name, result)
        return result

    def save_artifact(self, name: str, data: Any):
        """Saves an intermediate artifact next to the script as `<script>.<stage>.json`."""

        if self.file_path == "<stdin>":
            base_name = "stdin_output"
        else:
            base_name = os.path.splitext(self.file_path)[0]

        output_path = f"{base_name}.{name}.json"

        print(f"--- Saving artifact '{name}' to {output_path} ---")

        try:
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=False, cls=InterpreterArtifactEncoder)
        except OSError as e:
            print(f"Error: Could not save artifact '{name}': {e}")


def interpret_source(
    source_content: str,
    evaluator: Optional[Evaluator] = None,
    file_path: Optional[str] = None,
    dump_stages: Optional[List[str]] = None,
    stop_after_stage: Optional[str] = None,
):
    """High-level entry point for the interpreter pipeline."""
    pipeline = InterpreterPipeline(source_content, file_path, evaluator, dump_stages, stop_after_stage)
    return pipeline.run()
