"""
Variable scopes: a stack of frames, searched innermost first.

A name can be declared once per frame. Shadowing a name from an enclosing
frame is allowed, and the outer binding is visible again once the inner frame
is popped.
"""

import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from loxwalk.evaluator.values import NativeCallable, stringify
from loxwalk.exceptions import LoxRuntimeError, RuntimeErrorKind


class Frame:
    def __init__(self):
        self.variables: Dict[str, Any] = {}

    def declare(self, identifier: str, value: Any = None):
        if identifier in self.variables:
            raise LoxRuntimeError(RuntimeErrorKind.VARIABLE_REDEFINITION, name=identifier)
        self.variables[identifier] = value

    def __contains__(self, identifier: str) -> bool:
        return identifier in self.variables


def _clock(_arguments: List[Any]) -> float:
    return time.time()


class Environment:
    def __init__(self):
        self._frames: List[Frame] = [Frame()]  # global frame, never popped

        # Built-ins live in the global frame of this environment only.
        self.define("time", NativeCallable("time", 0, _clock))

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push(self):
        self._frames.append(Frame())

    def pop(self):
        if len(self._frames) == 1:
            raise IndexError("The global frame cannot be popped.")
        self._frames.pop()

    @contextmanager
    def scope(self) -> Iterator["Environment"]:
        """Runs the body in a fresh innermost frame, popped even if the body raises."""
        self.push()
        try:
            yield self
        finally:
            self.pop()

    def declare(self, identifier: str):
        """`var name;` binds nil in the innermost frame."""
        self._frames[-1].declare(identifier)

    def define(self, identifier: str, value: Any):
        """`var name = value;` binds a value in the innermost frame."""
        self._frames[-1].declare(identifier, value)

    def assign(self, identifier: str, value: Any):
        """Rebinds the innermost existing binding of `identifier`."""
        for frame in reversed(self._frames):
            if identifier in frame:
                frame.variables[identifier] = value
                return
        raise LoxRuntimeError(RuntimeErrorKind.VARIABLE_DOES_NOT_EXIST, name=identifier)

    def lookup(self, identifier: str) -> Any:
        for frame in reversed(self._frames):
            if identifier in frame:
                return frame.variables[identifier]
        raise LoxRuntimeError(RuntimeErrorKind.VARIABLE_DOES_NOT_EXIST, name=identifier)

    def snapshot(self) -> List[Dict[str, str]]:
        """Every frame, outermost first, with values in their printed form."""
        return [{name: stringify(value) for name, value in frame.variables.items()} for frame in self._frames]

    def __repr__(self) -> str:
        return f"Environment({self.snapshot()!r})"
