"""
Utility helpers for the loxwalk interpreter, including terminal coloring,
a JSON serializer for intermediate artifacts, and a guard for deeply nested
input.
"""

import json
import sys
from contextlib import contextmanager
from enum import Enum

from pydantic import BaseModel

from loxwalk.config.config import RECURSION_LIMIT
from loxwalk.errors.recorder import Errors


class TerminalColors:
    RED = "\033[91m"
    GREEN = "\033[92m"
    CYAN = "\033[96m"
    RESET = "\033[0m"


@contextmanager
def raised_recursion_limit(limit: int = RECURSION_LIMIT):
    """Raises the interpreter's recursion limit to at least `limit` for the body, then restores it."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous, limit))
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class InterpreterArtifactEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, BaseModel):
            return o.model_dump(mode="json")
        if isinstance(o, Enum):
            return o.value
        if isinstance(o, Errors):
            return list(o)
        if isinstance(o, set):
            return list(o)
        return super().default(o)
