"""
Defines the core data types for the revive engine.

This module provides the classification variant used by the evaluator
(Literal | Call), the explicit Deferred wrapper that callables may return,
and the exception hierarchy surfaced by the runtime.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional


class ReviveError(Exception):
    """Base class for all errors raised by the revive runtime."""
    pass


class EvaluationError(ReviveError):
    """A registered function failed while a call node was being evaluated."""
    def __init__(self, name: str, args: Optional[list] = None, message: Optional[str] = None):
        self.name = name
        self.args_list = list(args or [])
        super().__init__(message or f"call to {name!r} failed")


class DocumentError(ReviveError):
    """Base class for document codec failures."""
    pass


class DocumentParseError(DocumentError):
    def __init__(self, message: str, line: Optional[int] = None, col: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.col = col


class DocumentEncodeError(DocumentError):
    pass


# =================================================================
# Classification
# =================================================================

class _LiteralType:
    """Marks a value that is not a call node."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "Literal"

    def __bool__(self):
        return False


# Singleton instance; compare with `is`
Literal = _LiteralType()


@dataclass(frozen=True)
class Call:
    """A mapping classified as a function invocation."""
    name: str
    args_value: Any

    def __bool__(self):
        return True


# =================================================================
# Deferred results
# =================================================================

class Deferred:
    """
    A result that still needs the data context.

    A registered function may return `Deferred(fn)` to state explicitly that
    `fn(data)` produces the final value. Plain callables are treated the same
    way by the evaluator; the wrapper only makes the intent visible.
    """
    __slots__ = ("fn", "name")

    def __init__(self, fn: Callable[[Any], Any], name: Optional[str] = None):
        if not callable(fn):
            raise TypeError("Deferred expects a callable")
        self.fn = fn
        self.name = name or getattr(fn, "__name__", None)

    def __call__(self, data):
        return self.fn(data)

    def __repr__(self):
        return f"<Deferred {self.name or '?'}>"


def is_deferred(value: Any) -> bool:
    """True for values the evaluator would apply to the data context."""
    return isinstance(value, Deferred) or callable(value)


__all__ = [
    "ReviveError",
    "EvaluationError",
    "DocumentError",
    "DocumentParseError",
    "DocumentEncodeError",
    "Literal",
    "Call",
    "Deferred",
    "is_deferred",
]
