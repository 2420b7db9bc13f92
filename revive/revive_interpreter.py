"""
The core revive evaluator: call-node classification, argument normalization
and the recursive Reviver engine.
"""
import os
import sys
import collections.abc
from typing import Any, Dict, List

from revive.revive_config import ReviverConfig, coerce_config
from revive.revive_datatypes import (
    Literal, Call, EvaluationError, ReviveError, is_deferred
)


def normalize_args(args_value: Any) -> List[Any]:
    """Coerce the value stored under a call tag into a positional argument list.

    A list (or tuple) is used as-is; any other value becomes a single argument.
    `{"$f": []}` is therefore the only way to write a zero-argument call.
    """
    if isinstance(args_value, (list, tuple)):
        return list(args_value)
    return [args_value]


def _build_tag_index(config: ReviverConfig) -> Dict[str, str]:
    # tag string -> registered name; first registered name wins on collision
    index: Dict[str, str] = {}
    for name in config.functions:
        index.setdefault(config.tag(name), name)
    return index


class Reviver:
    """
    Replaces call nodes in a document with the results of registered functions.

    An instance is bound to one configuration and one data context. It can be
    driven two ways:
      - as a per-node hook (`reviver(key, value)`), by a decoder that has
        already revived every child before the parent is visited;
      - directly with `evaluate(value, self_driven=True)`, in which case the
        reviver walks lists and mappings itself.
    """
    def __init__(self, config: Any = None, data: Any = None):
        self.config = coerce_config(config)
        self.data = data
        self._tag_index = _build_tag_index(self.config)

    def __call__(self, key: Any, value: Any) -> Any:
        return self.evaluate(value, self_driven=False)

    def _dbg(self, *parts):
        if os.environ.get("REVIVE_DEBUG"):
            try:
                print("[DBG]", *parts, file=sys.stderr)
            except Exception:
                pass

    # --- Classification ---

    def classify(self, value: Any):
        """Return `Call(name, args_value)` for a call node, else `Literal`."""
        if not isinstance(value, collections.abc.Mapping) or len(value) != 1:
            return Literal
        (key, args_value), = value.items()
        if not isinstance(key, str):
            return Literal
        name = self._tag_index.get(key)
        if name is None:
            return Literal
        return Call(name, args_value)

    # --- Evaluation ---

    def evaluate(self, value: Any, self_driven: bool = True) -> Any:
        """Resolve every call node reachable from `value`.

        With `self_driven=False` the children of literal containers are assumed
        to be resolved already and only `value` itself is inspected.
        """
        node = self.classify(value)
        if node is Literal:
            if not self_driven:
                return value
            if isinstance(value, list):
                return [self.evaluate(item) for item in value]
            if isinstance(value, tuple):
                return tuple(self.evaluate(item) for item in value)
            if isinstance(value, collections.abc.Mapping):
                return {k: self.evaluate(v) for k, v in value.items()}
            return value
        return self._invoke(node, self_driven)

    def _invoke(self, node: Call, self_driven: bool) -> Any:
        # Arguments are evaluated in both modes; a resolved argument comes back unchanged.
        args = [self.evaluate(arg, self_driven) for arg in normalize_args(node.args_value)]
        func = self.config.functions[node.name]
        self._dbg("CALL", node.name, "argc", len(args), "bind", self.config.bind_data_to_function)
        try:
            if self.config.bind_data_to_function:
                result = func(self.data, *args)
            else:
                result = func(*args)
            if self.config.call_functions_returned_with_data and is_deferred(result):
                self._dbg("DEFERRED", node.name, type(result).__name__)
                result = result(self.data)
        except ReviveError:
            raise
        except Exception as e:
            raise EvaluationError(
                node.name, args, f"{type(e).__name__} in call to {node.name!r}: {e}"
            ) from e
        return result


__all__ = [
    "Reviver",
    "normalize_args",
]
