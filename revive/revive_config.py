"""
Configuration for the revive engine: tag naming strategies and ReviverConfig.
"""
from __future__ import annotations

import sys
import collections.abc
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Dict, Optional


def dollar_tag(name: str) -> str:
    """Default tag convention: `add` -> `$add`."""
    return "$" + name


def prefix_tag(prefix: str) -> Callable[[str], str]:
    """Build a tag strategy that prepends `prefix`, e.g. prefix_tag('fn::')."""
    if not isinstance(prefix, str):
        raise TypeError("prefix_tag expects a string prefix")

    def tag(name: str) -> str:
        return prefix + name
    tag.__name__ = f"prefix_tag({prefix!r})"
    return tag


def stderr_diagnostic(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


@dataclass
class ReviverConfig:
    """Options shared by every entry point of the runtime."""
    functions: Dict[str, Callable] = field(default_factory=dict)
    tag: Callable[[str], str] = dollar_tag
    bind_data_to_function: bool = False
    call_functions_returned_with_data: bool = True
    # None = auto: driver-fed for structured and JSON text input
    stringify_first: Optional[bool] = None
    # Format of textual documents: 'json' or 'yaml'
    fmt: str = "json"
    diagnostic: Callable[[str], None] = stderr_diagnostic

    def __post_init__(self):
        if self.functions is None:
            self.functions = {}
        if not isinstance(self.functions, collections.abc.Mapping):
            raise TypeError("functions must be a mapping of name -> callable")
        for name, func in self.functions.items():
            if not isinstance(name, str):
                raise TypeError(f"function names must be strings, not {type(name).__name__}")
            if not callable(func):
                raise TypeError(f"function {name!r} is not callable")
        if not callable(self.tag):
            raise TypeError("tag must be a callable name -> tag string")
        if self.stringify_first not in (None, True, False):
            raise TypeError("stringify_first must be True, False or None")
        fmt = (self.fmt or "json").lower()
        if fmt not in ("json", "yaml"):
            raise ValueError(f"Unsupported document format: {self.fmt!r}")
        self.fmt = fmt


_FIELD_NAMES = None


def _field_names() -> set:
    global _FIELD_NAMES
    if _FIELD_NAMES is None:
        _FIELD_NAMES = {f.name for f in fields(ReviverConfig)}
    return _FIELD_NAMES


def coerce_config(config: Any = None, **overrides) -> ReviverConfig:
    """
    Normalize the accepted configuration forms into a ReviverConfig.

    `config` may be None, a ReviverConfig, or a mapping with ReviverConfig
    field names. Keyword overrides are applied last.
    """
    match config:
        case None:
            base: Dict[str, Any] = {}
        case ReviverConfig():
            return replace(config, **overrides) if overrides else config
        case collections.abc.Mapping():
            base = dict(config)
        case _:
            raise TypeError(f"config must be a ReviverConfig or a mapping, not {type(config).__name__}")
    base.update(overrides)
    unknown = sorted(set(base) - _field_names())
    if unknown:
        raise TypeError(f"unknown config option(s): {', '.join(unknown)}")
    return ReviverConfig(**base)


__all__ = [
    "ReviverConfig",
    "coerce_config",
    "dollar_tag",
    "prefix_tag",
    "stderr_diagnostic",
]
