"""
Entry points for reviving documents: the per-node hook, the document
transform with its traversal-mode selection, the curried form, and a
DocumentRunner that reports failures as structured results.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Literal, Optional

from revive.revive_config import ReviverConfig, coerce_config
from revive.revive_datatypes import (
    ReviveError, EvaluationError, DocumentParseError, DocumentEncodeError
)
from revive.revive_interpreter import Reviver
from revive.revive_serialize import deserialize, serialize, loads_with_reviver, is_text

DRIVER_FED = "driver-fed"
SELF_DRIVEN = "self-driven"

Mode = Literal["driver-fed", "self-driven"]


# ===================================================================
# 1. Hook and mode selection
# ===================================================================

def make_reviver(config: Any = None, data: Any = None, **overrides) -> Reviver:
    """Build a `(key, value)` hook for a bottom-up decoder.

    The returned Reviver only inspects the node it is handed; the decoder is
    responsible for visiting children first.
    """
    return Reviver(coerce_config(config, **overrides), data)


def select_mode(document: Any, config: ReviverConfig) -> Mode:
    """Decide who drives the traversal for this document.

    stringify_first=True always re-decodes through the hook, False always walks
    the materialized tree. Unset, JSON text and structured input go through the
    hook; YAML text has no hook-capable decoder and is walked directly.
    """
    if config.stringify_first is True:
        return DRIVER_FED
    if config.stringify_first is False:
        return SELF_DRIVEN
    if is_text(document) and config.fmt == "yaml":
        return SELF_DRIVEN
    return DRIVER_FED


def _json_source(document: Any, config: ReviverConfig):
    if not is_text(document):
        return serialize(document, fmt="json", pretty=False)
    if config.fmt == "json":
        return document
    # Materialize YAML, then re-encode so the JSON decoder can drive the hook
    return serialize(deserialize(document, fmt=config.fmt), fmt="json", pretty=False)


# ===================================================================
# 2. Document transform
# ===================================================================

def transform(config: Any = None, document: Any = None, data: Any = None, **overrides) -> Any:
    """
    Revive every call node in `document` against `data`.

    `document` may be structured (dicts, lists, scalars) or text/bytes in the
    configured format. Raises DocumentParseError for malformed text and
    EvaluationError when a registered function fails.
    """
    cfg = coerce_config(config, **overrides)
    if not cfg.functions:
        cfg.diagnostic("revive: no functions provided")
    reviver = Reviver(cfg, data)
    mode = select_mode(document, cfg)
    reviver._dbg("transform", "mode", mode, "input", type(document).__name__)
    if mode == DRIVER_FED:
        return loads_with_reviver(_json_source(document, cfg), reviver)
    tree = deserialize(document, fmt=cfg.fmt) if is_text(document) else document
    return reviver.evaluate(tree, self_driven=True)


def transform_curried(config: Any = None, **overrides) -> Callable[[Any], Callable[..., Any]]:
    """Curried transform: `transform_curried(config)(document)(data)`.

    Useful for reviving one document against many data contexts, e.g.
    `list(map(transform_curried(cfg)(doc), contexts))`.
    """
    cfg = coerce_config(config, **overrides)

    def with_document(document: Any) -> Callable[..., Any]:
        def with_data(data: Any = None) -> Any:
            return transform(cfg, document, data)
        return with_data
    return with_document


# ===================================================================
# 3. Document execution
# ===================================================================

Token = Dict[str, Any]


@dataclass
class RevivalResult:
    """The structured result of reviving a document."""
    status: Literal['success', 'error']
    value: Any = None
    error_message: Optional[str] = None
    error_token: Optional[Token] = None

    def format_error(self) -> str:
        """The error message, suffixed with the parse location when known."""
        if self.status != 'error':
            return ""
        msg = self.error_message or "Unknown error"
        token = self.error_token or {}
        if token.get('line') is None:
            return msg
        col = token.get('col')
        return f"{msg} (line {token['line']}" + (f", col {col})" if col is not None else ")")


class DocumentRunner:
    """Revives documents with a fixed configuration, reporting failures as results."""

    def __init__(self, functions: Optional[Dict[str, Callable]] = None, **config):
        self.config = coerce_config({"functions": dict(functions or {}), **config})

    def _format_error(self, e: ReviveError) -> tuple[str, Optional[Token]]:
        token = None
        match e:
            case DocumentParseError():
                msg = f"ParseError: {e}"
                if e.line is not None:
                    token = {'line': e.line, 'col': e.col}
            case DocumentEncodeError():
                msg = f"EncodeError: {e}"
            case EvaluationError():
                msg = f"EvaluationError: {e}"
                if e.args_list:
                    try:
                        rendered = serialize(e.args_list, fmt="json", pretty=False, strict=False)
                    except DocumentEncodeError:
                        rendered = repr(e.args_list)
                    msg = f"{msg}\nArguments: {rendered}"
            case _:
                msg = f"InternalError: {e}"
        return msg, token

    def handle_document(self, document: Any, data: Any = None) -> RevivalResult:
        try:
            value = transform(self.config, document, data)
        except ReviveError as e:
            msg, token = self._format_error(e)
            return RevivalResult(status='error', error_message=msg, error_token=token)
        return RevivalResult(status='success', value=value)


__all__ = [
    "DRIVER_FED",
    "SELF_DRIVEN",
    "make_reviver",
    "select_mode",
    "transform",
    "transform_curried",
    "RevivalResult",
    "DocumentRunner",
]
