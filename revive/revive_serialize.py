from __future__ import annotations

import json
import re
import datetime
import collections.abc
from typing import Any, Callable, Optional

# YAML is a project dependency
import yaml

from revive.revive_datatypes import DocumentParseError, DocumentEncodeError


# --------------------------
# Helpers
# --------------------------

def _norm_text(data: bytes | bytearray | str, *, encoding: Optional[str] = None) -> str:
    if isinstance(data, (bytes, bytearray)):
        enc = encoding or 'utf-8'
        try:
            return data.decode(enc)
        except (LookupError, UnicodeDecodeError) as e:
            raise DocumentParseError(f"could not decode document bytes as {enc}: {e}") from e
    if isinstance(data, str):
        return data
    raise TypeError(f"expected text or bytes, not {type(data).__name__}")


def _encoding_from_content_type(content_type: Optional[str]) -> Optional[str]:
    if not content_type:
        return None
    m = re.search(r'charset\s*=\s*([^\s;]+)', content_type, re.IGNORECASE)
    if m:
        return m.group(1).strip('"').strip("'")
    return None


def _to_builtin(obj: Any) -> Any:
    # Tuples and mapping-likes become plain lists/dicts
    if isinstance(obj, (list, tuple)):
        return [_to_builtin(x) for x in obj]
    if isinstance(obj, collections.abc.Mapping):
        return {k: _to_builtin(v) for k, v in obj.items()}
    return obj


def _display_default(obj: Any) -> Any:
    # json.dumps `default` hook for values produced by registered functions
    if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
        return obj.isoformat()
    if callable(obj):
        name = getattr(obj, "name", None) or getattr(obj, "__name__", None) or "?"
        return f"<deferred {name}>"
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def is_text(document: Any) -> bool:
    return isinstance(document, (str, bytes, bytearray))


def detect_format(content_type: Optional[str] = None, data_hint: Optional[str] = None) -> Optional[str]:
    """
    Returns a canonical format name among: 'json', 'yaml'.
    Uses Content-Type first; falls back to simple data sniffing if provided.
    """
    ct = (content_type or "").lower()
    if 'json' in ct:
        return 'json'
    if 'yaml' in ct:
        return 'yaml'

    if data_hint is not None:
        s = data_hint.lstrip()
        if not s:
            return None
        if s[0] in "{[\"":
            return 'json'
        return 'yaml'
    return None


# --------------------------
# Public API
# --------------------------

def loads_with_reviver(text: bytes | bytearray | str,
                       hook: Callable[[Any, Any], Any]) -> Any:
    """
    Decode JSON text, calling `hook(key, mapping)` for every object as soon as
    the decoder has built it. Children are always hooked before their parent.
    The decoder does not expose the owning key, so `key` is None.
    """
    text = _norm_text(text)

    def object_pairs_hook(pairs):
        return hook(None, dict(pairs))

    try:
        return json.loads(text, object_pairs_hook=object_pairs_hook)
    except json.JSONDecodeError as e:
        raise DocumentParseError(f"invalid JSON: {e.msg}", line=e.lineno, col=e.colno) from e


def deserialize(data: bytes | bytearray | str,
                *,
                content_type: Optional[str] = None,
                fmt: Optional[str] = None) -> Any:
    """
    Convert document text (bytes/string) to native Python structures.
    Supported fmt: 'json', 'yaml'. If fmt is None, uses content_type, then sniffing.
    """
    enc = _encoding_from_content_type(content_type)
    text = _norm_text(data, encoding=enc)
    f = (fmt or detect_format(content_type, text) or 'json').lower()
    if f == 'json':
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentParseError(f"invalid JSON: {e.msg}", line=e.lineno, col=e.colno) from e
    if f == 'yaml':
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            mark = getattr(e, 'problem_mark', None)
            line = mark.line + 1 if mark is not None else None
            col = mark.column + 1 if mark is not None else None
            raise DocumentParseError(f"invalid YAML: {e}", line=line, col=col) from e
    raise ValueError(f"Unsupported document format: {fmt!r}")


def serialize(value: Any,
              *,
              fmt: str = 'json',
              pretty: bool = True,
              strict: bool = True) -> str:
    """
    Convert a document into text.
    - fmt: 'json' | 'yaml'
    - strict: when False, non-JSON values (dates, deferred functions) are
      rendered for display instead of raising DocumentEncodeError.
    """
    f = (fmt or '').lower()
    built = _to_builtin(value)
    if f == 'json':
        try:
            return json.dumps(built, ensure_ascii=False,
                              indent=2 if pretty else None,
                              default=None if strict else _display_default)
        except (TypeError, ValueError) as e:
            raise DocumentEncodeError(f"document is not JSON-encodable: {e}") from e
    if f == 'yaml':
        try:
            return yaml.safe_dump(built, sort_keys=False)
        except yaml.YAMLError as e:
            raise DocumentEncodeError(f"document is not YAML-encodable: {e}") from e
    raise ValueError(f"Unsupported serialization format: {fmt!r}")


__all__ = [
    "deserialize",
    "serialize",
    "detect_format",
    "loads_with_reviver",
    "is_text",
]
