from __future__ import annotations
import os
import inspect
import importlib
from typing import Any, Callable, Dict, Optional

from revive.revive_serialize import deserialize

_EXT_FORMATS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def format_for_path(path: str) -> Optional[str]:
    return _EXT_FORMATS.get(os.path.splitext(path)[1].lower())


def read_document_text(path: str, encoding: str = "utf-8") -> str:
    with open(path, "r", encoding=encoding) as f:
        return f.read()


def load_document(path: str, *, encoding: str = "utf-8") -> Any:
    """Read and decode a document file; unknown extensions return raw text."""
    text = read_document_text(path, encoding=encoding)
    fmt = format_for_path(path)
    if fmt is None:
        return text
    return deserialize(text, fmt=fmt)


def load_functions(module_name: str) -> Dict[str, Callable]:
    """Import `module_name` and return its public functions as a registry."""
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ImportError(f"Could not import functions from '{module_name}': {e}") from e
    return {
        name: func for name, func in inspect.getmembers(module, inspect.isfunction)
        if not name.startswith('_') and func.__module__ == module.__name__
    }
