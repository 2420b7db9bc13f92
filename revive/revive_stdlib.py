"""
A ready-made function library for revive documents.

Each `_name` method of StdLib is exposed under `name`; names containing an
underscore also get a camelCase alias (`get_curried` -> `getCurried`) so
documents written for camelCase registries revive unchanged.
"""
import inspect
import datetime
import collections.abc
from typing import Any, Callable, Dict

import pystache

from revive.revive_datatypes import Deferred


def lookup(obj: Any, label: Any) -> Any:
    """Read `label` from a mapping, sequence index or attribute; None when absent."""
    if isinstance(obj, collections.abc.Mapping):
        return obj.get(label)
    if isinstance(obj, (list, tuple)):
        try:
            return obj[int(label)]
        except (ValueError, TypeError, IndexError):
            return None
    if isinstance(label, str) and obj is not None:
        return getattr(obj, label, None)
    return None


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.capitalize() for part in rest)


_DATE_FORMATS = ("%m-%d-%Y", "%m/%d/%Y", "%Y/%m/%d")


def _naive_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(datetime.timezone.utc).replace(tzinfo=None)


class StdLib:
    """Python implementations of the standard revive functions."""

    def functions(self) -> Dict[str, Callable]:
        registry: Dict[str, Callable] = {}
        for name, member in inspect.getmembers(self):
            if name.startswith('_') and not name.startswith('__') and callable(member):
                fn_name = name[1:]
                registry[fn_name] = member
                alias = _camel(fn_name)
                if alias != fn_name:
                    registry[alias] = member
        return registry

    # --- Lookup ---
    def _get(self, label, obj): return lookup(obj, label)

    def _get_curried(self, label):
        return Deferred(lambda data: lookup(data, label), name=f"get {label}")

    def _always(self, value):
        return Deferred(lambda data: value, name="always")

    # --- Math ---
    def _add(self, a, b): return a + b
    def _sub(self, a, b): return a - b
    def _mul(self, a, b): return a * b
    def _div(self, a, b): return a / b

    # --- Strings ---
    def _concat(self, *parts): return "".join(str(p) for p in parts)

    def _render(self, template):
        """Mustache template rendered against the data context."""
        if not isinstance(template, str):
            raise TypeError("render expects a template string")
        return Deferred(lambda data: pystache.render(template, data if data is not None else {}),
                        name="render")

    # --- Dates ---
    def _now(self): return datetime.datetime.now()

    def _date(self, value=None):
        """Naive datetime; timestamps and offset-bearing strings are converted to UTC."""
        if value is None:
            return datetime.datetime.now()
        if isinstance(value, bool):
            raise TypeError("date expects a string or a millisecond timestamp")
        if isinstance(value, (int, float)):
            return _naive_utc(datetime.datetime.fromtimestamp(value / 1000, tz=datetime.timezone.utc))
        if isinstance(value, datetime.datetime):
            return _naive_utc(value)
        if isinstance(value, datetime.date):
            return datetime.datetime(value.year, value.month, value.day)
        if not isinstance(value, str):
            raise TypeError("date expects a string or a millisecond timestamp")
        try:
            return _naive_utc(datetime.datetime.fromisoformat(value))
        except ValueError:
            pass
        for fmt in _DATE_FORMATS:
            try:
                return datetime.datetime.strptime(value, fmt)
            except ValueError:
                continue
        raise ValueError(f"unrecognized date: {value!r}")

    def _add_days(self, date, days):
        if not isinstance(date, datetime.datetime):
            date = self._date(date)
        return date + datetime.timedelta(days=days)


def standard_functions() -> Dict[str, Callable]:
    return StdLib().functions()


__all__ = [
    "StdLib",
    "lookup",
    "standard_functions",
]
