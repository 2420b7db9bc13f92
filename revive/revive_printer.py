"""
A pretty-printer for revived documents.

Output is JSON text for JSON values; values produced by registered functions
that JSON cannot represent (dates, deferred functions) get a readable form.
"""
import json
import datetime
import collections.abc

from revive.revive_datatypes import Deferred


class Printer:
    """Formats revived documents into readable, JSON-shaped strings."""

    def __init__(self, indent_width=2):
        self._indent_char = " " * indent_width
        self._handlers = self._create_handlers()

    def pformat(self, obj, level=0):
        """Public entry point to format an object."""
        handler = self._get_handler(obj)
        return handler(obj, level)

    def _get_handler(self, obj):
        """Dispatcher to find the correct formatting method."""
        obj_type = type(obj)
        if obj_type in self._handlers:
            return self._handlers[obj_type]
        if isinstance(obj, collections.abc.Mapping): return self._pformat_dict
        if isinstance(obj, (list, tuple)): return self._pformat_list
        if isinstance(obj, (datetime.date, datetime.time)): return self._pformat_temporal
        if callable(obj): return self._pformat_callable
        return lambda o, l: repr(o)

    def _create_handlers(self):
        return {
            str: self._pformat_str,
            int: self._pformat_primitive,
            float: self._pformat_float,
            bool: self._pformat_bool,
            type(None): self._pformat_none,
            list: self._pformat_list,
            tuple: self._pformat_list,
            dict: self._pformat_dict,
            datetime.datetime: self._pformat_temporal,
            datetime.date: self._pformat_temporal,
            Deferred: self._pformat_deferred,
        }

    def _pformat_primitive(self, obj, level):
        return str(obj)

    def _pformat_float(self, obj, level):
        return json.dumps(obj)

    def _pformat_str(self, obj, level):
        return json.dumps(obj, ensure_ascii=False)

    def _pformat_bool(self, obj, level):
        return 'true' if obj else 'false'

    def _pformat_none(self, obj, level):
        return 'null'

    def _pformat_temporal(self, obj, level):
        return f'"{obj.isoformat()}"'

    def _pformat_deferred(self, obj, level):
        return f"<deferred {obj.name or '?'}>"

    def _pformat_callable(self, obj, level):
        return f"<deferred {getattr(obj, '__name__', '?')}>"

    def _pformat_block(self, items, level, open_char, close_char):
        outer_indent = self._indent_char * level
        inner_indent = self._indent_char * (level + 1)
        lines = [f"{inner_indent}{item}" for item in items]
        return open_char + "\n" + ",\n".join(lines) + "\n" + outer_indent + close_char

    def _pformat_list(self, obj, level):
        if not obj:
            return "[]"
        return self._pformat_block([self.pformat(x, level + 1) for x in obj], level, '[', ']')

    def _pformat_dict(self, obj, level):
        if not obj:
            return "{}"
        entries = []
        for key, value in obj.items():
            entries.append(f"{json.dumps(str(key), ensure_ascii=False)}: {self.pformat(value, level + 1)}")
        return self._pformat_block(entries, level, '{', '}')
