import datetime

import pytest

from revive.revive_stdlib import StdLib, lookup, standard_functions
from revive.revive_runtime import transform
from revive.revive_datatypes import Deferred, EvaluationError


@pytest.fixture
def functions():
    return standard_functions()


def revive(functions, document, data=None):
    return transform({"functions": functions}, document, data)


def test_registry_names_and_camel_case_aliases(functions):
    for name in ("get", "get_curried", "getCurried", "always", "add", "sub", "mul", "div",
                 "concat", "render", "date", "now", "add_days", "addDays"):
        assert name in functions
    assert "functions" not in functions
    assert functions["getCurried"] == functions["get_curried"]


@pytest.mark.parametrize(
    "obj,label,expected",
    [
        ({"a": 1}, "a", 1),
        ({"a": 1}, "b", None),
        ([10, 20], 1, 20),
        ([10, 20], "1", 20),
        ([10, 20], 5, None),
        (None, "a", None),
    ],
)
def test_lookup(obj, label, expected):
    assert lookup(obj, label) == expected


def test_lookup_reads_attributes():
    d = datetime.date(2020, 5, 17)
    assert lookup(d, "month") == 5


def test_arithmetic(functions):
    doc = {"sum": {"$add": [1, {"$mul": [2, 3]}]}, "diff": {"$sub": [5, 2]}, "ratio": {"$div": [1, 4]}}
    assert revive(functions, doc) == {"sum": 7, "diff": 3, "ratio": 0.25}


def test_get_and_curried_get(functions):
    doc = {"direct": {"$get": ["a", {"a": 1}]}, "fromData": {"$getCurried": "a"}, "missing": {"$get_curried": "zz"}}
    assert revive(functions, doc, {"a": 2}) == {"direct": 1, "fromData": 2, "missing": None}


def test_always_returns_deferred():
    result = StdLib()._always("x")
    assert isinstance(result, Deferred)
    assert result({"ignored": True}) == "x"


def test_concat(functions):
    assert revive(functions, {"$concat": ["a", 1, {"$getCurried": "b"}]}, {"b": "c"}) == "a1c"


def test_render_uses_data_context(functions):
    doc = {"greeting": {"$render": "Hello {{name}}!"}}
    assert revive(functions, doc, {"name": "Ada"}) == {"greeting": "Hello Ada!"}


def test_render_without_data(functions):
    assert revive(functions, {"$render": "static"}) == "static"


def test_render_rejects_non_string(functions):
    with pytest.raises(EvaluationError):
        revive(functions, {"$render": [[1]]})


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2020-01-01", datetime.datetime(2020, 1, 1)),
        ("2020-01-01T10:15:00", datetime.datetime(2020, 1, 1, 10, 15)),
        ("01-01-2020", datetime.datetime(2020, 1, 1)),
        ("2020/03/04", datetime.datetime(2020, 3, 4)),
        (0, datetime.datetime(1970, 1, 1)),
        ("2020-01-01T02:00:00+02:00", datetime.datetime(2020, 1, 1)),
    ],
)
def test_date_parsing(functions, value, expected):
    assert revive(functions, {"$date": [value]}) == expected


def test_date_without_argument_is_now(functions):
    before = datetime.datetime.now()
    out = revive(functions, {"$date": []})
    after = datetime.datetime.now()
    assert before <= out <= after


def test_date_rejects_garbage(functions):
    with pytest.raises(EvaluationError) as exc:
        revive(functions, {"$date": "not a date"})
    assert isinstance(exc.value.__cause__, ValueError)


def test_add_days(functions):
    doc = {"$addDays": [{"$date": "2020-01-30"}, 3]}
    assert revive(functions, doc) == datetime.datetime(2020, 2, 2)


def test_add_days_accepts_strings(functions):
    assert revive(functions, {"$add_days": ["2020-12-31", 1]}) == datetime.datetime(2021, 1, 1)


def test_dates_from_timestamps_and_strings_can_be_compared(functions):
    doc = {"$sub": [{"$date": "1970-01-02"}, {"$date": 0}]}
    assert revive(functions, doc) == datetime.timedelta(days=1)


def test_date_accepts_date_values(functions):
    doc = {"$addDays": [{"$date": "2020-01-01"}, 1]}
    out = transform({"functions": functions}, doc, stringify_first=False)
    assert out == datetime.datetime(2020, 1, 2)
    assert StdLib()._date(datetime.date(2020, 1, 1)) == datetime.datetime(2020, 1, 1)
    assert StdLib()._add_days(datetime.date(2020, 1, 1), 1) == datetime.datetime(2020, 1, 2)
