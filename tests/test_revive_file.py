import pytest

from revive.revive_file import load_document, load_functions, format_for_path
from revive.revive_datatypes import DocumentParseError


@pytest.mark.parametrize(
    "path,expected",
    [("doc.json", "json"), ("doc.YAML", "yaml"), ("doc.yml", "yaml"), ("doc.txt", None), ("doc", None)],
)
def test_format_for_path(path, expected):
    assert format_for_path(path) == expected


def test_load_json_document(tmp_path):
    p = tmp_path / "doc.json"
    p.write_text('{"total": {"$add": [1, 2]}}', encoding="utf-8")
    assert load_document(str(p)) == {"total": {"$add": [1, 2]}}


def test_load_yaml_document(tmp_path):
    p = tmp_path / "doc.yaml"
    p.write_text("total:\n  $add: [1, 2]\n", encoding="utf-8")
    assert load_document(str(p)) == {"total": {"$add": [1, 2]}}


def test_load_unknown_extension_returns_text(tmp_path):
    p = tmp_path / "doc.txt"
    p.write_text("hello", encoding="utf-8")
    assert load_document(str(p)) == "hello"


def test_load_malformed_document(tmp_path):
    p = tmp_path / "bad.json"
    p.write_text("{", encoding="utf-8")
    with pytest.raises(DocumentParseError):
        load_document(str(p))


def test_load_missing_document(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_document(str(tmp_path / "missing.json"))


def test_load_functions_returns_public_module_functions():
    funcs = load_functions("revive.revive_stdlib")
    assert "lookup" in funcs
    assert "standard_functions" in funcs
    assert "_camel" not in funcs
    # imported names are not re-exported
    assert "deserialize" not in load_functions("revive.revive_file")


def test_load_functions_missing_module():
    with pytest.raises(ImportError):
        load_functions("revive.does_not_exist")
