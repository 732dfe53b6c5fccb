"""Type mapping and override table tests."""

import json

import pytest

from jassdts.backend.typescript import (
    NATIVE_OVERRIDES,
    OverridesError,
    TypeMapper,
    emit_typescript,
    load_overrides,
    merge_overrides,
)
from jassdts.model import Argument, Library, NativeDecl


@pytest.mark.parametrize(
    "jass,ts",
    [
        ("real", "number"),
        ("integer", "number"),
        ("nothing", "void"),
        ("code", "() => void"),
        ("", "void"),
        ("boolexpr", "boolexpr"),
        ("boolean", "boolean"),
        ("string", "string"),
        ("unit", "unit"),
        ("handle", "handle"),
    ],
)
def test_map_type(jass: str, ts: str):
    mapper = TypeMapper()
    assert mapper.map_type(jass) == ts
    assert mapper.map_type(jass) == mapper.map_type(jass)


def test_argument_position_asymmetry():
    mapper = TypeMapper()
    assert mapper.map_argument_type("boolexpr") == "boolexpr | null"
    assert mapper.map_type("boolexpr") == "boolexpr"
    assert mapper.map_argument_type("real") == "number"
    assert mapper.map_argument_type("widget") == "widget"


def test_native_override_by_index():
    mapper = TypeMapper({"Pair": {1: "() => boolean"}})
    native = NativeDecl("Pair", [Argument("boolexpr", "a"), Argument("boolexpr", "b")], "nothing")
    assert mapper.native_argument_type(native, 0) == "boolexpr | null"
    assert mapper.native_argument_type(native, 1) == "() => boolean"


def test_override_index_past_arguments_is_ignored():
    library = Library(natives=[NativeDecl("Condition", [], "conditionfunc")])
    output = emit_typescript(library)
    assert "declare function Condition(): conditionfunc\n" in output


def test_emission_leaves_model_untouched():
    native = NativeDecl("Condition", [Argument("code", "func")], "conditionfunc")
    emit_typescript(Library(natives=[native]))
    assert native.arguments[0].type == "code"


def test_default_overrides():
    assert NATIVE_OVERRIDES["Condition"] == {0: "() => boolean"}
    assert NATIVE_OVERRIDES["Filter"] == {0: "() => boolean"}


def test_load_overrides(tmp_path):
    path = tmp_path / "overrides.json"
    path.write_text(json.dumps({"ForGroup": {"1": "() => void"}, "Condition": {"0": "code"}}))
    table = load_overrides(str(path))
    assert table == {"ForGroup": {1: "() => void"}, "Condition": {0: "code"}}
    merged = merge_overrides(NATIVE_OVERRIDES, table)
    assert merged["ForGroup"] == {1: "() => void"}
    assert merged["Condition"] == {0: "code"}
    assert merged["Filter"] == {0: "() => boolean"}
    assert NATIVE_OVERRIDES["Condition"] == {0: "() => boolean"}


@pytest.mark.parametrize(
    "content,message",
    [
        ("{not json", "invalid JSON"),
        ("[1, 2]", "expected an object"),
        ('{"Condition": "code"}', "must be an object"),
        ('{"Condition": {"first": "code"}}', "is not an integer"),
        ('{"Condition": {"-1": "code"}}', "non-negative index"),
        ('{"Condition": {"0": 5}}', "non-negative index"),
    ],
)
def test_load_overrides_rejects_malformed(tmp_path, content: str, message: str):
    path = tmp_path / "bad.json"
    path.write_text(content)
    with pytest.raises(OverridesError) as exc:
        load_overrides(str(path))
    assert message in str(exc.value)
    assert str(path) in str(exc.value)


def test_load_overrides_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_overrides(str(tmp_path / "missing.json"))


def test_default_mapper_owns_its_overrides():
    mapper = TypeMapper()
    mapper.overrides["Condition"][0] = "code"
    mapper.overrides["Extra"] = {0: "unit"}
    assert NATIVE_OVERRIDES == {
        "Condition": {0: "() => boolean"},
        "Filter": {0: "() => boolean"},
    }
    assert TypeMapper().overrides["Condition"] == {0: "() => boolean"}
    assert "Extra" not in TypeMapper().overrides
