import pytest

from layercfg.maps import (
    deep_search,
    flatten_keys,
    insensitivise_map,
    merge_flat_keys,
    merge_maps,
    search_map,
    search_with_path_prefixes,
    shadowed_in_deep_map,
    shadowed_in_flat_map,
    to_case_insensitive_value,
)


def test_search_map_nested_and_empty_path():
    source = {"a": {"b": {"c": "leaf"}}}
    assert search_map(source, ["a", "b", "c"]) == "leaf"
    assert search_map(source, ["a", "b"]) is source["a"]["b"]
    assert search_map(source, []) is source


def test_search_map_missing_and_scalar_parent():
    assert search_map({"a": 5}, ["a", "b"]) is None
    assert search_map({"a": {}}, ["a", "b"]) is None
    assert search_map({}, ["x"]) is None


def test_search_map_non_string_keys():
    assert search_map({"a": {1: "one"}}, ["a", "1"]) == "one"


def test_prefix_search_prefers_flat_key():
    source = {"foo": {"bar": "nested"}, "foo.bar": "flat"}
    assert search_with_path_prefixes(source, ["foo", "bar"], ".") == "flat"


def test_prefix_search_falls_back_to_nested():
    assert search_with_path_prefixes({"foo": {"bar": "nested"}}, ["foo", "bar"], ".") == "nested"
    assert search_with_path_prefixes({"foo.bar": {"baz": "deep"}}, ["foo", "bar", "baz"], ".") == "deep"


def test_prefix_search_indexes_lists():
    source = {"items": [{"name": "first"}, {"name": "second"}]}
    assert search_with_path_prefixes(source, ["items", "1", "name"], ".") == "second"
    assert search_with_path_prefixes(source, ["items", "5", "name"], ".") is None
    assert search_with_path_prefixes(source, ["items", "-1", "name"], ".") is None
    assert search_with_path_prefixes(source, ["items", "x"], ".") is None


def test_deep_search_creates_and_replaces():
    root = {"a": {"keep": 1}, "b": "scalar"}
    inner = deep_search(root, ["a", "x"])
    inner["y"] = 2
    assert root["a"] == {"keep": 1, "x": {"y": 2}}
    replaced = deep_search(root, ["b"])
    assert root["b"] is replaced
    assert replaced == {}
    assert deep_search(root, []) is root


def test_merge_maps_case_insensitive():
    tgt = {"Foo": {"a": 1}, "name": "old"}
    merge_maps({"foo": {"b": 2}, "NAME": "new", "extra": True}, tgt)
    assert tgt == {"Foo": {"a": 1, "b": 2}, "name": "new", "extra": True}


def test_merge_maps_skips_scalar_into_map():
    tgt = {"section": {"a": 1}}
    merge_maps({"section": "flat"}, tgt)
    assert tgt == {"section": {"a": 1}}


def test_merge_maps_map_replaces_scalar():
    tgt = {"section": "flat"}
    merge_maps({"section": {"a": 1}}, tgt)
    assert tgt == {"section": {"a": 1}}


def test_insensitivise_map_recurses():
    data = {"Top": {"Inner": 1}, "List": [{"Key": "v"}, [{"Deep": 2}]], 3: "x"}
    insensitivise_map(data)
    assert data == {"top": {"inner": 1}, "list": [{"key": "v"}, [{"deep": 2}]], "3": "x"}


def test_to_case_insensitive_value_copies():
    original = {"A": {"B": [{"C": 1}]}}
    copied = to_case_insensitive_value(original)
    assert copied == {"a": {"b": [{"C": 1}]}}
    assert original == {"A": {"B": [{"C": 1}]}}
    assert copied["a"] is not original["A"]
    items = [1, 2]
    assert to_case_insensitive_value(items) is items


def test_shadowed_in_deep_map():
    assert shadowed_in_deep_map(["foo", "bar", "baz"], {"foo": {"bar": 1}}, ".") == "foo.bar"
    assert shadowed_in_deep_map(["foo", "bar"], {"foo": {"bar": 1}}, ".") is None
    assert shadowed_in_deep_map(["foo", "bar"], {}, ".") is None


def test_shadowed_in_flat_map():
    flat = {"foo.bar": "x"}
    assert shadowed_in_flat_map(["foo", "bar", "baz"], flat, ".") == "foo.bar"
    assert shadowed_in_flat_map(["foo", "bar"], flat, ".") is None
    assert shadowed_in_flat_map(["foo", "bar", "baz"], ["foo"], ".") == "foo"


def test_flatten_keys_basic():
    data = {"a": {"b": 1, "c": {"d": 2}}, "E": 3}
    assert flatten_keys(None, set(), data, "", ".", False) == {"a.b", "a.c.d", "e"}


def test_flatten_keys_respects_shadow():
    shadow = {"a"}
    result = flatten_keys(shadow, set(), {"a": {"b": 1}, "c": 2}, "", ".", False)
    assert result == {"a", "c"}


@pytest.mark.parametrize(("allow", "expected"), [(True, {"x.a"}), (False, set())])
def test_flatten_keys_empty_maps(allow, expected):
    assert flatten_keys(None, set(), {"x": {"a": {}}}, "", ".", allow) == expected


def test_merge_flat_keys():
    shadow = {"foo"}
    result = merge_flat_keys(shadow, ["foo.bar", "Baz", "qux.quux"], ".")
    assert result == {"foo", "baz", "qux.quux"}
    assert result is shadow