import pytest

from layercfg.codecs import (
    DotenvCodec,
    IniCodec,
    JsonCodec,
    PropertiesCodec,
    TomlCodec,
    YamlCodec,
    default_registry,
)
from layercfg.errors import UnsupportedConfigError

NESTED = {"name": "steve", "clothing": {"jacket": "leather", "pants": {"size": "large"}}}


@pytest.mark.parametrize("codec", [JsonCodec(), YamlCodec(), TomlCodec()])
def test_structured_round_trip(codec):
    data = {"age": 35, "beard": True, "hobbies": ["go", "skateboarding"], **NESTED}
    assert codec.decode(codec.encode(data)) == data


@pytest.mark.parametrize("codec", [IniCodec("."), PropertiesCodec(".")])
def test_string_formats_round_trip(codec):
    assert codec.decode(codec.encode(NESTED)) == NESTED


def test_yaml_decode_lists_and_maps():
    doc = b"Hacker: true\nhobbies:\n    - go\nclothing:\n    jacket: leather\n"
    result = YamlCodec().decode(doc)
    assert result == {"Hacker": True, "hobbies": ["go"], "clothing": {"jacket": "leather"}}


def test_yaml_empty_document():
    assert YamlCodec().decode(b"") == {}


def test_properties_decode_nested():
    assert PropertiesCodec(".").decode("a.b = c\n# skip\nd: e\n") == {"a": {"b": "c"}, "d": "e"}


def test_ini_sections_become_keys():
    assert IniCodec(".").decode("top = 1\n[sec]\nk = v\n") == {"top": "1", "sec": {"k": "v"}}


def test_dotenv_encode_and_decode():
    codec = DotenvCodec()
    assert codec.encode({"a": {"b": "c"}}) == b"A_B=c\n"
    assert codec.decode('export KEY="value"\nOTHER=x\n') == {"KEY": "value", "OTHER": "x"}


def test_registry_aliases_share_format():
    registry = default_registry(".")
    encoded = registry.encode("yml", NESTED)
    assert registry.decode("yaml", encoded) == NESTED


def test_registry_unknown_format():
    with pytest.raises(UnsupportedConfigError):
        default_registry(".").decode("hcl", b"")


def test_json_rejects_non_object():
    with pytest.raises(ValueError):
        JsonCodec().decode("[1, 2]")