"""Encoders and decoders for the supported configuration formats."""

from __future__ import annotations

import configparser
import io
import json
import re
import tomllib
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import tomli_w
import yaml

from .cast import to_string, to_string_map
from .errors import UnsupportedConfigError
from .maps import deep_search

_DEFAULT_SECTION = "default"
_PARSER_DEFAULT = "\x00layercfg-default\x00"


def _flatten(mapping: Mapping[Any, Any], delimiter: str, prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in mapping.items():
        full_key = f"{prefix}{delimiter}{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(to_string_map(value), delimiter, full_key))
        else:
            flat[full_key] = value
    return flat


def _set_path(target: dict[str, Any], key: str, delimiter: str, value: Any) -> None:
    path = key.split(delimiter)
    deep_search(target, path[:-1])[path[-1]] = value


def _text(data: bytes | str) -> str:
    return data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data


class Codec(ABC):
    """Turns a configuration map into bytes and back."""

    @abstractmethod
    def encode(self, data: Mapping[str, Any]) -> bytes:
        """Serialise ``data``."""

    @abstractmethod
    def decode(self, data: bytes | str) -> dict[str, Any]:
        """Parse ``data`` into a map."""


class JsonCodec(Codec):
    """JSON documents."""

    def encode(self, data: Mapping[str, Any]) -> bytes:
        return json.dumps(data, indent="  ", sort_keys=True, default=str).encode("utf-8")

    def decode(self, data: bytes | str) -> dict[str, Any]:
        parsed = json.loads(_text(data) or "{}")
        if not isinstance(parsed, dict):
            raise ValueError("JSON document is not an object")
        return parsed


class YamlCodec(Codec):
    """YAML documents."""

    def encode(self, data: Mapping[str, Any]) -> bytes:
        return yaml.safe_dump(dict(data), sort_keys=True, default_flow_style=False, allow_unicode=True).encode("utf-8")

    def decode(self, data: bytes | str) -> dict[str, Any]:
        parsed = yaml.safe_load(_text(data))
        if parsed is None:
            return {}
        if not isinstance(parsed, Mapping):
            raise ValueError("YAML document is not a mapping")
        return dict(parsed)


class TomlCodec(Codec):
    """TOML documents."""

    def encode(self, data: Mapping[str, Any]) -> bytes:
        return tomli_w.dumps(dict(data)).encode("utf-8")

    def decode(self, data: bytes | str) -> dict[str, Any]:
        return tomllib.loads(_text(data))


class IniCodec(Codec):
    """INI documents; section names become the first key element."""

    def __init__(self, key_delimiter: str = ".") -> None:
        self.key_delimiter = key_delimiter

    def encode(self, data: Mapping[str, Any]) -> bytes:
        sections: dict[str, dict[str, str]] = {}
        for key, value in sorted(_flatten(data, self.key_delimiter).items()):
            section, sep, name = key.rpartition(self.key_delimiter)
            if not sep or section == _DEFAULT_SECTION:
                section = ""
            sections.setdefault(section, {})[name] = to_string(value)
        out = io.StringIO()
        for section, items in sorted(sections.items()):
            if section:
                out.write(f"\n[{section}]\n")
            for name, value in items.items():
                out.write(f"{name} = {value}\n")
        return out.getvalue().lstrip("\n").encode("utf-8")

    def decode(self, data: bytes | str) -> dict[str, Any]:
        parser = configparser.ConfigParser(interpolation=None, default_section=_PARSER_DEFAULT)
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        parser.read_string(f"[{_PARSER_DEFAULT}]\n" + _text(data))
        result: dict[str, Any] = {}
        for name, value in parser.defaults().items():
            _set_path(result, name, self.key_delimiter, value)
        for section in parser.sections():
            for name, value in parser.items(section, raw=True):
                if name in parser.defaults() and parser.defaults()[name] == value:
                    continue
                _set_path(result, f"{section}{self.key_delimiter}{name}", self.key_delimiter, value)
        return result


_PROP_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_PROP_SEPARATOR = re.compile(r"(?<!\\)(?:\\\\)*\s*([=:]|\s)\s*")


def _unescape(text: str) -> str:
    return re.sub(r"\\(.)", lambda m: _PROP_ESCAPES.get(m.group(1), m.group(1)), text)


def _logical_lines(text: str):
    pending = ""
    for raw in text.splitlines():
        line = raw.lstrip() if not pending else raw.lstrip()
        if not pending and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2:
            pending += line[:-1]
            continue
        yield pending + line
        pending = ""
    if pending:
        yield pending


class PropertiesCodec(Codec):
    """Java properties files; delimited keys become nested maps."""

    def __init__(self, key_delimiter: str = ".") -> None:
        self.key_delimiter = key_delimiter

    def encode(self, data: Mapping[str, Any]) -> bytes:
        lines = (f"{key} = {to_string(value)}\n" for key, value in sorted(_flatten(data, self.key_delimiter).items()))
        return "".join(lines).encode("utf-8")

    def decode(self, data: bytes | str) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for line in _logical_lines(_text(data)):
            match = _PROP_SEPARATOR.search(line)
            if match:
                key, value = line[: match.start(1)].rstrip(), line[match.end():]
                key = line[: match.start()] if match.start() < match.start(1) else key
            else:
                key, value = line, ""
            _set_path(result, _unescape(key), self.key_delimiter, _unescape(value))
        return result


class DotenvCodec(Codec):
    """Dotenv files; nested keys are joined with underscores and upper-cased."""

    def encode(self, data: Mapping[str, Any]) -> bytes:
        flat = _flatten(data, "_")
        return "".join(f"{key.upper()}={to_string(value)}\n" for key, value in sorted(flat.items())).encode("utf-8")

    def decode(self, data: bytes | str) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for raw in _text(data).splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export "):].lstrip()
            key, sep, value = line.partition("=")
            if not sep:
                key, sep, value = line.partition(":")
            if not sep:
                raise ValueError(f"invalid dotenv line {raw!r}")
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
                quote, value = value[0], value[1:-1]
                if quote == '"':
                    value = value.replace("\\n", "\n").replace('\\"', '"')
            else:
                value = value.split(" #", 1)[0].rstrip()
            result[key.strip()] = value
        return result


class CodecRegistry:
    """Maps format names to codecs."""

    def __init__(self) -> None:
        self._codecs: dict[str, Codec] = {}

    def register(self, name: str, codec: Codec) -> None:
        self._codecs[name] = codec

    def _lookup(self, name: str) -> Codec:
        try:
            return self._codecs[name]
        except KeyError:
            raise UnsupportedConfigError(name) from None

    def encode(self, name: str, data: Mapping[str, Any]) -> bytes:
        return self._lookup(name).encode(data)

    def decode(self, name: str, data: bytes | str) -> dict[str, Any]:
        return self._lookup(name).decode(data)


def default_registry(key_delimiter: str = ".") -> CodecRegistry:
    """Return a registry holding every built-in format."""
    registry = CodecRegistry()
    entries: list[tuple[tuple[str, ...], Codec]] = [
        (("yaml", "yml"), YamlCodec()),
        (("json",), JsonCodec()),
        (("toml",), TomlCodec()),
        (("ini",), IniCodec(key_delimiter)),
        (("properties", "props", "prop"), PropertiesCodec(key_delimiter)),
        (("dotenv", "env"), DotenvCodec()),
    ]
    for names, codec in entries:
        for name in names:
            registry.register(name, codec)
    return registry