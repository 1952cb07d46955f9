"""Command-line flag values that can be bound to configuration keys."""

from __future__ import annotations

import csv
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .cast import to_bool, to_int, to_int_slice

_INT_TYPES = frozenset({"int", "int8", "int16", "int32", "int64"})


class FlagValue(ABC):
    """A flag whose textual value can feed a configuration key."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The flag's long name."""

    @abstractmethod
    def has_changed(self) -> bool:
        """Whether the flag was given explicitly."""

    @abstractmethod
    def value_string(self) -> str:
        """The flag's value as text."""

    @abstractmethod
    def value_type(self) -> str:
        """The flag's type name, such as ``int`` or ``stringSlice``."""


@dataclass
class Flag(FlagValue):
    """A simple in-memory flag."""

    flag_name: str
    value: str = ""
    type_name: str = "string"
    changed: bool = False

    @property
    def name(self) -> str:
        return self.flag_name

    def has_changed(self) -> bool:
        return self.changed

    def value_string(self) -> str:
        return self.value

    def value_type(self) -> str:
        return self.type_name


def read_as_csv(value: str) -> list[str]:
    """Read one CSV record; an empty string gives an empty list."""
    if not value:
        return []
    try:
        return next(csv.reader([value]), [])
    except csv.Error:
        return []


def string_to_string(value: str) -> dict[str, str] | None:
    """Parse ``[a=1,b=2]`` into a dict, or None if malformed."""
    value = value.strip("[]")
    if not value:
        return {}
    try:
        pairs = next(csv.reader([value]))
    except (csv.Error, StopIteration):
        return None
    result: dict[str, str] = {}
    for pair in pairs:
        key, sep, item = pair.partition("=")
        if not sep:
            return None
        result[key] = item
    return result


def _list_body(text: str) -> str:
    return text.removeprefix("[").removesuffix("]")


def flag_to_value(flag: FlagValue) -> Any:
    """Convert a flag's text to a value of its declared type."""
    kind = flag.value_type()
    text = flag.value_string()
    if kind in _INT_TYPES:
        return to_int(text)
    if kind == "bool":
        return to_bool(text)
    if kind in ("stringSlice", "stringArray"):
        return read_as_csv(_list_body(text))
    if kind == "intSlice":
        return to_int_slice(read_as_csv(_list_body(text)))
    if kind == "stringToString":
        return string_to_string(text)
    return text