"""Helpers for searching, merging and flattening nested configuration maps.

All functions assume that path elements and map keys are lower case
unless stated otherwise.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from typing import Any

from .cast import to_string, to_string_map

logger = logging.getLogger(__name__)

_INDEX = re.compile(r"[+-]?\d+")


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, (bool, int, float)):
        return to_string(key)
    return str(key)


def search_map(source: Mapping[str, Any], path: Sequence[str]) -> Any:
    """Return the value at ``path`` in nested maps, or None."""
    if not path:
        return source
    found = source.get(path[0])
    if found is None or len(path) == 1:
        return found
    if isinstance(found, Mapping):
        return search_map(to_string_map(found), path[1:])
    return None


def _descend(found: Any, rest: Sequence[str], delimiter: str) -> Any:
    if isinstance(found, Mapping):
        return search_with_path_prefixes(to_string_map(found), rest, delimiter)
    if isinstance(found, list):
        return search_with_path_prefixes(found, rest, delimiter)
    return None


def search_with_path_prefixes(source: Any, path: Sequence[str], delimiter: str) -> Any:
    """Return the value at ``path``, preferring keys that contain the delimiter.

    For path ``["foo", "bar"]`` a key ``"foo.bar"`` wins over ``foo`` → ``bar``.
    Lists are indexed by numeric path elements.
    """
    if not path:
        return source
    for length in range(len(path), 0, -1):
        prefix_key = delimiter.join(path[:length]).lower()
        rest = path[length:]
        found = None
        if isinstance(source, list):
            if _INDEX.fullmatch(prefix_key):
                index = int(prefix_key)
                if 0 <= index < len(source):
                    found = source[index]
        elif isinstance(source, Mapping):
            found = to_string_map(source).get(prefix_key)
        if found is None:
            continue
        value = found if not rest else _descend(found, rest, delimiter)
        if value is not None:
            return value
    return None


def deep_search(mapping: MutableMapping[str, Any], path: Sequence[str]) -> dict[str, Any]:
    """Return the innermost map along ``path``, creating maps as needed.

    Values on the way that are not maps are replaced by empty maps.
    """
    current = mapping
    for key in path:
        child = current.get(key)
        if not isinstance(child, dict):
            child = {}
            current[key] = child
        current = child
    return current


def _matching_key(key: Any, mapping: Mapping[Any, Any]) -> Any:
    wanted = _key_text(key).lower()
    for existing in mapping:
        if _key_text(existing).lower() == wanted:
            return existing
    return None


def merge_maps(src: Mapping[Any, Any], tgt: MutableMapping[Any, Any]) -> None:
    """Merge ``src`` into ``tgt`` in place, matching keys case-insensitively."""
    for key, value in src.items():
        target_key = _matching_key(key, tgt)
        if target_key is None:
            tgt[key] = value
            continue
        existing = tgt[target_key]
        if isinstance(existing, MutableMapping):
            if not isinstance(value, Mapping):
                logger.error(
                    "could not merge non-map into map at key %r (%s into %s)",
                    key,
                    type(value).__name__,
                    type(existing).__name__,
                )
                continue
            merge_maps(value, existing)
        else:
            tgt[target_key] = value


def _insensitivise_list(items: list[Any]) -> None:
    for position, item in enumerate(items):
        if isinstance(item, Mapping):
            converted = dict(to_string_map(item)) if not isinstance(item, dict) else to_string_map(item)
            insensitivise_map(converted)
            items[position] = converted
        elif isinstance(item, list):
            _insensitivise_list(item)


def insensitivise_map(mapping: MutableMapping[Any, Any]) -> None:
    """Lower-case every key in place, recursing into maps and lists."""
    for key in list(mapping):
        value = mapping[key]
        if isinstance(value, Mapping):
            value = to_string_map(value)
            if not isinstance(value, dict):
                value = dict(value)
            insensitivise_map(value)
        elif isinstance(value, list):
            _insensitivise_list(value)
        lowered = _key_text(key).lower()
        if lowered != key:
            del mapping[key]
        mapping[lowered] = value


def _copy_insensitive(mapping: Mapping[str, Any]) -> dict[str, Any]:
    copied: dict[str, Any] = {}
    for key, value in mapping.items():
        if isinstance(value, Mapping):
            value = _copy_insensitive(to_string_map(value))
        copied[key.lower()] = value
    return copied


def to_case_insensitive_value(value: Any) -> Any:
    """Return a copy of a map with lower-cased keys; other values unchanged."""
    if isinstance(value, Mapping):
        return _copy_insensitive(to_string_map(value))
    return value


def shadowed_in_deep_map(path: Sequence[str], mapping: Mapping[str, Any], delimiter: str) -> str | None:
    """Return the key of a plain value that hides ``path`` in nested maps."""
    for length in range(1, len(path)):
        parent = search_map(mapping, path[:length])
        if parent is None:
            return None
        if not isinstance(parent, Mapping):
            return delimiter.join(path[:length])
    return None


def shadowed_in_flat_map(path: Sequence[str], mapping: Iterable[str], delimiter: str) -> str | None:
    """Return the flat key that hides ``path``, if any."""
    keys = mapping if isinstance(mapping, (Mapping, set, frozenset)) else set(mapping)
    for length in range(1, len(path)):
        parent_key = delimiter.join(path[:length])
        if parent_key in keys:
            return parent_key
    return None


def flatten_keys(
    shadow: set[str] | None,
    empty: set[str] | None,
    mapping: Mapping[Any, Any],
    prefix: str,
    delimiter: str,
    allow_empty_map: bool,
) -> set[str]:
    """Add the delimited key paths of ``mapping`` to ``shadow``.

    Paths under a prefix already present in ``shadow`` are skipped.
    Nested empty maps are recorded in ``empty`` when ``allow_empty_map``.
    """
    if empty is None:
        empty = set()
    if not mapping and prefix and allow_empty_map:
        empty.add(prefix)
    if shadow is not None and prefix and prefix in shadow:
        return shadow
    if shadow is None:
        shadow = set()
    if prefix:
        prefix += delimiter
    for key, value in mapping.items():
        full_key = prefix + _key_text(key)
        if isinstance(value, Mapping):
            shadow = flatten_keys(shadow, empty, to_string_map(value), full_key, delimiter, allow_empty_map)
        else:
            shadow.add(full_key.lower())
    for key in empty:
        if prefix and prefix in key:
            shadow.add(key.lower())
    return shadow


def merge_flat_keys(shadow: set[str], keys: Iterable[str], delimiter: str) -> set[str]:
    """Add flat ``keys`` to ``shadow`` unless a parent path is already there."""
    for key in keys:
        path = key.split(delimiter)
        if any(delimiter.join(path[:length]) in shadow for length in range(1, len(path))):
            continue
        shadow.add(key.lower())
    return shadow