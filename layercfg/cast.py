"""Lenient conversions between loosely typed configuration values.

Every public function returns the zero value of its target type when the
input cannot be converted, instead of raising.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1
_SEQUENCES = (list, tuple)

_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_DURATION_PART = re.compile(r"(\d*)(?:\.(\d*))?(ns|us|µs|μs|ms|s|m|h)")
_OCTAL = re.compile(r"([+-]?)0([0-7_]+)")
_ZERO_DECIMAL = re.compile(r"(.*)\.0+")

_TIME_FORMATS = (
    "%a, %d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S %Z",
    "%d %b %y %H:%M %z",
    "%d %b %y %H:%M %Z",
    "%a %b %d %H:%M:%S %Y",
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S",
    "%d %b %Y",
    "%d %b %y",
)

_CONVERSION_ERRORS = (ValueError, TypeError, OverflowError)


def _strict_bool(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, timedelta):
        return value != timedelta(0)
    if isinstance(value, str):
        if value in _TRUE_WORDS:
            return True
        if value in _FALSE_WORDS:
            return False
        raise ValueError(f"invalid boolean {value!r}")
    raise TypeError(f"cannot convert {type(value).__name__} to bool")


def _parse_int(text: str, low: int, high: int) -> int:
    trimmed = _ZERO_DECIMAL.fullmatch(text)
    if trimmed:
        text = trimmed.group(1)
    if not text or not text.isascii() or text != text.strip():
        raise ValueError(f"invalid integer {text!r}")
    octal = _OCTAL.fullmatch(text)
    if octal:
        text = f"{octal.group(1)}0o{octal.group(2)}"
    number = int(text, 0)
    if not low <= number <= high:
        raise ValueError(f"integer {text!r} out of range")
    return number


def _strict_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return _parse_int(value, _INT64_MIN, _INT64_MAX)
    raise TypeError(f"cannot convert {type(value).__name__} to int")


def _strict_float(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        if not value or value != value.strip():
            raise ValueError(f"invalid float {value!r}")
        return float(value)
    raise TypeError(f"cannot convert {type(value).__name__} to float")


def _format_float(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "+Inf" if number > 0 else "-Inf"
    return format(Decimal(repr(number)).normalize(), "f")


def _fraction(value: int, unit: int) -> str:
    whole, rest = divmod(value, unit)
    if not rest:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(rest).rjust(width, '0').rstrip('0')}"


def _format_duration(duration: timedelta) -> str:
    nanos = ((duration.days * 86400 + duration.seconds) * 1_000_000 + duration.microseconds) * 1000
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)
    if nanos < 1_000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        return f"{sign}{_fraction(nanos, 1_000)}µs"
    if nanos < 1_000_000_000:
        return f"{sign}{_fraction(nanos, 1_000_000)}ms"
    whole_seconds, sub_second = divmod(nanos, 1_000_000_000)
    hours, remainder = divmod(whole_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{_fraction(seconds * 1_000_000_000 + sub_second, 1_000_000_000)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{text}"
    if minutes:
        return f"{sign}{minutes}m{text}"
    return sign + text


def _parse_duration(text: str) -> int:
    """Parse a duration such as ``1h30m`` into nanoseconds."""
    rest = text
    sign = 1
    if rest[:1] in ("+", "-"):
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest == "0":
        return 0
    if not rest:
        raise ValueError(f"invalid duration {text!r}")
    total = 0
    position = 0
    while position < len(rest):
        part = _DURATION_PART.match(rest, position)
        if part is None or (not part.group(1) and not part.group(2)):
            raise ValueError(f"invalid duration {text!r}")
        unit = _DURATION_UNITS[part.group(3)]
        total += int(part.group(1) or 0) * unit
        digits = part.group(2)
        if digits:
            total += int(digits) * unit // 10 ** len(digits)
        position = part.end()
    return sign * total


def _nanos_to_timedelta(nanos: int) -> timedelta:
    micros = abs(nanos) // 1000
    return timedelta(microseconds=-micros if nanos < 0 else micros)


def _strict_duration(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool) or value is None:
        raise TypeError("cannot convert to duration")
    if isinstance(value, int):
        return _nanos_to_timedelta(value)
    if isinstance(value, float):
        return _nanos_to_timedelta(int(value))
    if isinstance(value, str):
        text = value if any(char in value for char in "nsuµmh") else value + "ns"
        return _nanos_to_timedelta(_parse_duration(text))
    raise TypeError(f"cannot convert {type(value).__name__} to duration")


def _with_zone(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def _parse_time(text: str) -> datetime:
    try:
        return _with_zone(datetime.fromisoformat(text))
    except ValueError:
        pass
    for layout in _TIME_FORMATS:
        try:
            return _with_zone(datetime.strptime(text, layout))
        except ValueError:
            continue
    raise ValueError(f"unable to parse date {text!r}")


def _strict_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, bool) or value is None:
        raise TypeError("cannot convert to time")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        return _parse_time(value)
    raise TypeError(f"cannot convert {type(value).__name__} to time")


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, (bool, int, float)):
        return to_string(key)
    return str(key)


def _json_object(text: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def to_bool(value: Any) -> bool:
    """Convert to a boolean; unknown words count as false."""
    try:
        return _strict_bool(value)
    except _CONVERSION_ERRORS:
        return False


def to_string(value: Any) -> str:
    """Convert a scalar to text; containers yield an empty string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, timedelta):
        return _format_duration(value)
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return ""
    return str(value)


def to_int(value: Any) -> int:
    """Convert to an integer, accepting prefixed and octal notations."""
    try:
        return _strict_int(value)
    except _CONVERSION_ERRORS:
        return 0


def to_uint(value: Any) -> int:
    """Convert to a non-negative integer; negative inputs yield zero."""
    try:
        number = _strict_int(value)
    except _CONVERSION_ERRORS:
        return 0
    return number if 0 <= number <= _UINT64_MAX else 0


def to_float(value: Any) -> float:
    """Convert to a float."""
    try:
        return _strict_float(value)
    except _CONVERSION_ERRORS:
        return 0.0


def to_duration(value: Any) -> timedelta:
    """Convert to a duration; bare numbers are nanoseconds."""
    try:
        return _strict_duration(value)
    except _CONVERSION_ERRORS:
        return timedelta(0)


def to_time(value: Any) -> datetime:
    """Convert to a timezone-aware datetime; numbers are Unix seconds."""
    try:
        return _strict_time(value)
    except _CONVERSION_ERRORS:
        return ZERO_TIME


def to_string_slice(value: Any) -> list[str]:
    """Convert to a list of strings; text is split on whitespace."""
    if isinstance(value, str):
        return value.split()
    if isinstance(value, _SEQUENCES):
        return [to_string(item) for item in value]
    return []


def to_int_slice(value: Any) -> list[int]:
    """Convert a sequence to integers; any bad element yields an empty list."""
    if not isinstance(value, _SEQUENCES):
        return []
    try:
        return [_strict_int(item) for item in value]
    except _CONVERSION_ERRORS:
        return []


def to_string_map(value: Any) -> dict[str, Any]:
    """Convert to a dict with string keys.

    A plain dict whose keys are already strings is returned as is.
    """
    if isinstance(value, dict) and all(isinstance(key, str) for key in value):
        return value
    if isinstance(value, Mapping):
        return {_key_text(key): item for key, item in value.items()}
    if isinstance(value, str):
        return _json_object(value) or {}
    return {}


def to_string_map_string(value: Any) -> dict[str, str]:
    """Convert to a dict of strings to strings."""
    if isinstance(value, Mapping):
        return {_key_text(key): to_string(item) for key, item in value.items()}
    if isinstance(value, str):
        parsed = _json_object(value)
        if parsed and all(isinstance(item, str) for item in parsed.values()):
            return parsed
    return {}


def to_string_map_string_slice(value: Any) -> dict[str, list[str]]:
    """Convert to a dict of strings to lists of strings."""
    if isinstance(value, str):
        value = _json_object(value)
    if not isinstance(value, Mapping):
        return {}
    return {_key_text(key): to_string_slice(item) for key, item in value.items()}


def parse_size_in_bytes(size: Any) -> int:
    """Parse sizes such as ``512``, ``10kb``, ``2 MB`` or ``1GB`` into bytes."""
    text = to_string(size).strip()
    multiplier = 1
    if len(text) > 2 and text[-1] in "bB":
        unit = text[-2].lower()
        factors = {"k": 1 << 10, "m": 1 << 20, "g": 1 << 30}
        if unit in factors:
            multiplier = factors[unit]
            text = text[:-2].strip()
        else:
            text = text[:-1].strip()
    number = max(to_int(text), 0)
    result = number * multiplier
    return result if result <= _UINT64_MAX else 0