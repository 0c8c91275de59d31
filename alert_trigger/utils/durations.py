"""Parsers for duration and label flag values."""
import re
from datetime import timedelta
from typing import Dict

# Microseconds per unit; nanoseconds are kept as a fraction and rounded.
_UNIT_MICROSECONDS = {
    "ns": 0.001,
    "us": 1,
    "µs": 1,
    "μs": 1,
    "ms": 1_000,
    "s": 1_000_000,
    "m": 60_000_000,
    "h": 3_600_000_000,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

# Largest duration Go accepts: int64 nanoseconds (about 2562047h)
_MAX_MICROSECONDS = (2**63 - 1) / 1000
MAX_DURATION = timedelta(microseconds=(2**63 - 1) // 1000)

LABEL_SEPARATOR = ","
KEY_VALUE_SEPARATOR = "="


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``1m``, ``90s``, ``1h30m`` or ``-2.5s``.

    Raises:
        ValueError: If the text is not a valid duration or exceeds
            MAX_DURATION.
    """
    value = text.strip()
    if not value:
        raise ValueError("invalid duration: empty string")

    sign = 1
    if value[0] in "+-":
        sign = -1 if value[0] == "-" else 1
        value = value[1:]

    if value == "0":
        return timedelta(0)

    total = 0.0
    pos = 0
    while pos < len(value):
        match = _COMPONENT.match(value, pos)
        if match is None:
            raise ValueError(f"invalid duration: {text!r}")
        number, unit = match.groups()
        total += float(number) * _UNIT_MICROSECONDS[unit]
        pos = match.end()
        if total > _MAX_MICROSECONDS:
            raise ValueError(f"invalid duration: {text!r} is out of range")

    if pos == 0:
        raise ValueError(f"invalid duration: {text!r}")

    return timedelta(microseconds=sign * round(total))


def format_duration(value: timedelta) -> str:
    """Render a timedelta in the same compact form, e.g. ``1m30s``."""
    total = int(value.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s" if seconds else f"{sign}{minutes}m"
    return f"{sign}{seconds}s"


def parse_labels(text: str) -> Dict[str, str]:
    """Parse ``key=value[,key=value...]`` into a dict.

    Each item is split on the first ``=``, so values may contain ``=``.
    Later keys override earlier ones.

    Raises:
        ValueError: If an item has no ``=`` or an empty key.
    """
    labels: Dict[str, str] = {}
    for item in text.split(LABEL_SEPARATOR):
        key, sep, value = item.partition(KEY_VALUE_SEPARATOR)
        if not sep:
            raise ValueError(f"item {item!r} is missing separator {KEY_VALUE_SEPARATOR!r}")
        key = key.strip()
        if not key:
            raise ValueError(f"item {item!r} has an empty label name")
        labels[key] = value
    return labels
