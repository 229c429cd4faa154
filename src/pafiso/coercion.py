"""
Raw value coercion.

Filter values arrive as strings.  When the resolved field has a known type
the string is parsed straight into it (*typed mode*); otherwise a fixed
inference order is used (*untyped mode*)::

    coerce_value("42", int)        # 42
    coerce_value("red", Color)     # Color.RED
    infer_value("42")              # 42.0  (float wins over int)
    infer_value("TRUE")            # True
    infer_value("laptop")          # "laptop"

All parsing is locale-invariant.
"""

from __future__ import annotations

import datetime
import re
import uuid as uuid_module
from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from .exceptions import ValueCoercionError

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


# ---------------------------------------------------------------------------
# Interval parsing
# ---------------------------------------------------------------------------

_TIME_RE = re.compile(r"^(-)?(\d+):(\d+):(\d+(?:\.\d+)?)$")
_DAY_RE = re.compile(r"(\d+)\s*days?", re.IGNORECASE)
_HOUR_RE = re.compile(r"(\d+)\s*hours?", re.IGNORECASE)
_MIN_RE = re.compile(r"(\d+)\s*minutes?", re.IGNORECASE)
_SEC_RE = re.compile(r"(\d+)\s*seconds?", re.IGNORECASE)
# Shorthand: 7d, 24h, 30m, 90s, 2w
_SHORTHAND_RE = re.compile(r"^(\d+)\s*([dhmsw])$", re.IGNORECASE)
_UNITS = {"d": "days", "h": "hours", "m": "minutes", "s": "seconds", "w": "weeks"}


def parse_interval(text: str) -> datetime.timedelta:
    """
    Parse an interval string into a ``timedelta``.

    Supported formats:
    - ``"1:30:00"`` (HH:MM:SS, optionally negative or with fractional seconds)
    - ``"7d"``, ``"24h"``, ``"30m"``, ``"90s"``, ``"2w"``
    - ``"1 day 2 hours 30 minutes"``
    - Plain numeric string, treated as seconds
    """
    text = text.strip()

    sm = _SHORTHAND_RE.match(text)
    if sm:
        amount = int(sm.group(1))
        return datetime.timedelta(**{_UNITS[sm.group(2).lower()]: amount})

    m = _TIME_RE.match(text)
    if m:
        sign, hours, minutes, seconds = m.groups()
        delta = datetime.timedelta(
            hours=int(hours), minutes=int(minutes), seconds=float(seconds)
        )
        return -delta if sign else delta

    found = {
        unit: int(match.group(1))
        for unit, regex in (
            ("days", _DAY_RE),
            ("hours", _HOUR_RE),
            ("minutes", _MIN_RE),
            ("seconds", _SEC_RE),
        )
        if (match := regex.search(text))
    }
    if found:
        return datetime.timedelta(**found)

    if _FLOAT_RE.match(text):
        return datetime.timedelta(seconds=float(text))
    raise ValueError(f"Unrecognised interval format: {text}")


# ---------------------------------------------------------------------------
# Scalar parsers
# ---------------------------------------------------------------------------


def _parse_bool(raw: str) -> bool:
    low = raw.strip().lower()
    if low == "true":
        return True
    if low == "false":
        return False
    raise ValueError("expected 'true' or 'false'")


def _parse_int(raw: str) -> int:
    text = raw.strip()
    if not _INT_RE.match(text):
        raise ValueError("not an integer literal")
    return int(text)


def _parse_float(raw: str) -> float:
    text = raw.strip()
    if not _FLOAT_RE.match(text):
        raise ValueError("not a decimal literal")
    return float(text)


def _parse_decimal(raw: str) -> Decimal:
    text = raw.strip()
    if not _FLOAT_RE.match(text):
        raise ValueError("not a decimal literal")
    try:
        return Decimal(text)
    except InvalidOperation as err:
        raise ValueError("not a decimal literal") from err


def _parse_datetime(raw: str) -> datetime.datetime:
    result = datetime.datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    if result.tzinfo is not None:
        result = result.astimezone(datetime.timezone.utc)
    return result


def _parse_date(raw: str) -> datetime.date:
    return datetime.date.fromisoformat(raw.strip())


def _parse_time(raw: str) -> datetime.time:
    return datetime.time.fromisoformat(raw.strip())


def _parse_uuid(raw: str) -> uuid_module.UUID:
    return uuid_module.UUID(raw.strip())


# Ordered: bool before int (bool is an int subclass), datetime before date.
_PARSERS: tuple[tuple[type, Callable[[str], Any]], ...] = (
    (str, str),
    (bool, _parse_bool),
    (int, _parse_int),
    (float, _parse_float),
    (Decimal, _parse_decimal),
    (datetime.datetime, _parse_datetime),
    (datetime.date, _parse_date),
    (datetime.time, _parse_time),
    (datetime.timedelta, parse_interval),
    (uuid_module.UUID, _parse_uuid),
)


def parse_enum(raw: str, enum_type: type[Enum]) -> Enum:
    """
    Parse an enum member from its value label, falling back to its name.

    Names are tried exactly, then case-insensitively; int-valued enums also
    accept the integer value.
    """
    text = raw.strip()
    for member in enum_type:
        if str(member.value) == text:
            return member
    if text in enum_type.__members__:
        return enum_type.__members__[text]
    lowered = text.lower()
    for name, member in enum_type.__members__.items():
        if name.lower() == lowered:
            return member
    if _INT_RE.match(text):
        try:
            return enum_type(int(text))
        except ValueError:
            pass
    labels = ", ".join(str(m.value) for m in enum_type)
    raise ValueError(f"expected one of: {labels}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def coerce_value(raw: str | None, target_type: Any, *, field: str | None = None) -> Any:
    """
    Parse *raw* into *target_type* (typed mode).

    A ``None`` target type falls back to :func:`infer_value`.  ``None`` input
    is returned unchanged.

    Raises:
        ValueCoercionError: If *raw* cannot be parsed.
    """
    if raw is None:
        return None
    if target_type is None or target_type is object or target_type is Any:
        return infer_value(raw)
    if not isinstance(raw, str):
        # Already typed (programmatic callers).
        return raw

    try:
        if isinstance(target_type, type) and issubclass(target_type, Enum):
            return parse_enum(raw, target_type)
        for base, parser in _PARSERS:
            if target_type is base:
                return parser(raw)
        for base, parser in _PARSERS:
            if isinstance(target_type, type) and issubclass(target_type, base):
                return target_type(parser(raw))
        return target_type(raw)
    except (TypeError, ValueError) as err:
        raise ValueCoercionError(raw, target_type, field=field, reason=str(err)) from err


def infer_value(raw: str | None) -> Any:
    """
    Infer a value from an untyped string (untyped mode).

    Tries ``float``, then ``bool``, then ``int``, then falls back to the
    string itself; the first successful parse wins.
    """
    if raw is None or not isinstance(raw, str):
        return raw
    for parser in (_parse_float, _parse_bool, _parse_int):
        try:
            return parser(raw)
        except ValueError:
            continue
    return raw


def escape_like_pattern(value: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so *value* matches literally."""
    return (
        value.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )
