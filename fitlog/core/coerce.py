"""
Loose value coercion for client-supplied JSON.

Imported documents come from phone shortcuts and hand-edited files, so
numbers arrive as ints, floats or strings. Optional numbers follow the
legacy rule: a falsy raw value (None, "", 0) means "not provided" and is
stored as NULL. Set KEEP_ZERO_VALUES to store explicit zeros instead.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any

from fitlog.core.config import settings


def _absent(value: Any, keep_zero: bool | None) -> bool:
    if keep_zero is None:
        keep_zero = settings.KEEP_ZERO_VALUES
    if keep_zero:
        return value is None or (isinstance(value, str) and not value.strip())
    return not value


def _float(value: Any) -> float:
    if isinstance(value, str):
        value = value.strip()
    return float(value)


def _int(value: Any) -> int:
    # "7.9" and 7.9 both truncate to 7; garbage raises ValueError
    if isinstance(value, str):
        value = value.strip()
        try:
            return int(value)
        except ValueError:
            return int(float(value))
    return int(value)


def to_float(value: Any, keep_zero: bool | None = None) -> float | None:
    if _absent(value, keep_zero):
        return None
    return _float(value)


def to_int(value: Any, keep_zero: bool | None = None) -> int | None:
    if _absent(value, keep_zero):
        return None
    return _int(value)


def opt_int(value: Any) -> int | None:
    """Presence check only: 0 stays 0."""
    if value is None:
        return None
    return _int(value)


def opt_float(value: Any) -> float | None:
    if value is None:
        return None
    return _float(value)


def opt_str(value: Any) -> str | None:
    if not value:
        return None
    return str(value)


def round_half_up(x: float) -> int:
    # 12.5 -> 13; builtin round() would give 12
    return math.floor(x + 0.5)


def pct(part: int | None, total: int | None) -> int | None:
    if not total or part is None:
        return None
    return round_half_up(part / total * 100)


def parse_date(value: Any) -> date:
    """
    Accept a date, "YYYY-MM-DD" or a full ISO-8601 timestamp (date part kept).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid date: {value!r}")

    s = value.strip()
    try:
        return date.fromisoformat(s)
    except ValueError:
        pass

    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}, expected YYYY-MM-DD")
