"""Utility helpers for the SmartLink client."""

from __future__ import annotations

from datetime import UTC, datetime
import math
from typing import Any


def float_or_none(value: Any) -> float | None:
    """Return value as ``float`` if possible, else ``None``.

    Converts integers, floats, and numeric strings to ``float`` while safely
    handling ``None`` and non-numeric inputs.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            num = float(value)
        else:
            string_val = str(value).strip()
            if not string_val:
                return None
            num = float(string_val)
    except (TypeError, ValueError):
        return None
    return num if math.isfinite(num) else None


def int_or_none(value: Any) -> int | None:
    """Return ``value`` as ``int`` when it is an integral number, else ``None``."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value.is_integer() else None
    candidate = str(value).strip()
    if not candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        return None


def utcnow() -> datetime:
    """Return the current time as an aware UTC ``datetime``."""

    return datetime.now(UTC)
