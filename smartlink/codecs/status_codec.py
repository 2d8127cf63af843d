"""Decoder for the compact device status strings.

A status string concatenates single-letter tags and numerals without any
separator, e.g. ``R7D1M3S4C44A41J10W50Y100``:

===  =========================================
Tag  Field
===  =========================================
R    room position
D    device position inside the room
M    mode code (see ``HeaterMode``)
S    state code
C    setpoint in half degrees (``TC`` variant)
A    ambient temperature in half degrees (``TA`` variant)
J    daily active hours
W    weekly active hours
Y    yearly active hours
===  =========================================

The numerals are assigned to the fields by order of appearance, not by tag:
an omitted tag shifts every following value one field to the left. Monthly
hours have no tag and always decode as ``0``. Integer fields outside the
32-bit signed range also read as ``0``. Decoding never raises; input that
cannot be read yields zero-valued fields.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import math
import re
from typing import Any

from ..domain.readings import DeviceReading

_LOGGER = logging.getLogger(__name__)

STATUS_TAGS = "RDMSCAJWY"

_TOKEN_RE = re.compile(rf"([{STATUS_TAGS}]?)([^{STATUS_TAGS}]*)")
_INT_RE = re.compile(r"[+-]?\d+")
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# Reading fields filled, in this order, by the numerals of a status string.
_POSITIONAL_FIELDS: tuple[str, ...] = (
    "room_position",
    "position",
    "mode",
    "state",
    "setpoint",
    "ambient",
    "daily_hours",
    "weekly_hours",
    "yearly_hours",
)
_HALF_DEGREE_FIELDS = frozenset({"setpoint", "ambient"})

# Integer fields hold 32-bit signed values; anything wider reads as zero.
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT32_MAX_DIGITS = len(str(_INT32_MAX))


def normalize_status(raw: str) -> str:
    """Fold the ``TC``/``TA`` tag variants onto ``C``/``A``."""

    return raw.replace("TC", "C").replace("TA", "A")


def scan_status_tokens(raw: str) -> list[tuple[str, str]]:
    """Return the ``(tag, numeral)`` pairs of a status string.

    Text before the first tag is returned with an empty tag; empty numerals
    are dropped.
    """

    tokens: list[tuple[str, str]] = []
    for match in _TOKEN_RE.finditer(normalize_status(raw)):
        tag, body = match.groups()
        for part in body.split(" "):
            if part:
                tokens.append((tag, part))
    return tokens


def _is_number(text: str) -> bool:
    return bool(_INT_RE.fullmatch(text) or _DECIMAL_RE.fullmatch(text))


def _decode_field(name: str, text: str) -> int | float:
    if name in _HALF_DEGREE_FIELDS:
        if _DECIMAL_RE.fullmatch(text):
            value = float(text)
            if math.isfinite(value):
                return value / 2.0
        return 0.0
    if not _INT_RE.fullmatch(text):
        return 0
    if len(text.lstrip("+-").lstrip("0")) > _INT32_MAX_DIGITS:
        return 0
    value = int(text)
    return value if _INT32_MIN <= value <= _INT32_MAX else 0


def decode_status(raw: Any) -> DeviceReading:
    """Decode one status string into a ``DeviceReading``."""

    if not isinstance(raw, str):
        _LOGGER.debug("Ignoring non-string status payload: %r", raw)
        return DeviceReading()

    values: dict[str, int | float] = {}
    tokens = scan_status_tokens(raw)
    for name, (_tag, text) in zip(_POSITIONAL_FIELDS, tokens):
        if not _is_number(text):
            _LOGGER.debug("Unreadable %s segment %r in status %r", name, text, raw)
            continue
        values[name] = _decode_field(name, text)
    if len(tokens) > len(_POSITIONAL_FIELDS):
        _LOGGER.debug("Ignoring trailing segments in status %r", raw)
    return DeviceReading(**values)


def decode_status_list(raw_statuses: Iterable[Any]) -> list[DeviceReading]:
    """Decode every entry of ``raw_statuses``; malformed entries read as zero."""

    return [decode_status(raw) for raw in raw_statuses]


__all__ = [
    "STATUS_TAGS",
    "decode_status",
    "decode_status_list",
    "normalize_status",
    "scan_status_tokens",
]
