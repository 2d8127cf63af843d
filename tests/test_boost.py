"""Tests for boost duration validation."""

from __future__ import annotations

from datetime import timedelta

import pytest

from smartlink.domain.boost import (
    MAX_BOOST_MINUTES,
    MIN_BOOST_MINUTES,
    validate_boost_duration,
)
from smartlink.domain.errors import DomainValidationError


def test_boost_window_bounds() -> None:
    assert (MIN_BOOST_MINUTES, MAX_BOOST_MINUTES) == (15, 120)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (timedelta(minutes=15), timedelta(minutes=15)),
        (timedelta(hours=2), timedelta(minutes=120)),
        (30, timedelta(minutes=30)),
        ("45", timedelta(minutes=45)),
        (90.5, timedelta(minutes=90, seconds=30)),
    ],
)
def test_validate_boost_duration_accepts_window(value, expected) -> None:
    assert validate_boost_duration(value) == expected


@pytest.mark.parametrize(
    "value",
    [timedelta(minutes=14, seconds=59), timedelta(minutes=121), 0, -30, "soon", None, True],
)
def test_validate_boost_duration_rejects(value) -> None:
    with pytest.raises(DomainValidationError) as err:
        validate_boost_duration(value)
    assert err.value.field == "boost_duration"
    assert "between 15 minutes and 2 hours" in str(err.value) or "Invalid" in str(err.value)
