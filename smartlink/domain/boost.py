"""Helpers for validating room boost durations."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Final

from ..const import MAX_BOOST_DURATION, MIN_BOOST_DURATION
from ..util import float_or_none
from .errors import DomainValidationError

MIN_BOOST_MINUTES: Final = int(MIN_BOOST_DURATION.total_seconds() // 60)
MAX_BOOST_MINUTES: Final = int(MAX_BOOST_DURATION.total_seconds() // 60)


def validate_boost_duration(duration: Any) -> timedelta:
    """Return ``duration`` as a ``timedelta`` when inside the boost window.

    ``duration`` may be a ``timedelta`` or a number of minutes. Durations
    shorter than 15 minutes or longer than two hours are rejected.
    """

    if isinstance(duration, timedelta):
        candidate = duration
    else:
        minutes = float_or_none(duration)
        if minutes is None:
            raise DomainValidationError(
                "boost_duration", f"Invalid boost duration: {duration!r}"
            )
        candidate = timedelta(minutes=minutes)

    if not MIN_BOOST_DURATION <= candidate <= MAX_BOOST_DURATION:
        raise DomainValidationError(
            "boost_duration",
            "Boost duration must be between "
            f"{MIN_BOOST_MINUTES} minutes and {MAX_BOOST_MINUTES // 60} hours",
        )
    return candidate
