"""Tests for room setpoints, modes and boost handling."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from itertools import product

import pytest

from smartlink.domain import DeviceMode, DomainValidationError, Home, Temperature
from smartlink.domain import room as room_module

C = Temperature.from_celsius


@pytest.fixture
def room():
    return Home.create("home-1", "Chalet").add_room("Living room")


def test_defaults(room) -> None:
    """Rooms start with 20/17 setpoints, in program mode, without readings."""

    assert room.comfort_setpoint == C(20)
    assert room.eco_setpoint == C(17)
    assert room.current_mode is DeviceMode.PROGRAM
    assert room.current_temperature is None
    assert room.current_setpoint is None
    assert room.is_boost_active is False
    assert room.boost_end_time is None
    assert room.device_ids == ()


@pytest.mark.parametrize("value", [6.9, 30.1, -5])
def test_setpoints_outside_band_rejected(room, value) -> None:
    with pytest.raises(DomainValidationError, match="between 7°C and 30°C"):
        room.set_comfort_setpoint(C(value))
    with pytest.raises(DomainValidationError):
        room.set_eco_setpoint(C(value))
    assert room.comfort_setpoint == C(20)
    assert room.eco_setpoint == C(17)


def test_band_uses_celsius_conversion(room) -> None:
    """Fahrenheit inputs are checked after conversion."""

    room.set_comfort_setpoint(Temperature.from_fahrenheit(77))
    assert room.comfort_setpoint.to_celsius() == pytest.approx(25.0)
    with pytest.raises(DomainValidationError):
        room.set_comfort_setpoint(Temperature.from_fahrenheit(90))


def test_comfort_must_exceed_eco(room) -> None:
    """Both setters check the ordering against the other value."""

    with pytest.raises(DomainValidationError) as err:
        room.set_comfort_setpoint(C(17))
    assert err.value.field == "comfort_setpoint"

    with pytest.raises(DomainValidationError) as err:
        room.set_eco_setpoint(C(20))
    assert err.value.field == "eco_setpoint"

    room.set_eco_setpoint(C(19.5))
    assert room.eco_setpoint == C(19.5)
    with pytest.raises(DomainValidationError):
        room.set_comfort_setpoint(C(19))


@pytest.mark.parametrize(
    ("comfort", "eco"),
    [pair for pair in product((8, 12, 18, 22, 29), repeat=2) if pair[0] > pair[1]],
)
def test_sequential_setters_never_leave_invalid_state(comfort, eco) -> None:
    """Either call order ends valid or fails without corrupting the room."""

    for order in ("comfort_first", "eco_first"):
        room = Home.create("h", "H").add_room("R")
        calls = [
            (room.set_comfort_setpoint, C(comfort)),
            (room.set_eco_setpoint, C(eco)),
        ]
        if order == "eco_first":
            calls.reverse()
        for setter, value in calls:
            try:
                setter(value)
            except DomainValidationError:
                pass
            assert room.comfort_setpoint.to_celsius() > room.eco_setpoint.to_celsius()


def test_set_setpoints_moves_pair_atomically(room) -> None:
    """A pair update can cross the current values in one step."""

    room.set_setpoints(C(16), C(12))
    assert room.comfort_setpoint == C(16)
    assert room.eco_setpoint == C(12)

    with pytest.raises(DomainValidationError):
        room.set_setpoints(C(18), C(18))
    with pytest.raises(DomainValidationError):
        room.set_setpoints(C(31), C(12))
    assert room.comfort_setpoint == C(16)
    assert room.eco_setpoint == C(12)


def test_area(room) -> None:
    room.set_area(14.5)
    assert room.area_m2 == 14.5
    for bad in (0, -3):
        with pytest.raises(DomainValidationError):
            room.set_area(bad)
    assert room.area_m2 == 14.5


def test_activate_boost(room, monkeypatch: pytest.MonkeyPatch) -> None:
    """Boosting forces boost mode and stores the end time."""

    start = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
    monkeypatch.setattr(room_module, "utcnow", lambda: start)

    room.activate_boost(timedelta(minutes=30))

    assert room.current_mode is DeviceMode.BOOST
    assert room.is_boost_active is True
    assert room.boost_end_time == start + timedelta(minutes=30)
    assert room.boost_remaining(start + timedelta(minutes=10)) == timedelta(minutes=20)
    assert not room.is_boost_expired(start + timedelta(minutes=29))
    assert room.is_boost_expired(start + timedelta(minutes=30))
    assert room.boost_remaining(start + timedelta(hours=1)) == timedelta(0)


def test_activate_boost_uses_current_time(room) -> None:
    before = datetime.now(UTC)
    room.activate_boost(timedelta(minutes=30))
    after = datetime.now(UTC)

    assert before + timedelta(minutes=30) <= room.boost_end_time
    assert room.boost_end_time <= after + timedelta(minutes=30)


@pytest.mark.parametrize(
    "duration", [timedelta(minutes=14), timedelta(minutes=121), timedelta(0)]
)
def test_activate_boost_rejects_duration(room, duration) -> None:
    with pytest.raises(DomainValidationError):
        room.activate_boost(duration)
    assert room.current_mode is DeviceMode.PROGRAM
    assert room.is_boost_active is False


@pytest.mark.parametrize(
    "mode",
    [m for m in DeviceMode if m is not DeviceMode.BOOST],
)
def test_set_mode_clears_boost(room, mode) -> None:
    """Any non-boost mode ends the boost."""

    room.activate_boost(timedelta(minutes=45))
    room.set_mode(mode)

    assert room.current_mode is mode
    assert room.is_boost_active is False
    assert room.boost_end_time is None


def test_set_mode_boost_keeps_timer(room) -> None:
    room.activate_boost(timedelta(minutes=45))
    end = room.boost_end_time
    room.set_mode(DeviceMode.BOOST)
    assert room.boost_end_time == end


def test_deactivate_boost_returns_to_program(room) -> None:
    """Deactivation always returns to program, not to the previous mode."""

    room.set_mode(DeviceMode.ECO)
    room.activate_boost(timedelta(minutes=15))
    room.deactivate_boost()

    assert room.current_mode is DeviceMode.PROGRAM
    assert room.is_boost_active is False
    assert room.boost_end_time is None
    assert room.boost_remaining() == timedelta(0)
    assert room.is_boost_expired() is False


def test_observed_state_and_metadata(room) -> None:
    room.update_name("Lounge")
    room.set_max_temperature_limit(C(26))
    room.update_current_temperature(C(19.4))
    room.update_current_setpoint(C(20))

    assert room.name == "Lounge"
    assert room.max_temperature_limit == C(26)
    assert room.current_temperature == C(19.4)
    assert room.current_setpoint == C(20)
    assert room.updated_at is not None
