"""Live device readings and their merge into a ``Home``."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import logging
from types import MappingProxyType

from .enums import ConnectionStatus, device_mode_from_code
from .home import Home
from .values import Temperature

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeviceReading:
    """Telemetry decoded from one device status string.

    ``room_position`` and ``position`` locate the device; temperatures are in
    degrees Celsius. Readings are replaced wholesale on every poll.
    """

    room_position: int = 0
    position: int = 0
    mode: int = 0
    state: int = 0
    setpoint: float = 0.0
    ambient: float = 0.0
    daily_hours: int = 0
    weekly_hours: int = 0
    monthly_hours: int = 0
    yearly_hours: int = 0


@dataclass(frozen=True, slots=True)
class RoomTelemetry:
    """Figures aggregated over the readings of one room."""

    room_id: str
    reading_count: int
    average_temperature: float
    average_setpoint: float
    total_daily_hours: int


def _mean(values: list[float]) -> float:
    return round(sum(values) / len(values), 1) if values else 0.0


def group_by_room(readings: Iterable[DeviceReading]) -> dict[int, list[DeviceReading]]:
    """Return ``readings`` grouped by room position, keeping their order."""

    grouped: dict[int, list[DeviceReading]] = {}
    for reading in readings:
        grouped.setdefault(reading.room_position, []).append(reading)
    return grouped


def apply_readings(
    home: Home, readings: Iterable[DeviceReading]
) -> Mapping[str, RoomTelemetry]:
    """Fold ``readings`` into ``home`` and return per-room telemetry.

    Each room receives the mean ambient temperature and setpoint of its
    readings. ``DeviceReading.position`` is the 0-based index of the device in
    the room's assignment order; a matching device gets the reading's
    temperatures, its mode (when the code is known) and an ``Online`` status.
    Readings for unknown rooms or device positions are skipped.
    """

    telemetry: dict[str, RoomTelemetry] = {}
    for room_position, room_readings in group_by_room(readings).items():
        room = home.room_at(room_position)
        if room is None:
            _LOGGER.debug(
                "Skipping %d reading(s) for unknown room position %s",
                len(room_readings),
                room_position,
            )
            continue

        average_temperature = _mean([r.ambient for r in room_readings])
        average_setpoint = _mean([r.setpoint for r in room_readings])
        room.update_current_temperature(Temperature.from_celsius(average_temperature))
        room.update_current_setpoint(Temperature.from_celsius(average_setpoint))

        devices = home.devices_in_room(room.id)
        for reading in room_readings:
            if not 0 <= reading.position < len(devices):
                _LOGGER.debug(
                    "No device at position %s in room %s",
                    reading.position,
                    room_position,
                )
                continue
            device = devices[reading.position]
            device.update_temperatures(
                Temperature.from_celsius(reading.ambient),
                Temperature.from_celsius(reading.setpoint),
            )
            mode = device_mode_from_code(reading.mode)
            if mode is not None:
                device.update_mode(mode)
            device.update_connection_status(ConnectionStatus.ONLINE)

        telemetry[room.id] = RoomTelemetry(
            room_id=room.id,
            reading_count=len(room_readings),
            average_temperature=average_temperature,
            average_setpoint=average_setpoint,
            total_daily_hours=sum(r.daily_hours for r in room_readings),
        )
    return MappingProxyType(telemetry)
