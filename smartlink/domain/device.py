"""Device entity: a single controllable heating unit."""

from __future__ import annotations

from datetime import datetime

from ..const import MANUAL_URLS
from ..util import utcnow
from .entity import Entity
from .enums import (
    ConnectionStatus,
    DeviceBrand,
    DeviceCategory,
    DeviceMode,
    normalize_device_category,
)
from .errors import DomainValidationError
from .values import Temperature

_MANUAL_KEYS: dict[DeviceCategory, str] = {
    DeviceCategory.THERMOSTAT: "thermostat",
    DeviceCategory.GATEWAY: "gateway",
    DeviceCategory.WATER_HEATER_RELAY: "water_heater_relay",
}


class Device(Entity):
    """A field device belonging to exactly one home and at most one room.

    Instances are created through :meth:`create`; state changes go through the
    named operations so that ``updated_at`` is always stamped. Room membership
    is changed by :meth:`Home.assign_device_to_room`, which keeps the room's
    device set consistent with :attr:`room_id`.
    """

    __slots__ = (
        "_home_id",
        "_room_id",
        "_identifier",
        "_category",
        "_brand",
        "_reference",
        "_color",
        "_power_watts",
        "_firmware_version",
        "_installation_date",
        "_last_connection",
        "_connection_status",
        "_mode",
        "_ambient_temperature",
        "_setpoint",
        "_is_boost_active",
        "_is_open_window_detected",
        "_did_respond",
    )

    def __init__(
        self,
        device_id: str,
        home_id: str,
        identifier: str,
        category: DeviceCategory,
        brand: DeviceBrand,
    ) -> None:
        """Initialise identity fields; use :meth:`create` instead."""

        super().__init__(device_id)
        self._home_id = home_id
        self._room_id: str | None = None
        self._identifier = identifier
        self._category = category
        self._brand = brand
        self._reference: str | None = None
        self._color: int | None = None
        self._power_watts: int | None = None
        self._firmware_version: str | None = None
        self._installation_date: datetime | None = None
        self._last_connection: datetime | None = None
        self._connection_status = ConnectionStatus.OFFLINE
        self._mode = DeviceMode.PROGRAM
        self._ambient_temperature: Temperature | None = None
        self._setpoint: Temperature | None = None
        self._is_boost_active = False
        self._is_open_window_detected = False
        self._did_respond = False

    @classmethod
    def create(
        cls,
        device_id: str,
        home_id: str,
        identifier: str,
        category: DeviceCategory | int | str,
        brand: DeviceBrand = DeviceBrand.UNKNOWN,
        *,
        installation_date: datetime | None = None,
    ) -> Device:
        """Return a new offline device in ``Program`` mode."""

        device = cls(
            device_id,
            str(home_id),
            str(identifier),
            normalize_device_category(category),
            DeviceBrand(brand),
        )
        device._installation_date = installation_date or utcnow()
        return device

    # ----------------- Identity -----------------

    @property
    def home_id(self) -> str:
        return self._home_id

    @property
    def room_id(self) -> str | None:
        return self._room_id

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def category(self) -> DeviceCategory:
        return self._category

    @property
    def brand(self) -> DeviceBrand:
        return self._brand

    @property
    def reference(self) -> str | None:
        return self._reference

    @property
    def color(self) -> int | None:
        return self._color

    @property
    def power_watts(self) -> int | None:
        return self._power_watts

    @property
    def firmware_version(self) -> str | None:
        return self._firmware_version

    @property
    def installation_date(self) -> datetime | None:
        return self._installation_date

    @property
    def is_gateway(self) -> bool:
        """Return ``True`` for the device bridging the home to the cloud."""

        return self._category is DeviceCategory.GATEWAY

    # ----------------- Live state -----------------

    @property
    def connection_status(self) -> ConnectionStatus:
        return self._connection_status

    @property
    def last_connection(self) -> datetime | None:
        return self._last_connection

    @property
    def did_respond(self) -> bool:
        return self._did_respond

    @property
    def mode(self) -> DeviceMode:
        return self._mode

    @property
    def ambient_temperature(self) -> Temperature | None:
        return self._ambient_temperature

    @property
    def setpoint(self) -> Temperature | None:
        return self._setpoint

    @property
    def is_boost_active(self) -> bool:
        return self._is_boost_active

    @property
    def is_open_window_detected(self) -> bool:
        return self._is_open_window_detected

    # ----------------- Mutations -----------------

    def assign_to_room(self, room_id: str) -> None:
        """Point the device at ``room_id`` without touching the room itself.

        Use :meth:`Home.assign_device_to_room` to keep the room's device list
        in step.
        """

        self._room_id = room_id
        self._touch()

    def remove_from_room(self) -> None:
        """Clear the room reference; see :meth:`Home.unassign_device`."""

        self._room_id = None
        self._touch()

    def update_reference(self, reference: str | None) -> None:
        self._reference = reference
        self._touch()

    def update_color(self, color: int | None) -> None:
        self._color = color
        self._touch()

    def update_power(self, power_watts: int) -> None:
        """Set the nominal power; negative values are rejected."""

        if power_watts < 0:
            raise DomainValidationError("power_watts", "Power must be positive")
        self._power_watts = int(power_watts)
        self._touch()

    def update_firmware_version(self, version: str | None) -> None:
        self._firmware_version = version
        self._touch()

    def update_connection_status(self, status: ConnectionStatus) -> None:
        """Record a connectivity transition.

        Only a transition to ``Online`` stamps ``last_connection``; ``did_respond``
        mirrors whether the latest status is ``Online``.
        """

        status = ConnectionStatus(status)
        self._connection_status = status
        if status is ConnectionStatus.ONLINE:
            self._last_connection = utcnow()
        self._did_respond = status is ConnectionStatus.ONLINE
        self._touch()

    def update_mode(self, mode: DeviceMode) -> None:
        self._mode = DeviceMode(mode)
        self._touch()

    def update_temperatures(
        self, ambient: Temperature | None, setpoint: Temperature | None
    ) -> None:
        self._ambient_temperature = ambient
        self._setpoint = setpoint
        self._touch()

    def set_boost_active(self, active: bool) -> None:
        self._is_boost_active = bool(active)
        self._touch()

    def set_open_window_detected(self, detected: bool) -> None:
        self._is_open_window_detected = bool(detected)
        self._touch()

    def get_manual_url(self) -> str:
        """Return the documentation link for this device category."""

        key = _MANUAL_KEYS.get(self._category)
        return MANUAL_URLS[key] if key is not None else ""
