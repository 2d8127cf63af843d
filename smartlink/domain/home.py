"""Home aggregate root owning rooms and devices."""

from __future__ import annotations

from datetime import datetime
import logging
from uuid import uuid4

from ..const import MAX_DEVICES, MAX_ROOMS
from .device import Device
from .entity import Entity
from .errors import (
    CapacityError,
    DomainValidationError,
    EntityNotFoundError,
    StructuralIntegrityError,
)
from .room import Room
from .values import Address, GeoLocation

_LOGGER = logging.getLogger(__name__)


class Home(Entity):
    """One dwelling and its heating installation.

    The home is the only owner of its rooms and devices; both are addressed
    by id. Collections are exposed as tuples so callers iterate over a
    snapshot. All mutations go through the methods below, which check the
    structural limits before changing anything.
    """

    __slots__ = (
        "_name",
        "_notes",
        "_address",
        "_location",
        "_vacation_mode",
        "_vacation_return_date",
        "_rooms",
        "_devices",
        "_next_position",
    )

    def __init__(self, home_id: str, name: str) -> None:
        """Initialise an empty home; use :meth:`create` instead."""

        super().__init__(home_id)
        self._name = name
        self._notes: str | None = None
        self._address: Address | None = None
        self._location: GeoLocation | None = None
        self._vacation_mode = False
        self._vacation_return_date: datetime | None = None
        self._rooms: dict[str, Room] = {}
        self._devices: dict[str, Device] = {}
        self._next_position = 0

    @classmethod
    def create(cls, home_id: str, name: str) -> Home:
        """Return an empty home without gateway and with vacation mode off."""

        return cls(home_id, name)

    # ----------------- Properties -----------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def notes(self) -> str | None:
        return self._notes

    @property
    def address(self) -> Address | None:
        return self._address

    @property
    def location(self) -> GeoLocation | None:
        return self._location

    @property
    def vacation_mode(self) -> bool:
        return self._vacation_mode

    @property
    def vacation_return_date(self) -> datetime | None:
        return self._vacation_return_date

    @property
    def rooms(self) -> tuple[Room, ...]:
        """Return the rooms in creation order."""

        return tuple(self._rooms.values())

    @property
    def devices(self) -> tuple[Device, ...]:
        """Return the devices in registration order."""

        return tuple(self._devices.values())

    @property
    def gateway(self) -> Device | None:
        """Return the first gateway device, if any."""

        return next((d for d in self._devices.values() if d.is_gateway), None)

    @property
    def has_gateway(self) -> bool:
        """Return ``True`` while at least one gateway device is registered."""

        return self.gateway is not None

    # ----------------- Lookups -----------------

    def get_room(self, room_id: str) -> Room:
        """Return the room ``room_id`` or raise ``EntityNotFoundError``."""

        try:
            return self._rooms[room_id]
        except KeyError:
            raise EntityNotFoundError("Room", room_id) from None

    def get_device(self, device_id: str) -> Device:
        """Return the device ``device_id`` or raise ``EntityNotFoundError``."""

        try:
            return self._devices[device_id]
        except KeyError:
            raise EntityNotFoundError("Device", device_id) from None

    def room_at(self, position: int) -> Room | None:
        """Return the room occupying ``position``, if any."""

        return next((r for r in self._rooms.values() if r.position == position), None)

    def devices_in_room(self, room_id: str) -> tuple[Device, ...]:
        """Return the devices whose ``room_id`` is ``room_id``.

        Devices are ordered as the room lists them; a device pointed at the
        room without going through :meth:`assign_device_to_room` comes last.
        """

        room = self.get_room(room_id)
        order = {device_id: index for index, device_id in enumerate(room.device_ids)}
        members = [d for d in self._devices.values() if d.room_id == room.id]
        members.sort(key=lambda d: order.get(d.id, len(order)))
        return tuple(members)

    # ----------------- Home details -----------------

    def update_name(self, name: str) -> None:
        self._name = name
        self._touch()

    def update_notes(self, notes: str | None) -> None:
        self._notes = notes
        self._touch()

    def set_address(self, address: Address | None) -> None:
        self._address = address
        self._touch()

    def set_location(self, location: GeoLocation | None) -> None:
        self._location = location
        self._touch()

    def enable_vacation_mode(self, return_date: datetime | None) -> None:
        self._vacation_mode = True
        self._vacation_return_date = return_date
        self._touch()

    def disable_vacation_mode(self) -> None:
        self._vacation_mode = False
        self._vacation_return_date = None
        self._touch()

    # ----------------- Rooms -----------------

    def add_room(self, name: str) -> Room:
        """Create a room named ``name`` at the next free position.

        Positions are handed out once: removing a room never renumbers the
        remaining ones and its position is not given to a later room.
        """

        return self._insert_room(str(uuid4()), name, self._next_position)

    def restore_room(self, room_id: str, name: str, position: int) -> Room:
        """Rebuild a previously persisted room at its stored ``position``."""

        if position < 0:
            raise DomainValidationError("position", "Position must not be negative")
        if self.room_at(position) is not None:
            raise DomainValidationError(
                "position", f"Position {position} is already taken"
            )
        if room_id in self._rooms:
            raise DomainValidationError("room_id", f"Room {room_id} already exists")
        return self._insert_room(room_id, name, position)

    def _insert_room(self, room_id: str, name: str, position: int) -> Room:
        if len(self._rooms) >= MAX_ROOMS:
            raise CapacityError("rooms", MAX_ROOMS)
        room = Room(room_id, self.id, name, position)
        self._rooms[room.id] = room
        self._next_position = max(self._next_position, position + 1)
        self._touch()
        return room

    def remove_room(self, room_id: str) -> None:
        """Remove ``room_id``; unknown ids are ignored.

        Rooms still referenced by a device cannot be removed.
        """

        if room_id not in self._rooms:
            _LOGGER.debug("Ignoring removal of unknown room %s", room_id)
            return
        if any(d.room_id == room_id for d in self._devices.values()):
            raise StructuralIntegrityError("Cannot remove a room that contains devices")
        del self._rooms[room_id]
        self._touch()

    # ----------------- Devices -----------------

    def add_device(self, device: Device) -> None:
        """Register ``device`` with this home."""

        if len(self._devices) >= MAX_DEVICES:
            raise CapacityError("devices", MAX_DEVICES)
        if device.home_id != self.id:
            raise DomainValidationError(
                "home_id", f"Device belongs to home {device.home_id}"
            )
        if device.id in self._devices:
            raise DomainValidationError("device_id", f"Device {device.id} already exists")
        room = None
        if device.room_id is not None:
            room = self.get_room(device.room_id)
        self._devices[device.id] = device
        if room is not None:
            room._attach_device(device.id)
        self._touch()

    def remove_device(self, device_id: str) -> None:
        """Remove ``device_id``; unknown ids are ignored."""

        device = self._devices.pop(device_id, None)
        if device is None:
            _LOGGER.debug("Ignoring removal of unknown device %s", device_id)
            return
        if device.room_id is not None and device.room_id in self._rooms:
            self._rooms[device.room_id]._detach_device(device.id)
            device.remove_from_room()
        self._touch()

    def assign_device_to_room(self, device_id: str, room_id: str) -> None:
        """Move ``device_id`` into ``room_id``, updating both sides at once."""

        device = self.get_device(device_id)
        target = self.get_room(room_id)
        previous = device.room_id
        if previous == room_id:
            return
        if previous is not None and previous in self._rooms:
            self._rooms[previous]._detach_device(device.id)
        device.assign_to_room(room_id)
        target._attach_device(device.id)
        self._touch()

    def unassign_device(self, device_id: str) -> None:
        """Take ``device_id`` out of its room; the device stays in the home."""

        device = self.get_device(device_id)
        if device.room_id is None:
            return
        if device.room_id in self._rooms:
            self._rooms[device.room_id]._detach_device(device.id)
        device.remove_from_room()
        self._touch()
