"""Domain model of a SmartLink home."""

from .boost import validate_boost_duration
from .commands import (
    BaseCommand,
    DirectAction,
    GeofenceAction,
    geofence_for_rooms,
    room_mask,
)
from .device import Device
from .enums import (
    AccessoryCategory,
    ConnectionStatus,
    DeviceBrand,
    DeviceCategory,
    DeviceMode,
    HeaterMode,
    ProximityAction,
    TemperatureUnit,
    device_mode_from_code,
    normalize_device_category,
)
from .errors import (
    CapacityError,
    DomainError,
    DomainValidationError,
    EntityNotFoundError,
    OutOfRangeError,
    SmartLinkError,
    StructuralIntegrityError,
)
from .home import Home
from .readings import DeviceReading, RoomTelemetry, apply_readings
from .room import Room
from .values import Address, GeoLocation, Temperature

__all__ = [
    "AccessoryCategory",
    "Address",
    "BaseCommand",
    "CapacityError",
    "ConnectionStatus",
    "Device",
    "DeviceBrand",
    "DeviceCategory",
    "DeviceMode",
    "DeviceReading",
    "DirectAction",
    "DomainError",
    "DomainValidationError",
    "EntityNotFoundError",
    "GeoLocation",
    "GeofenceAction",
    "HeaterMode",
    "Home",
    "OutOfRangeError",
    "ProximityAction",
    "Room",
    "RoomTelemetry",
    "SmartLinkError",
    "StructuralIntegrityError",
    "Temperature",
    "TemperatureUnit",
    "apply_readings",
    "device_mode_from_code",
    "geofence_for_rooms",
    "normalize_device_category",
    "room_mask",
    "validate_boost_duration",
]
