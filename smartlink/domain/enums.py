"""Enumerations shared by the SmartLink domain and its wire codecs."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any

from ..util import int_or_none


class TemperatureUnit(str, Enum):
    """Units a ``Temperature`` can be expressed in."""

    CELSIUS = "C"
    FAHRENHEIT = "F"


class ConnectionStatus(IntEnum):
    """Connectivity of a field device."""

    OFFLINE = 0
    CONNECTING = 1
    ONLINE = 2
    SCANNING = 3
    CONFIGURING = 4
    PEERING = 5
    FAILED = 6


class DeviceCategory(IntEnum):
    """Kind of hardware unit."""

    UNKNOWN = 0
    THERMOSTAT = 1  # FP11 pilot-wire module
    GATEWAY = 2  # BHSL32 box
    WATER_HEATER_RELAY = 3  # RL10 relay
    RADIATOR = 4


class DeviceBrand(IntEnum):
    """Manufacturer of a device."""

    UNKNOWN = 0


class DeviceMode(IntEnum):
    """Operating mode of a room or device."""

    OFF = 0
    COMFORT = 1
    ECO = 2
    ANTI_FREEZE = 3
    MANUAL = 4
    PROGRAM = 5
    BOOST = 6


class HeaterMode(IntEnum):
    """Mode codes used by heater settings and status strings."""

    STOP = 1
    ANTIFREEZE = 2
    MANUAL = 3
    PROG = 4


class AccessoryCategory(IntEnum):
    """Category codes used by the remote accessory payloads."""

    HEATER = 1
    TOWEL_DRYER = 2
    FIREPLACE = 3
    GATEWAY = 4
    MODULE = 5
    FURNACE = 6


class ProximityAction(IntEnum):
    """Geofencing actions sent when the user enters or leaves the home."""

    NOTHING = 0
    STOP = 1
    ANTIFREEZE = 2
    MANUAL = 3
    PROG = 4


_HEATER_TO_DEVICE_MODE: dict[HeaterMode, DeviceMode] = {
    HeaterMode.STOP: DeviceMode.OFF,
    HeaterMode.ANTIFREEZE: DeviceMode.ANTI_FREEZE,
    HeaterMode.MANUAL: DeviceMode.MANUAL,
    HeaterMode.PROG: DeviceMode.PROGRAM,
}

_DEVICE_TO_HEATER_MODE: dict[DeviceMode, HeaterMode] = {
    DeviceMode.OFF: HeaterMode.STOP,
    DeviceMode.ANTI_FREEZE: HeaterMode.ANTIFREEZE,
    DeviceMode.MANUAL: HeaterMode.MANUAL,
    DeviceMode.COMFORT: HeaterMode.MANUAL,
    DeviceMode.ECO: HeaterMode.MANUAL,
    DeviceMode.PROGRAM: HeaterMode.PROG,
    DeviceMode.BOOST: HeaterMode.PROG,
}

_ACCESSORY_TO_DEVICE_CATEGORY: dict[AccessoryCategory, DeviceCategory] = {
    AccessoryCategory.HEATER: DeviceCategory.RADIATOR,
    AccessoryCategory.TOWEL_DRYER: DeviceCategory.RADIATOR,
    AccessoryCategory.FIREPLACE: DeviceCategory.RADIATOR,
    AccessoryCategory.FURNACE: DeviceCategory.RADIATOR,
    AccessoryCategory.GATEWAY: DeviceCategory.GATEWAY,
    AccessoryCategory.MODULE: DeviceCategory.THERMOSTAT,
}

_DEVICE_TO_ACCESSORY_CATEGORY: dict[DeviceCategory, AccessoryCategory] = {
    DeviceCategory.RADIATOR: AccessoryCategory.HEATER,
    DeviceCategory.GATEWAY: AccessoryCategory.GATEWAY,
    DeviceCategory.THERMOSTAT: AccessoryCategory.MODULE,
    DeviceCategory.WATER_HEATER_RELAY: AccessoryCategory.MODULE,
}


def device_mode_from_code(code: Any) -> DeviceMode | None:
    """Translate a wire ``HeaterMode`` code into a ``DeviceMode``."""

    value = int_or_none(code)
    if value is None:
        return None
    try:
        return _HEATER_TO_DEVICE_MODE[HeaterMode(value)]
    except ValueError:
        return None


def heater_mode_for(mode: DeviceMode) -> HeaterMode:
    """Return the wire ``HeaterMode`` used to persist ``mode``."""

    return _DEVICE_TO_HEATER_MODE[DeviceMode(mode)]


def device_category_from_code(code: Any) -> DeviceCategory:
    """Translate a remote accessory category code into a ``DeviceCategory``."""

    value = int_or_none(code)
    if value is None:
        return DeviceCategory.UNKNOWN
    try:
        return _ACCESSORY_TO_DEVICE_CATEGORY[AccessoryCategory(value)]
    except (KeyError, ValueError):
        return DeviceCategory.UNKNOWN


def accessory_code_for(category: DeviceCategory) -> int:
    """Return the remote accessory category code for ``category``."""

    accessory = _DEVICE_TO_ACCESSORY_CATEGORY.get(DeviceCategory(category))
    return int(accessory) if accessory is not None else 0


def normalize_device_category(category: DeviceCategory | int | str) -> DeviceCategory:
    """Normalize assorted category inputs to ``DeviceCategory``."""

    if isinstance(category, DeviceCategory):
        return category
    if isinstance(category, str) and int_or_none(category) is None:
        try:
            return DeviceCategory[category.strip().upper()]
        except KeyError as err:
            raise ValueError(f"Unknown device category: {category}") from err
    try:
        return DeviceCategory(int_or_none(category))
    except ValueError as err:
        raise ValueError(f"Unknown device category: {category}") from err
