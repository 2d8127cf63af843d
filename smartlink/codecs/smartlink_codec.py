"""Mapping between SmartLink backend payloads and the domain aggregate."""

from __future__ import annotations

import base64
from collections.abc import Mapping
import logging
from typing import Any

from pydantic import ValidationError

from ..domain.commands import DirectAction, GeofenceAction
from ..domain.device import Device
from ..domain.enums import (
    DeviceCategory,
    accessory_code_for,
    device_category_from_code,
    device_mode_from_code,
    heater_mode_for,
)
from ..domain.errors import DomainValidationError
from ..domain.home import Home
from ..domain.readings import DeviceReading
from ..domain.room import Room
from ..domain.values import Address, GeoLocation, Temperature
from .smartlink_models import (
    AccessoryPayload,
    DeviceStatusResponse,
    DirectActionRequest,
    GatewayPayload,
    GeofencingRequest,
    HeaterSettingsPayload,
    HomePayload,
    LocationPayload,
    RoomPayload,
)
from .status_codec import decode_status_list

_LOGGER = logging.getLogger(__name__)


def room_id_for(home_id: str, position: int) -> str:
    """Return the stable id given to the room stored at ``position``."""

    return f"{home_id}:{position}"


def decode_gateway_payload(raw: Any) -> GatewayPayload | None:
    """Validate a gateway payload; return ``None`` when unusable."""

    if not isinstance(raw, Mapping):
        return None
    try:
        return GatewayPayload.model_validate(raw)
    except ValidationError:
        _LOGGER.debug("Unexpected gateway payload shape: %r", raw)
        return None


def decode_device_status_payload(raw: Any) -> list[DeviceReading]:
    """Return the readings contained in a device-status payload."""

    if isinstance(raw, list):
        return decode_status_list(raw)
    if isinstance(raw, Mapping):
        try:
            model = DeviceStatusResponse.model_validate(raw)
        except ValidationError:
            statuses = raw.get("status")
            if isinstance(statuses, list):
                return decode_status_list(statuses)
            _LOGGER.debug("Unexpected device status payload: %r", raw)
            return []
        return decode_status_list(model.status)
    _LOGGER.debug(
        "Unexpected device status payload (%s); returning empty list",
        type(raw).__name__,
    )
    return []


def _apply_location(home: Home, location: LocationPayload | None) -> None:
    if location is None:
        return
    try:
        home.set_location(GeoLocation(location.latitude, location.longitude))
    except DomainValidationError:
        _LOGGER.warning(
            "Ignoring out of range location for home %s: %s,%s",
            home.id,
            location.latitude,
            location.longitude,
        )
    if location.locality or location.zip_code:
        home.set_address(
            Address(city=location.locality or "", zip_code=location.zip_code or "")
        )


def _apply_settings(room: Room, settings: HeaterSettingsPayload) -> None:
    try:
        room.set_setpoints(
            Temperature.from_celsius(settings.standard_value),
            Temperature.from_celsius(settings.economy_value),
        )
    except DomainValidationError as err:
        _LOGGER.warning("Keeping default setpoints for room %s: %s", room.id, err)
    room.set_max_temperature_limit(
        Temperature.from_celsius(settings.limitation_setpoint)
    )
    mode = device_mode_from_code(settings.mode)
    if mode is not None:
        room.set_mode(mode)


def _device_from_accessory(home: Home, accessory: AccessoryPayload) -> Device:
    device = Device.create(
        accessory.identifier,
        home.id,
        accessory.identifier,
        device_category_from_code(accessory.category),
        installation_date=accessory.creation_date,
    )
    if accessory.power >= 0:
        device.update_power(accessory.power)
    device.update_reference(accessory.reference)
    device.update_firmware_version(accessory.firmware_version)
    device.update_color(accessory.color)
    return device


def decode_home_payload(
    raw: Any,
    *,
    name: str | None = None,
    gateway: GatewayPayload | None = None,
) -> Home:
    """Build a ``Home`` aggregate from a home document.

    ``name`` comes from the invitation listing since the home document does
    not carry it. When ``gateway`` describes a registered gateway that no
    room lists, it is added as an unassigned device.
    """

    model = HomePayload.model_validate(raw)
    home = Home.create(model.id, name or model.id)
    _apply_location(home, model.location)
    if model.vacation_return_date is not None:
        home.enable_vacation_mode(model.vacation_return_date)

    for room_payload in sorted(model.rooms, key=lambda r: r.position):
        room = home.restore_room(
            room_id_for(home.id, room_payload.position),
            room_payload.name,
            room_payload.position,
        )
        if room_payload.area > 0:
            room.set_area(room_payload.area)
        _apply_settings(room, room_payload.settings)
        for accessory in room_payload.accessories:
            if not accessory.identifier:
                _LOGGER.debug("Skipping accessory without header in room %s", room.id)
                continue
            device = _device_from_accessory(home, accessory)
            home.add_device(device)
            home.assign_device_to_room(device.id, room.id)

    if gateway is not None and gateway.has_gateway and gateway.identifier:
        if gateway.identifier not in {d.identifier for d in home.devices}:
            device = Device.create(
                gateway.identifier,
                home.id,
                gateway.identifier,
                DeviceCategory.GATEWAY,
                installation_date=gateway.installation,
            )
            home.add_device(device)
    elif model.has_gateway and not home.has_gateway:
        _LOGGER.debug("Home %s reports a gateway that is not listed", home.id)
    return home


def _encode_accessory(device: Device, base: AccessoryPayload | None) -> AccessoryPayload:
    update = {
        "identifier": device.identifier,
        "category": accessory_code_for(device.category),
        "power": device.power_watts or 0,
        "reference": device.reference,
        "firmware_version": device.firmware_version,
        "color": device.color,
        "creation_date": device.installation_date,
    }
    if base is None:
        return AccessoryPayload(**update)
    return base.model_copy(update=update)


def _encode_room(home: Home, room: Room, base: RoomPayload | None) -> RoomPayload:
    base_settings = base.settings if base is not None else HeaterSettingsPayload()
    limit = room.max_temperature_limit
    settings = base_settings.model_copy(
        update={
            "standard_value": room.comfort_setpoint.to_celsius(),
            "economy_value": room.eco_setpoint.to_celsius(),
            "mode": int(heater_mode_for(room.current_mode)),
            "limitation_setpoint": (
                limit.to_celsius()
                if limit is not None
                else base_settings.limitation_setpoint
            ),
        }
    )
    base_accessories = {
        a.identifier: a for a in (base.accessories if base is not None else [])
    }
    accessories = [
        _encode_accessory(device, base_accessories.get(device.identifier))
        for device in home.devices_in_room(room.id)
    ]
    update = {
        "position": room.position,
        "name": room.name,
        "area": int(round(room.area_m2)) if room.area_m2 is not None else 0,
        "settings": settings,
        "accessories": accessories,
    }
    if base is None:
        return RoomPayload(**update)
    return base.model_copy(update=update)


def encode_home_payload(
    home: Home, base: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Serialise ``home`` for ``PUT api/1/homes/``.

    Keys of ``base`` (the document the home was loaded from) that the domain
    does not model, such as program ranges, are carried over unchanged.
    """

    base_model = HomePayload.model_validate(base) if base is not None else None
    base_rooms = {r.position: r for r in (base_model.rooms if base_model else [])}

    location = None
    if home.location is not None:
        address = home.address
        location = LocationPayload(
            latitude=home.location.latitude,
            longitude=home.location.longitude,
            locality=address.city if address is not None else None,
            zip_code=address.zip_code if address is not None else None,
        )

    update = {
        "id": home.id,
        "location": location,
        "rooms": [
            _encode_room(home, room, base_rooms.get(room.position))
            for room in sorted(home.rooms, key=lambda r: r.position)
        ],
        "vacation_return_date": (
            home.vacation_return_date if home.vacation_mode else None
        ),
        "has_gateway": home.has_gateway,
    }
    model = (
        base_model.model_copy(update=update)
        if base_model is not None
        else HomePayload(**update)
    )
    return model.model_dump(by_alias=True, mode="json", exclude_none=True)


def encode_geofence_request(command: GeofenceAction) -> dict[str, Any]:
    """Return the JSON body for a geofencing command."""

    request = GeofencingRequest(
        action=int(command.action),
        home_id=command.home_id,
        description=command.description or "",
        room_mask=command.room_mask,
    )
    return request.model_dump(by_alias=True)


def encode_direct_action(command: DirectAction) -> dict[str, Any]:
    """Return the JSON body relaying ``command`` to the gateway."""

    encoded = base64.b64encode(command.payload).decode("ascii")
    request = DirectActionRequest(
        home_id=command.home_id,
        description=command.description or "",
        **{command.payload_tag: encoded},
    )
    return request.model_dump(by_alias=True)


__all__ = [
    "decode_device_status_payload",
    "decode_gateway_payload",
    "decode_home_payload",
    "encode_direct_action",
    "encode_geofence_request",
    "encode_home_payload",
    "room_id_for",
]
