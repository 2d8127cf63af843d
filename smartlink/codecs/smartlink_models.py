"""Pydantic models for SmartLink backend payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Payload(BaseModel):
    """Base payload keeping unknown keys so documents round-trip intact."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class LocationPayload(_Payload):
    """Geographic position of a home."""

    latitude: float
    longitude: float
    locality: str | None = None
    zip_code: str | None = Field(default=None, alias="postalCode")


class HeaterSettingsPayload(_Payload):
    """Per-room heater presets."""

    manual_value: float = Field(default=18.5, alias="manualValue")
    economy_value: float = Field(default=15.5, alias="economyValue")
    standard_value: float = Field(default=19.0, alias="standardValue")
    mode: int = Field(default=3, alias="currentMode")
    limitation_setpoint: float = Field(default=30.0, alias="limitationSetPoint")


class ProgramRangePayload(_Payload):
    """One range of a room's weekly program."""

    tag: int = Field(default=0, alias="eventID")
    mode: int = 1
    start_hour: int = Field(default=0, alias="startHour")
    start_minute: int = Field(default=0, alias="startMinute")
    end_hour: int = Field(default=0, alias="endHour")
    end_minute: int = Field(default=0, alias="endMinute")
    active_days: int = Field(default=0, alias="reccurency")


class AccessoryPayload(_Payload):
    """A device as stored inside a room document."""

    identifier: str = Field(default="", alias="header")
    retailer: str | None = None
    category: int = 0
    color: int | None = None
    power: int = Field(default=0, alias="powerRange")
    reference: str | None = None
    firmware_version: str | None = Field(default=None, alias="softwareVersion")
    creation_date: datetime | None = Field(default=None, alias="creationDate")
    capabilities: int = 0

    @field_validator("identifier", mode="before")
    @classmethod
    def _stringify_identifier(cls, value: Any) -> Any:
        """Accept numeric identifiers from older firmware."""

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class RoomPayload(_Payload):
    """A room as stored inside the home document."""

    position: int = Field(default=0, alias="roomNumber")
    name: str = ""
    area: int = 0
    accessories: list[AccessoryPayload] = Field(default_factory=list)
    programs: list[ProgramRangePayload] = Field(default_factory=list, alias="events")
    uses_ecopilot: bool = Field(default=True, alias="ecopilotEnabled")
    settings: HeaterSettingsPayload = Field(
        default_factory=HeaterSettingsPayload, alias="heaterSettings"
    )
    open_windows_detection_enabled: bool = Field(
        default=False, alias="openWindowsDetectionEnabled"
    )


class HomePayload(_Payload):
    """Home document returned by ``GET api/1/homes/{id}``."""

    id: str = Field(alias="_id")
    mesh_data: str | None = Field(default=None, alias="meshCryptogram")
    pro_identifier: str | None = Field(default=None, alias="client")
    location: LocationPayload | None = None
    rooms: list[RoomPayload] = Field(default_factory=list)
    vacation_return_date: datetime | None = Field(
        default=None, alias="vacationReturnDate"
    )
    has_gateway: bool = Field(default=False, alias="hasGateway")


class DeviceStatusResponse(_Payload):
    """Raw status strings returned by ``GET api/1/deviceStatus/{id}``."""

    home_id: str = Field(default="", alias="homeId")
    status: list[str] = Field(default_factory=list)


class GatewayPayload(_Payload):
    """Gateway details returned by ``GET api/1/device/{id}``."""

    home_id: str = Field(default="", alias="homeId")
    has_gateway: bool = Field(default=False, alias="hasGateway")
    identifier: str = ""
    installation: datetime | None = None
    last_connection: datetime | None = Field(default=None, alias="lastConnection")


class GeofencingRequest(BaseModel):
    """Body of ``POST api/1/geofencing``."""

    model_config = ConfigDict(populate_by_name=True)

    action: int
    home_id: str = Field(alias="homeId")
    description: str = ""
    room_mask: int = Field(default=255, alias="rooms")


class DirectActionRequest(BaseModel):
    """Body of ``POST api/1/device/notify``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    home_id: str = Field(alias="homeId")
    description: str = ""
