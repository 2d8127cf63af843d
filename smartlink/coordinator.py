"""Coordinator keeping one home in sync with the SmartLink cloud."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Mapping
from copy import deepcopy
from datetime import datetime
import logging
from types import MappingProxyType
from typing import Any

from .api import RESTClient
from .codecs.smartlink_codec import decode_home_payload
from .domain.boost import validate_boost_duration
from .domain.commands import GeofenceAction, geofence_for_rooms
from .domain.enums import DeviceMode, ProximityAction
from .domain.home import Home
from .domain.readings import DeviceReading, RoomTelemetry, apply_readings
from .domain.values import Temperature
from .sanitize import mask_identifier
from .util import utcnow

_LOGGER = logging.getLogger(__name__)


class HomeNotLoadedError(RuntimeError):
    """An operation needs a home that has not been fetched yet."""


class HomeCoordinator:
    """Fetch, merge and persist the state of a single home.

    All operations run under one ``asyncio.Lock`` so that only one writer
    touches the held ``Home`` at a time. Mutations are applied through the
    aggregate's named operations and saved afterwards; when a domain rule
    rejects a change, nothing is saved.
    """

    def __init__(
        self,
        client: RESTClient,
        home_id: str,
        *,
        home_name: str | None = None,
    ) -> None:
        """Initialise the coordinator for ``home_id``."""
        self.client = client
        self._home_id = home_id
        self._home_name = home_name
        self._lock = asyncio.Lock()
        self._home: Home | None = None
        self._payload: dict[str, Any] | None = None
        self._readings: tuple[DeviceReading, ...] = ()
        self._telemetry: Mapping[str, RoomTelemetry] = MappingProxyType({})
        self._last_refresh: datetime | None = None

    @property
    def home_id(self) -> str:
        return self._home_id

    @property
    def home(self) -> Home:
        """Return the held home, raising when it has not been fetched."""

        if self._home is None:
            raise HomeNotLoadedError(f"Home {self._home_id} has not been loaded")
        return self._home

    @property
    def readings(self) -> tuple[DeviceReading, ...]:
        return self._readings

    @property
    def telemetry(self) -> Mapping[str, RoomTelemetry]:
        return self._telemetry

    @property
    def last_refresh(self) -> datetime | None:
        return self._last_refresh

    async def async_refresh(self) -> Home:
        """Fetch the home, gateway and readings and merge them."""

        async with self._lock:
            gateway = await self.client.fetch_gateway(self._home_id)
            payload = await self.client.fetch_home_payload(self._home_id)
            readings = await self.client.fetch_device_readings(self._home_id)
            home = decode_home_payload(payload, name=self._home_name, gateway=gateway)
            self._telemetry = apply_readings(home, readings)
            self._home = home
            self._payload = payload
            self._readings = tuple(readings)
            self._last_refresh = utcnow()
            _LOGGER.debug(
                "Refreshed home %s: %d room(s), %d device(s), %d reading(s)",
                mask_identifier(self._home_id),
                len(home.rooms),
                len(home.devices),
                len(readings),
            )
            return home

    async def _async_mutate(self, mutate: Callable[[Home], None]) -> Home:
        """Apply ``mutate`` to a copy of the home and keep it once saved.

        The held home is only replaced after the backend accepted the change,
        so a rejected mutation or a failed save leaves it as it was.
        """

        async with self._lock:
            candidate = deepcopy(self.home)
            mutate(candidate)
            await self.client.save_home(candidate, base=self._payload)
            self._home = candidate
            return candidate

    async def async_set_room_mode(self, room_id: str, mode: DeviceMode) -> Home:
        """Switch ``room_id`` to ``mode`` and save."""

        return await self._async_mutate(lambda home: home.get_room(room_id).set_mode(mode))

    async def async_set_room_setpoints(
        self, room_id: str, comfort: Temperature, eco: Temperature
    ) -> Home:
        """Replace the comfort/eco setpoints of ``room_id`` and save."""

        return await self._async_mutate(
            lambda home: home.get_room(room_id).set_setpoints(comfort, eco)
        )

    async def async_activate_boost(self, room_id: str, minutes: float) -> Home:
        """Boost ``room_id`` for ``minutes`` and save."""

        duration = validate_boost_duration(minutes)
        return await self._async_mutate(
            lambda home: home.get_room(room_id).activate_boost(duration)
        )

    async def async_deactivate_boost(self, room_id: str) -> Home:
        """Stop the boost of ``room_id`` and save."""

        return await self._async_mutate(
            lambda home: home.get_room(room_id).deactivate_boost()
        )

    async def async_enable_vacation_mode(self, return_date: datetime) -> Home:
        """Suspend heating until ``return_date`` and save."""

        return await self._async_mutate(
            lambda home: home.enable_vacation_mode(return_date)
        )

    async def async_disable_vacation_mode(self) -> Home:
        """Resume normal heating and save."""

        return await self._async_mutate(lambda home: home.disable_vacation_mode())

    def expired_boosts(self, now: datetime | None = None) -> list[str]:
        """Return ids of rooms whose boost end time has passed."""

        if self._home is None:
            return []
        return [room.id for room in self._home.rooms if room.is_boost_expired(now)]

    async def async_send_geofence_action(
        self,
        action: ProximityAction,
        room_ids: Iterable[str] | None = None,
        *,
        description: str | None = None,
    ) -> GeofenceAction:
        """Send a geofencing ``action`` for ``room_ids`` (all rooms by default)."""

        async with self._lock:
            command = geofence_for_rooms(
                self.home, action, room_ids, description=description
            )
            await self.client.send_geofence_action(command)
            return command
