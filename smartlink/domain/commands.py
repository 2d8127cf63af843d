"""Command intents handed to the REST layer."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..const import ALL_ROOMS_MASK
from .enums import ProximityAction
from .home import Home


@dataclass(slots=True)
class BaseCommand:
    """Base type for commands sent on behalf of a home."""

    home_id: str


@dataclass(slots=True)
class GeofenceAction(BaseCommand):
    """Apply ``action`` to the rooms selected by ``room_mask``."""

    action: ProximityAction
    description: str | None = None
    room_mask: int = ALL_ROOMS_MASK

    @property
    def is_noop(self) -> bool:
        """Return ``True`` when nothing needs to be sent."""

        return self.action is ProximityAction.NOTHING or self.room_mask == 0


@dataclass(slots=True)
class DirectAction(BaseCommand):
    """Raw action bytes relayed to the gateway."""

    payload: bytes = b""
    payload_tag: str = "action"
    description: str | None = None


def room_mask(positions: Iterable[int]) -> int:
    """Return the bit mask selecting the rooms at ``positions``."""

    mask = 0
    for position in positions:
        if not 0 <= position < ALL_ROOMS_MASK.bit_length():
            raise ValueError(f"Room position out of mask range: {position}")
        mask |= 1 << position
    return mask


def geofence_for_rooms(
    home: Home,
    action: ProximityAction,
    room_ids: Iterable[str] | None = None,
    *,
    description: str | None = None,
) -> GeofenceAction:
    """Build a geofencing command for ``room_ids`` (all rooms when ``None``)."""

    if room_ids is None:
        mask = ALL_ROOMS_MASK
    else:
        mask = room_mask(home.get_room(room_id).position for room_id in room_ids)
    return GeofenceAction(
        home_id=home.id,
        action=ProximityAction(action),
        description=description,
        room_mask=mask,
    )
