"""Identity and timestamp bookkeeping shared by the aggregate entities."""

from __future__ import annotations

from datetime import datetime

from ..util import utcnow


class Entity:
    """Base for entities identified by a string id."""

    __slots__ = ("_id", "_created_at", "_updated_at")

    def __init__(self, entity_id: str) -> None:
        """Fix the identity and stamp the creation time."""

        entity_id = str(entity_id).strip()
        if not entity_id:
            msg = "entity id must not be empty"
            raise ValueError(msg)
        self._id = entity_id
        self._created_at = utcnow()
        self._updated_at: datetime | None = None

    @property
    def id(self) -> str:
        """Return the entity identifier."""

        return self._id

    @property
    def created_at(self) -> datetime:
        """Return when the entity object was created."""

        return self._created_at

    @property
    def updated_at(self) -> datetime | None:
        """Return when the entity was last mutated, ``None`` if never."""

        return self._updated_at

    def _touch(self) -> None:
        self._updated_at = utcnow()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity) or type(other) is not type(self):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"
