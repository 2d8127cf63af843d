"""Error hierarchy for the SmartLink domain."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType


class SmartLinkError(Exception):
    """Base exception for the SmartLink client."""


class DomainError(SmartLinkError):
    """A domain rule rejected the requested change."""


class DomainValidationError(DomainError, ValueError):
    """A caller supplied value violates a numeric or structural constraint."""

    def __init__(self, field: str, error: str) -> None:
        """Record the offending ``field`` and a human readable ``error``."""

        super().__init__(f"Validation failed for {field}: {error}")
        self.field = field
        self.errors: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {field: (error,)}
        )


class OutOfRangeError(DomainValidationError):
    """A coordinate or measurement lies outside its admissible range."""


class CapacityError(DomainError):
    """A structural ceiling of the installation would be exceeded."""

    def __init__(self, what: str, limit: int) -> None:
        """Describe which collection (``what``) is full at ``limit`` entries."""

        super().__init__(f"Maximum number of {what} ({limit}) has been reached")
        self.what = what
        self.limit = limit


class StructuralIntegrityError(DomainError):
    """Removing an entity would leave dangling references behind."""


class EntityNotFoundError(DomainError, KeyError):
    """An explicit lookup referenced an unknown entity."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        """Remember the missing ``entity_type``/``entity_id`` pair."""

        super().__init__(f"{entity_type} with ID '{entity_id}' was not found")
        self.entity_type = entity_type
        self.entity_id = entity_id

    def __str__(self) -> str:
        """Return the plain message instead of the quoted ``KeyError`` form."""

        return str(self.args[0])
