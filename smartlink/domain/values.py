"""Immutable value objects used by the SmartLink entities."""

from __future__ import annotations

from dataclasses import dataclass
import math

from ..const import EARTH_RADIUS_KM
from .enums import TemperatureUnit
from .errors import OutOfRangeError


@dataclass(frozen=True, slots=True)
class Temperature:
    """A temperature value tagged with its unit.

    No range is enforced here; rooms validate setpoints where the range is
    meaningful.
    """

    value: float
    unit: TemperatureUnit = TemperatureUnit.CELSIUS

    def __post_init__(self) -> None:
        """Normalise the value to ``float`` and the unit to ``TemperatureUnit``."""

        object.__setattr__(self, "value", float(self.value))
        object.__setattr__(self, "unit", TemperatureUnit(self.unit))

    @classmethod
    def from_celsius(cls, celsius: float) -> Temperature:
        """Return a Celsius temperature."""

        return cls(celsius, TemperatureUnit.CELSIUS)

    @classmethod
    def from_fahrenheit(cls, fahrenheit: float) -> Temperature:
        """Return a Fahrenheit temperature."""

        return cls(fahrenheit, TemperatureUnit.FAHRENHEIT)

    def to_celsius(self) -> float:
        """Return the value in degrees Celsius."""

        if self.unit is TemperatureUnit.CELSIUS:
            return self.value
        return (self.value - 32) * 5 / 9

    def to_fahrenheit(self) -> float:
        """Return the value in degrees Fahrenheit."""

        if self.unit is TemperatureUnit.FAHRENHEIT:
            return self.value
        return self.value * 9 / 5 + 32

    def __str__(self) -> str:
        return f"{self.value:.1f}°{self.unit.value}"


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """A point on the globe with an optional geofence radius."""

    latitude: float
    longitude: float
    radius_km: float | None = None

    def __post_init__(self) -> None:
        """Reject coordinates outside the WGS84 ranges."""

        if not -90 <= self.latitude <= 90:
            raise OutOfRangeError("latitude", "Latitude must be between -90 and 90")
        if not -180 <= self.longitude <= 180:
            raise OutOfRangeError(
                "longitude", "Longitude must be between -180 and 180"
            )

    def distance_to(self, other: GeoLocation) -> float:
        """Return the great-circle distance to ``other`` in kilometres."""

        d_lat = math.radians(other.latitude - self.latitude)
        d_lon = math.radians(other.longitude - self.longitude)
        a = math.sin(d_lat / 2) ** 2 + math.cos(
            math.radians(self.latitude)
        ) * math.cos(math.radians(other.latitude)) * math.sin(d_lon / 2) ** 2
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return EARTH_RADIUS_KM * c

    def contains(self, other: GeoLocation) -> bool:
        """Return ``True`` when ``other`` lies within this location's radius."""

        if self.radius_km is None:
            return False
        return self.distance_to(other) <= self.radius_km


@dataclass(frozen=True, slots=True)
class Address:
    """Postal address kept for display and storage only."""

    street: str = ""
    city: str = ""
    zip_code: str = ""
    country: str | None = None

    def __str__(self) -> str:
        return f"{self.street}, {self.zip_code} {self.city}"
