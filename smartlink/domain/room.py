"""Room entity: a thermal zone with setpoints and a boost timer."""

from __future__ import annotations

from datetime import datetime, timedelta

from ..const import DEFAULT_COMFORT_C, DEFAULT_ECO_C, MAX_SETPOINT_C, MIN_SETPOINT_C
from ..util import utcnow
from .boost import validate_boost_duration
from .entity import Entity
from .enums import DeviceMode
from .errors import DomainValidationError
from .values import Temperature


def _validate_setpoint(field: str, temperature: Temperature) -> float:
    """Return ``temperature`` in Celsius when it lies inside the setpoint band."""

    celsius = temperature.to_celsius()
    if not MIN_SETPOINT_C <= celsius <= MAX_SETPOINT_C:
        raise DomainValidationError(
            field,
            f"Temperature must be between {MIN_SETPOINT_C:g}°C and {MAX_SETPOINT_C:g}°C",
        )
    return celsius


class Room(Entity):
    """A heating zone of a home.

    Rooms are only created by :meth:`Home.add_room`, which assigns the
    position. The room keeps the ids of the devices assigned to it; the home
    updates that set together with :attr:`Device.room_id`.
    """

    __slots__ = (
        "_home_id",
        "_name",
        "_position",
        "_area_m2",
        "_comfort_setpoint",
        "_eco_setpoint",
        "_max_temperature_limit",
        "_current_mode",
        "_current_temperature",
        "_current_setpoint",
        "_is_boost_active",
        "_boost_end_time",
        "_device_ids",
    )

    def __init__(self, room_id: str, home_id: str, name: str, position: int) -> None:
        """Initialise a room; only :class:`Home` should call this."""

        super().__init__(room_id)
        self._home_id = home_id
        self._name = name
        self._position = int(position)
        self._area_m2: float | None = None
        self._comfort_setpoint = Temperature.from_celsius(DEFAULT_COMFORT_C)
        self._eco_setpoint = Temperature.from_celsius(DEFAULT_ECO_C)
        self._max_temperature_limit: Temperature | None = None
        self._current_mode = DeviceMode.PROGRAM
        self._current_temperature: Temperature | None = None
        self._current_setpoint: Temperature | None = None
        self._is_boost_active = False
        self._boost_end_time: datetime | None = None
        self._device_ids: list[str] = []

    # ----------------- Properties -----------------

    @property
    def home_id(self) -> str:
        return self._home_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def position(self) -> int:
        return self._position

    @property
    def area_m2(self) -> float | None:
        return self._area_m2

    @property
    def comfort_setpoint(self) -> Temperature:
        return self._comfort_setpoint

    @property
    def eco_setpoint(self) -> Temperature:
        return self._eco_setpoint

    @property
    def max_temperature_limit(self) -> Temperature | None:
        return self._max_temperature_limit

    @property
    def current_mode(self) -> DeviceMode:
        return self._current_mode

    @property
    def current_temperature(self) -> Temperature | None:
        return self._current_temperature

    @property
    def current_setpoint(self) -> Temperature | None:
        return self._current_setpoint

    @property
    def is_boost_active(self) -> bool:
        return self._is_boost_active

    @property
    def boost_end_time(self) -> datetime | None:
        return self._boost_end_time

    @property
    def device_ids(self) -> tuple[str, ...]:
        """Return ids of the assigned devices in assignment order."""

        return tuple(self._device_ids)

    # ----------------- Configuration -----------------

    def update_name(self, name: str) -> None:
        self._name = name
        self._touch()

    def set_area(self, area_m2: float) -> None:
        """Set the floor area; zero and negative areas are rejected."""

        if area_m2 <= 0:
            raise DomainValidationError("area_m2", "Area must be positive")
        self._area_m2 = float(area_m2)
        self._touch()

    def set_comfort_setpoint(self, temperature: Temperature) -> None:
        """Set the comfort setpoint, which must stay above the eco setpoint."""

        celsius = _validate_setpoint("comfort_setpoint", temperature)
        if self._eco_setpoint.to_celsius() >= celsius:
            raise DomainValidationError(
                "comfort_setpoint", "Comfort setpoint must be higher than Eco setpoint"
            )
        self._comfort_setpoint = temperature
        self._touch()

    def set_eco_setpoint(self, temperature: Temperature) -> None:
        """Set the eco setpoint, which must stay below the comfort setpoint."""

        celsius = _validate_setpoint("eco_setpoint", temperature)
        if celsius >= self._comfort_setpoint.to_celsius():
            raise DomainValidationError(
                "eco_setpoint", "Eco setpoint must be lower than Comfort setpoint"
            )
        self._eco_setpoint = temperature
        self._touch()

    def set_setpoints(self, comfort: Temperature, eco: Temperature) -> None:
        """Replace both setpoints at once.

        The pair is validated as a whole, so moving both values past each
        other (e.g. 20/17 to 16/12) succeeds where two sequential setter calls
        would be rejected. Nothing changes when the pair is invalid.
        """

        comfort_c = _validate_setpoint("comfort_setpoint", comfort)
        eco_c = _validate_setpoint("eco_setpoint", eco)
        if eco_c >= comfort_c:
            raise DomainValidationError(
                "comfort_setpoint", "Comfort setpoint must be higher than Eco setpoint"
            )
        self._comfort_setpoint = comfort
        self._eco_setpoint = eco
        self._touch()

    def set_max_temperature_limit(self, temperature: Temperature | None) -> None:
        self._max_temperature_limit = temperature
        self._touch()

    # ----------------- Mode & boost -----------------

    def set_mode(self, mode: DeviceMode) -> None:
        """Switch mode; leaving ``Boost`` clears the boost timer."""

        mode = DeviceMode(mode)
        self._current_mode = mode
        if mode is not DeviceMode.BOOST:
            self._is_boost_active = False
            self._boost_end_time = None
        self._touch()

    def activate_boost(self, duration: timedelta) -> None:
        """Start a boost for ``duration`` (15 to 120 minutes)."""

        duration = validate_boost_duration(duration)
        self._is_boost_active = True
        self._boost_end_time = utcnow() + duration
        self._current_mode = DeviceMode.BOOST
        self._touch()

    def deactivate_boost(self) -> None:
        """Stop the boost and return to ``Program`` mode."""

        self._is_boost_active = False
        self._boost_end_time = None
        self._current_mode = DeviceMode.PROGRAM
        self._touch()

    def boost_remaining(self, now: datetime | None = None) -> timedelta:
        """Return the boost time left, zero when inactive or expired."""

        if not self._is_boost_active or self._boost_end_time is None:
            return timedelta(0)
        remaining = self._boost_end_time - (now or utcnow())
        return max(remaining, timedelta(0))

    def is_boost_expired(self, now: datetime | None = None) -> bool:
        """Return ``True`` when a boost is flagged active but its end has passed."""

        if not self._is_boost_active or self._boost_end_time is None:
            return False
        return (now or utcnow()) >= self._boost_end_time

    # ----------------- Observed state -----------------

    def update_current_temperature(self, temperature: Temperature | None) -> None:
        self._current_temperature = temperature
        self._touch()

    def update_current_setpoint(self, temperature: Temperature | None) -> None:
        self._current_setpoint = temperature
        self._touch()

    # Device membership is driven by Home so both sides change together.

    def _attach_device(self, device_id: str) -> None:
        if device_id not in self._device_ids:
            self._device_ids.append(device_id)

    def _detach_device(self, device_id: str) -> None:
        if device_id in self._device_ids:
            self._device_ids.remove(device_id)
