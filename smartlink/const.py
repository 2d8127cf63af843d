"""Constants for the Home SmartLink client."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from typing import Final

# HTTP base & routes
API_BASE: Final = "https://jcqzjjt6q5.execute-api.eu-west-3.amazonaws.com/Prod/"
HOME_PATH_FMT: Final = "api/1/homes/{home_id}"
HOMES_PATH: Final = "api/1/homes/"
DEVICE_STATUS_PATH_FMT: Final = "api/1/deviceStatus/{home_id}"
GATEWAY_PATH_FMT: Final = "api/1/device/{home_id}"
DEVICE_NOTIFY_PATH: Final = "api/1/device/notify"
GEOFENCING_PATH: Final = "api/1/geofencing"

SESSION_HEADER: Final = "x-session"
AGENT: Final = "python-smartlink"
APP_VERSION: Final = 103
REQUEST_TIMEOUT: Final = 25

# Structural limits of one installation
MAX_ROOMS: Final = 8
MAX_DEVICES: Final = 8
ALL_ROOMS_MASK: Final = 0xFF

# Admissible setpoint band (°C)
MIN_SETPOINT_C: Final = 7.0
MAX_SETPOINT_C: Final = 30.0
DEFAULT_COMFORT_C: Final = 20.0
DEFAULT_ECO_C: Final = 17.0

MIN_BOOST_DURATION: Final = timedelta(minutes=15)
MAX_BOOST_DURATION: Final = timedelta(minutes=120)

EARTH_RADIUS_KM: Final = 6371.0

MANUAL_URLS: Final[Mapping[str, str]] = {
    "thermostat": "https://man.wf/FP111S0",
    "gateway": "https://man.wf/BHSL32",
    "water_heater_relay": "https://man.wf/RL1011S0",
}
