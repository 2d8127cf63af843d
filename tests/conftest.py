# ruff: noqa: D100,D101,D102,D103,D107,INP001
from __future__ import annotations

import copy
from datetime import UTC, datetime
from typing import Any, Callable

import pytest

from smartlink.domain import Device, DeviceCategory, Home


class MockResponse:
    def __init__(
        self,
        status: int,
        json_data: Any = None,
        *,
        headers: dict[str, str] | None = None,
        text_data: str | None = None,
    ) -> None:
        self.status = status
        self._json = json_data
        if text_data is None:
            text_data = "" if json_data is None else "{}"
        self._text = text_data
        self.headers = headers if headers is not None else {
            "Content-Type": "application/json"
        }
        self.request_info = None
        self.history = ()

    async def __aenter__(self) -> MockResponse:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def text(self) -> str:
        return self._text

    async def json(self, content_type: str | None = None) -> Any:
        if isinstance(self._json, Exception):
            raise self._json
        return copy.deepcopy(self._json)


class _StubRequestInfo:
    def __init__(self, method: str, url: str) -> None:
        self.method = method
        self.real_url = url


class FakeSession:
    """Minimal stand-in for ``aiohttp.ClientSession.request``."""

    def __init__(self) -> None:
        self._queue: list[Any] = []
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def queue(self, *responses: Any) -> None:
        self._queue.extend(responses)

    def request(self, method: str, url: str, **kwargs: Any) -> Any:
        self.calls.append((method, url, copy.deepcopy(kwargs)))
        if not self._queue:
            raise AssertionError(f"Unexpected {method} {url} with no queued response")
        result = self._queue.pop(0)
        if isinstance(result, Exception):
            raise result
        if getattr(result, "request_info", False) is None:
            result.request_info = _StubRequestInfo(method, url)
        return result


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def make_device() -> Callable[..., Device]:
    """Return a factory building devices for the ``home`` fixture's id."""

    counter = {"value": 0}

    def _factory(
        category: DeviceCategory = DeviceCategory.RADIATOR,
        *,
        home_id: str = "home-1",
        device_id: str | None = None,
    ) -> Device:
        counter["value"] += 1
        ident = device_id or f"dev-{counter['value']}"
        return Device.create(
            ident,
            home_id,
            f"hw-{ident}",
            category,
            installation_date=datetime(2024, 1, 1, tzinfo=UTC),
        )

    return _factory


@pytest.fixture
def home() -> Home:
    return Home.create("home-1", "Chalet")


def home_document(**overrides: Any) -> dict[str, Any]:
    """Return a representative home document as served by the backend."""

    document: dict[str, Any] = {
        "_id": "home-1",
        "meshCryptogram": "mesh",
        "client": "pro-42",
        "location": {
            "latitude": 45.9,
            "longitude": 6.87,
            "locality": "Chamonix",
            "postalCode": "74400",
        },
        "rooms": [
            {
                "roomNumber": 1,
                "name": "Bedroom",
                "area": 12,
                "accessories": [
                    {
                        "header": "B2",
                        "category": 5,
                        "powerRange": 1000,
                        "reference": "FP11",
                        "softwareVersion": "1.2",
                    }
                ],
                "events": [
                    {
                        "eventID": 3,
                        "mode": 1,
                        "startHour": 6,
                        "startMinute": 30,
                        "endHour": 8,
                        "endMinute": 0,
                        "reccurency": 31,
                    }
                ],
                "ecopilotEnabled": False,
                "heaterSettings": {
                    "manualValue": 19.0,
                    "economyValue": 16.0,
                    "standardValue": 21.0,
                    "currentMode": 4,
                    "limitationSetPoint": 28.0,
                },
            },
            {
                "roomNumber": 0,
                "name": "Living room",
                "area": 30,
                "accessories": [
                    {"header": "A1", "category": 1, "powerRange": 1500},
                    {"header": "A2", "category": 2, "powerRange": 500},
                ],
                "heaterSettings": {
                    "economyValue": 17.0,
                    "standardValue": 20.5,
                    "currentMode": 3,
                },
            },
        ],
        "hasGateway": True,
    }
    document.update(overrides)
    return document


@pytest.fixture
def home_payload() -> dict[str, Any]:
    return home_document()
