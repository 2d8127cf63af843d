"""Tests for the SmartLink REST client."""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp
import pytest

from smartlink.api import (
    BackendAuthError,
    BackendError,
    BackendRateLimitError,
    RESTClient,
)
from smartlink.const import API_BASE
from smartlink.domain import (
    DeviceCategory,
    DirectAction,
    GeofenceAction,
    Home,
    ProximityAction,
)

from conftest import FakeSession, MockResponse


def _client(session: FakeSession, **kwargs: Any) -> RESTClient:
    return RESTClient(session, session_token="tok-123", **kwargs)


def test_headers_and_base_url() -> None:
    """The session token and agent are sent with every request."""

    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(200, ["R0D0"]))
        client = _client(session, api_base="https://example.test/api", app_version=7)

        await client.fetch_device_status("home-1")

        method, url, kwargs = session.calls[0]
        assert method == "GET"
        assert url == "https://example.test/api/api/1/deviceStatus/home-1"
        assert kwargs["headers"]["x-session"] == "tok-123"
        assert kwargs["headers"]["User-Agent"] == "python-smartlink/7"
        assert isinstance(kwargs["timeout"], aiohttp.ClientTimeout)

    asyncio.run(_run())


def test_no_token_header_without_token() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(200, []))
        client = RESTClient(session)

        await client.fetch_device_status("home-1")

        assert "x-session" not in session.calls[0][2]["headers"]
        assert session.calls[0][1].startswith(API_BASE)

    asyncio.run(_run())


def test_session_token_setter() -> None:
    client = RESTClient(FakeSession())
    client.session_token = "abc"
    assert client.session_token == "abc"
    client.session_token = ""
    assert client.session_token is None


def test_fetch_home(home_payload) -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(200, home_payload))
        client = _client(session)

        home = await client.fetch_home("home-1", name="Chalet")

        assert session.calls[0][1] == f"{API_BASE}api/1/homes/home-1"
        assert home.name == "Chalet"
        assert len(home.rooms) == 2
        assert len(home.devices) == 3

    asyncio.run(_run())


def test_fetch_home_payload_rejects_non_mapping() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(200, ["not", "a", "home"]))
        client = _client(session)

        with pytest.raises(BackendError, match="Malformed home payload"):
            await client.fetch_home_payload("home-1")

    asyncio.run(_run())


def test_save_home_puts_encoded_body(make_device) -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(200, None, text_data=""))
        client = _client(session)
        home = Home.create("home-1", "Chalet")
        home.add_room("Lounge")
        home.add_device(make_device(DeviceCategory.GATEWAY))

        await client.save_home(home)

        method, url, kwargs = session.calls[0]
        assert method == "PUT"
        assert url == f"{API_BASE}api/1/homes/"
        assert kwargs["json"]["_id"] == "home-1"
        assert kwargs["json"]["hasGateway"] is True
        assert kwargs["json"]["rooms"][0]["name"] == "Lounge"

    asyncio.run(_run())


def test_fetch_device_status_filters_entries() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(
            MockResponse(200, {"homeId": "home-1", "status": ["R0D0", 5, "R1D0"]}),
            MockResponse(200, "unexpected", text_data="unexpected",
                         headers={"Content-Type": "text/plain"}),
        )
        client = _client(session)

        assert await client.fetch_device_status("home-1") == ["R0D0", "R1D0"]
        assert await client.fetch_device_status("home-1") == []

    asyncio.run(_run())


def test_fetch_device_readings_decodes() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(200, {"status": ["R7D1M3S4C44A41J10W50Y100"]}))
        client = _client(session)

        (reading,) = await client.fetch_device_readings("home-1")

        assert reading.room_position == 7
        assert reading.setpoint == 22.0
        assert reading.yearly_hours == 100

    asyncio.run(_run())


def test_fetch_gateway_missing_returns_none(caplog: pytest.LogCaptureFixture) -> None:
    """A 404 reads as no gateway and is not logged as an error."""

    async def _run() -> None:
        session = FakeSession()
        session.queue(
            MockResponse(404, None, text_data="not found"),
            MockResponse(200, {"homeId": "home-1", "hasGateway": True, "identifier": "GW"}),
        )
        client = _client(session)

        assert await client.fetch_gateway("home-1") is None
        gateway = await client.fetch_gateway("home-1")
        assert gateway is not None
        assert gateway.identifier == "GW"
        assert session.calls[1][1] == f"{API_BASE}api/1/device/home-1"

    with caplog.at_level("ERROR"):
        asyncio.run(_run())
    assert caplog.records == []


@pytest.mark.parametrize(
    ("status", "error"),
    [(401, BackendAuthError), (403, BackendAuthError), (429, BackendRateLimitError)],
)
def test_auth_and_rate_limit_errors(status, error) -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(status, None, text_data="denied"))
        client = _client(session)

        with pytest.raises(error):
            await client.fetch_home_payload("home-1")

    asyncio.run(_run())


def test_other_http_errors_are_raised_and_redacted(
    caplog: pytest.LogCaptureFixture,
) -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(
            MockResponse(500, None, text_data='{"token": "s3cr3t", "user": "a@b.io"}')
        )
        client = _client(session)

        with pytest.raises(aiohttp.ClientResponseError) as err:
            await client.fetch_home_payload("home-1")
        assert err.value.status == 500

    with caplog.at_level("ERROR"):
        asyncio.run(_run())
    assert "s3cr3t" not in caplog.text
    assert "a@b.io" not in caplog.text
    assert "-> 500" in caplog.text


def test_transport_errors_propagate() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(aiohttp.ClientConnectionError("offline"))
        client = _client(session)

        with pytest.raises(aiohttp.ClientConnectionError):
            await client.fetch_device_status("home-1")

    asyncio.run(_run())


def test_send_geofence_action() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(200, {"ok": True}))
        client = _client(session)

        await client.send_geofence_action(
            GeofenceAction("home-1", ProximityAction.ANTIFREEZE, "leaving", 0b101)
        )
        await client.send_geofence_action(
            GeofenceAction("home-1", ProximityAction.NOTHING)
        )

        assert len(session.calls) == 1
        method, url, kwargs = session.calls[0]
        assert (method, url) == ("POST", f"{API_BASE}api/1/geofencing")
        assert kwargs["json"] == {
            "action": 2,
            "homeId": "home-1",
            "description": "leaving",
            "rooms": 5,
        }

    asyncio.run(_run())


def test_send_direct_action() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(200, None, text_data=""))
        client = _client(session)

        await client.send_direct_action(DirectAction("home-1", b"\xff"))

        method, url, kwargs = session.calls[0]
        assert (method, url) == ("POST", f"{API_BASE}api/1/device/notify")
        assert kwargs["json"]["action"] == "/w=="

    asyncio.run(_run())
