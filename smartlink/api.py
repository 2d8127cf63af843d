"""Async REST client for the SmartLink cloud."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
import logging
from typing import Any

import aiohttp

from .codecs.smartlink_codec import (
    decode_device_status_payload,
    decode_gateway_payload,
    decode_home_payload,
    encode_direct_action,
    encode_geofence_request,
    encode_home_payload,
)
from .codecs.smartlink_models import GatewayPayload
from .const import (
    AGENT,
    API_BASE,
    APP_VERSION,
    DEVICE_NOTIFY_PATH,
    DEVICE_STATUS_PATH_FMT,
    GATEWAY_PATH_FMT,
    GEOFENCING_PATH,
    HOME_PATH_FMT,
    HOMES_PATH,
    REQUEST_TIMEOUT,
    SESSION_HEADER,
)
from .domain.commands import DirectAction, GeofenceAction
from .domain.errors import SmartLinkError
from .domain.home import Home
from .domain.readings import DeviceReading
from .sanitize import mask_identifier, redact_text

_LOGGER = logging.getLogger(__name__)

# Toggle to preview bodies in debug logs (redacted). Leave False by default.
API_LOG_PREVIEW = False


class BackendError(SmartLinkError):
    """The SmartLink backend returned an unusable response."""


class BackendAuthError(BackendError):
    """The session token is missing or was rejected."""


class BackendRateLimitError(BackendError):
    """Server rate-limited the client (HTTP 429)."""


class RESTClient:
    """Thin async client for the SmartLink cloud.

    The client sends an already obtained session token in the ``x-session``
    header; acquiring that token is left to the caller.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        session_token: str | None = None,
        api_base: str = API_BASE,
        agent: str = AGENT,
        app_version: int = APP_VERSION,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        """Initialise the REST client with its HTTP session and token."""
        self._session = session
        self._session_token = session_token
        base = api_base or API_BASE
        self._api_base = base if base.endswith("/") else f"{base}/"
        self._agent = agent
        self._app_version = app_version
        self._timeout = timeout

    @property
    def api_base(self) -> str:
        """Return the API base URL, always ending with a slash."""

        return self._api_base

    @property
    def session_token(self) -> str | None:
        """Return the current session token."""

        return self._session_token

    @session_token.setter
    def session_token(self, token: str | None) -> None:
        self._session_token = token or None

    @property
    def user_agent(self) -> str:
        """Return the User-Agent sent with every request."""

        return f"{self._agent}/{self._app_version}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": self.user_agent}
        if self._session_token:
            headers[SESSION_HEADER] = self._session_token
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        ignore_statuses: Iterable[int] = (),
        **kwargs: Any,
    ) -> Any | None:
        """Perform an HTTP request.

        Return JSON when possible, otherwise text. HTTP statuses listed in
        ``ignore_statuses`` are logged and yield ``None`` instead of raising an
        exception. Errors are logged WITHOUT secrets.
        """
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        ignore_statuses = set(ignore_statuses)
        timeout = kwargs.pop("timeout", aiohttp.ClientTimeout(total=self._timeout))

        url = path if path.startswith("http") else f"{self._api_base}{path}"
        _LOGGER.debug("HTTP %s %s", method, url)

        try:
            async with self._session.request(
                method, url, headers=headers, timeout=timeout, **kwargs
            ) as resp:
                ctype = resp.headers.get("Content-Type", "")
                try:
                    body_text = await resp.text()
                except (aiohttp.ClientError, UnicodeDecodeError):
                    body_text = "<no body>"

                if resp.status >= 400:
                    log_fn = (
                        _LOGGER.debug if resp.status in ignore_statuses else _LOGGER.error
                    )
                    log_fn(
                        "HTTP error %s %s -> %s; body=%s",
                        method,
                        url,
                        resp.status,
                        redact_text(body_text),
                    )
                elif API_LOG_PREVIEW:
                    _LOGGER.debug(
                        "HTTP %s -> %s, ctype=%s, body[0:200]=%r",
                        url,
                        resp.status,
                        ctype,
                        (redact_text(body_text) or "")[:200],
                    )
                else:
                    _LOGGER.debug("HTTP %s -> %s, ctype=%s", url, resp.status, ctype)

                if resp.status in (401, 403):
                    raise BackendAuthError("Unauthorized")
                if resp.status == 429:
                    raise BackendRateLimitError("Rate limited")
                if resp.status in ignore_statuses:
                    return None
                if resp.status >= 400:
                    raise aiohttp.ClientResponseError(
                        resp.request_info,
                        resp.history,
                        status=resp.status,
                        message=body_text,
                        headers=resp.headers,
                    )

                # Try JSON first; fall back to text
                if "application/json" in ctype or (
                    body_text and body_text[:1] in ("{", "[")
                ):
                    try:
                        return await resp.json(content_type=None)
                    except ValueError:
                        return body_text
                return body_text

        except BackendError:
            raise
        except aiohttp.ClientResponseError as e:
            if e.status not in ignore_statuses:
                _LOGGER.error(
                    "Request %s %s failed (sanitized): %s",
                    method,
                    url,
                    redact_text(str(e)),
                )
            raise
        except asyncio.CancelledError:
            raise
        except Exception as e:
            _LOGGER.error(
                "Request %s %s failed (sanitized): %s",
                method,
                url,
                redact_text(str(e)),
            )
            raise

    # ----------------- Public API -----------------

    async def fetch_home_payload(self, home_id: str) -> dict[str, Any]:
        """Return the raw home document for ``home_id``."""

        data = await self._request("GET", HOME_PATH_FMT.format(home_id=home_id))
        if not isinstance(data, Mapping):
            _LOGGER.error(
                "Unexpected home payload for %s (%s)",
                mask_identifier(home_id),
                type(data).__name__,
            )
            raise BackendError("Malformed home payload")
        return dict(data)

    async def fetch_home(
        self,
        home_id: str,
        *,
        name: str | None = None,
        gateway: GatewayPayload | None = None,
    ) -> Home:
        """Return the ``Home`` aggregate stored for ``home_id``."""

        payload = await self.fetch_home_payload(home_id)
        return decode_home_payload(payload, name=name, gateway=gateway)

    async def save_home(self, home: Home, *, base: Mapping[str, Any] | None = None) -> None:
        """Persist ``home``; ``base`` is the document it was loaded from."""

        body = encode_home_payload(home, base)
        _LOGGER.debug(
            "Saving home %s with %d room(s)", mask_identifier(home.id), len(home.rooms)
        )
        await self._request("PUT", HOMES_PATH, json=body)

    async def fetch_device_status(self, home_id: str) -> list[str]:
        """Return the raw status strings reported for ``home_id``."""

        data = await self._request(
            "GET", DEVICE_STATUS_PATH_FMT.format(home_id=home_id)
        )
        statuses: Any = data.get("status") if isinstance(data, Mapping) else data
        if not isinstance(statuses, list):
            _LOGGER.debug(
                "Unexpected device status shape (%s); returning empty list",
                type(data).__name__,
            )
            return []
        return [item for item in statuses if isinstance(item, str)]

    async def fetch_device_readings(self, home_id: str) -> list[DeviceReading]:
        """Return decoded readings for every device of ``home_id``."""

        data = await self._request(
            "GET", DEVICE_STATUS_PATH_FMT.format(home_id=home_id)
        )
        return decode_device_status_payload(data)

    async def fetch_gateway(self, home_id: str) -> GatewayPayload | None:
        """Return gateway details for ``home_id`` (``None`` when absent)."""

        data = await self._request(
            "GET", GATEWAY_PATH_FMT.format(home_id=home_id), ignore_statuses=(404,)
        )
        return decode_gateway_payload(data)

    async def send_geofence_action(self, command: GeofenceAction) -> None:
        """Send a geofencing action; no-op commands are not transmitted."""

        if command.is_noop:
            _LOGGER.debug(
                "Skipping no-op geofence action for %s", mask_identifier(command.home_id)
            )
            return
        await self._request(
            "POST", GEOFENCING_PATH, json=encode_geofence_request(command)
        )

    async def send_direct_action(self, command: DirectAction) -> None:
        """Relay raw action bytes to the home's gateway."""

        await self._request(
            "POST", DEVICE_NOTIFY_PATH, json=encode_direct_action(command)
        )
