"""Client library for SmartLink connected heating homes.

The :mod:`smartlink.domain` package holds the home aggregate and its
invariants, :mod:`smartlink.codecs` translates cloud payloads and device
status strings, and :class:`~smartlink.coordinator.HomeCoordinator` ties the
REST client to a single home.
"""

from __future__ import annotations

from .api import BackendAuthError, BackendError, BackendRateLimitError, RESTClient
from .coordinator import HomeCoordinator, HomeNotLoadedError

__all__ = [
    "BackendAuthError",
    "BackendError",
    "BackendRateLimitError",
    "HomeCoordinator",
    "HomeNotLoadedError",
    "RESTClient",
]
