"""VATSIM activity adapter."""

from __future__ import annotations

from .client import VatsimAPIError, VatsimClient, VatsimRateLimitedError
from .schema import AtcSessionPage, LiveFeed, StatusDocument

__all__ = [
    "AtcSessionPage",
    "LiveFeed",
    "StatusDocument",
    "VatsimAPIError",
    "VatsimClient",
    "VatsimRateLimitedError",
]
