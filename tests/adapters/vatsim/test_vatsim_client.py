"""VATSIM client behaviour against captured payloads."""

from __future__ import annotations

import asyncio
import json
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import pytest

from artccsync.adapters.vatsim import VatsimAPIError, VatsimClient, VatsimRateLimitedError
from artccsync.config.vatsim import VatsimConfig
from artccsync.domain.ports import AtcSession, OnlineController
from tests.helpers.http import make_client_factory

if TYPE_CHECKING:
    from collections.abc import Callable

FIXTURES = Path("tests/data/vatsim")
FEED_URL = "https://data.vatsim.net/v3/vatsim-data.json"


def _load_fixture(name: str) -> object:
    return json.loads((FIXTURES / name).read_text())


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> VatsimClient:
    return VatsimClient(config=VatsimConfig(), client_factory=make_client_factory(handler))


def test_atc_sessions_follow_next_links() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        page = request.url.params.get("page")
        name = "atcsessions_page2.json" if page == "2" else "atcsessions_page1.json"
        return httpx.Response(200, json=_load_fixture(name))

    sessions = asyncio.run(_client(handler).get_atc_sessions(1000001, start=date(2024, 1, 1)))

    assert [str(request.url) for request in requests] == [
        "https://api.vatsim.net/api/ratings/1000001/atcsessions/?start=2024-01-01",
        "https://api.vatsim.net/api/ratings/1000001/atcsessions/?page=2&start=2024-01-01",
    ]
    assert sessions == [
        AtcSession(callsign="DEN_APP", start="2024-05-02T10:00:00Z", minutes_on_callsign="90.0"),
        AtcSession(callsign="DEN_TWR", start="2024-04-20T18:00:00Z", minutes_on_callsign="45"),
        AtcSession(callsign="ABQ_CTR", start="2024-02-11T02:00:00Z", minutes_on_callsign="60.0"),
    ]


def test_online_controllers_resolve_feed_from_status() -> None:
    hosts: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        hosts.append(request.url.host)
        if str(request.url) == FEED_URL:
            return httpx.Response(200, json=_load_fixture("live_feed.json"))
        return httpx.Response(200, json=_load_fixture("status.json"))

    controllers = asyncio.run(_client(handler).get_online_controllers())

    assert hosts == ["status.vatsim.net", "data.vatsim.net"]
    assert controllers[0] == OnlineController(
        cid=1000001,
        callsign="DEN_APP",
        logon_time="2024-05-20T11:30:00.0000000Z",
        name="Alex Example",
    )
    assert [controller.cid for controller in controllers] == [1000001, 1000003]


def test_status_without_feed_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        del request
        return httpx.Response(200, json={"data": {"v3": []}})

    with pytest.raises(VatsimAPIError, match="no v3 data feed"):
        asyncio.run(_client(handler).get_online_controllers())


def test_rate_limited_session_history() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        del request
        return httpx.Response(429)

    with pytest.raises(VatsimRateLimitedError):
        asyncio.run(_client(handler).get_atc_sessions(1000001))
