"""VATSIM session history and live data client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, cast

import httpx
from pydantic import BaseModel, ValidationError

from artccsync.adapters.http_resilience import ResilientClient
from artccsync.domain.errors import ExternalServiceError, RateLimitedError
from artccsync.domain.ports import AtcSession, OnlineController

from .schema import AtcSessionPage, LiveFeed, StatusDocument

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from artccsync.config.http_resilience import ResilienceConfig
    from artccsync.config.vatsim import VatsimConfig

log = getLogger(__name__)

MAX_SESSION_PAGES = 50


class VatsimAPIError(ExternalServiceError):
    """Raised when a VATSIM endpoint fails or returns an unexpected response."""


class VatsimRateLimitedError(VatsimAPIError, RateLimitedError):
    """Raised when VATSIM answers with HTTP 429."""


class VatsimClient:
    """Controlling sessions from the stats API and who is online from the live feed."""

    def __init__(
        self,
        *,
        config: VatsimConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient

    async def get_atc_sessions(self, cid: int, *, start: date | None = None) -> list[AtcSession]:
        params = {"start": start.isoformat()} if start is not None else None
        sessions: list[AtcSession] = []
        url: str | None = f"api/ratings/{cid}/atcsessions/"
        async with self._client_factory(self._config.stats) as client:
            pages = 0
            while url is not None:
                if pages >= MAX_SESSION_PAGES:
                    log.warning(
                        "Stopped following session pages for %s after %d", cid, MAX_SESSION_PAGES
                    )
                    break
                page = await self._get_model(client, url, AtcSessionPage, params=params)
                sessions.extend(
                    AtcSession(
                        callsign=session.callsign,
                        start=session.start,
                        minutes_on_callsign=session.minutes_on_callsign,
                    )
                    for session in page.results
                )
                # the next link already carries the query
                url, params = page.next, None
                pages += 1
        return sessions

    async def get_online_controllers(self) -> list[OnlineController]:
        feed_url = await self._resolve_feed_url()
        async with self._client_factory(self._config.feed) as client:
            feed = await self._get_model(client, feed_url, LiveFeed)
        return [
            OnlineController(
                cid=controller.cid,
                callsign=controller.callsign,
                logon_time=controller.logon_time,
                name=controller.name,
            )
            for controller in feed.controllers
        ]

    async def _resolve_feed_url(self) -> str:
        async with self._client_factory(self._config.status) as client:
            status = await self._get_model(client, self._config.status_url, StatusDocument)
        if not status.data.v3:
            raise VatsimAPIError("VATSIM status document lists no v3 data feed")
        return status.data.v3[0]

    async def _get_model[TModel: BaseModel](
        self,
        client: ResilientClient,
        url: str,
        model: type[TModel],
        *,
        params: dict[str, str] | None = None,
    ) -> TModel:
        try:
            response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise VatsimAPIError(f"VATSIM request to {url} failed: {exc}") from exc
        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            raise VatsimRateLimitedError(
                f"Rate limited by VATSIM on {url}", status_code=response.status_code
            )
        if not response.is_success:
            raise VatsimAPIError(
                f"Got status {response.status_code} from VATSIM on {url}",
                status_code=response.status_code,
            )
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise VatsimAPIError(
                f"Unexpected VATSIM payload from {url}", status_code=response.status_code
            ) from exc


if TYPE_CHECKING:
    from artccsync.domain.ports import ActivitySource

    _source_check: ActivitySource = VatsimClient(config=cast("VatsimConfig", object()))
