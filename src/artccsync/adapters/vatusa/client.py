"""VATUSA roster API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, cast

import httpx
from pydantic import BaseModel, ValidationError

from artccsync.adapters.http_resilience import ResilientClient
from artccsync.config.errors import MissingConfigurationError
from artccsync.domain.errors import ExternalServiceError, RateLimitedError

from .schema import MemberResponse, RosterResponse, TransferChecklistResponse
from .translator import translate_checklist, translate_member

if TYPE_CHECKING:
    from collections.abc import Callable

    from artccsync.config.http_resilience import ResilienceConfig
    from artccsync.config.vatusa import VatusaConfig
    from artccsync.domain.ports import RosterMember, TransferChecklist

log = getLogger(__name__)


class VatusaAPIError(ExternalServiceError):
    """Raised when the VATUSA API fails or returns an unexpected response."""


class VatusaRateLimitedError(VatusaAPIError, RateLimitedError):
    """Raised when VATUSA answers with HTTP 429."""


class VatusaClient:
    """Roster access for one facility through the VATUSA API."""

    def __init__(
        self,
        *,
        config: VatusaConfig,
        facility: str,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._facility = facility.upper()
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def get_roster(self) -> list[RosterMember]:
        payload = await self._request_model(
            "GET", f"facility/{self._facility}/roster/both", RosterResponse
        )
        return [translate_member(member) for member in payload.data]

    async def get_member(self, cid: int) -> RosterMember:
        params = {"apikey": self._config.api_key} if self._config.api_key else None
        payload = await self._request_model("GET", f"user/{cid}", MemberResponse, params=params)
        return translate_member(payload.data)

    async def get_transfer_checklist(self, cid: int) -> TransferChecklist:
        payload = await self._request_model(
            "GET",
            f"v2/user/{cid}/transfer/checklist",
            TransferChecklistResponse,
            params=self._private_params(),
        )
        return translate_checklist(payload.data)

    async def remove_home_member(self, cid: int, *, by: str, reason: str) -> None:
        await self._request(
            "DELETE",
            f"v2/facility/{self._facility}/roster/{cid}",
            params=self._private_params(),
            json={"by": by, "reason": reason},
        )
        log.info("Removed home controller %s from the %s roster", cid, self._facility)

    async def remove_visiting_member(self, cid: int, *, reason: str) -> None:
        await self._request(
            "DELETE",
            f"v2/facility/{self._facility}/roster/manageVisitor/{cid}",
            params=self._private_params(),
            json={"reason": reason},
        )
        log.info("Removed visiting controller %s from the %s roster", cid, self._facility)

    async def add_visiting_member(self, cid: int) -> None:
        await self._request(
            "POST",
            f"v2/facility/{self._facility}/roster/manageVisitor/{cid}",
            params=self._private_params(),
        )
        log.info("Added visiting controller %s to the %s roster", cid, self._facility)

    def _private_params(self) -> dict[str, str]:
        if not self._config.api_key:
            raise MissingConfigurationError(
                ["VATUSA_API_KEY"], needed_for="private VATUSA calls"
            )
        return {"apikey": self._config.api_key}

    async def _request_model[TModel: BaseModel](
        self,
        method: str,
        path: str,
        model: type[TModel],
        *,
        params: dict[str, str] | None = None,
    ) -> TModel:
        response = await self._request(method, path, params=params)
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise VatusaAPIError(
                f"Unexpected VATUSA payload from {path}", status_code=response.status_code
            ) from exc

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: object | None = None,
    ) -> httpx.Response:
        try:
            async with self._client_factory(self._resilience) as client:
                if json is None:
                    response = await client.request(method, path, params=params)
                else:
                    response = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise VatusaAPIError(f"VATUSA request to {path} failed: {exc}") from exc

        # the URL is left out of messages since it may carry the API key
        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            raise VatusaRateLimitedError(
                f"Rate limited by VATUSA on {path}", status_code=response.status_code
            )
        if not response.is_success:
            raise VatusaAPIError(
                f"Got status {response.status_code} from VATUSA on {path}",
                status_code=response.status_code,
            )
        return response


if TYPE_CHECKING:
    from artccsync.domain.ports import RosterSource

    _source_check: RosterSource = VatusaClient(config=cast("VatusaConfig", object()), facility="")
