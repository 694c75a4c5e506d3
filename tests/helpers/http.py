"""HTTP client factories backed by ``httpx.MockTransport``."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

import httpx

from artccsync.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from artccsync.config.http_resilience import ResilienceConfig


def make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    keep_ratelimit: bool = False,
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        ratelimit = resilience.ratelimit if keep_ratelimit else None
        client = ResilientClient(replace(resilience, cache=None, ratelimit=ratelimit))
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=resilience.base_url or "",
            headers=dict(resilience.default_headers or {}),
            transport=httpx.MockTransport(async_handler),
        )
        return client

    return factory
