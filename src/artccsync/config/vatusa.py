"""VATUSA roster API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, json_headers

VATUSA_BASE_URL = "https://api.vatusa.net/"
VATUSA_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class VatusaConfig:
    """Holds VATUSA API configuration values.

    The API key is only needed for private endpoints (transfer checklist and roster
    writes); roster reads work without it.
    """

    resilience: ResilienceConfig
    api_key: str | None = None


def default_vatusa_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="vatusa",
        base_url=VATUSA_BASE_URL,
        timeout_seconds=VATUSA_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        default_headers=json_headers(),
    )


def get_vatusa_config(*, resilience: ResilienceConfig | None = None) -> VatusaConfig:
    return VatusaConfig(
        resilience=resilience or default_vatusa_resilience(),
        api_key=optional_env_var("VATUSA_API_KEY"),
    )
