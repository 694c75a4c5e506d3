"""VATSIM stats API and live data feed configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .http_resilience import CacheConfig, ResilienceConfig, json_headers

VATSIM_API_BASE_URL = "https://api.vatsim.net/"
VATSIM_STATUS_URL = "https://status.vatsim.net/status.json"
STATUS_CACHE_TTL_SECONDS = 3600.0


def _is_status_document(payload: object) -> bool:
    return isinstance(payload, dict) and "data" in payload


def default_stats_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="vatsim-stats",
        base_url=VATSIM_API_BASE_URL,
        default_headers=json_headers(),
    )


def default_status_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="vatsim-status",
        timeout_seconds=10.0,
        default_headers=json_headers(),
        cache=CacheConfig(
            backend="sqlite",
            default_ttl_seconds=STATUS_CACHE_TTL_SECONDS,
            refresh_ttl_on_access=False,
            should_cache=_is_status_document,
        ),
    )


def default_feed_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="vatsim-feed", timeout_seconds=15.0, default_headers=json_headers()
    )


@dataclass(frozen=True, slots=True)
class VatsimConfig:
    status_url: str = VATSIM_STATUS_URL
    stats: ResilienceConfig = field(default_factory=default_stats_resilience)
    status: ResilienceConfig = field(default_factory=default_status_resilience)
    feed: ResilienceConfig = field(default_factory=default_feed_resilience)


def get_vatsim_config() -> VatsimConfig:
    return VatsimConfig()
