"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .facility import FacilityConfig, get_facility_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import get_data_dir, get_database_uri, get_http_cache_path
from .sync import (
    ActivitySyncConfig,
    RosterSyncConfig,
    ScheduleConfig,
    get_activity_sync_config,
    get_roster_sync_config,
    get_schedule_config,
)
from .vatsim import VatsimConfig, get_vatsim_config
from .vatusa import VatusaConfig, get_vatusa_config

__all__ = [
    "ActivitySyncConfig",
    "CacheConfig",
    "ConfigurationError",
    "FacilityConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "RosterSyncConfig",
    "ScheduleConfig",
    "VatsimConfig",
    "VatusaConfig",
    "configure_logging",
    "get_activity_sync_config",
    "get_data_dir",
    "get_database_uri",
    "get_facility_config",
    "get_http_cache_path",
    "get_roster_sync_config",
    "get_schedule_config",
    "get_vatsim_config",
    "get_vatusa_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
