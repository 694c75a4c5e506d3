"""Reconciliation and scheduling defaults."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from artccsync.domain.activity_sync import (
    DEFAULT_LOOKBACK_MONTHS,
    DEFAULT_RATE_LIMIT_BACKOFF_SECONDS,
    DEFAULT_REQUEST_INTERVAL_SECONDS,
)
from artccsync.domain.model.enums import OffRosterCertificationPolicy

from .env import env_float, env_int, optional_env_var
from .errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RosterSyncConfig:
    off_roster_certification_policy: OffRosterCertificationPolicy = (
        OffRosterCertificationPolicy.STRIP_WHEN_EMPTY
    )


@dataclass(frozen=True, slots=True)
class ActivitySyncConfig:
    lookback_months: int = DEFAULT_LOOKBACK_MONTHS
    request_interval_seconds: float = DEFAULT_REQUEST_INTERVAL_SECONDS
    rate_limit_backoff_seconds: float = DEFAULT_RATE_LIMIT_BACKOFF_SECONDS


@dataclass(frozen=True, slots=True)
class ScheduleConfig:
    roster_partial: timedelta = timedelta(minutes=5)
    roster_full: timedelta = timedelta(hours=2)
    activity_online: timedelta = timedelta(minutes=15)
    activity_full: timedelta = timedelta(hours=6)
    solo_sweep: timedelta = timedelta(minutes=30)
    no_show_sweep: timedelta = timedelta(hours=12)
    startup_delay: timedelta = timedelta(seconds=5)


def get_roster_sync_config() -> RosterSyncConfig:
    raw = optional_env_var("OFF_ROSTER_CERT_POLICY")
    if raw is None:
        return RosterSyncConfig()
    try:
        policy = OffRosterCertificationPolicy(raw.lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in OffRosterCertificationPolicy)
        raise ConfigurationError(
            f"OFF_ROSTER_CERT_POLICY must be one of {allowed}, got {raw!r}"
        ) from exc
    return RosterSyncConfig(off_roster_certification_policy=policy)


def get_activity_sync_config() -> ActivitySyncConfig:
    return ActivitySyncConfig(
        lookback_months=env_int("ACTIVITY_LOOKBACK_MONTHS", DEFAULT_LOOKBACK_MONTHS),
        request_interval_seconds=env_float(
            "ACTIVITY_REQUEST_INTERVAL_SECONDS", DEFAULT_REQUEST_INTERVAL_SECONDS
        ),
        rate_limit_backoff_seconds=env_float(
            "ACTIVITY_RATE_LIMIT_BACKOFF_SECONDS", DEFAULT_RATE_LIMIT_BACKOFF_SECONDS
        ),
    )


def _seconds(name: str, default: timedelta) -> timedelta:
    return timedelta(seconds=env_float(name, default.total_seconds()))


def get_schedule_config() -> ScheduleConfig:
    defaults = ScheduleConfig()
    return ScheduleConfig(
        roster_partial=_seconds("SCHEDULE_ROSTER_PARTIAL_SECONDS", defaults.roster_partial),
        roster_full=_seconds("SCHEDULE_ROSTER_FULL_SECONDS", defaults.roster_full),
        activity_online=_seconds("SCHEDULE_ACTIVITY_ONLINE_SECONDS", defaults.activity_online),
        activity_full=_seconds("SCHEDULE_ACTIVITY_FULL_SECONDS", defaults.activity_full),
        solo_sweep=_seconds("SCHEDULE_SOLO_SWEEP_SECONDS", defaults.solo_sweep),
        no_show_sweep=_seconds("SCHEDULE_NO_SHOW_SWEEP_SECONDS", defaults.no_show_sweep),
        startup_delay=_seconds("SCHEDULE_STARTUP_DELAY_SECONDS", defaults.startup_delay),
    )
