from __future__ import annotations

import inspect
from datetime import timedelta

import pytest

from artccsync.config import (
    ConfigurationError,
    get_activity_sync_config,
    get_roster_sync_config,
    get_schedule_config,
)
from artccsync.domain.activity_sync import ActivityReconciler
from artccsync.domain.model import OffRosterCertificationPolicy


def test_off_roster_policy_defaults_to_strip_when_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OFF_ROSTER_CERT_POLICY", raising=False)

    config = get_roster_sync_config()

    assert config.off_roster_certification_policy is OffRosterCertificationPolicy.STRIP_WHEN_EMPTY


def test_off_roster_policy_is_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    value = OffRosterCertificationPolicy.STRIP_WHEN_PRESENT.value.upper()
    monkeypatch.setenv("OFF_ROSTER_CERT_POLICY", value)

    config = get_roster_sync_config()

    assert (
        config.off_roster_certification_policy is OffRosterCertificationPolicy.STRIP_WHEN_PRESENT
    )


def test_unknown_off_roster_policy_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OFF_ROSTER_CERT_POLICY", "sometimes")

    with pytest.raises(ConfigurationError, match="OFF_ROSTER_CERT_POLICY"):
        get_roster_sync_config()


def test_activity_and_schedule_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACTIVITY_LOOKBACK_MONTHS", "3")
    monkeypatch.setenv("ACTIVITY_REQUEST_INTERVAL_SECONDS", "0")
    monkeypatch.setenv("SCHEDULE_ROSTER_PARTIAL_SECONDS", "60")
    monkeypatch.delenv("SCHEDULE_ROSTER_FULL_SECONDS", raising=False)

    activity = get_activity_sync_config()
    schedule = get_schedule_config()

    assert activity.lookback_months == 3
    assert activity.request_interval_seconds == 0.0
    assert activity.rate_limit_backoff_seconds == 30.0
    assert schedule.roster_partial == timedelta(minutes=1)
    assert schedule.roster_full == timedelta(hours=2)


def test_activity_defaults_match_reconciler_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ACTIVITY_LOOKBACK_MONTHS",
        "ACTIVITY_REQUEST_INTERVAL_SECONDS",
        "ACTIVITY_RATE_LIMIT_BACKOFF_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    defaults = inspect.signature(ActivityReconciler).parameters

    config = get_activity_sync_config()

    assert config.lookback_months == defaults["lookback_months"].default
    assert config.request_interval_seconds == defaults["request_interval"].default
    assert config.rate_limit_backoff_seconds == defaults["rate_limit_backoff"].default
