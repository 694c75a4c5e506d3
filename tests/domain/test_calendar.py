from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from artccsync.domain.time_windows import (
    add_months,
    ensure_aware,
    lookback_start,
    month_key,
    month_start,
    parse_month_key,
    utcnow,
)


def test_add_months_clamps_to_month_end() -> None:
    assert add_months(date(2024, 8, 31), 6) == date(2025, 2, 28)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
    assert add_months(date(2024, 11, 15), 2) == date(2025, 1, 15)


def test_add_months_keeps_time_of_day() -> None:
    value = datetime(2024, 8, 31, 13, 45, tzinfo=UTC)
    assert add_months(value, 6) == datetime(2025, 2, 28, 13, 45, tzinfo=UTC)


def test_month_helpers() -> None:
    now = datetime(2024, 5, 20, 12, 30, tzinfo=UTC)

    assert month_key(now) == "2024-05"
    assert month_start(now) == datetime(2024, 5, 1, tzinfo=UTC)
    assert lookback_start(now, 5) == date(2023, 12, 1)
    assert lookback_start(now, 0) == date(2024, 5, 1)


def test_parse_month_key() -> None:
    assert parse_month_key("2024-5") == "2024-05"
    with pytest.raises(ValueError, match="YYYY-MM"):
        parse_month_key("May 2024")


def test_ensure_aware_assumes_utc() -> None:
    assert ensure_aware(datetime(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=UTC)  # noqa: DTZ001


def test_utcnow_is_timezone_aware() -> None:
    assert utcnow().tzinfo is UTC
