"""Calendar helpers for activity months and record lifetimes."""

from __future__ import annotations

import calendar
from datetime import UTC, date, datetime
from typing import Protocol


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive timestamps as UTC and normalise aware ones to UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def add_months[TDate: date](value: TDate, months: int) -> TDate:
    """Shift ``value`` by whole calendar months, clamping the day to the month end.

    ``add_months(date(2024, 8, 31), 6)`` is ``date(2025, 2, 28)``.
    """

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def month_start(value: datetime) -> datetime:
    return value.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def lookback_start(now: datetime, months: int) -> date:
    """First day of the month ``months`` before the month of ``now``."""

    if months < 0:
        raise ValueError("Lookback months must be non-negative")
    return add_months(now.date().replace(day=1), -months)


def parse_month_key(value: str) -> str:
    """Validate a ``YYYY-MM`` key and return it normalised."""

    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m")
    except ValueError as exc:
        raise ValueError(f"Expected a month as YYYY-MM, got {value!r}") from exc
    return month_key(parsed)


__all__ = [
    "Clock",
    "add_months",
    "ensure_aware",
    "lookback_start",
    "month_key",
    "month_start",
    "parse_month_key",
    "utcnow",
]
