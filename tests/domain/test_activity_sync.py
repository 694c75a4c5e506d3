from __future__ import annotations

import asyncio
from datetime import date
from typing import TYPE_CHECKING

from artccsync.domain.activity_sync import ActivityReconciler, round_minutes, seconds_by_month
from artccsync.domain.airspace import FacilityAirspace
from artccsync.domain.errors import ExternalServiceError, RateLimitedError
from artccsync.domain.model import Activity
from artccsync.domain.ports import OnlineController
from tests.helpers.facility import (
    FakeActivitySource,
    RecordingSleep,
    fixed_clock,
    make_controller,
    session,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from artccsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

    UowFactory = Callable[[], SqlAlchemyUnitOfWork]

AIRSPACE = FacilityAirspace.from_codes(("DEN",), ("GND", "TWR", "APP", "CTR"))


def _reconciler(
    source: FakeActivitySource,
    uow_factory: UowFactory,
    sleep: RecordingSleep,
) -> ActivityReconciler:
    return ActivityReconciler(
        source=source,
        unit_of_work_factory=uow_factory,
        airspace=AIRSPACE,
        lookback_months=5,
        request_interval=8.0,
        rate_limit_backoff=30.0,
        sleep=sleep,
        clock=fixed_clock(),
    )


def _seed(uow_factory: UowFactory, *controllers: tuple[int, bool]) -> None:
    with uow_factory() as uow:
        for cid, on_roster in controllers:
            uow.repositories.controllers.add(
                make_controller(cid, on_roster=on_roster, operating_initials=None)
            )
        uow.commit()


def _activity(uow_factory: UowFactory, cid: int) -> dict[str, int]:
    with uow_factory() as uow:
        return {row.month: row.minutes for row in uow.repositories.activity.list_for(cid)}


def test_seconds_by_month_filters_and_skips_malformed() -> None:
    sessions = [
        session("DEN_TWR", "2024-04-01T10:00:00", "60.5"),
        session("DEN_APP", "2024-04-20T10:00:00", "29.5"),
        session("ABQ_CTR", "2024-04-20T10:00:00", "300"),
        session("DEN_GND", "garbage", "10"),
        session("DEN_GND", "2024-05-01T10:00:00", "n/a"),
        session("DEN_CTR", "2024-05-02T10:00:00Z", "45"),
    ]

    totals = seconds_by_month(sessions, AIRSPACE)

    assert totals == {"2024-04": 90 * 60.0, "2024-05": 45 * 60.0}


def test_round_minutes_rounds_half_up() -> None:
    assert round_minutes(89) == 1
    assert round_minutes(90) == 2
    assert round_minutes(29) == 0


def test_true_up_replaces_all_rows(sqlite_unit_of_work: UowFactory) -> None:
    _seed(sqlite_unit_of_work, (1, True))
    with sqlite_unit_of_work() as uow:
        activity = uow.repositories.activity
        activity.add(Activity(cid=1, month="2023-01", minutes=999))
        activity.add(Activity(cid=1, month="2024-04", minutes=1))
        uow.commit()
    source = FakeActivitySource(
        sessions={
            1: [
                session("DEN_TWR", "2024-04-01T10:00:00", "60"),
                session("DEN_TWR", "2024-04-02T10:00:00", "30.4"),
                session("DEN_CTR", "2024-05-02T10:00:00", "15"),
            ]
        }
    )
    sleep = RecordingSleep()

    result = asyncio.run(_reconciler(source, sqlite_unit_of_work, sleep).true_up_all())

    assert result.updated == [1]
    assert _activity(sqlite_unit_of_work, 1) == {"2024-04": 90, "2024-05": 15}
    assert source.session_calls == [(1, date(2023, 12, 1))]


def test_true_up_skips_off_roster_and_isolates_failures(sqlite_unit_of_work: UowFactory) -> None:
    _seed(sqlite_unit_of_work, (1, True), (2, True), (3, False))
    source = FakeActivitySource(
        sessions={2: [session("DEN_TWR", "2024-05-01T00:00:00", "120")]},
        errors={1: ExternalServiceError("boom", status_code=500)},
    )
    sleep = RecordingSleep()

    result = asyncio.run(_reconciler(source, sqlite_unit_of_work, sleep).true_up_all())

    assert result.failed == [1]
    assert result.updated == [2]
    assert [cid for cid, _ in source.session_calls] == [1, 2]
    assert sleep.delays == [8.0]
    assert _activity(sqlite_unit_of_work, 2) == {"2024-05": 120}


def test_rate_limit_backs_off_then_counts_as_failure(sqlite_unit_of_work: UowFactory) -> None:
    _seed(sqlite_unit_of_work, (1, True), (2, True))
    with sqlite_unit_of_work() as uow:
        uow.repositories.activity.add(Activity(cid=1, month="2024-04", minutes=42))
        uow.commit()
    source = FakeActivitySource(errors={1: RateLimitedError("slow down", status_code=429)})
    sleep = RecordingSleep()

    result = asyncio.run(_reconciler(source, sqlite_unit_of_work, sleep).true_up_all())

    assert result.failed == [1]
    assert result.updated == [2]
    assert sleep.delays == [30.0, 8.0]
    assert _activity(sqlite_unit_of_work, 1) == {"2024-04": 42}


def test_update_online_adds_current_session(sqlite_unit_of_work: UowFactory) -> None:
    _seed(sqlite_unit_of_work, (1, True), (2, True), (3, False))
    with sqlite_unit_of_work() as uow:
        uow.repositories.activity.add(Activity(cid=2, month="2024-05", minutes=5))
        uow.commit()
    source = FakeActivitySource(
        sessions={
            1: [session("DEN_TWR", "2024-05-03T10:00:00", "100")],
            2: [session("DEN_APP", "2024-05-04T10:00:00", "10")],
        },
        online=[
            # the clock reads 12:00, so cid 1 has been connected for 30 minutes
            OnlineController(cid=1, callsign="DEN_TWR", logon_time="2024-05-20T11:30:00Z"),
            OnlineController(cid=2, callsign="DEN_APP", logon_time="2024-05-20T11:50:00Z"),
            OnlineController(cid=3, callsign="DEN_TWR", logon_time="2024-05-20T11:00:00Z"),
            OnlineController(cid=4, callsign="DEN_TWR", logon_time="2024-05-20T11:00:00Z"),
            OnlineController(cid=2, callsign="ABQ_CTR", logon_time="2024-05-20T11:00:00Z"),
        ],
    )
    sleep = RecordingSleep()

    result = asyncio.run(_reconciler(source, sqlite_unit_of_work, sleep).update_online())

    assert result.updated == [1, 2]
    assert source.session_calls == [(1, date(2024, 5, 1)), (2, date(2024, 5, 1))]
    assert sleep.delays == [8.0]
    assert _activity(sqlite_unit_of_work, 1) == {"2024-05": 130}
    assert _activity(sqlite_unit_of_work, 2) == {"2024-05": 20}
