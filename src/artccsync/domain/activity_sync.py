"""Controlling activity reconciliation against the session history service."""

from __future__ import annotations

import asyncio
import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from artccsync.domain.errors import RateLimitedError, RecordFormatError
from artccsync.domain.model import Activity
from artccsync.domain.time_windows import (
    ensure_aware,
    lookback_start,
    month_key,
    month_start,
    utcnow,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from artccsync.domain.airspace import FacilityAirspace
    from artccsync.domain.ports import (
        ActivitySource,
        AtcSession,
        FacilityUnitOfWork,
        OnlineController,
    )
    from artccsync.domain.time_windows import Clock

type Sleep = Callable[[float], Awaitable[None]]

log = getLogger(__name__)

DEFAULT_LOOKBACK_MONTHS = 5
DEFAULT_REQUEST_INTERVAL_SECONDS = 8.0
DEFAULT_RATE_LIMIT_BACKOFF_SECONDS = 30.0


@dataclass(slots=True)
class ActivitySyncResult:
    updated: list[int] = field(default_factory=list[int])
    failed: list[int] = field(default_factory=list[int])


def parse_session_timestamp(value: str) -> datetime:
    try:
        return ensure_aware(datetime.fromisoformat(value.strip()))
    except ValueError as exc:
        raise RecordFormatError(f"Invalid session timestamp {value!r}") from exc


def session_seconds(session: AtcSession) -> float:
    try:
        minutes = float(session.minutes_on_callsign)
    except ValueError as exc:
        raise RecordFormatError(
            f"Invalid session length {session.minutes_on_callsign!r}"
        ) from exc
    if not math.isfinite(minutes) or minutes < 0:
        raise RecordFormatError(f"Invalid session length {session.minutes_on_callsign!r}")
    return minutes * 60.0


def round_minutes(seconds: float) -> int:
    """Whole minutes, rounding halves up."""

    return math.floor(seconds / 60.0 + 0.5)


def seconds_by_month(
    sessions: Iterable[AtcSession],
    airspace: FacilityAirspace,
    *,
    cid: int | None = None,
) -> dict[str, float]:
    """Sum in-airspace session seconds per ``YYYY-MM`` of the session start."""

    totals: defaultdict[str, float] = defaultdict(float)
    for session in sessions:
        if not airspace.contains(session.callsign):
            continue
        try:
            started = parse_session_timestamp(session.start)
            seconds = session_seconds(session)
        except RecordFormatError as exc:
            log.warning("Skipping session %s of %s: %s", session.callsign, cid, exc)
            continue
        totals[month_key(started)] += seconds
    return dict(totals)


class ActivityReconciler:
    """Keep per-month controlling minutes in step with the session history."""

    def __init__(  # noqa: PLR0913
        self,
        *,
        source: ActivitySource,
        unit_of_work_factory: Callable[[], FacilityUnitOfWork],
        airspace: FacilityAirspace,
        lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
        request_interval: float = DEFAULT_REQUEST_INTERVAL_SECONDS,
        rate_limit_backoff: float = DEFAULT_RATE_LIMIT_BACKOFF_SECONDS,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = utcnow,
    ) -> None:
        self._source = source
        self._unit_of_work_factory = unit_of_work_factory
        self._airspace = airspace
        self._lookback_months = lookback_months
        self._request_interval = request_interval
        self._rate_limit_backoff = rate_limit_backoff
        self._sleep = sleep
        self._clock = clock

    async def true_up_all(self) -> ActivitySyncResult:
        """Rebuild the activity rows of every on-roster controller."""

        with self._unit_of_work_factory() as uow:
            cids = sorted(uow.repositories.controllers.list_on_roster_cids())
        since = lookback_start(self._clock(), self._lookback_months)

        result = ActivitySyncResult()
        for index, cid in enumerate(cids):
            if index:
                await self._sleep(self._request_interval)
            log.debug("Getting activity for %s", cid)
            try:
                await self.true_up(cid, since=since)
            except Exception:
                log.exception("Error updating activity for %s", cid)
                result.failed.append(cid)
            else:
                result.updated.append(cid)
        return result

    async def true_up(self, cid: int, *, since: date | None = None) -> dict[str, int]:
        """Replace all activity rows of ``cid`` with fresh monthly totals."""

        if since is None:
            since = lookback_start(self._clock(), self._lookback_months)
        sessions = await self._fetch_sessions(cid, since)
        minutes = {
            month: round_minutes(seconds)
            for month, seconds in seconds_by_month(sessions, self._airspace, cid=cid).items()
        }
        with self._unit_of_work_factory() as uow:
            uow.repositories.activity.replace_for(cid, minutes)
            uow.commit()
        return minutes

    async def update_online(self) -> ActivitySyncResult:
        """Refresh this month's minutes for on-roster controllers online in the airspace."""

        with self._unit_of_work_factory() as uow:
            on_roster = uow.repositories.controllers.list_on_roster_cids()
        online = await self._source.get_online_controllers()

        result = ActivitySyncResult()
        first = True
        for controller in online:
            if controller.cid not in on_roster:
                continue
            if not self._airspace.contains(controller.callsign):
                continue
            if not first:
                await self._sleep(self._request_interval)
            first = False
            log.debug("Spot-updating activity for %s", controller.cid)
            try:
                await self.update_single(controller)
            except Exception:
                log.exception("Error spot-updating activity for %s", controller.cid)
                result.failed.append(controller.cid)
            else:
                result.updated.append(controller.cid)
        return result

    async def update_single(self, controller: OnlineController) -> int:
        """Add the current session to this month's completed sessions for one controller."""

        now = self._clock()
        start = month_start(now)
        sessions = await self._fetch_sessions(controller.cid, start.date())
        month = month_key(now)
        completed = seconds_by_month(sessions, self._airspace, cid=controller.cid).get(month, 0.0)
        logon = parse_session_timestamp(controller.logon_time)
        online_seconds = max((now - logon).total_seconds(), 0.0)
        minutes = round_minutes(completed + online_seconds)

        with self._unit_of_work_factory() as uow:
            activity = uow.repositories.activity
            if activity.update_minutes(controller.cid, month, minutes) == 0:
                activity.add(Activity(cid=controller.cid, month=month, minutes=minutes))
            uow.commit()
        return minutes

    async def _fetch_sessions(self, cid: int, since: date) -> list[AtcSession]:
        try:
            return await self._source.get_atc_sessions(cid, start=since)
        except RateLimitedError:
            log.warning(
                "Rate limited by the activity API; waiting %.0f seconds before continuing",
                self._rate_limit_backoff,
            )
            await self._sleep(self._rate_limit_backoff)
            raise
