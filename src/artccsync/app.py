"""Application wiring: adapters, reconcilers and the job schedule."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from artccsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from artccsync.adapters.vatsim import VatsimClient
from artccsync.adapters.vatusa import VatusaClient
from artccsync.config import (
    get_activity_sync_config,
    get_facility_config,
    get_roster_sync_config,
    get_schedule_config,
    get_vatsim_config,
    get_vatusa_config,
)
from artccsync.domain.activity_report import build_activity_report
from artccsync.domain.activity_sync import ActivityReconciler
from artccsync.domain.airspace import FacilityAirspace
from artccsync.domain.certifications import CertificationLifecycleManager
from artccsync.domain.expiration import ExpirationSweeper
from artccsync.domain.ports.unit_of_work import FacilityUnitOfWork
from artccsync.domain.roster_sync import RosterReconciler
from artccsync.scheduler import JobMode, ReconciliationScheduler, ResourceGuard, ScheduledJob

if TYPE_CHECKING:
    from collections.abc import Sequence

    from artccsync.config import (
        ActivitySyncConfig,
        FacilityConfig,
        RosterSyncConfig,
        ScheduleConfig,
    )
    from artccsync.domain.activity_report import ControllerActivity
    from artccsync.domain.ports import ActivitySource, RosterSource

UnitOfWorkFactory = Callable[[], FacilityUnitOfWork]

ROSTER_FULL_JOB = "roster"
ROSTER_PARTIAL_JOB = "roster-requests"
ACTIVITY_FULL_JOB = "activity"
ACTIVITY_ONLINE_JOB = "activity-online"
SOLO_SWEEP_JOB = "sweep-solo"
NO_SHOW_SWEEP_JOB = "sweep-no-shows"

log = getLogger(__name__)


@dataclass(slots=True)
class FacilityServices:
    roster: RosterReconciler
    activity: ActivityReconciler
    sweeper: ExpirationSweeper
    unit_of_work_factory: UnitOfWorkFactory


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def build_services(  # noqa: PLR0913
    *,
    facility: FacilityConfig | None = None,
    roster_source: RosterSource | None = None,
    activity_source: ActivitySource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    roster_config: RosterSyncConfig | None = None,
    activity_config: ActivitySyncConfig | None = None,
) -> FacilityServices:
    """Build the reconcilers from configuration, defaulting to the real adapters."""

    facility_config = facility or get_facility_config()
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    roster_settings = roster_config or get_roster_sync_config()
    activity_settings = activity_config or get_activity_sync_config()

    certifications = CertificationLifecycleManager(
        off_roster_policy=roster_settings.off_roster_certification_policy
    )
    roster = RosterReconciler(
        source=roster_source
        or VatusaClient(config=get_vatusa_config(), facility=facility_config.code),
        unit_of_work_factory=effective_uow,
        facility=facility_config.code,
        certifications=certifications,
    )
    activity = ActivityReconciler(
        source=activity_source or VatsimClient(config=get_vatsim_config()),
        unit_of_work_factory=effective_uow,
        airspace=FacilityAirspace.from_codes(
            facility_config.position_prefixes, facility_config.position_suffixes
        ),
        lookback_months=activity_settings.lookback_months,
        request_interval=activity_settings.request_interval_seconds,
        rate_limit_backoff=activity_settings.rate_limit_backoff_seconds,
    )
    sweeper = ExpirationSweeper(unit_of_work_factory=effective_uow, certifications=certifications)
    log.debug(
        "Built services for %s (off-roster policy %s)",
        facility_config.code,
        roster_settings.off_roster_certification_policy,
    )
    return FacilityServices(
        roster=roster,
        activity=activity,
        sweeper=sweeper,
        unit_of_work_factory=effective_uow,
    )


def build_jobs(services: FacilityServices, schedule: ScheduleConfig) -> list[ScheduledJob]:
    """The six reconciliation jobs; full and partial jobs of a resource share its guard."""

    roster_guard = ResourceGuard("roster")
    activity_guard = ResourceGuard("activity")

    async def sweep_solo() -> object:
        return services.sweeper.sweep_solo_certifications()

    async def sweep_no_shows() -> object:
        return services.sweeper.sweep_no_shows()

    return [
        ScheduledJob(
            ROSTER_PARTIAL_JOB,
            schedule.roster_partial,
            services.roster.sync_requested,
            roster_guard,
            JobMode.ATTEMPT,
        ),
        ScheduledJob(ROSTER_FULL_JOB, schedule.roster_full, services.roster.sync_full, roster_guard),
        ScheduledJob(
            ACTIVITY_ONLINE_JOB,
            schedule.activity_online,
            services.activity.update_online,
            activity_guard,
            JobMode.ATTEMPT,
        ),
        ScheduledJob(
            ACTIVITY_FULL_JOB,
            schedule.activity_full,
            services.activity.true_up_all,
            activity_guard,
        ),
        ScheduledJob(SOLO_SWEEP_JOB, schedule.solo_sweep, sweep_solo),
        ScheduledJob(NO_SHOW_SWEEP_JOB, schedule.no_show_sweep, sweep_no_shows),
    ]


def build_scheduler(
    services: FacilityServices | None = None,
    *,
    schedule: ScheduleConfig | None = None,
) -> ReconciliationScheduler:
    effective_services = services or build_services()
    effective_schedule = schedule or get_schedule_config()
    return ReconciliationScheduler(
        build_jobs(effective_services, effective_schedule),
        startup_delay=effective_schedule.startup_delay,
    )


def run_job(name: str, *, services: FacilityServices | None = None) -> bool:
    """Run a single job once, outside the timer loop."""

    scheduler = build_scheduler(services)
    log.info("Running %s", name)
    ran = asyncio.run(scheduler.run_job(name))
    log.info("Finished %s", name)
    return ran


def run_scheduler(*, services: FacilityServices | None = None) -> None:
    """Run every job on its timer until interrupted."""

    asyncio.run(build_scheduler(services).run_forever())


def activity_report(
    months: Sequence[str],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[ControllerActivity]:
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        return build_activity_report(uow, months)
