"""Periodic removal of lapsed solo certifications and no-show entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from artccsync.domain.certifications import CertificationLifecycleManager
from artccsync.domain.time_windows import add_months, ensure_aware, utcnow

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from artccsync.domain.model import NoShowEntry
    from artccsync.domain.ports import FacilityUnitOfWork
    from artccsync.domain.time_windows import Clock

log = getLogger(__name__)

NO_SHOW_LIFETIME_MONTHS: Final[int] = 6


@dataclass(slots=True)
class SweepResult:
    removed: list[int] = field(default_factory=list[int])
    reverted: list[int] = field(default_factory=list[int])


def no_show_expired(entry: NoShowEntry, now: datetime) -> bool:
    expires = add_months(ensure_aware(entry.created_date), NO_SHOW_LIFETIME_MONTHS)
    return expires < now


class ExpirationSweeper:
    """Delete expired training records, cascading solo expiry into certifications."""

    def __init__(
        self,
        *,
        unit_of_work_factory: Callable[[], FacilityUnitOfWork],
        certifications: CertificationLifecycleManager | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self._certifications = certifications or CertificationLifecycleManager()
        self._clock = clock

    def sweep_solo_certifications(self) -> SweepResult:
        now = self._clock()
        result = SweepResult()
        with self._unit_of_work_factory() as uow:
            solos = uow.repositories.solo_certifications
            for solo in list(solos.list_all()):
                if not solo.is_expired(now):
                    continue
                log.info(
                    "Solo certification %s for %s on %s expired at %s",
                    solo.id,
                    solo.cid,
                    solo.position,
                    solo.expiration_date,
                )
                solos.delete(solo)
                if solo.id is not None:
                    result.removed.append(solo.id)
                if self._certifications.revert_solo(uow, solo) is not None:
                    result.reverted.append(solo.cid)
            uow.commit()
        return result

    def sweep_no_shows(self) -> SweepResult:
        now = self._clock()
        result = SweepResult()
        with self._unit_of_work_factory() as uow:
            no_shows = uow.repositories.no_shows
            for entry in list(no_shows.list_all()):
                if not no_show_expired(entry, now):
                    continue
                log.info(
                    "Removing no-show entry %s for %s from %s",
                    entry.id,
                    entry.cid,
                    entry.created_date,
                )
                no_shows.delete(entry)
                if entry.id is not None:
                    result.removed.append(entry.id)
            uow.commit()
        return result
