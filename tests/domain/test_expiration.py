from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from artccsync.domain.expiration import ExpirationSweeper
from artccsync.domain.model import CertificationValue, NoShowEntry, SoloCertification
from tests.helpers.facility import fixed_clock, make_certification

if TYPE_CHECKING:
    from collections.abc import Callable

    from artccsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

    UowFactory = Callable[[], SqlAlchemyUnitOfWork]

NOW = datetime(2024, 9, 15, 12, 0, tzinfo=UTC)


def _sweeper(uow_factory: UowFactory) -> ExpirationSweeper:
    return ExpirationSweeper(unit_of_work_factory=uow_factory, clock=fixed_clock(NOW))


def test_expired_solo_is_removed_and_certification_reverted(
    sqlite_unit_of_work: UowFactory,
) -> None:
    with sqlite_unit_of_work() as uow:
        solos = uow.repositories.solo_certifications
        solos.add(
            SoloCertification(
                cid=1,
                issued_by=9,
                position="DEN_TWR",
                created_date=NOW - timedelta(days=30),
                expiration_date=NOW - timedelta(minutes=1),
            )
        )
        solos.add(
            SoloCertification(
                cid=2,
                issued_by=9,
                position="DEN_TWR",
                created_date=NOW - timedelta(days=3),
                expiration_date=NOW + timedelta(days=27),
            )
        )
        uow.repositories.certifications.add(make_certification(1, "TWR", CertificationValue.SOLO))
        uow.repositories.certifications.add(make_certification(2, "TWR", CertificationValue.SOLO))
        uow.commit()

    result = _sweeper(sqlite_unit_of_work).sweep_solo_certifications()

    assert result.reverted == [1]
    with sqlite_unit_of_work() as uow:
        remaining = [solo.cid for solo in uow.repositories.solo_certifications.list_all()]
        first = uow.repositories.certifications.list_for(1)[0]
        second = uow.repositories.certifications.list_for(2)[0]
    assert remaining == [2]
    assert first.value is CertificationValue.TRAINING
    assert second.value is CertificationValue.SOLO


def test_no_shows_expire_after_six_calendar_months(sqlite_unit_of_work: UowFactory) -> None:
    old = datetime(2024, 3, 14, 12, 0, tzinfo=UTC)  # six months and a day
    recent = datetime(2024, 3, 17, 12, 0, tzinfo=UTC)  # five months and 29 days
    with sqlite_unit_of_work() as uow:
        for cid, created in ((1, old), (2, recent)):
            uow.repositories.no_shows.add(
                NoShowEntry(cid=cid, reported_by=9, entry_type="training", created_date=created)
            )
        uow.commit()

    result = _sweeper(sqlite_unit_of_work).sweep_no_shows()

    assert len(result.removed) == 1
    with sqlite_unit_of_work() as uow:
        assert [entry.cid for entry in uow.repositories.no_shows.list_all()] == [2]
