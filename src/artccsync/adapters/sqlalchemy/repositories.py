"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, select, update

from artccsync.adapters.sqlalchemy.mappings import (
    activity_table,
    certification_table,
    controller_table,
    sync_request_table,
)
from artccsync.domain.model import (
    Activity,
    Certification,
    Controller,
    NoShowEntry,
    SoloCertification,
    SyncRequest,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy.engine import CursorResult
    from sqlalchemy.orm import Session


class SqlAlchemyControllerRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Controller) -> None:
        self.session.add(entity)

    def get(self, cid: int) -> Controller | None:
        stmt = select(Controller).where(controller_table.c.cid == cid)
        return self.session.execute(stmt).scalar_one_or_none()

    def list_all(self) -> Sequence[Controller]:
        stmt = select(Controller).order_by(controller_table.c.cid)
        return self.session.execute(stmt).scalars().all()

    def list_cids(self) -> set[int]:
        return set(self.session.execute(select(controller_table.c.cid)).scalars())

    def list_on_roster_cids(self) -> set[int]:
        stmt = select(controller_table.c.cid).where(controller_table.c.is_on_roster.is_(True))
        return set(self.session.execute(stmt).scalars())

    def operating_initials_in_use(self) -> set[str]:
        stmt = select(controller_table.c.operating_initials).where(
            controller_table.c.operating_initials.is_not(None)
        )
        return {initials.upper() for initials in self.session.execute(stmt).scalars() if initials}


class SqlAlchemyCertificationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Certification) -> None:
        self.session.add(entity)

    def list_for(self, cid: int) -> Sequence[Certification]:
        stmt = (
            select(Certification)
            .where(certification_table.c.cid == cid)
            .order_by(certification_table.c.name)
        )
        return self.session.execute(stmt).scalars().all()

    def delete_for(self, cid: int) -> int:
        certifications = self.list_for(cid)
        for certification in certifications:
            self.session.delete(certification)
        return len(certifications)


class SqlAlchemyActivityRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Activity) -> None:
        self.session.add(entity)

    def list_for(self, cid: int) -> Sequence[Activity]:
        stmt = (
            select(Activity).where(activity_table.c.cid == cid).order_by(activity_table.c.month)
        )
        return self.session.execute(stmt).scalars().all()

    def list_all(self) -> Sequence[Activity]:
        stmt = select(Activity).order_by(activity_table.c.cid, activity_table.c.month)
        return self.session.execute(stmt).scalars().all()

    def replace_for(self, cid: int, minutes_by_month: Mapping[str, int]) -> None:
        self.session.execute(delete(activity_table).where(activity_table.c.cid == cid))
        for month, minutes in sorted(minutes_by_month.items()):
            self.session.add(Activity(cid=cid, month=month, minutes=minutes))

    def update_minutes(self, cid: int, month: str, minutes: int) -> int:
        stmt = (
            update(activity_table)
            .where(activity_table.c.cid == cid)
            .where(activity_table.c.month == month)
            .values(minutes=minutes)
        )
        result = cast("CursorResult[object]", self.session.execute(stmt))
        return result.rowcount


class SqlAlchemySoloCertificationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: SoloCertification) -> None:
        self.session.add(entity)

    def list_all(self) -> Sequence[SoloCertification]:
        return self.session.execute(select(SoloCertification)).scalars().all()

    def delete(self, entity: SoloCertification) -> None:
        self.session.delete(entity)


class SqlAlchemyNoShowRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: NoShowEntry) -> None:
        self.session.add(entity)

    def list_all(self) -> Sequence[NoShowEntry]:
        return self.session.execute(select(NoShowEntry)).scalars().all()

    def delete(self, entity: NoShowEntry) -> None:
        self.session.delete(entity)


class SqlAlchemySyncRequestRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: SyncRequest) -> None:
        self.session.add(entity)

    def list_pending(self, action: str) -> Sequence[SyncRequest]:
        stmt = select(SyncRequest).where(sync_request_table.c.action == action)
        return self.session.execute(stmt).scalars().all()

    def delete(self, request_id: str) -> None:
        self.session.execute(delete(sync_request_table).where(sync_request_table.c.id == request_id))


if TYPE_CHECKING:
    from artccsync.domain.ports.persistence import (
        ActivityRepository,
        CertificationRepository,
        ControllerRepository,
        NoShowRepository,
        SoloCertificationRepository,
        SyncRequestRepository,
    )

    _session_stub = cast("Session", object())
    _controller_repo: ControllerRepository = SqlAlchemyControllerRepository(_session_stub)
    _certification_repo: CertificationRepository = SqlAlchemyCertificationRepository(
        _session_stub
    )
    _activity_repo: ActivityRepository = SqlAlchemyActivityRepository(_session_stub)
    _solo_repo: SoloCertificationRepository = SqlAlchemySoloCertificationRepository(_session_stub)
    _no_show_repo: NoShowRepository = SqlAlchemyNoShowRepository(_session_stub)
    _sync_request_repo: SyncRequestRepository = SqlAlchemySyncRequestRepository(_session_stub)
