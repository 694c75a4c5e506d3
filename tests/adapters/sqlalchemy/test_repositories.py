from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from artccsync.domain.model import Activity, CertificationValue, Role, SyncAction, SyncRequest
from tests.helpers.facility import make_certification, make_controller

if TYPE_CHECKING:
    from collections.abc import Callable

    from artccsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

    UowFactory = Callable[[], SqlAlchemyUnitOfWork]


def test_controller_roles_round_trip(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.controllers.add(
            make_controller(1, roles={Role.MTR, Role.INS}, operating_initials="JD")
        )
        uow.repositories.controllers.add(make_controller(2, on_roster=False))
        uow.commit()

    with sqlite_unit_of_work() as uow:
        controllers = uow.repositories.controllers
        stored = controllers.get(1)
        raw_roles = uow.session.execute(text("SELECT roles FROM controller WHERE cid = 1")).scalar()
        assert stored is not None
        assert stored.roles == frozenset({Role.MTR, Role.INS})
        assert controllers.get(3) is None
        assert controllers.list_cids() == {1, 2}
        assert controllers.list_on_roster_cids() == {1}
        assert controllers.operating_initials_in_use() == {"JD"}

    assert raw_roles == '["INS", "MTR"]'


def test_operating_initials_are_unique(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.controllers.add(make_controller(1, operating_initials="JD"))
        uow.repositories.controllers.add(make_controller(2, operating_initials="JD"))
        with pytest.raises(IntegrityError):
            uow.commit()


def test_activity_replace_and_update(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        activity = uow.repositories.activity
        activity.add(Activity(cid=1, month="2023-01", minutes=10))
        activity.add(Activity(cid=2, month="2024-05", minutes=5))
        uow.commit()

    with sqlite_unit_of_work() as uow:
        activity = uow.repositories.activity
        activity.replace_for(1, {"2024-05": 30, "2024-04": 60})
        updated = activity.update_minutes(2, "2024-05", 45)
        missing = activity.update_minutes(2, "2024-04", 45)
        uow.commit()

    assert updated == 1
    assert missing == 0
    with sqlite_unit_of_work() as uow:
        rows = [(row.cid, row.month, row.minutes) for row in uow.repositories.activity.list_all()]
    assert rows == [(1, "2024-04", 60), (1, "2024-05", 30), (2, "2024-05", 45)]


def test_certifications_delete_for_controller(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        certifications = uow.repositories.certifications
        certifications.add(make_certification(1, "TWR", CertificationValue.SOLO))
        certifications.add(make_certification(1, "GND"))
        certifications.add(make_certification(2, "GND"))
        uow.commit()

    with sqlite_unit_of_work() as uow:
        removed = uow.repositories.certifications.delete_for(1)
        uow.commit()

    assert removed == 2
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.certifications.list_for(1) == []
        (remaining,) = uow.repositories.certifications.list_for(2)
    assert remaining.value is CertificationValue.CERTIFIED


def test_sync_requests_filter_by_action(sqlite_unit_of_work: UowFactory) -> None:
    wanted = SyncRequest(action=SyncAction.VATUSA_SYNC, payload="1234567")
    with sqlite_unit_of_work() as uow:
        requests = uow.repositories.sync_requests
        requests.add(wanted)
        requests.add(SyncRequest(action="EMAIL_SEND", payload="{}"))
        uow.commit()

    with sqlite_unit_of_work() as uow:
        pending = uow.repositories.sync_requests.list_pending(SyncAction.VATUSA_SYNC)
        assert [request.payload for request in pending] == ["1234567"]
        uow.repositories.sync_requests.delete(wanted.id)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.sync_requests.list_pending(SyncAction.VATUSA_SYNC) == []
        assert len(uow.repositories.sync_requests.list_pending("EMAIL_SEND")) == 1
