"""Roster reconciliation against the external membership registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from logging import getLogger
from typing import TYPE_CHECKING

from artccsync.domain.certifications import CertificationLifecycleManager
from artccsync.domain.errors import RecordFormatError
from artccsync.domain.model import Controller, SyncAction
from artccsync.domain.operating_initials import allocate_operating_initials
from artccsync.domain.roles import merge_roles, synced_roles
from artccsync.domain.time_windows import ensure_aware

if TYPE_CHECKING:
    from collections.abc import Callable

    from artccsync.domain.model import SyncRequest
    from artccsync.domain.ports import FacilityUnitOfWork, RosterMember, RosterSource

log = getLogger(__name__)


@dataclass(slots=True)
class RosterSyncResult:
    """Outcome of a full roster sync."""

    updated: list[int] = field(default_factory=list[int])
    failed: list[int] = field(default_factory=list[int])
    off_roster: list[int] = field(default_factory=list[int])
    assigned_operating_initials: dict[int, str] = field(default_factory=dict[int, str])


@dataclass(slots=True)
class PartialRosterSyncResult:
    """Outcome of draining queued single-member sync requests."""

    updated: list[int] = field(default_factory=list[int])
    failed: list[str] = field(default_factory=list[str])


@dataclass(slots=True)
class MemberUpdate:
    controller: Controller
    created: bool
    assigned_operating_initials: str | None = None


def parse_join_date(value: str | None) -> datetime | None:
    if value is None or not value.strip():
        return None
    try:
        return ensure_aware(datetime.fromisoformat(value.strip()))
    except ValueError as exc:
        raise RecordFormatError(f"Invalid facility join date {value!r}") from exc


def parse_request_cid(request: SyncRequest) -> int:
    try:
        return int(request.payload.strip())
    except ValueError as exc:
        raise RecordFormatError(
            f"Sync request {request.id} carries no cid: {request.payload!r}"
        ) from exc


class RosterReconciler:
    """Merge the registry's roster into the local controller table."""

    def __init__(
        self,
        *,
        source: RosterSource,
        unit_of_work_factory: Callable[[], FacilityUnitOfWork],
        facility: str,
        certifications: CertificationLifecycleManager | None = None,
    ) -> None:
        self._source = source
        self._unit_of_work_factory = unit_of_work_factory
        self._facility = facility.upper()
        self._certifications = certifications or CertificationLifecycleManager()

    async def sync_full(self) -> RosterSyncResult:
        """Upsert every registry member, then move everyone else off the roster.

        A failed roster fetch fails the run; a failure for a single member is logged
        and does not stop the others.
        """

        members = await self._source.get_roster()
        log.debug("Fetched %d roster members", len(members))
        result = RosterSyncResult()
        for member in members:
            try:
                update = self.apply_member(member)
            except Exception:
                log.exception("Error updating controller %s", member.cid)
                result.failed.append(member.cid)
                continue
            result.updated.append(member.cid)
            if update.assigned_operating_initials is not None:
                result.assigned_operating_initials[member.cid] = update.assigned_operating_initials

        external = {member.cid for member in members}
        with self._unit_of_work_factory() as uow:
            local = uow.repositories.controllers.list_cids()
        for cid in sorted(local - external):
            try:
                self.remove_from_roster(cid)
            except Exception:
                log.exception("Error moving controller %s off the roster", cid)
                result.failed.append(cid)
                continue
            result.off_roster.append(cid)
        log.debug(
            "Controllers known locally but not on the roster: %s",
            ", ".join(str(cid) for cid in result.off_roster),
        )
        return result

    async def sync_requested(self) -> PartialRosterSyncResult:
        """Process queued single-member sync requests.

        Each handled request is deleted whether or not its sync succeeded. Requests
        for other actions stay queued.
        """

        with self._unit_of_work_factory() as uow:
            requests = list(uow.repositories.sync_requests.list_pending(SyncAction.VATUSA_SYNC))

        result = PartialRosterSyncResult()
        for request in requests:
            try:
                cid = parse_request_cid(request)
                member = await self._source.get_member(cid)
                self.apply_member(member)
            except Exception:
                log.exception("Error in quick roster update for request %s", request.id)
                result.failed.append(request.id)
            else:
                log.info("Quick-updated roster for %s", cid)
                result.updated.append(cid)
            finally:
                self._discard_request(request)
        return result

    def apply_member(self, member: RosterMember) -> MemberUpdate:
        """Upsert one registry member in its own unit of work."""

        join_date = parse_join_date(member.facility_join)
        roles = synced_roles(member, self._facility)

        with self._unit_of_work_factory() as uow:
            controllers = uow.repositories.controllers
            controller = controllers.get(member.cid)
            created = controller is None
            if controller is None:
                controller = Controller(
                    cid=member.cid,
                    first_name=member.first_name,
                    last_name=member.last_name,
                )
                controllers.add(controller)
            needs_initials = (
                created or not controller.is_on_roster or controller.operating_initials is None
            )

            controller.first_name = member.first_name
            controller.last_name = member.last_name
            controller.email = member.email
            controller.rating = member.rating
            controller.home_facility = member.facility
            controller.is_on_roster = True
            controller.join_date = join_date
            controller.roles = merge_roles(controller.roles, roles)

            assigned: str | None = None
            if needs_initials:
                in_use = controllers.operating_initials_in_use()
                if controller.operating_initials:
                    in_use.discard(controller.operating_initials)
                assigned = allocate_operating_initials(
                    in_use, member.first_name, member.last_name
                )
                controller.operating_initials = assigned
            uow.commit()

        if assigned is not None:
            log.info("%s (%s) added to the roster with OIs %s", controller.name, member.cid, assigned)
        else:
            log.debug("%s (%s) updated", controller.name, member.cid)
        return MemberUpdate(
            controller=controller, created=created, assigned_operating_initials=assigned
        )

    def remove_from_roster(self, cid: int) -> None:
        """Clear roster-owned fields of ``cid`` and run the certification cascade."""

        with self._unit_of_work_factory() as uow:
            controller = uow.repositories.controllers.get(cid)
            if controller is None:
                return
            was_on_roster = controller.is_on_roster
            controller.mark_off_roster()
            self._certifications.handle_off_roster(uow, cid)
            uow.commit()
        if was_on_roster:
            log.info("Controller %s is no longer on the roster", cid)

    def _discard_request(self, request: SyncRequest) -> None:
        try:
            with self._unit_of_work_factory() as uow:
                uow.repositories.sync_requests.delete(request.id)
                uow.commit()
        except Exception:
            log.exception("Could not delete sync request %s", request.id)
