"""Translate VATUSA payload models into roster records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artccsync.domain.ports import RosterMember, RosterMemberRole, TransferChecklist

if TYPE_CHECKING:
    from .schema import VatusaMember, VatusaTransferChecklist


def translate_member(member: VatusaMember) -> RosterMember:
    return RosterMember(
        cid=member.cid,
        first_name=member.first_name,
        last_name=member.last_name,
        email=member.email,
        rating=member.rating,
        facility=member.facility,
        facility_join=member.facility_join,
        roles=tuple(RosterMemberRole(facility=role.facility, role=role.role) for role in member.roles),
        visiting_facilities=tuple(
            entry.facility for entry in member.visiting_facilities or ()
        ),
    )


def translate_checklist(checklist: VatusaTransferChecklist) -> TransferChecklist:
    return TransferChecklist(
        home_controller=checklist.home_controller,
        pending=checklist.pending,
        has_rating=checklist.has_rating,
        instructor=checklist.instructor,
        staff=checklist.staff,
        visiting=checklist.visiting,
        overall=checklist.overall,
        days=checklist.days,
        visiting_days=checklist.visiting_days,
    )
