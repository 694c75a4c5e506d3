"""Which externally reported roles a controller holds locally."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from artccsync.domain.errors import RecordFormatError
from artccsync.domain.model import Role

if TYPE_CHECKING:
    from collections.abc import Iterable

    from artccsync.domain.ports import RosterMember

SYNCED_ROLES: Final[frozenset[Role]] = frozenset({Role.ATM, Role.DATM, Role.TA, Role.MTR})
INSTRUCTOR_RATINGS: Final[frozenset[int]] = frozenset({8, 9, 10})


def parse_role(code: str) -> Role:
    """Decode a role code; unknown codes are a format error."""

    try:
        return Role(code.strip().upper())
    except ValueError as exc:
        raise RecordFormatError(f"Unknown role code {code!r}") from exc


def parse_roles(codes: Iterable[str]) -> frozenset[Role]:
    return frozenset(parse_role(code) for code in codes)


def synced_roles(member: RosterMember, facility: str) -> frozenset[Role]:
    """Roles the registry grants ``member`` at ``facility``.

    Only staff roles scoped to the local facility are taken over; roles for other
    facilities and role codes outside ``SYNCED_ROLES`` are ignored.
    """

    facility_code = facility.upper()
    roles: set[Role] = set()
    for entry in member.roles:
        if entry.facility.upper() != facility_code:
            continue
        try:
            role = parse_role(entry.role)
        except RecordFormatError:
            continue
        if role in SYNCED_ROLES:
            roles.add(role)
    if member.facility.upper() == facility_code and member.rating in INSTRUCTOR_RATINGS:
        roles.add(Role.INS)
    return frozenset(roles)


def merge_roles(existing: frozenset[Role], synced: frozenset[Role]) -> frozenset[Role]:
    """Union of local and synced roles; automatic sync never revokes a role."""

    return existing | synced
