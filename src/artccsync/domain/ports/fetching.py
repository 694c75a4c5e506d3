"""Ports for reading from the external roster registry and session feeds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True, slots=True)
class RosterMemberRole:
    facility: str
    role: str


@dataclass(frozen=True, slots=True)
class RosterMember:
    """A member as reported by the roster registry.

    ``facility_join`` is kept verbatim; it is parsed while the member is reconciled so
    a malformed value only affects this member.
    """

    cid: int
    first_name: str
    last_name: str
    email: str | None
    rating: int
    facility: str
    facility_join: str
    roles: tuple[RosterMemberRole, ...] = ()
    visiting_facilities: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TransferChecklist:
    home_controller: bool
    pending: bool
    has_rating: bool
    instructor: bool
    staff: bool
    visiting: bool
    overall: bool
    days: int = 0
    visiting_days: int = 0


@dataclass(frozen=True, slots=True)
class AtcSession:
    """One controlling session; ``start`` and ``minutes_on_callsign`` are raw strings."""

    callsign: str
    start: str
    minutes_on_callsign: str


@dataclass(frozen=True, slots=True)
class OnlineController:
    cid: int
    callsign: str
    logon_time: str
    name: str = field(default="", compare=False)


@runtime_checkable
class RosterSource(Protocol):
    """Typed access to the external roster registry."""

    async def get_roster(self) -> list[RosterMember]:
        """Home and visiting members of the local facility."""
        ...

    async def get_member(self, cid: int) -> RosterMember: ...

    async def get_transfer_checklist(self, cid: int) -> TransferChecklist: ...

    async def remove_home_member(self, cid: int, *, by: str, reason: str) -> None: ...

    async def remove_visiting_member(self, cid: int, *, reason: str) -> None: ...

    async def add_visiting_member(self, cid: int) -> None: ...


@runtime_checkable
class ActivitySource(Protocol):
    """Typed access to historical and live controlling sessions."""

    async def get_atc_sessions(self, cid: int, *, start: date | None = None) -> list[AtcSession]: ...

    async def get_online_controllers(self) -> list[OnlineController]: ...


__all__ = [
    "ActivitySource",
    "AtcSession",
    "OnlineController",
    "RosterMember",
    "RosterMemberRole",
    "RosterSource",
    "TransferChecklist",
]
