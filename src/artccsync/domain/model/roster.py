"""Roster entities: controllers and their certifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from artccsync.domain.model.enums import CertificationValue, Role

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class Controller:
    """A controller known to the facility, on the roster or not.

    ``cid`` is the externally issued identity; ``id`` is the local surrogate key and
    stays ``None`` until the row is flushed.
    """

    cid: int
    first_name: str
    last_name: str
    email: str | None = None
    rating: int = 0
    home_facility: str = ""
    is_on_roster: bool = False
    roles: frozenset[Role] = field(default_factory=frozenset[Role])
    operating_initials: str | None = None
    join_date: datetime | None = None
    loa_until: datetime | None = None
    id: int | None = None

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def mark_off_roster(self) -> None:
        """Clear roster-owned fields. Roles are local state and are left alone."""

        self.is_on_roster = False
        self.home_facility = ""
        self.join_date = None
        self.operating_initials = None


@dataclass(eq=False, kw_only=True)
class Certification:
    cid: int
    name: str
    value: CertificationValue
    changed_on: datetime
    set_by: int
    id: int | None = None
