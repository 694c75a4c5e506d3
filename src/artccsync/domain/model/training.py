"""Training records with a limited lifetime."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class SoloCertification:
    """Time-boxed authorization to work ``position`` without direct supervision."""

    cid: int
    issued_by: int
    position: str
    created_date: datetime
    expiration_date: datetime
    reported: bool = False
    id: int | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expiration_date < now


@dataclass(eq=False, kw_only=True)
class NoShowEntry:
    cid: int
    reported_by: int
    entry_type: str
    created_date: datetime
    notified: bool = False
    notes: str | None = None
    id: int | None = None
