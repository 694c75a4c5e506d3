"""Ports for persisting facility state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

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


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ControllerRepository(Repository[Controller], Protocol):
    def get(self, cid: int) -> Controller | None: ...

    def list_all(self) -> Sequence[Controller]: ...

    def list_cids(self) -> set[int]: ...

    def list_on_roster_cids(self) -> set[int]: ...

    def operating_initials_in_use(self) -> set[str]: ...


@runtime_checkable
class CertificationRepository(Repository[Certification], Protocol):
    def list_for(self, cid: int) -> Sequence[Certification]: ...

    def delete_for(self, cid: int) -> int: ...


@runtime_checkable
class ActivityRepository(Repository[Activity], Protocol):
    def list_for(self, cid: int) -> Sequence[Activity]: ...

    def list_all(self) -> Sequence[Activity]: ...

    def replace_for(self, cid: int, minutes_by_month: Mapping[str, int]) -> None:
        """Drop every row of ``cid`` and insert one per month."""
        ...

    def update_minutes(self, cid: int, month: str, minutes: int) -> int:
        """Update an existing row, returning the number of rows affected."""
        ...


@runtime_checkable
class SoloCertificationRepository(Repository[SoloCertification], Protocol):
    def list_all(self) -> Sequence[SoloCertification]: ...

    def delete(self, entity: SoloCertification) -> None: ...


@runtime_checkable
class NoShowRepository(Repository[NoShowEntry], Protocol):
    def list_all(self) -> Sequence[NoShowEntry]: ...

    def delete(self, entity: NoShowEntry) -> None: ...


@runtime_checkable
class SyncRequestRepository(Repository[SyncRequest], Protocol):
    def list_pending(self, action: str) -> Sequence[SyncRequest]: ...

    def delete(self, request_id: str) -> None: ...
