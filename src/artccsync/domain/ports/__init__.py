"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import (
    ActivitySource,
    AtcSession,
    OnlineController,
    RosterMember,
    RosterMemberRole,
    RosterSource,
    TransferChecklist,
)
from .persistence import (
    ActivityRepository,
    CertificationRepository,
    ControllerRepository,
    NoShowRepository,
    Repository,
    SoloCertificationRepository,
    SyncRequestRepository,
)
from .unit_of_work import (
    FacilityRepositories,
    FacilityUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ActivityRepository",
    "ActivitySource",
    "AtcSession",
    "CertificationRepository",
    "ControllerRepository",
    "FacilityRepositories",
    "FacilityUnitOfWork",
    "NoShowRepository",
    "OnlineController",
    "Repository",
    "RepositoryCollection",
    "RosterMember",
    "RosterMemberRole",
    "RosterSource",
    "SoloCertificationRepository",
    "SyncRequestRepository",
    "TransferChecklist",
    "UnitOfWork",
]
