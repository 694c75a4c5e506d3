"""Public domain model surface."""

from __future__ import annotations

from artccsync.domain.model.activity import Activity
from artccsync.domain.model.enums import (
    CertificationValue,
    OffRosterCertificationPolicy,
    Role,
    SyncAction,
)
from artccsync.domain.model.ipc import SyncRequest
from artccsync.domain.model.roster import Certification, Controller
from artccsync.domain.model.training import NoShowEntry, SoloCertification

__all__ = [
    "Activity",
    "Certification",
    "CertificationValue",
    "Controller",
    "NoShowEntry",
    "OffRosterCertificationPolicy",
    "Role",
    "SoloCertification",
    "SyncAction",
    "SyncRequest",
]
