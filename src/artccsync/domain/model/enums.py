"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Facility staff and training role codes."""

    ATM = "ATM"
    DATM = "DATM"
    TA = "TA"
    FE = "FE"
    EC = "EC"
    WM = "WM"
    AFE = "AFE"
    AEC = "AEC"
    AWM = "AWM"
    INS = "INS"
    MTR = "MTR"


class CertificationValue(StrEnum):
    NONE = "none"
    TRAINING = "training"
    SOLO = "solo"
    CERTIFIED = "certified"


class SyncAction(StrEnum):
    """Actions understood on the sync request queue."""

    VATUSA_SYNC = "VATUSA_SYNC"


class OffRosterCertificationPolicy(StrEnum):
    """Which predicate decides whether an off-roster controller loses certifications.

    ``STRIP_WHEN_EMPTY`` is the historical default: it only deletes when the controller
    has no certification rows, so in practice it never removes any.
    ``STRIP_WHEN_PRESENT`` deletes whenever rows exist.
    """

    STRIP_WHEN_EMPTY = "strip_when_empty"
    STRIP_WHEN_PRESENT = "strip_when_present"
