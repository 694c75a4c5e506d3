"""Certification cascades triggered by roster and training changes."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from artccsync.domain.model import CertificationValue, OffRosterCertificationPolicy

if TYPE_CHECKING:
    from collections.abc import Sequence

    from artccsync.domain.model import Certification, SoloCertification
    from artccsync.domain.ports import FacilityUnitOfWork

log = getLogger(__name__)


def should_strip_certifications(
    policy: OffRosterCertificationPolicy,
    certifications: Sequence[Certification],
) -> bool:
    """Decide whether an off-roster controller loses its certification rows."""

    match policy:
        case OffRosterCertificationPolicy.STRIP_WHEN_EMPTY:
            return not certifications
        case OffRosterCertificationPolicy.STRIP_WHEN_PRESENT:
            return bool(certifications)


def solo_matches(certification: Certification, position: str) -> bool:
    """Whether ``certification`` is the one a solo on ``position`` was issued against.

    A solo may name the certification directly (``TWR``) or a full position
    (``XYZ_TWR``), in which case the last segment is compared.
    """

    name = certification.name.strip().upper()
    position_code = position.strip().upper()
    return name in {position_code, position_code.rsplit("_", 1)[-1]}


class CertificationLifecycleManager:
    """Applies certification side effects inside a caller-owned unit of work."""

    def __init__(
        self,
        *,
        off_roster_policy: OffRosterCertificationPolicy = (
            OffRosterCertificationPolicy.STRIP_WHEN_EMPTY
        ),
    ) -> None:
        self.off_roster_policy = off_roster_policy

    def handle_off_roster(self, uow: FacilityUnitOfWork, cid: int) -> int:
        """Strip certifications of an off-roster controller when the policy says so."""

        repository = uow.repositories.certifications
        certifications = repository.list_for(cid)
        if not should_strip_certifications(self.off_roster_policy, certifications):
            return 0
        removed = repository.delete_for(cid)
        if removed:
            log.info("Removed %d certifications of off-roster controller %s", removed, cid)
        return removed

    def revert_solo(self, uow: FacilityUnitOfWork, solo: SoloCertification) -> Certification | None:
        """Drop the certification backing ``solo`` from solo to training.

        ``changed_on`` and ``set_by`` keep the values of the original grant.
        """

        for certification in uow.repositories.certifications.list_for(solo.cid):
            if not solo_matches(certification, solo.position):
                continue
            if certification.value != CertificationValue.SOLO:
                continue
            certification.value = CertificationValue.TRAINING
            log.info(
                "Reverted %s certification of %s to training after solo expiry",
                certification.name,
                solo.cid,
            )
            return certification
        return None
