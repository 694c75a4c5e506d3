"""Monthly activity report for on-roster controllers."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from artccsync.domain.ports import FacilityUnitOfWork

CURRENCY_MINUTES: Final[int] = 180
CURRENCY_WINDOW_MONTHS: Final[int] = 3


@dataclass(frozen=True, slots=True)
class ControllerActivity:
    cid: int
    name: str
    operating_initials: str | None
    rating: int
    loa_until: datetime | None
    minutes: tuple[int, ...]
    violation: bool

    @property
    def total_minutes(self) -> int:
        return sum(self.minutes)


def build_activity_report(
    uow: FacilityUnitOfWork,
    months: Sequence[str],
) -> list[ControllerActivity]:
    """Minutes per requested month for every on-roster controller, sorted by cid.

    A controller is flagged when the first three requested months add up to less
    than the currency requirement.
    """

    repositories = uow.repositories
    minutes: defaultdict[int, dict[str, int]] = defaultdict(dict)
    for activity in repositories.activity.list_all():
        minutes[activity.cid][activity.month] = activity.minutes

    report: list[ControllerActivity] = []
    for controller in sorted(repositories.controllers.list_all(), key=lambda c: c.cid):
        if not controller.is_on_roster:
            continue
        per_month = tuple(minutes[controller.cid].get(month, 0) for month in months)
        report.append(
            ControllerActivity(
                cid=controller.cid,
                name=controller.name,
                operating_initials=controller.operating_initials,
                rating=controller.rating,
                loa_until=controller.loa_until,
                minutes=per_month,
                violation=sum(per_month[:CURRENCY_WINDOW_MONTHS]) < CURRENCY_MINUTES,
            )
        )
    return report
