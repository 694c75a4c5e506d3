"""VATUSA API response schemas."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class VatusaBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "VATUSA %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class VatusaRole(VatusaBaseModel):
    facility: str
    role: str


class VatusaVisitingFacility(VatusaBaseModel):
    facility: str


class VatusaMember(VatusaBaseModel):
    cid: int
    first_name: str = Field(alias="fname")
    last_name: str = Field(alias="lname")
    email: str | None = None
    facility: str
    rating: int
    facility_join: str = ""
    roles: list[VatusaRole] = Field(default_factory=list[VatusaRole])
    visiting_facilities: list[VatusaVisitingFacility] | None = None


class VatusaTransferChecklist(VatusaBaseModel):
    home_controller: bool = Field(alias="homecontroller")
    pending: bool
    has_rating: bool = Field(alias="hasRating")
    instructor: bool
    staff: bool
    visiting: bool
    overall: bool
    days: int = 0
    visiting_days: int = Field(default=0, alias="visitingDays")


class RosterResponse(BaseModel):
    data: list[VatusaMember]


class MemberResponse(BaseModel):
    data: VatusaMember


class TransferChecklistResponse(BaseModel):
    data: VatusaTransferChecklist
