"""VATUSA roster adapter."""

from __future__ import annotations

from .client import VatusaAPIError, VatusaClient, VatusaRateLimitedError
from .schema import MemberResponse, RosterResponse, TransferChecklistResponse, VatusaMember
from .translator import translate_checklist, translate_member

__all__ = [
    "MemberResponse",
    "RosterResponse",
    "TransferChecklistResponse",
    "VatusaAPIError",
    "VatusaClient",
    "VatusaMember",
    "VatusaRateLimitedError",
    "translate_checklist",
    "translate_member",
]
