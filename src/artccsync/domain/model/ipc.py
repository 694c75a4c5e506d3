"""Inter-process sync requests queued by the website."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4


def _new_request_id() -> str:
    return str(uuid4())


@dataclass(eq=False, kw_only=True)
class SyncRequest:
    action: str
    payload: str
    id: str = field(default_factory=_new_request_id)
