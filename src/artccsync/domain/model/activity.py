"""Controlling activity per controller and month."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, kw_only=True)
class Activity:
    cid: int
    month: str  # "YYYY-MM"
    minutes: int
    id: int | None = None
