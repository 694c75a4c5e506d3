"""Facility airspace membership for controlling callsigns."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FacilityAirspace:
    """Callsigns of the form ``PREFIX[_...]_SUFFIX`` belong to the facility."""

    prefixes: frozenset[str]
    suffixes: frozenset[str]

    @classmethod
    def from_codes(cls, prefixes: tuple[str, ...], suffixes: tuple[str, ...]) -> FacilityAirspace:
        return cls(
            prefixes=frozenset(code.upper() for code in prefixes),
            suffixes=frozenset(code.upper() for code in suffixes),
        )

    def contains(self, callsign: str) -> bool:
        segments = callsign.strip().upper().split("_")
        if len(segments) < 2:  # noqa: PLR2004
            return False
        return segments[0] in self.prefixes and segments[-1] in self.suffixes
