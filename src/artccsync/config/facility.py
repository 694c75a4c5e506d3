"""Facility identity and airspace configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars, split_csv

DEFAULT_POSITION_SUFFIXES = ("DEL", "GND", "TWR", "APP", "DEP", "CTR")


@dataclass(frozen=True, slots=True)
class FacilityConfig:
    """The local facility and the callsigns that count as its airspace."""

    code: str
    position_prefixes: tuple[str, ...]
    position_suffixes: tuple[str, ...] = DEFAULT_POSITION_SUFFIXES


def get_facility_config() -> FacilityConfig:
    values = require_env_vars(("FACILITY_CODE", "FACILITY_POSITION_PREFIXES"))
    suffixes = optional_env_var("FACILITY_POSITION_SUFFIXES")
    return FacilityConfig(
        code=values["FACILITY_CODE"].strip().upper(),
        position_prefixes=split_csv(values["FACILITY_POSITION_PREFIXES"]),
        position_suffixes=split_csv(suffixes) if suffixes else DEFAULT_POSITION_SUFFIXES,
    )
