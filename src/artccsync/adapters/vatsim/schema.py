"""VATSIM stats API and live data feed schemas."""

from __future__ import annotations

from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class VatsimBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class VatsimAtcSession(VatsimBaseModel):
    """One ATC session; the stats API nests connection details under ``connection_id``."""

    callsign: str
    start: str
    minutes_on_callsign: str

    @model_validator(mode="before")
    @classmethod
    def _flatten_connection(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        payload = cast(dict[str, Any], data)
        connection = payload.get("connection_id")
        if not isinstance(connection, dict):
            return payload
        flattened = dict(cast(dict[str, Any], connection))
        flattened.update({key: value for key, value in payload.items() if key != "connection_id"})
        return flattened

    @field_validator("minutes_on_callsign", mode="before")
    @classmethod
    def _stringify_minutes(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class AtcSessionPage(VatsimBaseModel):
    count: int | None = None
    next: str | None = None
    results: list[VatsimAtcSession] = Field(default_factory=list[VatsimAtcSession])


class StatusData(VatsimBaseModel):
    v3: list[str]


class StatusDocument(VatsimBaseModel):
    data: StatusData


class LiveController(VatsimBaseModel):
    cid: int
    callsign: str
    logon_time: str
    name: str = ""


class LiveFeed(VatsimBaseModel):
    controllers: list[LiveController] = Field(default_factory=list[LiveController])
