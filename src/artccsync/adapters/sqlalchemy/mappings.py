"""SQLAlchemy mapping metadata for the facility domain model."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    orm,
)
from sqlalchemy.orm import configure_mappers

from artccsync.domain.model import (
    Activity,
    Certification,
    CertificationValue,
    Controller,
    NoShowEntry,
    Role,
    SoloCertification,
    SyncRequest,
)
from artccsync.domain.roles import parse_roles

if TYPE_CHECKING:
    from enum import StrEnum

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class RoleSetType(TypeDecorator[frozenset[Role]]):
    """Role sets stored as a sorted JSON list of role codes."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: frozenset[Role] | None, dialect: Dialect) -> str:
        _ = dialect
        if not value:
            return "[]"
        return json.dumps(sorted(role.value for role in value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> frozenset[Role]:
        _ = dialect
        if not value:
            return frozenset()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            raise TypeError(f"Stored roles are not a list: {value!r}")
        return parse_roles(str(item) for item in cast(list[Any], loaded))


def _enum_values(enum_cls: type[StrEnum]) -> list[str]:
    return [member.value for member in enum_cls]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

controller_table = Table(
    "controller",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("cid", Integer, nullable=False, unique=True),
    Column("first_name", String, nullable=False),
    Column("last_name", String, nullable=False),
    Column("email", String, nullable=True),
    Column("rating", Integer, nullable=False, default=0),
    Column("home_facility", String, nullable=False, default=""),
    Column("is_on_roster", Boolean, nullable=False, default=False),
    Column("roles", RoleSetType, nullable=False),
    Column("operating_initials", String(2), nullable=True, unique=True),
    Column("join_date", UTCDateTime, nullable=True),
    Column("loa_until", UTCDateTime, nullable=True),
)

certification_table = Table(
    "certification",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("cid", Integer, nullable=False, index=True),
    Column("name", String, nullable=False),
    Column(
        "value",
        Enum(
            CertificationValue,
            native_enum=False,
            values_callable=_enum_values,
            length=16,
            name="certification_value",
        ),
        nullable=False,
    ),
    Column("changed_on", UTCDateTime, nullable=False),
    Column("set_by", Integer, nullable=False),
    UniqueConstraint("cid", "name"),
)

activity_table = Table(
    "activity",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("cid", Integer, nullable=False, index=True),
    Column("month", String(7), nullable=False),
    Column("minutes", Integer, nullable=False),
    UniqueConstraint("cid", "month"),
)

solo_certification_table = Table(
    "solo_certification",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("cid", Integer, nullable=False, index=True),
    Column("issued_by", Integer, nullable=False),
    Column("position", String, nullable=False),
    Column("reported", Boolean, nullable=False, default=False),
    Column("created_date", UTCDateTime, nullable=False),
    Column("expiration_date", UTCDateTime, nullable=False),
)

no_show_table = Table(
    "no_show",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("cid", Integer, nullable=False, index=True),
    Column("reported_by", Integer, nullable=False),
    Column("entry_type", String, nullable=False),
    Column("created_date", UTCDateTime, nullable=False),
    Column("notified", Boolean, nullable=False, default=False),
    Column("notes", Text, nullable=True),
)

sync_request_table = Table(
    "sync_request",
    mapper_registry.metadata,
    Column("id", String(36), primary_key=True),
    Column("action", String, nullable=False, index=True),
    Column("payload", Text, nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Controller, controller_table)
    mapper_registry.map_imperatively(Certification, certification_table)
    mapper_registry.map_imperatively(Activity, activity_table)
    mapper_registry.map_imperatively(SoloCertification, solo_certification_table)
    mapper_registry.map_imperatively(NoShowEntry, no_show_table)
    mapper_registry.map_imperatively(SyncRequest, sync_request_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
