"""SQLAlchemy adapter package for artccsync."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyActivityRepository,
    SqlAlchemyCertificationRepository,
    SqlAlchemyControllerRepository,
    SqlAlchemyNoShowRepository,
    SqlAlchemySoloCertificationRepository,
    SqlAlchemySyncRequestRepository,
)
from .unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyActivityRepository",
    "SqlAlchemyCertificationRepository",
    "SqlAlchemyControllerRepository",
    "SqlAlchemyNoShowRepository",
    "SqlAlchemySoloCertificationRepository",
    "SqlAlchemySyncRequestRepository",
    "SqlAlchemyUnitOfWork",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
