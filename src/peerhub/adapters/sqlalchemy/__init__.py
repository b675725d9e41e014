"""SQLAlchemy adapter package for peerhub."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import SqlAlchemyPeerGroupRepository, SqlAlchemyPeerRepository
from .unit_of_work import (
    SqlAlchemyPeerUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyPeerGroupRepository",
    "SqlAlchemyPeerRepository",
    "SqlAlchemyPeerUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
