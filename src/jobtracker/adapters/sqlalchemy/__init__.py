"""SQLAlchemy adapter package for jobtracker."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyAnalyzedEmailRepository,
    SqlAlchemyJobRepository,
    SqlAlchemyUserJobRepository,
)
from .unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyAnalyzedEmailRepository",
    "SqlAlchemyJobRepository",
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyUserJobRepository",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
