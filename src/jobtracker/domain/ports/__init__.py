"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    AnalyzedEmailRepository,
    JobRepository,
    Repository,
    UserJobRepository,
)
from .unit_of_work import (
    JobTrackingRepositories,
    JobTrackingUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AnalyzedEmailRepository",
    "JobRepository",
    "JobTrackingRepositories",
    "JobTrackingUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
    "UserJobRepository",
]
