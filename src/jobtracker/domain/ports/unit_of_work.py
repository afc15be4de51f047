"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from jobtracker.domain.ports.persistence import (
        AnalyzedEmailRepository,
        JobRepository,
        UserJobRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection.

    Leaving the context with an exception rolls back; nothing is persisted unless
    ``commit`` is called.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class JobTrackingRepositories(RepositoryCollection):
    """Repositories touched by matching, merging and email tracking."""

    jobs: JobRepository
    user_jobs: UserJobRepository
    analyzed_emails: AnalyzedEmailRepository


type JobTrackingUnitOfWork = UnitOfWork[JobTrackingRepositories]
