"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from jobtracker.domain.model import AnalyzedEmail, Job, UserJob

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class JobRepository(Repository[Job], Protocol):
    """Persistence contract for canonical jobs.

    ``add`` must leave ``job.id`` populated once it returns.
    """

    def get(self, job_id: int) -> Job | None: ...

    def list_all(self) -> Sequence[Job]: ...

    def search_by_title(self, title: str, *, limit: int) -> Sequence[Job]: ...

    def delete_if_exists(self, job_id: int) -> bool:
        """Delete the job if it is still present and report whether a row was removed."""
        ...


@runtime_checkable
class UserJobRepository(Repository[UserJob], Protocol):
    """Persistence contract for per-user job tracking links."""

    def get(self, user_id: UUID, job_id: int) -> UserJob | None: ...

    def list_by_job(self, job_id: int) -> Sequence[UserJob]: ...

    def update(self, entity: UserJob) -> None: ...

    def remove(self, entity: UserJob) -> None: ...


@runtime_checkable
class AnalyzedEmailRepository(Repository[AnalyzedEmail], Protocol):
    """Persistence contract for analysed emails referencing jobs."""

    def exists(self, *, user_id: UUID, message_id: str) -> bool: ...

    def list_by_matched_job(self, job_id: int) -> Sequence[AnalyzedEmail]: ...

    def update(self, entity: AnalyzedEmail) -> None: ...
