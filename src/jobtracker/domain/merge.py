"""Consolidate duplicate job records.

A merge folds a *source* job into a *target* job: every user's tracking link moves
to the target (or loses to a more advanced link already there), every analysed email
is repointed, and the source job is deleted. All of it happens inside one unit of
work, so a failure at any step leaves storage untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from jobtracker.domain.locks import MERGE_LOCKS, JobLockRegistry
from jobtracker.domain.matching import MatchFinder, should_adopt
from jobtracker.domain.model import UserJob, utcnow

if TYPE_CHECKING:
    from collections.abc import Callable

    from jobtracker.domain.matching import PotentialMatch
    from jobtracker.domain.ports.persistence import AnalyzedEmailRepository, UserJobRepository
    from jobtracker.domain.ports.unit_of_work import JobTrackingUnitOfWork


log = getLogger(__name__)

MERGE_SUCCESS_MESSAGE = "Jobs merged successfully"


class MergeError(Exception):
    """Base class for merges rejected for an expected reason."""


class SameJobMergeError(MergeError):
    def __init__(self, job_id: int) -> None:
        self.job_id = job_id
        super().__init__("Source and target jobs cannot be the same")


class JobNotFoundError(MergeError):
    def __init__(self, job_id: int, *, role: str) -> None:
        self.job_id = job_id
        self.role = role
        super().__init__(f"{role.capitalize()} job {job_id} not found")


class ConcurrentMergeError(MergeError):
    """Raised when the source job disappeared before it could be deleted."""

    def __init__(self, job_id: int) -> None:
        self.job_id = job_id
        super().__init__(f"Source job {job_id} was merged concurrently")


@dataclass(frozen=True, slots=True)
class MergeResult:
    success: bool
    message: str


@dataclass(slots=True)
class _MergeStats:
    links_moved: int = 0
    links_advanced: int = 0
    links_kept: int = 0
    emails_repointed: int = 0


class MergeEngine:
    """Suggest and apply merges of duplicate jobs."""

    def __init__(
        self,
        *,
        unit_of_work_factory: Callable[[], JobTrackingUnitOfWork],
        finder: MatchFinder | None = None,
        locks: JobLockRegistry | None = None,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self.finder = finder or MatchFinder()
        self._locks = locks or MERGE_LOCKS

    def find_potential_matches(self, job_id: int) -> list[PotentialMatch]:
        """Return duplicate suggestions for human review; nothing is applied."""

        with self._unit_of_work_factory() as uow:
            return self.finder.find_duplicate_candidates(uow.repositories.jobs, job_id)

    def merge_jobs(self, source_id: int, target_id: int) -> MergeResult:
        """Fold ``source_id`` into ``target_id``.

        Expected rejections (same id, missing job, source already merged) come back
        as a failed :class:`MergeResult`. Any other exception propagates after the
        unit of work has rolled back.
        """

        try:
            stats = self._merge(source_id, target_id)
        except MergeError as exc:
            log.warning("Merge of job %s into %s rejected: %s", source_id, target_id, exc)
            return MergeResult(success=False, message=str(exc))

        log.info(
            "Merged job %s into %s: links moved=%s, advanced=%s, kept=%s, emails repointed=%s",
            source_id,
            target_id,
            stats.links_moved,
            stats.links_advanced,
            stats.links_kept,
            stats.emails_repointed,
        )
        return MergeResult(success=True, message=MERGE_SUCCESS_MESSAGE)

    def _merge(self, source_id: int, target_id: int) -> _MergeStats:
        if source_id == target_id:
            raise SameJobMergeError(source_id)

        stats = _MergeStats()
        with self._locks.hold(source_id, target_id), self._unit_of_work_factory() as uow:
            repositories = uow.repositories
            if repositories.jobs.get(source_id) is None:
                raise JobNotFoundError(source_id, role="source")
            if repositories.jobs.get(target_id) is None:
                raise JobNotFoundError(target_id, role="target")

            _carry_over_links(repositories.user_jobs, source_id, target_id, stats)
            _repoint_emails(repositories.analyzed_emails, source_id, target_id, stats)

            if not repositories.jobs.delete_if_exists(source_id):
                raise ConcurrentMergeError(source_id)

            uow.commit()
        return stats


def _carry_over_links(
    user_jobs: UserJobRepository,
    source_id: int,
    target_id: int,
    stats: _MergeStats,
) -> None:
    now = utcnow()
    for link in list(user_jobs.list_by_job(source_id)):
        existing = user_jobs.get(link.user_id, target_id)
        if existing is None:
            user_jobs.add(
                UserJob(
                    user_id=link.user_id,
                    job_id=target_id,
                    status=link.status,
                    created_at=link.created_at,
                    updated_at=now,
                )
            )
            stats.links_moved += 1
        elif should_adopt(existing.status, link.status):
            log.debug(
                "User %s: %s on job %s supersedes %s",
                link.user_id,
                link.status,
                source_id,
                existing.status,
            )
            existing.change_status(link.status, at=now)
            user_jobs.update(existing)
            stats.links_advanced += 1
        else:
            stats.links_kept += 1
        user_jobs.remove(link)


def _repoint_emails(
    analyzed_emails: AnalyzedEmailRepository,
    source_id: int,
    target_id: int,
    stats: _MergeStats,
) -> None:
    for email in list(analyzed_emails.list_by_matched_job(source_id)):
        email.repoint(target_id)
        analyzed_emails.update(email)
        stats.emails_repointed += 1
