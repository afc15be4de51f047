"""Attach analysed recruiting emails to jobs and advance the user's tracking status.

The mailbox client and the language-model classification live outside this module;
it consumes their output as an :class:`EmailAnalysis` and decides whether the email
belongs to an existing job or describes a new one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from jobtracker.domain.matching import MatchFinder, should_adopt
from jobtracker.domain.model import AnalyzedEmail, Job, UserJob, UserJobStatus, utcnow

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from uuid import UUID

    from jobtracker.domain.ports.unit_of_work import (
        JobTrackingRepositories,
        JobTrackingUnitOfWork,
    )


log = getLogger(__name__)

UNKNOWN_POSITION = "Unknown Position"
NEW_JOB_SIMILARITY = 1.0


@dataclass(frozen=True, slots=True)
class EmailAnalysis:
    """Job facts extracted from one email by the classification service."""

    message_id: str
    subject: str
    received_at: datetime
    company_name: str | None = None
    job_title: str | None = None
    status: UserJobStatus = UserJobStatus.APPLIED
    key_phrases: tuple[str, ...] = ()
    suggested_actions: str | None = None


@dataclass(slots=True)
class EmailTrackingOutcome:
    subject: str
    received_at: datetime
    status: UserJobStatus
    is_recognized: bool = False
    skipped: bool = False
    created_job: bool = False
    job: Job | None = None
    similarity: float | None = None
    notes: list[str] = field(default_factory=list[str])


def record_email_analysis(
    analysis: EmailAnalysis,
    *,
    user_id: UUID,
    unit_of_work_factory: Callable[[], JobTrackingUnitOfWork],
    finder: MatchFinder | None = None,
) -> EmailTrackingOutcome:
    """Persist what one analysed email says about the user's applications."""

    effective_finder = finder or MatchFinder()
    outcome = EmailTrackingOutcome(
        subject=analysis.subject,
        received_at=analysis.received_at,
        status=analysis.status,
    )

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        if repositories.analyzed_emails.exists(user_id=user_id, message_id=analysis.message_id):
            log.info("Skipping already analysed email: %s", analysis.subject)
            outcome.skipped = True
            return outcome

        company = (analysis.company_name or "").strip()
        if not company:
            log.warning("Could not extract company name from email: %s", analysis.subject)
            outcome.notes.append("missing company name")
            return outcome

        title = (analysis.job_title or "").strip() or UNKNOWN_POSITION
        match = effective_finder.match_incoming(repositories.jobs, title, company)
        if match.is_match and match.matched_job is not None:
            job = match.matched_job
            similarity = match.similarity
            _track_status(repositories, user_id=user_id, job=job, status=analysis.status)
        else:
            job = _create_job(repositories, title=title, company=company, analysis=analysis)
            similarity = NEW_JOB_SIMILARITY
            repositories.user_jobs.add(
                UserJob(user_id=user_id, job_id=_job_id(job), status=analysis.status)
            )
            outcome.created_job = True

        repositories.analyzed_emails.add(
            AnalyzedEmail(
                user_id=user_id,
                message_id=analysis.message_id,
                matched_job_id=_job_id(job),
                subject=analysis.subject,
                received_at=analysis.received_at,
                similarity=similarity,
                key_phrases=list(analysis.key_phrases),
                suggested_actions=analysis.suggested_actions,
            )
        )
        uow.commit()

    outcome.is_recognized = True
    outcome.job = job
    outcome.similarity = similarity
    return outcome


def _track_status(
    repositories: JobTrackingRepositories,
    *,
    user_id: UUID,
    job: Job,
    status: UserJobStatus,
) -> None:
    job_id = _job_id(job)
    link = repositories.user_jobs.get(user_id, job_id)
    if link is None:
        log.info("Tracking job %s for user %s with status %s", job_id, user_id, status)
        repositories.user_jobs.add(UserJob(user_id=user_id, job_id=job_id, status=status))
        return
    if should_adopt(link.status, status):
        log.info("Updating job %s status from %s to %s", job_id, link.status, status)
        link.change_status(status)
        repositories.user_jobs.update(link)
    else:
        log.info(
            "Keeping current status %s for job %s (new status %s not applied)",
            link.status,
            job_id,
            status,
        )


def _create_job(
    repositories: JobTrackingRepositories,
    *,
    title: str,
    company: str,
    analysis: EmailAnalysis,
) -> Job:
    now = utcnow()
    job = Job(
        title=title,
        business_name=company,
        posted_at=analysis.received_at,
        is_new=True,
        created_at=now,
        updated_at=now,
    )
    repositories.jobs.add(job)
    log.info("No match found, created job %s for %s", job.id, job)
    return job


def _job_id(job: Job) -> int:
    if job.id is None:
        raise RuntimeError(f"Job {job} has no id; the job repository must assign one on add")
    return job.id
