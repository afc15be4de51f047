from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from jobtracker.domain.email_tracking import (
    NEW_JOB_SIMILARITY,
    UNKNOWN_POSITION,
    EmailAnalysis,
    record_email_analysis,
)
from jobtracker.domain.model import UserJobStatus
from tests.helpers.jobs import (
    FakeJobRepository,
    FakeJobTrackingRepositories,
    FakeUnitOfWork,
    FakeUserJobRepository,
    make_analyzed_email,
    make_job,
    make_user_job,
)

USER = uuid4()
RECEIVED = datetime(2024, 6, 3, 8, 30, tzinfo=UTC)


def _analysis(
    *,
    company: str | None = "Acme",
    title: str | None = "Backend Engineer",
    status: UserJobStatus = UserJobStatus.APPLIED,
    message_id: str = "msg-1",
) -> EmailAnalysis:
    return EmailAnalysis(
        message_id=message_id,
        subject="Your application to Acme",
        received_at=RECEIVED,
        company_name=company,
        job_title=title,
        status=status,
        key_phrases=("thank you for applying",),
        suggested_actions="Wait for a reply",
    )


def _with_existing_job(*links_statuses: UserJobStatus) -> FakeUnitOfWork:
    job = make_job("Backend Engineer", "Acme", job_id=1)
    links = [make_user_job(1, status, user_id=USER) for status in links_statuses]
    return FakeUnitOfWork(
        FakeJobTrackingRepositories(
            jobs=FakeJobRepository([job]),
            user_jobs=FakeUserJobRepository(links),
        )
    )


def test_unmatched_email_creates_job_link_and_reference() -> None:
    uow = FakeUnitOfWork()

    outcome = record_email_analysis(_analysis(), user_id=USER, unit_of_work_factory=uow.factory)

    assert outcome.is_recognized is True
    assert outcome.created_job is True
    assert outcome.similarity == NEW_JOB_SIMILARITY
    job = outcome.job
    assert job is not None
    assert job.id == 1
    assert job.title == "Backend Engineer"
    assert job.business_name == "Acme"
    assert job.posted_at == RECEIVED
    assert job.is_new is True

    repositories = uow.repositories
    link = repositories.user_jobs.get(USER, 1)
    assert link is not None
    assert link.status is UserJobStatus.APPLIED
    [email] = repositories.analyzed_emails.emails
    assert email.matched_job_id == 1
    assert email.message_id == "msg-1"
    assert email.similarity == NEW_JOB_SIMILARITY
    assert email.key_phrases == ["thank you for applying"]
    assert uow.commits == 1


def test_matched_email_advances_existing_link() -> None:
    uow = _with_existing_job(UserJobStatus.APPLIED)

    outcome = record_email_analysis(
        _analysis(status=UserJobStatus.INTERVIEWING),
        user_id=USER,
        unit_of_work_factory=uow.factory,
    )

    assert outcome.is_recognized is True
    assert outcome.created_job is False
    assert outcome.similarity == pytest.approx(1.0)
    [link] = uow.repositories.user_jobs.links
    assert link.status is UserJobStatus.INTERVIEWING
    assert uow.repositories.user_jobs.updated == [link]
    [email] = uow.repositories.analyzed_emails.emails
    assert email.matched_job_id == 1
    assert len(uow.repositories.jobs.list_all()) == 1


def test_matched_email_never_downgrades_status() -> None:
    uow = _with_existing_job(UserJobStatus.OFFERED)

    record_email_analysis(
        _analysis(status=UserJobStatus.APPLIED),
        user_id=USER,
        unit_of_work_factory=uow.factory,
    )

    [link] = uow.repositories.user_jobs.links
    assert link.status is UserJobStatus.OFFERED
    assert uow.repositories.analyzed_emails.emails


def test_matched_email_starts_tracking_when_user_has_no_link() -> None:
    uow = _with_existing_job()

    record_email_analysis(_analysis(), user_id=USER, unit_of_work_factory=uow.factory)

    link = uow.repositories.user_jobs.get(USER, 1)
    assert link is not None
    assert link.status is UserJobStatus.APPLIED


def test_already_analysed_email_is_skipped() -> None:
    uow = _with_existing_job(UserJobStatus.APPLIED)
    uow.repositories.analyzed_emails.add(make_analyzed_email(1, user_id=USER, message_id="msg-1"))

    outcome = record_email_analysis(_analysis(), user_id=USER, unit_of_work_factory=uow.factory)

    assert outcome.skipped is True
    assert outcome.is_recognized is False
    assert len(uow.repositories.analyzed_emails.emails) == 1
    assert uow.commits == 0


def test_email_without_company_is_not_recognised() -> None:
    uow = FakeUnitOfWork()

    outcome = record_email_analysis(
        _analysis(company="   "),
        user_id=USER,
        unit_of_work_factory=uow.factory,
    )

    assert outcome.is_recognized is False
    assert outcome.notes == ["missing company name"]
    assert uow.repositories.jobs.list_all() == []
    assert uow.repositories.analyzed_emails.emails == []
    assert uow.commits == 0


def test_email_without_title_uses_placeholder_position() -> None:
    uow = FakeUnitOfWork()

    outcome = record_email_analysis(
        _analysis(title=None),
        user_id=USER,
        unit_of_work_factory=uow.factory,
    )

    assert outcome.job is not None
    assert outcome.job.title == UNKNOWN_POSITION
