from __future__ import annotations

import threading
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from jobtracker import app
from jobtracker.adapters.sqlalchemy.unit_of_work import is_started, shutdown
from jobtracker.domain.model import UserJobStatus
from tests.helpers.jobs import (
    FakeJobRepository,
    FakeJobTrackingRepositories,
    FakeUnitOfWork,
    make_job,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from jobtracker.domain.matching import PotentialMatch


@pytest.fixture
def unit_of_work() -> FakeUnitOfWork:
    return FakeUnitOfWork(
        FakeJobTrackingRepositories(
            jobs=FakeJobRepository(
                [
                    make_job("Software Engineer", "Acme Inc", job_id=1),
                    make_job("Software Engineer II", "Acme Inc.", job_id=2),
                ]
            )
        )
    )


@pytest.fixture
def default_database(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    shutdown()
    yield
    shutdown()


def test_find_matching_job(unit_of_work: FakeUnitOfWork) -> None:
    result = app.find_matching_job(
        "Engineer II", "ACME INC.", unit_of_work_factory=unit_of_work.factory
    )

    assert result.is_match is True
    assert result.matched_job is not None
    assert result.matched_job.id == 2
    assert result.similarity == 1.0


def test_find_potential_matches(unit_of_work: FakeUnitOfWork) -> None:
    matches = app.find_potential_matches(1, unit_of_work_factory=unit_of_work.factory)

    assert [match.job.id for match in matches] == [2]


def test_merge_jobs_reports_expected_failures(unit_of_work: FakeUnitOfWork) -> None:
    result = app.merge_jobs(1, 1, unit_of_work_factory=unit_of_work.factory)

    assert result.success is False
    assert result.message == "Source and target jobs cannot be the same"


def test_merge_jobs_converts_unexpected_errors_into_a_result() -> None:
    def broken_factory() -> FakeUnitOfWork:
        raise RuntimeError("database unavailable")

    result = app.merge_jobs(1, 2, unit_of_work_factory=broken_factory)

    assert result.success is False
    assert result.message == app.MERGE_ERROR_MESSAGE


def test_duplicate_threshold_comes_from_environment(
    unit_of_work: FakeUnitOfWork,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("JOBTRACKER_DUPLICATE_THRESHOLD", "0.99")

    assert app.find_potential_matches(1, unit_of_work_factory=unit_of_work.factory) == []


def test_track_email_analysis_validates_and_records(unit_of_work: FakeUnitOfWork) -> None:
    user_id = uuid4()
    payload = {
        "messageId": "m-42",
        "subject": "Interview invitation",
        "receivedDate": "2024-06-03T08:30:00Z",
        "companyName": "Acme Inc",
        "jobTitle": "Software Engineer II",
        "status": "Interviewing",
    }

    outcome = app.track_email_analysis(
        payload, user_id=user_id, unit_of_work_factory=unit_of_work.factory
    )

    assert outcome.is_recognized is True
    assert outcome.created_job is False
    link = unit_of_work.repositories.user_jobs.get(user_id, 2)
    assert link is not None
    assert link.status is UserJobStatus.INTERVIEWING


@pytest.mark.usefixtures("default_database")
def test_default_unit_of_work_starts_database_lazily() -> None:
    assert not is_started()

    result = app.find_matching_job("Software Engineer", "Acme")

    assert result.is_match is False
    assert is_started()


@pytest.mark.usefixtures("default_database")
def test_concurrent_first_calls_start_database_once(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("DATABASE_URI", f"sqlite+pysqlite:///{tmp_path / 'jobs.db'}")
    barrier = threading.Barrier(2)
    results: list[list[PotentialMatch]] = []
    errors: list[BaseException] = []

    def worker() -> None:
        barrier.wait()
        try:
            results.append(app.find_potential_matches(1))
        except BaseException as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert errors == []
    assert results == [[], []]
    assert is_started()
