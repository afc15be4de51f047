"""Application orchestration entry points."""

from __future__ import annotations

import threading
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from jobtracker.adapters.email_analysis import parse_email_analysis
from jobtracker.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from jobtracker.config import get_matching_config
from jobtracker.domain.email_tracking import record_email_analysis
from jobtracker.domain.matching import MatchFinder, MatchResult
from jobtracker.domain.merge import MergeEngine, MergeResult
from jobtracker.domain.ports.unit_of_work import JobTrackingUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from jobtracker.domain.email_tracking import EmailTrackingOutcome
    from jobtracker.domain.matching import PotentialMatch

UnitOfWorkFactory = Callable[[], JobTrackingUnitOfWork]

MERGE_ERROR_MESSAGE = "An error occurred while merging jobs"

_STARTUP_LOCK = threading.Lock()


log = getLogger(__name__)


def _resolve_unit_of_work(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    """Return a factory that opens the default database lazily on first use."""

    if unit_of_work_factory is not None:
        return unit_of_work_factory

    def factory() -> JobTrackingUnitOfWork:
        if not is_started():
            with _STARTUP_LOCK:
                if not is_started():
                    startup()
        return SqlAlchemyUnitOfWork()

    return factory


def _build_finder() -> MatchFinder:
    return MatchFinder(config=get_matching_config())


def find_matching_job(
    title: str,
    company: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> MatchResult:
    """Look up an existing job for an incoming ``(title, company)`` reference."""

    effective_uow = _resolve_unit_of_work(unit_of_work_factory)
    finder = _build_finder()
    with effective_uow() as uow:
        return finder.match_incoming(uow.repositories.jobs, title, company)


def find_potential_matches(
    job_id: int,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[PotentialMatch]:
    """Suggest jobs that may duplicate ``job_id``."""

    engine = MergeEngine(
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
        finder=_build_finder(),
    )
    return engine.find_potential_matches(job_id)


def merge_jobs(
    source_id: int,
    target_id: int,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> MergeResult:
    """Merge ``source_id`` into ``target_id``, reporting every failure as a result."""

    log.info("Attempting to merge job %s into %s", source_id, target_id)
    engine = MergeEngine(
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
        finder=_build_finder(),
    )
    try:
        return engine.merge_jobs(source_id, target_id)
    except Exception:
        log.exception("Error merging job %s into %s", source_id, target_id)
        return MergeResult(success=False, message=MERGE_ERROR_MESSAGE)


def track_email_analysis(
    payload: Mapping[str, object],
    *,
    user_id: UUID,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> EmailTrackingOutcome:
    """Validate a classifier payload and record it against the user's jobs."""

    analysis = parse_email_analysis(payload)
    outcome = record_email_analysis(
        analysis,
        user_id=user_id,
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
        finder=_build_finder(),
    )
    log.info(
        "Tracked email %r: recognized=%s, created_job=%s, skipped=%s",
        outcome.subject,
        outcome.is_recognized,
        outcome.created_job,
        outcome.skipped,
    )
    return outcome
