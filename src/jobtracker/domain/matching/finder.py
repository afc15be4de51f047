"""Job matching policies.

Two policies share the similarity primitive but answer different questions and are
tuned independently:

* :meth:`MatchFinder.match_incoming` decides whether an email-derived
  ``(title, company)`` pair refers to an existing job. Titles only narrow the
  candidate set; the decision rests on company similarity alone.
* :meth:`MatchFinder.find_duplicate_candidates` suggests jobs that duplicate an
  existing one, weighting company similarity twice as heavily as title similarity.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from jobtracker.config.matching import MatchingConfig
from jobtracker.domain.matching.similarity import similarity

if TYPE_CHECKING:
    from collections.abc import Callable

    from jobtracker.domain.model import Job
    from jobtracker.domain.ports.persistence import JobRepository

    type Scorer = Callable[[str | None, str | None], float]


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of matching an incoming job reference."""

    is_match: bool
    matched_job: Job | None = None
    similarity: float = 0.0


NO_MATCH = MatchResult(is_match=False)


@dataclass(frozen=True, slots=True)
class PotentialMatch:
    """A job that may duplicate another, with its composite similarity."""

    job: Job
    similarity: float


# drops float noise so a composite of exactly the threshold compares equal to it
_COMPOSITE_PRECISION = 9


def composite_similarity(title_similarity: float, company_similarity: float) -> float:
    return round((title_similarity + 2 * company_similarity) / 3, _COMPOSITE_PRECISION)


class MatchFinder:
    """Find existing jobs for incoming references and duplicate candidates.

    Repositories are passed per call; the finder holds no job state between calls.
    """

    def __init__(
        self,
        *,
        config: MatchingConfig | None = None,
        scorer: Scorer = similarity,
    ) -> None:
        self.config = config or MatchingConfig()
        self._score = scorer

    def match_incoming(self, jobs: JobRepository, title: str, company: str) -> MatchResult:
        """Return the first title-prefiltered job whose company clears the threshold."""

        candidates = jobs.search_by_title(title, limit=self.config.candidate_limit)
        log.debug(
            "Matching incoming reference: title=%r, company=%r, candidates=%s",
            title,
            company,
            len(candidates),
        )
        for candidate in candidates:
            company_similarity = self._score(candidate.business_name, company)
            if company_similarity >= self.config.incoming_company_threshold:
                log.info(
                    "Matched %r / %r to job %s (company similarity %.3f)",
                    company,
                    title,
                    candidate.id,
                    company_similarity,
                )
                return MatchResult(
                    is_match=True,
                    matched_job=candidate,
                    similarity=company_similarity,
                )
        log.info("No existing job matches %r / %r", company, title)
        return NO_MATCH

    def find_duplicate_candidates(self, jobs: JobRepository, job_id: int) -> list[PotentialMatch]:
        """Scan every other job and return likely duplicates, best first.

        A missing source job yields an empty list.
        """

        source = jobs.get(job_id)
        if source is None:
            log.warning("Job with ID %s not found", job_id)
            return []

        matches: list[PotentialMatch] = []
        for job in jobs.list_all():
            if job.id == job_id:
                continue
            title_similarity = self._score(source.title, job.title)
            company_similarity = self._score(source.business_name, job.business_name)
            overall = composite_similarity(title_similarity, company_similarity)
            if overall > self.config.duplicate_threshold:
                matches.append(PotentialMatch(job=job, similarity=overall))

        matches.sort(key=lambda match: match.similarity, reverse=True)
        log.debug("Found %s potential duplicates of job %s", len(matches), job_id)
        return matches
