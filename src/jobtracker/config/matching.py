"""Thresholds for job matching and duplicate discovery."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_float_env, optional_int_env
from .errors import ConfigurationError

DEFAULT_INCOMING_COMPANY_THRESHOLD = 0.7
DEFAULT_DUPLICATE_THRESHOLD = 0.8
DEFAULT_MATCH_CANDIDATE_LIMIT = 10


@dataclass(frozen=True, slots=True)
class MatchingConfig:
    """Decision thresholds used by the match finder.

    ``incoming_company_threshold`` is inclusive (``>=``) and applies to the company
    similarity of an incoming email reference. ``duplicate_threshold`` is exclusive
    (``>``) and applies to the weighted title/company composite.
    """

    incoming_company_threshold: float = DEFAULT_INCOMING_COMPANY_THRESHOLD
    duplicate_threshold: float = DEFAULT_DUPLICATE_THRESHOLD
    candidate_limit: int = DEFAULT_MATCH_CANDIDATE_LIMIT

    def __post_init__(self) -> None:
        for name in ("incoming_company_threshold", "duplicate_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {value}")
        if self.candidate_limit < 1:
            raise ConfigurationError(
                f"candidate_limit must be positive, got {self.candidate_limit}"
            )


def get_matching_config() -> MatchingConfig:
    return MatchingConfig(
        incoming_company_threshold=optional_float_env(
            "JOBTRACKER_INCOMING_COMPANY_THRESHOLD", DEFAULT_INCOMING_COMPANY_THRESHOLD
        ),
        duplicate_threshold=optional_float_env(
            "JOBTRACKER_DUPLICATE_THRESHOLD", DEFAULT_DUPLICATE_THRESHOLD
        ),
        candidate_limit=optional_int_env(
            "JOBTRACKER_MATCH_CANDIDATE_LIMIT", DEFAULT_MATCH_CANDIDATE_LIMIT
        ),
    )
