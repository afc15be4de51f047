"""Forward-only ordering of application statuses.

Only the pipeline statuses carry a rank. ``REJECTED`` sits outside the order and is
absorbing: it always replaces whatever was tracked before. Every other status
(``NEW``, ``PENDING``, ``ARCHIVED``, ``GHOSTING``) is not eligible to progress and
never wins a conflict, in either direction.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

from jobtracker.domain.model import UserJobStatus

STATUS_RANKS: Final = MappingProxyType(
    {
        UserJobStatus.APPLIED: 0,
        UserJobStatus.REVIEWED: 1,
        UserJobStatus.INTERVIEWING: 2,
        UserJobStatus.TECHNICAL_ASSESSMENT: 3,
        UserJobStatus.OFFERED: 4,
    }
)


def rank_of(status: UserJobStatus) -> int | None:
    """Return the pipeline rank of ``status`` or ``None`` when it is unranked."""

    return STATUS_RANKS.get(status)


def is_ranked(status: UserJobStatus) -> bool:
    return status in STATUS_RANKS


def should_adopt(current: UserJobStatus, candidate: UserJobStatus) -> bool:
    """Decide whether a tracked ``current`` status is replaced by ``candidate``."""

    if candidate == UserJobStatus.REJECTED:
        return True
    current_rank = rank_of(current)
    candidate_rank = rank_of(candidate)
    if current_rank is None or candidate_rank is None:
        return False
    return candidate_rank > current_rank
