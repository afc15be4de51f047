from __future__ import annotations

import pytest

from jobtracker.domain.matching import STATUS_RANKS, is_ranked, rank_of, should_adopt
from jobtracker.domain.model import UserJobStatus

RANKED = [
    UserJobStatus.APPLIED,
    UserJobStatus.REVIEWED,
    UserJobStatus.INTERVIEWING,
    UserJobStatus.TECHNICAL_ASSESSMENT,
    UserJobStatus.OFFERED,
]
UNRANKED = [
    UserJobStatus.NEW,
    UserJobStatus.PENDING,
    UserJobStatus.ARCHIVED,
    UserJobStatus.GHOSTING,
]


def test_pipeline_ranks_are_strictly_increasing() -> None:
    assert [rank_of(status) for status in RANKED] == [0, 1, 2, 3, 4]
    assert set(STATUS_RANKS) == set(RANKED)


@pytest.mark.parametrize("status", [*UNRANKED, UserJobStatus.REJECTED])
def test_statuses_outside_the_pipeline_have_no_rank(status: UserJobStatus) -> None:
    assert rank_of(status) is None
    assert not is_ranked(status)


@pytest.mark.parametrize("current", list(UserJobStatus))
def test_rejected_always_wins(current: UserJobStatus) -> None:
    assert should_adopt(current, UserJobStatus.REJECTED) is True


@pytest.mark.parametrize(
    ("current", "candidate"),
    [
        (current, candidate)
        for index, current in enumerate(RANKED)
        for candidate in RANKED[index + 1 :]
    ],
)
def test_higher_ranked_status_is_adopted(
    current: UserJobStatus,
    candidate: UserJobStatus,
) -> None:
    assert should_adopt(current, candidate) is True
    assert should_adopt(candidate, current) is False


@pytest.mark.parametrize("status", RANKED)
def test_equal_status_is_not_adopted(status: UserJobStatus) -> None:
    assert should_adopt(status, status) is False


@pytest.mark.parametrize("unranked", UNRANKED)
@pytest.mark.parametrize("ranked", RANKED)
def test_unranked_statuses_never_win_or_lose(
    unranked: UserJobStatus,
    ranked: UserJobStatus,
) -> None:
    assert should_adopt(unranked, ranked) is False
    assert should_adopt(ranked, unranked) is False


@pytest.mark.parametrize("candidate", [*RANKED, *UNRANKED])
def test_rejected_is_absorbing(candidate: UserJobStatus) -> None:
    assert should_adopt(UserJobStatus.REJECTED, candidate) is False
