"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class UserJobStatus(StrEnum):
    """Where a user stands with a tracked job."""

    NEW = "new"
    PENDING = "pending"
    ARCHIVED = "archived"
    REVIEWED = "reviewed"
    GHOSTING = "ghosting"
    APPLIED = "applied"
    INTERVIEWING = "interviewing"
    TECHNICAL_ASSESSMENT = "technical_assessment"
    OFFERED = "offered"
    REJECTED = "rejected"
