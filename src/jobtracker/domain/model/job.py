"""Canonical job postings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jobtracker.domain.model.base import utcnow

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class Job:
    """A canonical job posting.

    ``id`` is assigned by storage on first flush and stays stable afterwards.
    """

    title: str | None = None
    business_name: str | None = None

    location: str | None = None
    work_type: str | None = None
    job_type: str | None = None
    pay_range: str | None = None
    url: str | None = None
    description: str | None = None
    posted_at: datetime | None = None

    is_active: bool = True
    is_new: bool = False

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    id: int | None = None

    def __str__(self) -> str:
        return f"{self.business_name or '?'} - {self.title or '?'}"
