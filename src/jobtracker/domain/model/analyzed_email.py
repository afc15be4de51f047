"""Emails that were classified and linked to a job."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jobtracker.domain.model.base import new_id, utcnow

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class AnalyzedEmail:
    """An analysed recruiting email pointing at the job it was matched to."""

    user_id: UUID
    message_id: str
    matched_job_id: int

    subject: str = ""
    received_at: datetime | None = None
    analyzed_at: datetime = field(default_factory=utcnow)

    similarity: float | None = None
    key_phrases: list[str] = field(default_factory=list[str])
    suggested_actions: str | None = None

    id: UUID = field(default_factory=new_id)

    def repoint(self, job_id: int) -> None:
        self.matched_job_id = job_id
