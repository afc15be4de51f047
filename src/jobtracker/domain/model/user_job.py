"""Per-user tracking of job applications."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jobtracker.domain.model.base import new_id, utcnow
from jobtracker.domain.model.enums import UserJobStatus

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class UserJob:
    """A user's tracked status against one job. Unique per (user_id, job_id)."""

    user_id: UUID
    job_id: int
    status: UserJobStatus = UserJobStatus.NEW

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    id: UUID = field(default_factory=new_id)

    def change_status(self, status: UserJobStatus, *, at: datetime | None = None) -> None:
        self.status = status
        self.updated_at = at or utcnow()
