"""Public domain model surface."""

from __future__ import annotations

from jobtracker.domain.model.analyzed_email import AnalyzedEmail
from jobtracker.domain.model.base import new_id, utcnow
from jobtracker.domain.model.enums import UserJobStatus
from jobtracker.domain.model.job import Job
from jobtracker.domain.model.user_job import UserJob

__all__ = [
    "AnalyzedEmail",
    "Job",
    "UserJob",
    "UserJobStatus",
    "new_id",
    "utcnow",
]
