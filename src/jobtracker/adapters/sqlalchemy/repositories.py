"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, select

from jobtracker.adapters.sqlalchemy.mappings import (
    analyzed_email_table,
    job_table,
    user_job_table,
)
from jobtracker.domain.model import AnalyzedEmail, Job, UserJob

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy import CursorResult
    from sqlalchemy.orm import Session


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlAlchemyJobRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Job) -> None:
        self.session.add(entity)
        self.session.flush()

    def get(self, job_id: int) -> Job | None:
        return self.session.get(Job, job_id)

    def list_all(self) -> Sequence[Job]:
        stmt = select(Job).order_by(job_table.c.id)
        return self.session.execute(stmt).scalars().all()

    def search_by_title(self, title: str, *, limit: int) -> Sequence[Job]:
        term = title.strip()
        stmt = (
            select(Job)
            .where(job_table.c.title.is_not(None))
            .where(job_table.c.title.ilike(f"%{_escape_like(term)}%", escape="\\"))
            .order_by(job_table.c.created_at.desc(), job_table.c.id.desc())
            .limit(limit)
        )
        return self.session.execute(stmt).scalars().all()

    def delete_if_exists(self, job_id: int) -> bool:
        stmt = delete(Job).where(job_table.c.id == job_id)
        result = cast("CursorResult[object]", self.session.execute(stmt))
        return result.rowcount == 1


class SqlAlchemyUserJobRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: UserJob) -> None:
        self.session.add(entity)

    def get(self, user_id: UUID, job_id: int) -> UserJob | None:
        stmt = (
            select(UserJob)
            .where(user_job_table.c.user_id == user_id)
            .where(user_job_table.c.job_id == job_id)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_by_job(self, job_id: int) -> Sequence[UserJob]:
        stmt = (
            select(UserJob)
            .where(user_job_table.c.job_id == job_id)
            .order_by(user_job_table.c.created_at)
        )
        return self.session.execute(stmt).scalars().all()

    def update(self, entity: UserJob) -> None:
        self.session.add(entity)

    def remove(self, entity: UserJob) -> None:
        self.session.delete(entity)


class SqlAlchemyAnalyzedEmailRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: AnalyzedEmail) -> None:
        self.session.add(entity)

    def exists(self, *, user_id: UUID, message_id: str) -> bool:
        stmt = (
            select(analyzed_email_table.c.id)
            .where(analyzed_email_table.c.user_id == user_id)
            .where(analyzed_email_table.c.message_id == message_id)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none() is not None

    def list_by_matched_job(self, job_id: int) -> Sequence[AnalyzedEmail]:
        stmt = select(AnalyzedEmail).where(analyzed_email_table.c.matched_job_id == job_id)
        return self.session.execute(stmt).scalars().all()

    def update(self, entity: AnalyzedEmail) -> None:
        self.session.add(entity)


if TYPE_CHECKING:
    from jobtracker.domain.ports.persistence import (
        AnalyzedEmailRepository,
        JobRepository,
        UserJobRepository,
    )

    _session_stub = cast("Session", object())
    _job_repo: JobRepository = SqlAlchemyJobRepository(_session_stub)
    _user_job_repo: UserJobRepository = SqlAlchemyUserJobRepository(_session_stub)
    _email_repo: AnalyzedEmailRepository = SqlAlchemyAnalyzedEmailRepository(_session_stub)
