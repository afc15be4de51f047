"""SQLAlchemy mapping metadata for the jobtracker domain model."""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from jobtracker.domain.model import AnalyzedEmail, Job, UserJob, UserJobStatus

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

job_table = Table(
    "job",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String, nullable=True),
    Column("business_name", String, nullable=True),
    Column("location", String, nullable=True),
    Column("work_type", String, nullable=True),
    Column("job_type", String, nullable=True),
    Column("pay_range", String, nullable=True),
    Column("url", String, nullable=True),
    Column("description", Text, nullable=True),
    Column("posted_at", UTCDateTime(), nullable=True),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("is_new", Boolean, nullable=False, default=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_job_title", "title"),
)

user_job_table = Table(
    "user_job",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", UUIDColumnType, nullable=False),
    Column("job_id", Integer, ForeignKey("job.id", ondelete="CASCADE"), nullable=False),
    Column("status", Enum(UserJobStatus, native_enum=False), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    UniqueConstraint("user_id", "job_id", name="uq_user_job_user_job"),
    Index("ix_user_job_job_id", "job_id"),
)

analyzed_email_table = Table(
    "analyzed_email",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", UUIDColumnType, nullable=False),
    Column("message_id", String, nullable=False),
    Column("subject", String, nullable=False, default=""),
    Column("received_at", UTCDateTime(), nullable=True),
    Column("analyzed_at", UTCDateTime(), nullable=False),
    Column("matched_job_id", Integer, ForeignKey("job.id"), nullable=False),
    Column("similarity", Float, nullable=True),
    Column("key_phrases", JSON, nullable=False, default=list),
    Column("suggested_actions", Text, nullable=True),
    UniqueConstraint("user_id", "message_id", name="uq_analyzed_email_message"),
    Index("ix_analyzed_email_matched_job_id", "matched_job_id"),
)


_MAPPERS_LOCK = threading.Lock()


def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model; later calls are no-ops."""

    with _MAPPERS_LOCK:
        if mapper_registry.mappers:
            return mapper_registry

        log.info("Starting SQLAlchemy mappers")

        mapper_registry.map_imperatively(Job, job_table)
        mapper_registry.map_imperatively(UserJob, user_job_table)
        mapper_registry.map_imperatively(AnalyzedEmail, analyzed_email_table)

        configure_mappers()
    return mapper_registry
