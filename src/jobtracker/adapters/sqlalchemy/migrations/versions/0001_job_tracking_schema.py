"""Job tracking schema: jobs, user job links and analysed emails.

Revision ID: 0001_job_tracking_schema
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_job_tracking_schema"
down_revision = None
branch_labels = None
depends_on = None

USER_JOB_STATUSES = (
    "NEW",
    "PENDING",
    "ARCHIVED",
    "REVIEWED",
    "GHOSTING",
    "APPLIED",
    "INTERVIEWING",
    "TECHNICAL_ASSESSMENT",
    "OFFERED",
    "REJECTED",
)


def upgrade() -> None:
    op.create_table(
        "job",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("business_name", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("work_type", sa.String(), nullable=True),
        sa.Column("job_type", sa.String(), nullable=True),
        sa.Column("pay_range", sa.String(), nullable=True),
        sa.Column("url", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("posted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_new", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_job"),
    )
    op.create_index("ix_job_title", "job", ["title"])

    op.create_table(
        "user_job",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("job_id", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*USER_JOB_STATUSES, name="userjobstatus", native_enum=False),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_user_job"),
        sa.ForeignKeyConstraint(
            ["job_id"],
            ["job.id"],
            name="fk_user_job_job_id_job",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("user_id", "job_id", name="uq_user_job_user_job"),
    )
    op.create_index("ix_user_job_job_id", "user_job", ["job_id"])

    op.create_table(
        "analyzed_email",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("message_id", sa.String(), nullable=False),
        sa.Column("subject", sa.String(), nullable=False),
        sa.Column("received_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("analyzed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("matched_job_id", sa.Integer(), nullable=False),
        sa.Column("similarity", sa.Float(), nullable=True),
        sa.Column("key_phrases", sa.JSON(), nullable=False),
        sa.Column("suggested_actions", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_analyzed_email"),
        sa.ForeignKeyConstraint(
            ["matched_job_id"],
            ["job.id"],
            name="fk_analyzed_email_matched_job_id_job",
        ),
        sa.UniqueConstraint("user_id", "message_id", name="uq_analyzed_email_message"),
    )
    op.create_index("ix_analyzed_email_matched_job_id", "analyzed_email", ["matched_job_id"])


def downgrade() -> None:
    op.drop_index("ix_analyzed_email_matched_job_id", table_name="analyzed_email")
    op.drop_table("analyzed_email")
    op.drop_index("ix_user_job_job_id", table_name="user_job")
    op.drop_table("user_job")
    op.drop_index("ix_job_title", table_name="job")
    op.drop_table("job")
