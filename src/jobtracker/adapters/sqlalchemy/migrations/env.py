"""Alembic environment for the job tracking schema.

Migrations only run through :func:`upgrade_head`, which hands over an open
connection in ``config.attributes``.
"""

from __future__ import annotations

from alembic import context

from jobtracker.adapters.sqlalchemy.mappings import mapper_registry, start_mappers

config = context.config

start_mappers()
target_metadata = mapper_registry.metadata


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is None:
        raise RuntimeError(
            "No connection supplied; run migrations through "
            "jobtracker.adapters.sqlalchemy.migrations.upgrade_head(engine=...)"
        )

    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=True,
        compare_type=True,
        compare_server_default=True,
    )
    with context.begin_transaction():
        context.run_migrations()


run_migrations_online()
