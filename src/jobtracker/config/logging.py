"""Logging set-up for the jobtracker entry points."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "JOBTRACKER_LOG_LEVEL"

# Loggers that are chatty at INFO during every start-up (migration checks, pool events).
_QUIET_LOGGERS = ("alembic.runtime.migration", "sqlalchemy.engine")


def _level_from_env(default: int) -> int:
    raw = os.getenv(LOG_LEVEL_ENV)
    if not raw:
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger for CLI use.

    ``level`` wins over ``JOBTRACKER_LOG_LEVEL``, which wins over INFO. Migration and
    engine loggers stay at WARNING unless DEBUG is requested.
    """

    effective = level if level is not None else _level_from_env(logging.INFO)
    logging.basicConfig(
        level=effective,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if effective > logging.DEBUG:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
