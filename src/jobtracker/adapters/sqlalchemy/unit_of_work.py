"""SQLAlchemy-backed unit of work for job tracking."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from jobtracker.adapters.sqlalchemy.mappings import start_mappers
from jobtracker.adapters.sqlalchemy.migrations import upgrade_head
from jobtracker.adapters.sqlalchemy.repositories import (
    SqlAlchemyAnalyzedEmailRepository,
    SqlAlchemyJobRepository,
    SqlAlchemyUserJobRepository,
)
from jobtracker.config import get_database_config
from jobtracker.domain.ports.unit_of_work import JobTrackingRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine


log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the adapter is used before ``startup()`` or configured twice."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            sessionmaker(bind=engine, expire_on_commit=False) if engine is not None else None
        )

    def open_session(self) -> Session:
        if self.sessions is None:
            raise StartupError(
                "Database not initialised; call "
                "jobtracker.adapters.sqlalchemy.unit_of_work.startup() first."
            )
        return self.sessions()


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to a database and migrate it to the latest schema.

    Without ``engine`` or ``database_uri`` the configured database is used
    (``DATABASE_URI`` or the SQLite file under the data directory).
    """

    if _STATE.engine is not None and not force:
        raise StartupError("Database already initialised; pass force=True to rebind.")

    if engine is None:
        engine = create_engine(database_uri or get_database_config().uri, future=True)
    start_mappers()
    upgrade_head(engine=engine)
    _STATE.bind(engine)
    log.info("Job tracking database ready at %s", engine.url.render_as_string())


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the bound engine; ``startup()`` may be called again afterwards."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.bind(None)


class SqlAlchemyUnitOfWork:
    """One session, one transaction: commit explicitly, roll back on any exception.

    The adapter must be started before construction, so a missing ``startup()``
    surfaces where the unit of work is created rather than on first use.
    """

    def __init__(self) -> None:
        if not is_started():
            raise StartupError("Cannot create a unit of work before startup()")
        self._session: Session | None = None
        self._repositories: JobTrackingRepositories | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already in use")
        session = _STATE.open_session()
        self._session = session
        self._repositories = JobTrackingRepositories(
            jobs=SqlAlchemyJobRepository(session),
            user_jobs=SqlAlchemyUserJobRepository(session),
            analyzed_emails=SqlAlchemyAnalyzedEmailRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        try:
            if exc_type is not None:
                self.rollback()
        finally:
            self.session.close()
            self._session = None
            self._repositories = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not active; use it as a context manager")
        return self._session

    @property
    def repositories(self) -> JobTrackingRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not active; use it as a context manager")
        return self._repositories


if TYPE_CHECKING:
    from jobtracker.domain.ports.unit_of_work import JobTrackingUnitOfWork

    _uow_check: JobTrackingUnitOfWork = SqlAlchemyUnitOfWork()
