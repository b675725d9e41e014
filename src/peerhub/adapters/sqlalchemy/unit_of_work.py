"""SQLAlchemy-backed unit of work for the peer inventory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Literal

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from peerhub.adapters.sqlalchemy.mappings import (
    GROUP_NAME_INDEX,
    PEER_NAME_INDEX,
    PEER_PUBLIC_KEY_CONSTRAINT,
    create_all_tables,
    start_mappers,
)
from peerhub.adapters.sqlalchemy.repositories import (
    SqlAlchemyPeerGroupRepository,
    SqlAlchemyPeerRepository,
)
from peerhub.config import get_database_config
from peerhub.domain.ports import (
    DuplicateGroupError,
    DuplicatePeerError,
    PeerIdentityField,
    PeerRepositories,
    RepositoryCollection,
    StoreError,
)

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine


_SQLITE_PUBLIC_KEY_VIOLATION: Final[str] = "UNIQUE constraint failed: wireguard_peer.public_key"


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call peerhub.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, schema, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri, future=True
    )
    start_mappers()
    create_all_tables(resolved_engine)

    _STATE.engine = resolved_engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


def translate_store_error(exc: SQLAlchemyError) -> StoreError:
    """Map a failed write onto the domain error taxonomy.

    Uniqueness violations are recognised by the index or constraint named in the
    driver message. SQLite names the index for expression indexes and the column
    for the public key constraint; PostgreSQL always names the constraint.
    """

    if not isinstance(exc, IntegrityError):
        return StoreError(str(exc))
    message = str(exc.orig)
    if PEER_NAME_INDEX in message:
        return DuplicatePeerError(PeerIdentityField.NAME)
    if GROUP_NAME_INDEX in message:
        return DuplicateGroupError("Group with this name already exists")
    if PEER_PUBLIC_KEY_CONSTRAINT in message or _SQLITE_PUBLIC_KEY_VIOLATION in message:
        return DuplicatePeerError(PeerIdentityField.PUBLIC_KEY)
    return StoreError(message)


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self.session = None
        return False

    def commit(self) -> None:
        """Commit pending writes; a rejected commit leaves the session rolled back."""
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise translate_store_error(exc) from exc
        except Exception as exc:
            # drivers raise some bind errors unwrapped, e.g. OverflowError from pysqlite
            self.session.rollback()
            raise StoreError(f"Could not store changes: {exc}") from exc

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class SqlAlchemyPeerUnitOfWork(BaseSqlAlchemyUnitOfWork[PeerRepositories]):
    """Unit of work managing SQLAlchemy sessions for peers and groups."""

    def _build_repositories(self, session: Session) -> PeerRepositories:
        return PeerRepositories(
            peers=SqlAlchemyPeerRepository(session),
            groups=SqlAlchemyPeerGroupRepository(session),
        )


if TYPE_CHECKING:
    from peerhub.domain.ports import PeerUnitOfWork

    _uow_peer_check: PeerUnitOfWork = SqlAlchemyPeerUnitOfWork()
