"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from peerhub.domain.ports.persistence import PeerGroupRepository, PeerRepository


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection.

    ``commit`` raises :class:`~peerhub.domain.ports.persistence.StoreError` (or its
    ``DuplicatePeerError`` subclass) when the store rejects pending writes; the unit
    of work stays usable after ``rollback``.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class PeerRepositories(RepositoryCollection):
    """Repositories backing the peer inventory."""

    peers: PeerRepository
    groups: PeerGroupRepository


type PeerUnitOfWork = UnitOfWork[PeerRepositories]
