"""Ports for persisting the peer inventory."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

from peerhub.domain.model import Peer, PeerGroup

if TYPE_CHECKING:
    from collections.abc import Sequence


class PeerIdentityField(StrEnum):
    """The two peer attributes that must be unique across the inventory."""

    NAME = "name"
    PUBLIC_KEY = "public_key"


NAME_TAKEN_MESSAGE: Final[str] = "Peer with this name already exists"
PUBLIC_KEY_TAKEN_MESSAGE: Final[str] = "Peer with this public key already exists"

_DUPLICATE_MESSAGES: Final[dict[PeerIdentityField, str]] = {
    PeerIdentityField.NAME: NAME_TAKEN_MESSAGE,
    PeerIdentityField.PUBLIC_KEY: PUBLIC_KEY_TAKEN_MESSAGE,
}


class StoreError(RuntimeError):
    """Raised when the backing store rejects or fails a read or write."""


class DuplicatePeerError(StoreError):
    """Raised when a write would break peer name or public key uniqueness."""

    def __init__(self, field: PeerIdentityField) -> None:
        super().__init__(_DUPLICATE_MESSAGES[field])
        self.field = field


class DuplicateGroupError(StoreError):
    """Raised when a group name is already taken (case-insensitively)."""


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...

    def list_all(self) -> Sequence[TEntity]: ...


@runtime_checkable
class PeerRepository(Repository[Peer], Protocol):
    """Persistence contract for peers."""

    def exists(self, *, name: str | None = None, public_key: str | None = None) -> bool:
        """Return whether a peer matches ``name`` (case-insensitively) or ``public_key``."""
        ...


@runtime_checkable
class PeerGroupRepository(Repository[PeerGroup], Protocol):
    """Persistence contract for peer groups."""

    def get_by_name(self, name: str) -> PeerGroup | None: ...
