"""Domain port definitions for adapters."""

from __future__ import annotations

from .keys import KeyGenerationError, KeyPair, KeyProvisioner
from .persistence import (
    NAME_TAKEN_MESSAGE,
    PUBLIC_KEY_TAKEN_MESSAGE,
    DuplicateGroupError,
    DuplicatePeerError,
    PeerGroupRepository,
    PeerIdentityField,
    PeerRepository,
    Repository,
    StoreError,
)
from .unit_of_work import (
    PeerRepositories,
    PeerUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "NAME_TAKEN_MESSAGE",
    "PUBLIC_KEY_TAKEN_MESSAGE",
    "DuplicateGroupError",
    "DuplicatePeerError",
    "KeyGenerationError",
    "KeyPair",
    "KeyProvisioner",
    "PeerGroupRepository",
    "PeerIdentityField",
    "PeerRepositories",
    "PeerRepository",
    "PeerUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "StoreError",
    "UnitOfWork",
]
