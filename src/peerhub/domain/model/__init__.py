"""Public domain model surface."""

from __future__ import annotations

from peerhub.domain.model.base import Entity, new_id
from peerhub.domain.model.enums import PeerStatus
from peerhub.domain.model.peer import (
    DEFAULT_ALLOWED_IPS,
    DEFAULT_DNS,
    DEFAULT_GROUP_COLOR,
    DEFAULT_PERSISTENT_KEEPALIVE,
    MAX_PERSISTENT_KEEPALIVE,
    Peer,
    PeerGroup,
)
from peerhub.domain.model.primitives import is_wireguard_key, name_key

__all__ = [
    "DEFAULT_ALLOWED_IPS",
    "DEFAULT_DNS",
    "DEFAULT_GROUP_COLOR",
    "DEFAULT_PERSISTENT_KEEPALIVE",
    "MAX_PERSISTENT_KEEPALIVE",
    "Entity",
    "Peer",
    "PeerGroup",
    "PeerStatus",
    "is_wireguard_key",
    "name_key",
    "new_id",
]
