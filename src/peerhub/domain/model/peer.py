"""Inventory entities: WireGuard peers and the groups they are filed under."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

from peerhub.domain.model.base import Entity
from peerhub.domain.model.enums import PeerStatus
from peerhub.domain.model.primitives import name_key

if TYPE_CHECKING:
    from uuid import UUID

DEFAULT_GROUP_COLOR: Final[str] = "#3b82f6"
DEFAULT_ALLOWED_IPS: Final[str] = "10.0.0.2/32"
DEFAULT_DNS: Final[str] = "1.1.1.1"
DEFAULT_PERSISTENT_KEEPALIVE: Final[int] = 25
MAX_PERSISTENT_KEEPALIVE: Final[int] = 65535


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False, kw_only=True)
class PeerGroup(Entity):
    """Named, coloured category. Peers reference groups by id, bundles by name."""

    name: str
    color: str = DEFAULT_GROUP_COLOR
    description: str | None = None
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Group name must not be blank")

    @property
    def name_key(self) -> str:
        return name_key(self.name)


@dataclass(eq=False, kw_only=True)
class Peer(Entity):
    """A VPN endpoint identified by its public key.

    ``private_key`` is only known when the key pair was provisioned by us or handed
    over together with the public key.
    """

    name: str
    public_key: str
    allowed_ips: str
    dns: str
    persistent_keepalive: int
    private_key: str | None = None
    group_id: UUID | None = None
    status: PeerStatus = PeerStatus.DISCONNECTED
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Peer name must not be blank")
        if not self.public_key:
            raise ValueError("Peer public key must not be empty")
        if self.persistent_keepalive < 0:
            raise ValueError("Persistent keepalive must be non-negative")

    @property
    def name_key(self) -> str:
        return name_key(self.name)
