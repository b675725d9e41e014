"""Services for managing single peers and groups outside of bulk imports."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from peerhub.domain.model import (
    DEFAULT_ALLOWED_IPS,
    DEFAULT_DNS,
    DEFAULT_GROUP_COLOR,
    DEFAULT_PERSISTENT_KEEPALIVE,
    Peer,
    PeerGroup,
    PeerStatus,
)
from peerhub.domain.ports import DuplicateGroupError, DuplicatePeerError, PeerIdentityField

if TYPE_CHECKING:
    from collections.abc import Callable

    from peerhub.domain.ports import KeyProvisioner, PeerUnitOfWork

log = getLogger(__name__)


class UnknownGroupError(LookupError):
    """Raised when a peer is filed under a group that does not exist."""


@dataclass(frozen=True, slots=True, kw_only=True)
class NewPeer:
    name: str
    public_key: str | None = None
    private_key: str | None = None
    allowed_ips: str = DEFAULT_ALLOWED_IPS
    dns: str = DEFAULT_DNS
    persistent_keepalive: int = DEFAULT_PERSISTENT_KEEPALIVE
    group_name: str | None = None
    status: PeerStatus = PeerStatus.DISCONNECTED


def add_peer(
    new_peer: NewPeer,
    *,
    unit_of_work_factory: Callable[[], PeerUnitOfWork],
    key_provisioner: KeyProvisioner,
) -> Peer:
    """Store one peer, provisioning keys when no public key is given.

    Unlike imports, a named group must exist: a typo on the command line should not
    silently produce an ungrouped peer.
    """

    with unit_of_work_factory() as uow:
        peers = uow.repositories.peers
        if peers.exists(name=new_peer.name):
            raise DuplicatePeerError(PeerIdentityField.NAME)

        public_key = new_peer.public_key
        private_key = new_peer.private_key
        if not public_key:
            pair = key_provisioner()
            public_key, private_key = pair.public_key, pair.private_key
        if peers.exists(public_key=public_key):
            raise DuplicatePeerError(PeerIdentityField.PUBLIC_KEY)

        group_id = None
        if new_peer.group_name:
            group = uow.repositories.groups.get_by_name(new_peer.group_name)
            if group is None:
                raise UnknownGroupError(f"No group named {new_peer.group_name!r}")
            group_id = group.id

        peer = Peer(
            name=new_peer.name,
            public_key=public_key,
            private_key=private_key,
            allowed_ips=new_peer.allowed_ips,
            dns=new_peer.dns,
            persistent_keepalive=new_peer.persistent_keepalive,
            group_id=group_id,
            status=new_peer.status,
        )
        peers.add(peer)
        uow.commit()

    log.info("Added peer %s", peer.name)
    return peer


def create_group(
    name: str,
    *,
    unit_of_work_factory: Callable[[], PeerUnitOfWork],
    color: str = DEFAULT_GROUP_COLOR,
    description: str | None = None,
) -> PeerGroup:
    with unit_of_work_factory() as uow:
        groups = uow.repositories.groups
        if groups.get_by_name(name) is not None:
            raise DuplicateGroupError(f"Group with name {name!r} already exists")
        group = PeerGroup(name=name, color=color, description=description)
        groups.add(group)
        uow.commit()

    log.info("Created group %s", group.name)
    return group


def list_peers(*, unit_of_work_factory: Callable[[], PeerUnitOfWork]) -> list[Peer]:
    with unit_of_work_factory() as uow:
        return list(uow.repositories.peers.list_all())


def list_groups(*, unit_of_work_factory: Callable[[], PeerUnitOfWork]) -> list[PeerGroup]:
    with unit_of_work_factory() as uow:
        return list(uow.repositories.groups.list_all())
