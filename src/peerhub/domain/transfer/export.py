"""Serialize the whole peer inventory into a portable bundle."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from peerhub.domain.transfer.bundle import ExportBundle, ExportedPeer
from peerhub.domain.transfer.groups import GroupDirectory

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from peerhub.domain.model import Peer, PeerGroup
    from peerhub.domain.ports import PeerUnitOfWork

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def build_export_bundle(
    peers: Iterable[Peer],
    groups: Iterable[PeerGroup],
    *,
    exported_at: datetime,
) -> ExportBundle:
    """Build a bundle from already loaded peers and groups.

    Peers are ordered by name ignoring case, ties broken by id, so two exports of an
    unchanged inventory differ only in ``exported_at``.
    """

    directory = GroupDirectory.from_groups(groups)
    ordered = sorted(peers, key=lambda peer: (peer.name_key, str(peer.id)))
    return ExportBundle(
        exported_at=exported_at,
        peers=tuple(_exported_peer(peer, directory) for peer in ordered),
    )


def export_inventory(
    *,
    unit_of_work_factory: Callable[[], PeerUnitOfWork],
    clock: Callable[[], datetime] | None = None,
) -> ExportBundle:
    """Read peers and groups once and return them as an export bundle."""

    with unit_of_work_factory() as uow:
        peers = list(uow.repositories.peers.list_all())
        groups = list(uow.repositories.groups.list_all())

    bundle = build_export_bundle(peers, groups, exported_at=(clock or _utcnow)())
    log.info("Exported %s peers", bundle.peers_count)
    return bundle


def _exported_peer(peer: Peer, directory: GroupDirectory) -> ExportedPeer:
    return ExportedPeer(
        name=peer.name,
        public_key=peer.public_key,
        private_key=peer.private_key or None,
        allowed_ips=peer.allowed_ips,
        dns=peer.dns or None,
        persistent_keepalive=peer.persistent_keepalive,
        group_name=directory.name_for(peer.group_id),
    )
