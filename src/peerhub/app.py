"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from peerhub.adapters.bundle import parse_import_payload
from peerhub.adapters.keys import build_key_provisioner
from peerhub.adapters.sqlalchemy.unit_of_work import SqlAlchemyPeerUnitOfWork, is_started, startup
from peerhub.adapters.webhook import WebhookDeliveryError, WebhookNotifier
from peerhub.config import get_import_config, get_webhook_config
from peerhub.domain.inventory import NewPeer
from peerhub.domain.inventory import add_peer as add_peer_to_inventory
from peerhub.domain.inventory import create_group as create_group_in_inventory
from peerhub.domain.inventory import list_groups as list_inventory_groups
from peerhub.domain.inventory import list_peers as list_inventory_peers
from peerhub.domain.model import DEFAULT_GROUP_COLOR, PeerStatus
from peerhub.domain.ports.unit_of_work import PeerUnitOfWork
from peerhub.domain.transfer import (
    ImportPolicy,
    export_inventory,
    import_candidates,
)

if TYPE_CHECKING:
    from datetime import datetime

    from peerhub.config import ImportConfig
    from peerhub.domain.model import Peer, PeerGroup
    from peerhub.domain.ports import KeyProvisioner
    from peerhub.domain.transfer import ExportBundle, ImportCompletionHook, ImportReport

UnitOfWorkFactory = Callable[[], PeerUnitOfWork]


log = getLogger(__name__)


def _resolve_unit_of_work(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyPeerUnitOfWork


def _policy_from_config(config: ImportConfig) -> ImportPolicy:
    return ImportPolicy(
        allowed_ips=config.default_allowed_ips,
        dns=config.default_dns,
        persistent_keepalive=config.default_persistent_keepalive,
        strict_key_format=config.strict_key_format,
    )


def _guard_delivery(notifier: ImportCompletionHook) -> ImportCompletionHook:
    def notify(report: ImportReport) -> None:
        try:
            notifier(report)
        except WebhookDeliveryError as exc:
            log.warning("Import finished but the completion webhook failed: %s", exc)

    return notify


def export_peers(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Callable[[], datetime] | None = None,
) -> ExportBundle:
    """Export the configured inventory as a bundle."""

    return export_inventory(
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory), clock=clock
    )


def import_peers(
    payload: str | bytes,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    key_provisioner: KeyProvisioner | None = None,
    import_config: ImportConfig | None = None,
    on_complete: ImportCompletionHook | None = None,
) -> ImportReport:
    """Parse ``payload`` and merge its peers into the configured inventory.

    Raises ``BundleFormatError`` before touching the store when the payload is not a
    peer list, and ``SnapshotError`` when the inventory cannot be read.
    """

    candidates = parse_import_payload(payload)
    config = import_config or get_import_config()
    effective_uow = _resolve_unit_of_work(unit_of_work_factory)
    effective_provisioner = key_provisioner or build_key_provisioner(config.key_provider)
    hook = on_complete or WebhookNotifier.from_config(get_webhook_config())

    log.info(
        "Starting peer import: records=%s, key_provider=%s, strict_key_format=%s",
        len(candidates),
        config.key_provider,
        config.strict_key_format,
    )

    return import_candidates(
        candidates,
        unit_of_work_factory=effective_uow,
        key_provisioner=effective_provisioner,
        policy=_policy_from_config(config),
        on_complete=_guard_delivery(hook) if hook is not None else None,
    )


def add_peer(  # noqa: PLR0913
    name: str,
    *,
    public_key: str | None = None,
    private_key: str | None = None,
    allowed_ips: str | None = None,
    dns: str | None = None,
    persistent_keepalive: int | None = None,
    group_name: str | None = None,
    status: PeerStatus = PeerStatus.DISCONNECTED,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    key_provisioner: KeyProvisioner | None = None,
    import_config: ImportConfig | None = None,
) -> Peer:
    config = import_config or get_import_config()
    new_peer = NewPeer(
        name=name.strip(),
        public_key=public_key,
        private_key=private_key,
        allowed_ips=allowed_ips or config.default_allowed_ips,
        dns=dns or config.default_dns,
        persistent_keepalive=(
            config.default_persistent_keepalive
            if persistent_keepalive is None
            else persistent_keepalive
        ),
        group_name=group_name,
        status=status,
    )
    return add_peer_to_inventory(
        new_peer,
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
        key_provisioner=key_provisioner or build_key_provisioner(config.key_provider),
    )


def create_group(
    name: str,
    *,
    color: str | None = None,
    description: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> PeerGroup:
    return create_group_in_inventory(
        name.strip(),
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
        color=color or DEFAULT_GROUP_COLOR,
        description=description,
    )


def list_peers(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> list[Peer]:
    return list_inventory_peers(unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory))


def list_groups(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> list[PeerGroup]:
    return list_inventory_groups(unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory))
