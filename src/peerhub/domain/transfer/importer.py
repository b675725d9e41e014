"""Merge an externally supplied candidate set into the peer inventory.

Records are processed in input order against one snapshot of the inventory taken
when the batch starts. The snapshot's name and key sets grow with every record that
is stored, so duplicates inside the batch are caught the same way as duplicates of
existing peers. Every record is committed on its own: a failing record never undoes
the ones before it, and an aborted batch keeps whatever was already stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from peerhub.domain.model import (
    DEFAULT_ALLOWED_IPS,
    DEFAULT_DNS,
    DEFAULT_PERSISTENT_KEEPALIVE,
    Peer,
    PeerStatus,
    is_wireguard_key,
    name_key,
)
from peerhub.domain.ports import (
    NAME_TAKEN_MESSAGE,
    PUBLIC_KEY_TAKEN_MESSAGE,
    KeyGenerationError,
    StoreError,
)
from peerhub.domain.transfer.bundle import CandidatePeer, RejectedCandidate
from peerhub.domain.transfer.groups import GroupDirectory
from peerhub.domain.transfer.results import ImportReport, ImportResult

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from peerhub.domain.ports import KeyProvisioner, PeerRepositories, PeerUnitOfWork
    from peerhub.domain.transfer.bundle import ImportCandidate

log = getLogger(__name__)

INVALID_PUBLIC_KEY_MESSAGE: Final[str] = "Invalid public key format"
KEY_GENERATION_FAILED_MESSAGE: Final[str] = "Key generation failed"

type ImportCompletionHook = Callable[[ImportReport], None]


class SnapshotError(RuntimeError):
    """Raised when the inventory cannot be read before an import; nothing is stored."""


@dataclass(frozen=True, slots=True)
class ImportPolicy:
    """Field defaults and checks applied to every imported record."""

    allowed_ips: str = DEFAULT_ALLOWED_IPS
    dns: str = DEFAULT_DNS
    persistent_keepalive: int = DEFAULT_PERSISTENT_KEEPALIVE
    strict_key_format: bool = False


@dataclass(slots=True)
class InventorySnapshot:
    """Lower-cased names, public keys and groups seen by the running batch."""

    names: set[str] = field(default_factory=set)
    public_keys: set[str] = field(default_factory=set)
    groups: GroupDirectory = field(default_factory=GroupDirectory)

    @classmethod
    def read(cls, repositories: PeerRepositories) -> InventorySnapshot:
        try:
            peers = repositories.peers.list_all()
            groups = repositories.groups.list_all()
        except StoreError as exc:
            raise SnapshotError(f"Could not read the peer inventory: {exc}") from exc
        return cls(
            names={peer.name_key for peer in peers},
            public_keys={peer.public_key for peer in peers},
            groups=GroupDirectory.from_groups(groups),
        )

    def name_taken(self, name: str) -> bool:
        return name_key(name) in self.names

    def key_taken(self, public_key: str) -> bool:
        return public_key in self.public_keys

    def claim(self, peer: Peer) -> None:
        self.names.add(peer.name_key)
        self.public_keys.add(peer.public_key)


def import_candidates(
    candidates: Iterable[ImportCandidate],
    *,
    unit_of_work_factory: Callable[[], PeerUnitOfWork],
    key_provisioner: KeyProvisioner,
    policy: ImportPolicy | None = None,
    on_complete: ImportCompletionHook | None = None,
) -> ImportReport:
    """Import ``candidates`` and return one result per candidate, in input order.

    Raises :class:`SnapshotError` when the inventory cannot be read up front. Every
    other problem is reported as a failed result for the record concerned.
    ``on_complete`` runs once after the batch when at least one peer was stored.
    """

    effective_policy = policy or ImportPolicy()
    batch = list(candidates)
    log.info("Importing %s peers", len(batch))

    results: list[ImportResult] = []
    with unit_of_work_factory() as uow:
        snapshot = InventorySnapshot.read(uow.repositories)
        for candidate in batch:
            result = _import_one(
                candidate,
                uow=uow,
                snapshot=snapshot,
                key_provisioner=key_provisioner,
                policy=effective_policy,
            )
            if result.success:
                log.debug("Imported peer %s", result.name)
            else:
                log.warning("Skipped peer %r: %s", result.name, result.error)
            results.append(result)

    report = ImportReport(results=tuple(results))
    log.info(
        "Finished import: succeeded=%s, failed=%s", report.success_count, report.fail_count
    )
    if on_complete is not None and report.success_count > 0:
        on_complete(report)
    return report


def _import_one(
    candidate: ImportCandidate,
    *,
    uow: PeerUnitOfWork,
    snapshot: InventorySnapshot,
    key_provisioner: KeyProvisioner,
    policy: ImportPolicy,
) -> ImportResult:
    if isinstance(candidate, RejectedCandidate):
        return ImportResult.failed(candidate.name, candidate.error)

    name = candidate.name
    if snapshot.name_taken(name):
        return ImportResult.failed(name, NAME_TAKEN_MESSAGE)

    try:
        public_key, private_key = _effective_keys(candidate, key_provisioner)
    except KeyGenerationError as exc:
        return ImportResult.failed(name, str(exc) or KEY_GENERATION_FAILED_MESSAGE)

    if (
        policy.strict_key_format
        and candidate.public_key is not None
        and not is_wireguard_key(public_key)
    ):
        return ImportResult.failed(name, INVALID_PUBLIC_KEY_MESSAGE)

    if snapshot.key_taken(public_key):
        return ImportResult.failed(name, PUBLIC_KEY_TAKEN_MESSAGE)

    try:
        peer = _build_peer(
            candidate,
            public_key=public_key,
            private_key=private_key,
            snapshot=snapshot,
            policy=policy,
        )
    except ValueError as exc:
        return ImportResult.failed(name, str(exc))

    try:
        uow.repositories.peers.add(peer)
        uow.commit()
    except StoreError as exc:
        uow.rollback()
        return ImportResult.failed(name, str(exc))

    snapshot.claim(peer)
    return ImportResult.succeeded(name)


def _effective_keys(
    candidate: CandidatePeer, key_provisioner: KeyProvisioner
) -> tuple[str, str | None]:
    if candidate.public_key:
        return candidate.public_key, candidate.private_key
    pair = key_provisioner()
    return pair.public_key, pair.private_key


def _build_peer(
    candidate: CandidatePeer,
    *,
    public_key: str,
    private_key: str | None,
    snapshot: InventorySnapshot,
    policy: ImportPolicy,
) -> Peer:
    keepalive = candidate.persistent_keepalive
    return Peer(
        name=candidate.name,
        public_key=public_key,
        private_key=private_key,
        allowed_ips=candidate.allowed_ips or policy.allowed_ips,
        dns=candidate.dns or policy.dns,
        persistent_keepalive=policy.persistent_keepalive if keepalive is None else keepalive,
        group_id=snapshot.groups.resolve(candidate.group_name),
        status=PeerStatus.PENDING,
    )
