from __future__ import annotations

import pytest

from peerhub.domain.inventory import (
    NewPeer,
    UnknownGroupError,
    add_peer,
    create_group,
    list_groups,
    list_peers,
)
from peerhub.domain.model import PeerStatus
from peerhub.domain.ports import DuplicateGroupError, DuplicatePeerError, PeerIdentityField
from tests.helpers.inventory import (
    InMemoryInventory,
    SequenceKeyProvisioner,
    fake_unit_of_work_factory,
    make_group,
    make_peer,
    peer_names,
)


def test_add_peer_provisions_keys_and_defaults(inventory: InMemoryInventory) -> None:
    provisioner = SequenceKeyProvisioner()

    peer = add_peer(
        NewPeer(name="kiosk"),
        unit_of_work_factory=fake_unit_of_work_factory(inventory),
        key_provisioner=provisioner,
    )

    assert peer.public_key == "generated-public-1"
    assert peer.private_key == "generated-private-1"
    assert peer.status is PeerStatus.DISCONNECTED
    assert peer_names(inventory.peers) == ["kiosk"]


def test_add_peer_rejects_duplicate_name(inventory: InMemoryInventory) -> None:
    inventory.peers.append(make_peer("kiosk"))

    with pytest.raises(DuplicatePeerError) as excinfo:
        add_peer(
            NewPeer(name="KIOSK", public_key="other"),
            unit_of_work_factory=fake_unit_of_work_factory(inventory),
            key_provisioner=SequenceKeyProvisioner(),
        )

    assert excinfo.value.field is PeerIdentityField.NAME
    assert str(excinfo.value) == "Peer with this name already exists"


def test_add_peer_rejects_duplicate_public_key(inventory: InMemoryInventory) -> None:
    inventory.peers.append(make_peer("kiosk", public_key="shared"))

    with pytest.raises(DuplicatePeerError) as excinfo:
        add_peer(
            NewPeer(name="other", public_key="shared"),
            unit_of_work_factory=fake_unit_of_work_factory(inventory),
            key_provisioner=SequenceKeyProvisioner(),
        )

    assert excinfo.value.field is PeerIdentityField.PUBLIC_KEY


def test_add_peer_requires_existing_group(inventory: InMemoryInventory) -> None:
    with pytest.raises(UnknownGroupError):
        add_peer(
            NewPeer(name="cam", group_name="Cameras"),
            unit_of_work_factory=fake_unit_of_work_factory(inventory),
            key_provisioner=SequenceKeyProvisioner(),
        )

    assert inventory.peers == []


def test_add_peer_files_peer_under_group(inventory: InMemoryInventory) -> None:
    cameras = make_group("Cameras")
    inventory.groups.append(cameras)

    peer = add_peer(
        NewPeer(name="cam", group_name="cameras", status=PeerStatus.CONNECTED),
        unit_of_work_factory=fake_unit_of_work_factory(inventory),
        key_provisioner=SequenceKeyProvisioner(),
    )

    assert peer.group_id == cameras.id
    assert peer.status is PeerStatus.CONNECTED


def test_create_group_rejects_case_insensitive_duplicates(inventory: InMemoryInventory) -> None:
    factory = fake_unit_of_work_factory(inventory)
    create_group("Office", unit_of_work_factory=factory)

    with pytest.raises(DuplicateGroupError):
        create_group("OFFICE", unit_of_work_factory=factory)

    assert [group.name for group in list_groups(unit_of_work_factory=factory)] == ["Office"]


def test_list_peers_reads_committed_peers(inventory: InMemoryInventory) -> None:
    inventory.peers.extend([make_peer("a"), make_peer("b")])

    peers = list_peers(unit_of_work_factory=fake_unit_of_work_factory(inventory))

    assert peer_names(peers) == ["a", "b"]
