"""Translate between bundle payloads and domain transfer objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from peerhub.domain.transfer import CandidatePeer

from .schema import ExportBundlePayload, ExportedPeerPayload

if TYPE_CHECKING:
    from peerhub.domain.transfer import ExportBundle, ExportedPeer

    from .schema import ImportPeerPayload


def candidate_from_payload(payload: ImportPeerPayload) -> CandidatePeer:
    return CandidatePeer(
        name=payload.name,
        public_key=payload.public_key,
        private_key=payload.private_key,
        allowed_ips=payload.allowed_ips,
        dns=payload.dns,
        persistent_keepalive=payload.persistent_keepalive,
        group_name=payload.group_name,
    )


def _exported_peer_payload(peer: ExportedPeer) -> ExportedPeerPayload:
    return ExportedPeerPayload(
        name=peer.name,
        public_key=peer.public_key,
        private_key=peer.private_key,
        allowed_ips=peer.allowed_ips,
        dns=peer.dns,
        persistent_keepalive=peer.persistent_keepalive,
        group_name=peer.group_name,
    )


def payload_from_bundle(bundle: ExportBundle) -> ExportBundlePayload:
    return ExportBundlePayload(
        version=bundle.version,
        exported_at=bundle.exported_at,
        peers_count=bundle.peers_count,
        peers=[_exported_peer_payload(peer) for peer in bundle.peers],
    )
