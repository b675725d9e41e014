"""Portable peer bundle types shared by export and import."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import datetime

BUNDLE_VERSION: Final[str] = "1.0"


@dataclass(frozen=True, slots=True, kw_only=True)
class ExportedPeer:
    """Peer as it travels between installations: group by name, no status."""

    name: str
    public_key: str
    allowed_ips: str
    private_key: str | None = None
    dns: str | None = None
    persistent_keepalive: int | None = None
    group_name: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ExportBundle:
    exported_at: datetime
    peers: tuple[ExportedPeer, ...]
    version: str = BUNDLE_VERSION

    @property
    def peers_count(self) -> int:
        return len(self.peers)


@dataclass(frozen=True, slots=True, kw_only=True)
class CandidatePeer:
    """One import record that passed schema validation.

    Absent fields are ``None``; defaults are applied by the importer, not here.
    """

    name: str
    public_key: str | None = None
    private_key: str | None = None
    allowed_ips: str | None = None
    dns: str | None = None
    persistent_keepalive: int | None = None
    group_name: str | None = None


@dataclass(frozen=True, slots=True)
class RejectedCandidate:
    """Import record that could not be read; keeps its slot in the result order."""

    name: str
    error: str


type ImportCandidate = CandidatePeer | RejectedCandidate
