"""Bulk export and import of the peer inventory."""

from __future__ import annotations

from .bundle import (
    BUNDLE_VERSION,
    CandidatePeer,
    ExportBundle,
    ExportedPeer,
    ImportCandidate,
    RejectedCandidate,
)
from .export import build_export_bundle, export_inventory
from .groups import GroupDirectory
from .importer import (
    INVALID_PUBLIC_KEY_MESSAGE,
    ImportCompletionHook,
    ImportPolicy,
    InventorySnapshot,
    SnapshotError,
    import_candidates,
)
from .results import (
    ImportOutcome,
    ImportReport,
    ImportResult,
    ImportSummary,
    summarize_results,
)

__all__ = [
    "BUNDLE_VERSION",
    "INVALID_PUBLIC_KEY_MESSAGE",
    "CandidatePeer",
    "ExportBundle",
    "ExportedPeer",
    "GroupDirectory",
    "ImportCandidate",
    "ImportCompletionHook",
    "ImportOutcome",
    "ImportPolicy",
    "ImportReport",
    "ImportResult",
    "ImportSummary",
    "InventorySnapshot",
    "RejectedCandidate",
    "SnapshotError",
    "build_export_bundle",
    "export_inventory",
    "import_candidates",
    "summarize_results",
]
