"""Read import payloads and write export bundles as JSON text."""

from __future__ import annotations

import json
from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, Final, cast

from pydantic import ValidationError

from peerhub.domain.transfer import RejectedCandidate

from .schema import ImportPeerPayload
from .translator import candidate_from_payload, payload_from_bundle

if TYPE_CHECKING:
    from datetime import datetime

    from peerhub.domain.transfer import ExportBundle, ImportCandidate

log = getLogger(__name__)

BUNDLE_FILENAME_PREFIX: Final[str] = "wireguard-peers"
INVALID_FORMAT_MESSAGE: Final[str] = (
    "Invalid format: expected a list of peers or an object with a 'peers' list"
)


class BundleFormatError(ValueError):
    """Raised when an import payload is not a peer list at all."""


def parse_import_payload(text: str | bytes) -> list[ImportCandidate]:
    """Parse import JSON into one candidate per record, in input order.

    Malformed JSON or an unexpected top-level shape raises :class:`BundleFormatError`.
    Records that fail validation are returned as :class:`RejectedCandidate` so they
    still get a result of their own.
    """

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BundleFormatError(f"Invalid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise BundleFormatError(f"Invalid encoding: {exc}") from exc

    records = _extract_records(document)
    candidates: list[ImportCandidate] = []
    for index, record in enumerate(records, start=1):
        try:
            payload = ImportPeerPayload.model_validate(record)
        except ValidationError as exc:
            candidates.append(
                RejectedCandidate(name=_best_effort_name(record, index), error=_describe(exc))
            )
            continue
        candidates.append(candidate_from_payload(payload))
    log.debug("Parsed %s import records", len(candidates))
    return candidates


def dump_bundle(bundle: ExportBundle) -> str:
    """Serialize ``bundle`` with two-space indentation, leaving out absent fields."""

    return payload_from_bundle(bundle).model_dump_json(indent=2, exclude_none=True)


def bundle_filename(now: datetime) -> str:
    return f"{BUNDLE_FILENAME_PREFIX}-{now.date().isoformat()}.json"


def _extract_records(document: object) -> list[object]:
    if isinstance(document, list):
        return cast("list[object]", document)
    if isinstance(document, Mapping):
        peers = cast("Mapping[str, object]", document).get("peers")
        if isinstance(peers, list):
            return cast("list[object]", peers)
    raise BundleFormatError(INVALID_FORMAT_MESSAGE)


def _best_effort_name(record: object, index: int) -> str:
    if isinstance(record, Mapping):
        name = cast("Mapping[str, object]", record).get("name")
        if isinstance(name, str) and name.strip():
            return name.strip()
    return f"record {index}"


def _describe(exc: ValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)
