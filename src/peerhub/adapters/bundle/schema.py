"""Pydantic models describing the peer bundle JSON format."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from peerhub.domain.model import MAX_PERSISTENT_KEEPALIVE


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class BundleBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ImportPeerPayload(BundleBaseModel):
    name: str = Field(min_length=1)
    public_key: str | None = None
    private_key: str | None = None
    allowed_ips: str | None = None
    dns: str | None = None
    persistent_keepalive: int | None = Field(default=None, ge=0, le=MAX_PERSISTENT_KEEPALIVE)
    group_name: str | None = None

    _normalize_optional = field_validator(
        "public_key",
        "private_key",
        "allowed_ips",
        "dns",
        "group_name",
        "persistent_keepalive",
        mode="before",
    )(_blank_to_none)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


class ExportedPeerPayload(BundleBaseModel):
    name: str
    public_key: str
    private_key: str | None = None
    allowed_ips: str
    dns: str | None = None
    persistent_keepalive: int | None = None
    group_name: str | None = None


class ExportBundlePayload(BundleBaseModel):
    version: str
    exported_at: datetime
    peers_count: int
    peers: list[ExportedPeerPayload]
