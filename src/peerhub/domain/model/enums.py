"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class PeerStatus(StrEnum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    PENDING = "pending"
