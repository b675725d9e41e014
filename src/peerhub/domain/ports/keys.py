"""Port for provisioning WireGuard key material."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


class KeyGenerationError(RuntimeError):
    """Raised when a key pair cannot be produced."""


@dataclass(frozen=True, slots=True)
class KeyPair:
    public_key: str
    private_key: str


@runtime_checkable
class KeyProvisioner(Protocol):
    """Produces a fresh key pair on every call or raises ``KeyGenerationError``."""

    def __call__(self) -> KeyPair: ...
