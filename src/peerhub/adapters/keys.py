"""WireGuard key pair provisioning.

Public keys are derived from private keys on Curve25519, the same way ``wg pubkey``
does it, so a pair produced here is always consistent.
"""

from __future__ import annotations

import base64
import binascii
import logging
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from nacl.exceptions import CryptoError
from nacl.public import PrivateKey

from peerhub.domain.ports import KeyGenerationError, KeyPair

if TYPE_CHECKING:
    from peerhub.config import KeyProviderName
    from peerhub.domain.ports import KeyProvisioner

log = logging.getLogger(__name__)

WG_GENKEY_COMMAND: Final[tuple[str, ...]] = ("wg", "genkey")


def _encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def derive_public_key(private_key: str) -> str:
    """Return the base64 public key belonging to a base64 private key."""

    try:
        private_bytes = base64.b64decode(private_key.strip(), validate=True)
        private = PrivateKey(private_bytes)
    except (binascii.Error, CryptoError, TypeError, ValueError) as exc:
        raise KeyGenerationError(f"Invalid private key: {exc}") from exc
    return _encode(bytes(private.public_key))


class NaClKeyProvisioner:
    """Generate Curve25519 key pairs in-process with PyNaCl."""

    def __call__(self) -> KeyPair:
        try:
            private = PrivateKey.generate()
        except CryptoError as exc:
            raise KeyGenerationError(f"Key generation failed: {exc}") from exc
        return KeyPair(
            public_key=_encode(bytes(private.public_key)),
            private_key=_encode(bytes(private)),
        )


@dataclass(slots=True)
class WireGuardToolKeyProvisioner:
    """Generate private keys with ``wg genkey``.

    Falls back to PyNaCl when the ``wg`` binary is missing or fails.
    """

    command: tuple[str, ...] = WG_GENKEY_COMMAND
    timeout_seconds: float = 5.0
    fallback: NaClKeyProvisioner | None = None

    def __call__(self) -> KeyPair:
        try:
            result = subprocess.run(  # noqa: S603
                self.command,
                capture_output=True,
                check=True,
                timeout=self.timeout_seconds,
            )
        except (subprocess.CalledProcessError, FileNotFoundError, subprocess.TimeoutExpired):
            log.debug("wg genkey unavailable, generating key pair with PyNaCl")
            return (self.fallback or NaClKeyProvisioner())()

        private_key = result.stdout.decode().strip()
        return KeyPair(public_key=derive_public_key(private_key), private_key=private_key)


def build_key_provisioner(name: KeyProviderName = "nacl") -> KeyProvisioner:
    if name == "wg":
        return WireGuardToolKeyProvisioner()
    return NaClKeyProvisioner()
