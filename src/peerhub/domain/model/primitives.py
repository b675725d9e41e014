"""Lightweight value helpers for peer identity fields."""

from __future__ import annotations

import base64
import binascii
from typing import Final

WIREGUARD_KEY_BYTES: Final[int] = 32
WIREGUARD_KEY_LENGTH: Final[int] = 44


def name_key(name: str) -> str:
    """Case-insensitive comparison key for peer and group names."""

    return name.lower()


def is_wireguard_key(value: str) -> bool:
    """Return whether ``value`` is a base64 encoded 32-byte Curve25519 key.

    This is a well-formedness check only; nothing is verified about the key itself.
    """

    if len(value) != WIREGUARD_KEY_LENGTH or not value.endswith("="):
        return False
    try:
        decoded = base64.b64decode(value, validate=True)
    except binascii.Error:
        return False
    return len(decoded) == WIREGUARD_KEY_BYTES
