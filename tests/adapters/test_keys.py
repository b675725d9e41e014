from __future__ import annotations

import base64
import subprocess

import pytest
from nacl.public import PrivateKey

from peerhub.adapters.keys import (
    NaClKeyProvisioner,
    WireGuardToolKeyProvisioner,
    build_key_provisioner,
    derive_public_key,
)
from peerhub.domain.model import is_wireguard_key
from peerhub.domain.ports import KeyGenerationError, KeyProvisioner


def test_nacl_provisioner_returns_consistent_wireguard_pairs() -> None:
    pair = NaClKeyProvisioner()()

    assert is_wireguard_key(pair.public_key)
    assert is_wireguard_key(pair.private_key)
    assert derive_public_key(pair.private_key) == pair.public_key


def test_nacl_provisioner_returns_fresh_pairs() -> None:
    provisioner = NaClKeyProvisioner()

    assert provisioner().public_key != provisioner().public_key


def test_derive_public_key_matches_nacl() -> None:
    private = PrivateKey.generate()
    encoded = base64.b64encode(bytes(private)).decode("ascii")

    assert derive_public_key(f"  {encoded}\n") == base64.b64encode(
        bytes(private.public_key)
    ).decode("ascii")


@pytest.mark.parametrize("value", ["not base64!", base64.b64encode(b"short").decode("ascii")])
def test_derive_public_key_rejects_invalid_private_keys(value: str) -> None:
    with pytest.raises(KeyGenerationError):
        derive_public_key(value)


def test_wg_provisioner_uses_wg_genkey(monkeypatch: pytest.MonkeyPatch) -> None:
    private = base64.b64encode(bytes(PrivateKey.generate())).decode("ascii")
    calls: list[tuple[str, ...]] = []

    def fake_run(command: tuple[str, ...], **_: object) -> subprocess.CompletedProcess[bytes]:
        calls.append(command)
        return subprocess.CompletedProcess(command, 0, stdout=f"{private}\n".encode())

    monkeypatch.setattr(subprocess, "run", fake_run)

    pair = WireGuardToolKeyProvisioner()()

    assert calls == [("wg", "genkey")]
    assert pair.private_key == private
    assert pair.public_key == derive_public_key(private)


@pytest.mark.parametrize(
    "error",
    [FileNotFoundError("wg"), subprocess.CalledProcessError(1, ["wg", "genkey"])],
)
def test_wg_provisioner_falls_back_to_nacl(
    monkeypatch: pytest.MonkeyPatch, error: Exception
) -> None:
    def fake_run(*_: object, **__: object) -> subprocess.CompletedProcess[bytes]:
        raise error

    monkeypatch.setattr(subprocess, "run", fake_run)

    pair = WireGuardToolKeyProvisioner()()

    assert derive_public_key(pair.private_key) == pair.public_key


def test_build_key_provisioner_selects_implementation() -> None:
    assert isinstance(build_key_provisioner("nacl"), NaClKeyProvisioner)
    assert isinstance(build_key_provisioner("wg"), WireGuardToolKeyProvisioner)
    assert isinstance(build_key_provisioner(), KeyProvisioner)
