from __future__ import annotations

import pytest

from peerhub.config import (
    ConfigurationError,
    ImportConfig,
    WebhookConfig,
    get_import_config,
    get_webhook_config,
)

_IMPORT_VARS = (
    "PEERHUB_KEY_PROVIDER",
    "PEERHUB_DEFAULT_ALLOWED_IPS",
    "PEERHUB_DEFAULT_DNS",
    "PEERHUB_DEFAULT_KEEPALIVE",
    "PEERHUB_STRICT_KEY_FORMAT",
)
_WEBHOOK_VARS = ("PEERHUB_WEBHOOK_URL", "PEERHUB_WEBHOOK_TIMEOUT", "PEERHUB_WEBHOOK_RETRIES")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (*_IMPORT_VARS, *_WEBHOOK_VARS):
        monkeypatch.delenv(name, raising=False)


def test_import_config_defaults() -> None:
    assert get_import_config() == ImportConfig()
    assert ImportConfig().default_allowed_ips == "10.0.0.2/32"
    assert ImportConfig().default_dns == "1.1.1.1"
    assert ImportConfig().default_persistent_keepalive == 25


def test_import_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PEERHUB_KEY_PROVIDER", "WG")
    monkeypatch.setenv("PEERHUB_DEFAULT_ALLOWED_IPS", "10.9.0.2/32")
    monkeypatch.setenv("PEERHUB_DEFAULT_DNS", "9.9.9.9")
    monkeypatch.setenv("PEERHUB_DEFAULT_KEEPALIVE", "0")
    monkeypatch.setenv("PEERHUB_STRICT_KEY_FORMAT", "yes")

    assert get_import_config() == ImportConfig(
        default_allowed_ips="10.9.0.2/32",
        default_dns="9.9.9.9",
        default_persistent_keepalive=0,
        strict_key_format=True,
        key_provider="wg",
    )


def test_blank_values_count_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PEERHUB_DEFAULT_DNS", "   ")

    assert get_import_config().default_dns == "1.1.1.1"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("PEERHUB_KEY_PROVIDER", "openssl"),
        ("PEERHUB_DEFAULT_KEEPALIVE", "soon"),
        ("PEERHUB_DEFAULT_KEEPALIVE", "-1"),
        ("PEERHUB_STRICT_KEY_FORMAT", "maybe"),
    ],
)
def test_invalid_import_settings_raise(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError, match=name):
        get_import_config()


def test_webhook_config(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_webhook_config() == WebhookConfig()

    monkeypatch.setenv("PEERHUB_WEBHOOK_URL", "https://hooks.example.test")
    monkeypatch.setenv("PEERHUB_WEBHOOK_TIMEOUT", "2.5")
    monkeypatch.setenv("PEERHUB_WEBHOOK_RETRIES", "0")

    config = get_webhook_config()
    assert config == WebhookConfig(url="https://hooks.example.test", timeout_seconds=2.5, retries=0)


@pytest.mark.parametrize("value", ["0", "-3", "fast"])
def test_invalid_webhook_timeout_raises(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("PEERHUB_WEBHOOK_TIMEOUT", value)

    with pytest.raises(ConfigurationError, match="PEERHUB_WEBHOOK_TIMEOUT"):
        get_webhook_config()
