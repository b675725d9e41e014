"""Settings for bulk peer import/export and completion notifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal, cast

from peerhub.domain.model import (
    DEFAULT_ALLOWED_IPS,
    DEFAULT_DNS,
    DEFAULT_PERSISTENT_KEEPALIVE,
)

from .env import env_bool, env_float, env_int, optional_env_var
from .errors import ConfigurationError

KeyProviderName = Literal["nacl", "wg"]

DEFAULT_WEBHOOK_TIMEOUT_SECONDS: Final[float] = 10.0
DEFAULT_WEBHOOK_RETRIES: Final[int] = 3

_KEY_PROVIDERS: Final[frozenset[str]] = frozenset({"nacl", "wg"})


@dataclass(frozen=True, slots=True)
class ImportConfig:
    """Field defaults and validation switches applied to imported peers."""

    default_allowed_ips: str = DEFAULT_ALLOWED_IPS
    default_dns: str = DEFAULT_DNS
    default_persistent_keepalive: int = DEFAULT_PERSISTENT_KEEPALIVE
    strict_key_format: bool = False
    key_provider: KeyProviderName = "nacl"


@dataclass(frozen=True, slots=True)
class WebhookConfig:
    url: str | None = None
    timeout_seconds: float = DEFAULT_WEBHOOK_TIMEOUT_SECONDS
    retries: int = DEFAULT_WEBHOOK_RETRIES


def get_import_config() -> ImportConfig:
    key_provider = (optional_env_var("PEERHUB_KEY_PROVIDER") or "nacl").lower()
    if key_provider not in _KEY_PROVIDERS:
        allowed = ", ".join(sorted(_KEY_PROVIDERS))
        raise ConfigurationError(
            f"PEERHUB_KEY_PROVIDER must be one of {allowed}, got {key_provider!r}"
        )
    return ImportConfig(
        default_allowed_ips=optional_env_var("PEERHUB_DEFAULT_ALLOWED_IPS") or DEFAULT_ALLOWED_IPS,
        default_dns=optional_env_var("PEERHUB_DEFAULT_DNS") or DEFAULT_DNS,
        default_persistent_keepalive=env_int(
            "PEERHUB_DEFAULT_KEEPALIVE", DEFAULT_PERSISTENT_KEEPALIVE, minimum=0
        ),
        strict_key_format=env_bool("PEERHUB_STRICT_KEY_FORMAT", default=False),
        key_provider=cast("KeyProviderName", key_provider),
    )


def get_webhook_config() -> WebhookConfig:
    return WebhookConfig(
        url=optional_env_var("PEERHUB_WEBHOOK_URL"),
        timeout_seconds=env_float("PEERHUB_WEBHOOK_TIMEOUT", DEFAULT_WEBHOOK_TIMEOUT_SECONDS),
        retries=env_int("PEERHUB_WEBHOOK_RETRIES", DEFAULT_WEBHOOK_RETRIES, minimum=0),
    )
