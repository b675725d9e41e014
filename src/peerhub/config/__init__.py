"""Application configuration helpers."""

from __future__ import annotations

from .env import env_bool, env_float, env_int, optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .transfer import (
    DEFAULT_ALLOWED_IPS,
    DEFAULT_DNS,
    DEFAULT_PERSISTENT_KEEPALIVE,
    ImportConfig,
    KeyProviderName,
    WebhookConfig,
    get_import_config,
    get_webhook_config,
)

__all__ = [
    "DEFAULT_ALLOWED_IPS",
    "DEFAULT_DNS",
    "DEFAULT_PERSISTENT_KEEPALIVE",
    "ConfigurationError",
    "DatabaseConfig",
    "ImportConfig",
    "KeyProviderName",
    "StorageConfig",
    "WebhookConfig",
    "configure_logging",
    "env_bool",
    "env_float",
    "env_int",
    "get_database_config",
    "get_import_config",
    "get_storage_config",
    "get_webhook_config",
    "optional_env_var",
]
