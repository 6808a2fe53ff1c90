"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag
from .errors import ConfigurationError
from .logging import configure_logging
from .reconcile import ReconcileConfig, get_reconcile_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "ConfigurationError",
    "ReconcileConfig",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "get_reconcile_config",
    "get_storage_config",
]
