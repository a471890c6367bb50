"""Application configuration helpers."""

from __future__ import annotations

from .archon import ArchonConfig, get_archon_config
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config
from .sync import Character, SyncConfig, example_sync_config, load_sync_config, parse_sync_config
from .warcraftlogs import WarcraftLogsConfig, get_warcraftlogs_config

__all__ = [
    "ArchonConfig",
    "CacheConfig",
    "Character",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "WarcraftLogsConfig",
    "configure_logging",
    "example_sync_config",
    "get_archon_config",
    "get_storage_config",
    "get_warcraftlogs_config",
    "load_sync_config",
    "parse_sync_config",
]
