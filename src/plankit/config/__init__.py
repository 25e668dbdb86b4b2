"""Application configuration helpers."""

from __future__ import annotations

from .catalog import CatalogFile, load_catalog, parse_catalog
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .polar import (
    POLAR_BASE_URLS,
    POLAR_DASHBOARD_PAGES,
    POLAR_DASHBOARD_URLS,
    PolarConfig,
    PolarServer,
    get_polar_config,
    log_error_response,
    parse_server,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "POLAR_BASE_URLS",
    "POLAR_DASHBOARD_PAGES",
    "POLAR_DASHBOARD_URLS",
    "CatalogFile",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "PolarConfig",
    "PolarServer",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_polar_config",
    "get_storage_config",
    "load_catalog",
    "log_error_response",
    "optional_env_var",
    "parse_catalog",
    "parse_server",
    "require_env_vars",
]
