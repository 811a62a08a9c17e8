"""Application configuration helpers."""

from __future__ import annotations

from .billing import (
    DEFAULT_CURRENCY,
    BillingConfig,
    BillingMode,
    RequestedBillingMode,
    StripeConfig,
    get_billing_config,
    get_billing_currency,
    select_billing_mode,
)
from .env import float_env_var, optional_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import DatabaseConfig, get_database_config
from .sync import SyncConfig, get_sync_config

__all__ = [
    "DEFAULT_CURRENCY",
    "BillingConfig",
    "BillingMode",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RequestedBillingMode",
    "ResilienceConfig",
    "RetryPolicy",
    "StripeConfig",
    "SyncConfig",
    "configure_logging",
    "float_env_var",
    "get_billing_config",
    "get_billing_currency",
    "get_database_config",
    "get_sync_config",
    "optional_env_var",
    "select_billing_mode",
]
