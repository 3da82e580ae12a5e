"""Application configuration helpers."""

from __future__ import annotations

from eventrelay.common.logging import configure_logging

from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .gladly import GladlyConfig, default_gladly_resilience, get_gladly_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

__all__ = [
    "ConfigurationError",
    "GladlyConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "default_gladly_resilience",
    "get_gladly_config",
    "require_env_var",
    "require_env_vars",
]
