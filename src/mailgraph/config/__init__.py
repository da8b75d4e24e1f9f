"""Application configuration helpers."""

from __future__ import annotations

from .env import parse_timestamp, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .graph import GRAPH_PAGE_SIZE, GraphConfig, MailboxScope, default_graph_resilience
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging, resolve_log_level
from .storage import database_uri, default_data_dir

__all__ = [
    "GRAPH_PAGE_SIZE",
    "ConfigurationError",
    "GraphConfig",
    "MailboxScope",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "database_uri",
    "default_data_dir",
    "default_graph_resilience",
    "parse_timestamp",
    "require_env_var",
    "require_env_vars",
    "resolve_log_level",
]
