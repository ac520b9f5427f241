"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
and custom exception hierarchy. It has no internal dependencies.
"""

from .config_loader import get_config, reload_config, Config, SearchConfig, RelayConfig
from .logger import get_logger
from .exceptions import (
    BookshelfError,
    ConfigurationError,
    DatabaseError,
    ValidationError,
    SearchError,
    BackendUnavailableError,
    RelayError
)

__all__ = [
    "get_config",
    "reload_config",
    "Config",
    "SearchConfig",
    "RelayConfig",
    "get_logger",
    "BookshelfError",
    "ConfigurationError",
    "DatabaseError",
    "ValidationError",
    "SearchError",
    "BackendUnavailableError",
    "RelayError"
]
