"""Core infrastructure module.

Provides foundational components:
- Configuration management with validation
- Custom exception hierarchy
- Logging setup
"""

from .config import Config, load_config, default_config_path
from .errors import (
    WifiSelectError,
    MissingDependencyError,
    ConfigurationError,
    BackendError,
    ScanError,
    InvalidSelectionError,
    NetworkNotFoundError,
    ConnectError,
    SavedProfileError,
)
from .logging import setup_logging, get_logger

__all__ = [
    # Config
    "Config",
    "load_config",
    "default_config_path",
    # Errors
    "WifiSelectError",
    "MissingDependencyError",
    "ConfigurationError",
    "BackendError",
    "ScanError",
    "InvalidSelectionError",
    "NetworkNotFoundError",
    "ConnectError",
    "SavedProfileError",
    # Logging
    "setup_logging",
    "get_logger",
]
