"""Configuration system for branch-db-switcher.

This module provides `.env` based configuration loading, validation,
and the schema definition used for a single invocation.
"""

from .loader import ConfigError, find_config_file, load_config
from .schema import BACKUP_DIR, Config

__all__ = [
    "BACKUP_DIR",
    "Config",
    "load_config",
    "find_config_file",
    "ConfigError",
]
