"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- Console output (Rich)

Clean architecture principle: The core layer has no dependencies on
domain or application layers.
"""

# Configuration
from .config import (
    Config,
    DisplayConfig,
    LoggingConfig,
    load_config,
    save_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    create_default_config,
    ensure_directories,
)

# Output
from .output import echo, log, setup_loguru


__all__ = [
    # Config
    "Config",
    "DisplayConfig",
    "LoggingConfig",
    "load_config",
    "save_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_file_path",
    "create_default_config",
    "ensure_directories",
    # Output
    "setup_loguru",
    "log",
    "echo",
]
