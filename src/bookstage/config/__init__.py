"""
Configuration helpers for the staging toolkit.
"""

from .models import (
    DEFAULT_BUILD_COMMAND,
    DEFAULT_BUILD_TIMEOUT,
    ConfigError,
    StageConfig,
    default_config_path,
    load_config,
)
from .settings import EnvSettings, get_settings

__all__ = [
    "DEFAULT_BUILD_COMMAND",
    "DEFAULT_BUILD_TIMEOUT",
    "ConfigError",
    "StageConfig",
    "default_config_path",
    "load_config",
    "EnvSettings",
    "get_settings",
]
