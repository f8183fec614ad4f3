"""Configuration package for clean_framework."""

from .config import (
    ConnectivityConfig,
    FrameworkConfig,
    LoggingSettings,
    RestConfig,
    get_config,
    reload_config,
)

__all__ = [
    "ConnectivityConfig",
    "FrameworkConfig",
    "LoggingSettings",
    "RestConfig",
    "get_config",
    "reload_config",
]
