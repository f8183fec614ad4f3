"""Centralized configuration management for clean_framework.

This module provides a centralized configuration system that supports:
- Environment variable overrides
- Default values with validation
- Type safety using Pydantic
- Hierarchical configuration structure
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from clean_framework.infrastructure.logging import LogLevel


class RestConfig(BaseModel):
    """REST client configuration."""

    base_url: str = Field(
        default="http://localhost:8000", description="Base URL prepended to service paths"
    )

    timeout: float = Field(
        default=10.0, gt=0, le=300, description="HTTP request timeout in seconds"
    )

    headers: dict[str, str] = Field(
        default_factory=lambda: {"Accept": "application/json"},
        description="Headers sent with every request",
    )


class ConnectivityConfig(BaseModel):
    """Connectivity probe configuration."""

    probe_url: str = Field(
        default="https://www.google.com", description="URL probed to detect network access"
    )

    probe_timeout: float = Field(
        default=3.0, gt=0, le=60, description="Connectivity probe timeout in seconds"
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Global log level")

    json_format: bool = Field(default=False, description="Emit structured JSON log lines")


class FrameworkConfig(BaseSettings):
    """Main framework configuration.

    All configuration values can be overridden using environment variables
    with the prefix CLEAN_FRAMEWORK_ (e.g., CLEAN_FRAMEWORK_REST__BASE_URL).
    """

    model_config = SettingsConfigDict(
        env_prefix="CLEAN_FRAMEWORK_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Sub-configurations
    rest: RestConfig = Field(default_factory=RestConfig)
    connectivity: ConnectivityConfig = Field(default_factory=ConnectivityConfig)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_config() -> FrameworkConfig:
    """Get the singleton configuration instance.

    This function returns a cached configuration instance that reads from
    environment variables and configuration files.

    Returns:
        FrameworkConfig: The configuration instance
    """
    return FrameworkConfig()


def reload_config() -> FrameworkConfig:
    """Reload configuration from environment.

    This clears the cache and creates a new configuration instance.

    Returns:
        FrameworkConfig: The new configuration instance
    """
    get_config.cache_clear()
    return get_config()
