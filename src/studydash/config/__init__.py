"""Configuration package for the study dashboard."""

from studydash.config.app_config import (
    AppConfig,
    DashboardConfig,
    LoggingConfig,
    ServerConfig,
    clear_config_cache,
    load_app_config,
)
from studydash.config.logging_setup import configure_logging

__all__ = [
    "AppConfig",
    "DashboardConfig",
    "LoggingConfig",
    "ServerConfig",
    "clear_config_cache",
    "load_app_config",
    "configure_logging",
]
