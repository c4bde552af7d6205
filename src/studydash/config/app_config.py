"""Application configuration loader.

Loads configuration from data/config/app_config_v1.yaml, falling back to
built-in defaults when the file is absent. A few environment variables
override file values:

- STUDYDASH_HOST
- STUDYDASH_PORT (or PORT)
- STUDYDASH_LOG_LEVEL

Usage:
    from studydash.config.app_config import load_app_config

    config = load_app_config()
    config.server.port
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to working directory)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")


@dataclass
class ServerConfig:
    """Where the API listens."""

    host: str = "127.0.0.1"
    port: int = 5000


@dataclass
class DashboardConfig:
    """Dashboard behaviour."""

    user_id: int = 1
    recent_limit: int = 5
    preview_length: int = 100
    seed_demo_data: bool = True


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "server": {
            "host": "127.0.0.1",
            "port": 5000,
        },
        "dashboard": {
            "user_id": 1,
            "recent_limit": 5,
            "preview_length": 100,
            "seed_demo_data": True,
        },
        "logging": {
            "level": "INFO",
        },
    }


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay environment variables on the loaded values."""
    server = data.setdefault("server", {})
    if host := os.environ.get("STUDYDASH_HOST"):
        server["host"] = host
    port = os.environ.get("STUDYDASH_PORT") or os.environ.get("PORT")
    if port:
        server["port"] = int(port)
    if level := os.environ.get("STUDYDASH_LOG_LEVEL"):
        data.setdefault("logging", {})["level"] = level
    return data


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()

    server_data = {**defaults["server"], **(data.get("server") or {})}
    server = ServerConfig(
        host=str(server_data["host"]),
        port=int(server_data["port"]),
    )

    dash_data = {**defaults["dashboard"], **(data.get("dashboard") or {})}
    dashboard = DashboardConfig(
        user_id=int(dash_data["user_id"]),
        recent_limit=int(dash_data["recent_limit"]),
        preview_length=int(dash_data["preview_length"]),
        seed_demo_data=bool(dash_data["seed_demo_data"]),
    )

    log_data = {**defaults["logging"], **(data.get("logging") or {})}
    log_config = LoggingConfig(level=str(log_data["level"]).upper())

    return AppConfig(server=server, dashboard=dashboard, logging=log_config)


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any]

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(_apply_env_overrides(data))
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
