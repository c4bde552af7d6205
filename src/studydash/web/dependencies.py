"""FastAPI dependencies.

The store and config live on app.state; handlers receive them through
these providers rather than importing a module-level store.
"""

from __future__ import annotations

from fastapi import Depends, Request

from studydash.config.app_config import AppConfig
from studydash.store.entity_store import EntityStore
from studydash.store.repository import DashboardRepository


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_repository(store: EntityStore = Depends(get_store)) -> DashboardRepository:
    return DashboardRepository(store)


def get_user_id(config: AppConfig = Depends(get_config)) -> int:
    """The fixed user every /api/user route is scoped to."""
    return config.dashboard.user_id
