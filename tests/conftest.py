"""Shared fixtures: stores, repositories and API clients."""

import random
from datetime import datetime, timezone

import pytest
import structlog
from fastapi.testclient import TestClient

from studydash.config.app_config import AppConfig
from studydash.store.entity_store import EntityStore
from studydash.store.repository import DashboardRepository
from studydash.store.seed import seed_demo_data
from studydash.web.api import create_app


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any structlog configuration a test (or CLI run) installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def store() -> EntityStore:
    """Empty store."""
    return EntityStore()


@pytest.fixture
def repo(store) -> DashboardRepository:
    """Repository over the empty store."""
    return DashboardRepository(store)


@pytest.fixture
def seeded_store() -> EntityStore:
    """Store filled with the demo dataset, timestamps relative to now."""
    store = EntityStore()
    seed_demo_data(store, rng=random.Random(7), now=datetime.now(timezone.utc))
    return store


@pytest.fixture
def client(seeded_store) -> TestClient:
    """API client over the seeded store with default config."""
    app = create_app(store=seeded_store, config=AppConfig())
    return TestClient(app)


@pytest.fixture
def empty_client(store) -> TestClient:
    """API client over an empty store."""
    app = create_app(store=store, config=AppConfig())
    return TestClient(app)
