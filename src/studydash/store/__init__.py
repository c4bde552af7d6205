"""In-memory storage for the dashboard.

Provides:
- EntityStore: keyed collections with per-collection id counters
- DashboardRepository: joins, ordering and limits over the store
- seed_demo_data: the demo dataset loaded at startup
"""

from studydash.store.entity_store import Collection, EntityStore
from studydash.store.errors import NotFoundError, StoreError
from studydash.store.repository import DashboardRepository
from studydash.store.seed import seed_demo_data

__all__ = [
    "Collection",
    "EntityStore",
    "NotFoundError",
    "StoreError",
    "DashboardRepository",
    "seed_demo_data",
]
