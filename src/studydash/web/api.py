"""FastAPI application factory.

Main entry point for the study dashboard Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studydash import __version__
from studydash.config.app_config import AppConfig, load_app_config
from studydash.store.entity_store import Collection, EntityStore
from studydash.store.seed import seed_demo_data
from studydash.web.errors import setup_error_handlers
from studydash.web.routes import (
    health_router,
    user_router,
    catalog_router,
    courses_router,
    study_sessions_router,
    notes_router,
    materials_router,
    notifications_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    store: EntityStore = app.state.store
    logger.info(
        "api_startup",
        user_id=app.state.config.dashboard.user_id,
        courses=store.count(Collection.COURSES),
        notifications=store.count(Collection.NOTIFICATIONS),
    )
    yield
    logger.info("api_shutdown")


def create_app(
    store: EntityStore | None = None,
    config: AppConfig | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Store to serve. When omitted a new one is created and, if
            enabled in config, filled with the demo dataset.
        config: Application config (defaults to load_app_config())

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()
    if store is None:
        store = EntityStore()
        if config.dashboard.seed_demo_data:
            seed_demo_data(store)

    app = FastAPI(
        title="Study Dashboard API",
        description="Progress, study sessions, notes and materials for a student dashboard",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.config = config

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_error_handlers(app)

    app.include_router(health_router)
    app.include_router(user_router)
    app.include_router(catalog_router)
    app.include_router(courses_router)
    app.include_router(study_sessions_router)
    app.include_router(notes_router)
    app.include_router(materials_router)
    app.include_router(notifications_router)

    return app
