"""Route handlers for the Web API."""

from studydash.web.routes.health import router as health_router
from studydash.web.routes.user import router as user_router
from studydash.web.routes.catalog import router as catalog_router
from studydash.web.routes.courses import router as courses_router
from studydash.web.routes.study_sessions import router as study_sessions_router
from studydash.web.routes.notes import router as notes_router
from studydash.web.routes.materials import router as materials_router
from studydash.web.routes.notifications import router as notifications_router

__all__ = [
    "health_router",
    "user_router",
    "catalog_router",
    "courses_router",
    "study_sessions_router",
    "notes_router",
    "materials_router",
    "notifications_router",
]
