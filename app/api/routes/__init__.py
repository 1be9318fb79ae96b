"""
API Routes package.
"""
from fastapi import APIRouter

from app.api.routes.auth import router as auth_router
from app.api.routes.health import router as health_router
from app.api.routes.users import router as users_router
from app.api.routes.agencies import router as agencies_router
from app.api.routes.projects import router as projects_router
from app.api.routes.jobs import router as jobs_router
from app.api.routes.events import router as events_router
from app.api.routes.taxonomy import router as taxonomy_router

# Main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(agencies_router)
api_router.include_router(projects_router)
api_router.include_router(jobs_router)
api_router.include_router(events_router)
api_router.include_router(taxonomy_router)

__all__ = [
    "api_router",
    "auth_router",
    "health_router",
    "users_router",
    "agencies_router",
    "projects_router",
    "jobs_router",
    "events_router",
    "taxonomy_router",
]
