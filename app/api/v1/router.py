"""
Main router for API v1.

Aggregates all v1 endpoints into a single router.
"""
from fastapi import APIRouter

from api.v1.endpoints import auth, files, health, jobs, users

api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)

api_router.include_router(
    files.router,
    prefix="/files",
    tags=["files"]
)

api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["jobs"]
)

api_router.include_router(
    health.router,
    tags=["health"]
)
