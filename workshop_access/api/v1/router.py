"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from workshop_access.api.v1.dependencies.
"""

from fastapi import APIRouter

from workshop_access.api.v1.endpoints import health, permissions, roles

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    permissions.router,
    prefix="/workshops/{workshop_id}/permissions",
    tags=["permissions"],
)
api_router.include_router(
    roles.router, prefix="/workshops/{workshop_id}", tags=["roles"]
)
