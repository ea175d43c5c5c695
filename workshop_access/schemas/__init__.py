"""Pydantic request/response schemas for the API."""

from workshop_access.schemas.health import HealthResponse
from workshop_access.schemas.permission import (
    BatchCheckRequest,
    BatchCheckResponse,
    PermissionCheckRequest,
    PermissionContextSchema,
    PermissionRequestItem,
    PermissionResultResponse,
)
from workshop_access.schemas.role import (
    PermissionEntry,
    RoleAssignmentResponse,
    RoleAssignRequest,
    RoleCreateRequest,
    RoleResponse,
    RoleUpdateRequest,
)

__all__ = [
    "BatchCheckRequest",
    "BatchCheckResponse",
    "HealthResponse",
    "PermissionCheckRequest",
    "PermissionContextSchema",
    "PermissionEntry",
    "PermissionRequestItem",
    "PermissionResultResponse",
    "RoleAssignRequest",
    "RoleAssignmentResponse",
    "RoleCreateRequest",
    "RoleResponse",
    "RoleUpdateRequest",
]
