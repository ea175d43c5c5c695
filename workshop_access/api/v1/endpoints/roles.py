"""Roles API: list, get, create, update, delete, assign, revoke (workshop-scoped).

Mutations are restricted to workshop owners and managers by RoleService
and invalidate cached decisions of the affected users.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from workshop_access.api.v1.dependencies import (
    get_actor_id,
    get_role_service,
    require_permission,
)
from workshop_access.application.dtos.role import RoleCreate, RoleUpdate
from workshop_access.application.services.role_service import RoleService
from workshop_access.schemas.role import (
    RoleAssignmentResponse,
    RoleAssignRequest,
    RoleCreateRequest,
    RoleResponse,
    RoleUpdateRequest,
)

router = APIRouter()


@router.post("/roles", response_model=RoleResponse, status_code=201)
async def create_role(
    workshop_id: str,
    body: RoleCreateRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    role_service: Annotated[RoleService, Depends(get_role_service)],
):
    """Create a role."""
    role = await role_service.create_role(
        workshop_id,
        actor_id,
        RoleCreate(
            name=body.name,
            scope=body.scope,
            scope_id=body.scope_id,
            permissions=tuple(p.to_permission() for p in body.permissions),
            description=body.description,
            is_default=body.is_default,
        ),
    )
    return RoleResponse.model_validate(role)


@router.patch("/roles/{role_id}", response_model=RoleResponse)
async def update_role(
    workshop_id: str,
    role_id: str,
    body: RoleUpdateRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    role_service: Annotated[RoleService, Depends(get_role_service)],
):
    """Update role name, description or permissions."""
    role = await role_service.update_role(
        workshop_id,
        actor_id,
        role_id,
        RoleUpdate(
            name=body.name,
            description=body.description,
            permissions=(
                tuple(p.to_permission() for p in body.permissions)
                if body.permissions is not None
                else None
            ),
        ),
    )
    return RoleResponse.model_validate(role)


@router.delete("/roles/{role_id}", status_code=204)
async def delete_role(
    workshop_id: str,
    role_id: str,
    actor_id: Annotated[str, Depends(get_actor_id)],
    role_service: Annotated[RoleService, Depends(get_role_service)],
) -> Response:
    """Delete role and all of its assignments."""
    await role_service.delete_role(workshop_id, actor_id, role_id)
    return Response(status_code=204)


@router.post(
    "/roles/{role_id}/assignments",
    response_model=RoleAssignmentResponse,
    status_code=201,
)
async def assign_role(
    workshop_id: str,
    role_id: str,
    body: RoleAssignRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    role_service: Annotated[RoleService, Depends(get_role_service)],
):
    """Assign role to a user."""
    assignment = await role_service.assign_role(
        workshop_id, actor_id, role_id, body.user_id, body.scope_id
    )
    return RoleAssignmentResponse.model_validate(assignment)


@router.delete("/roles/{role_id}/assignments/{user_id}", status_code=204)
async def revoke_role(
    workshop_id: str,
    role_id: str,
    user_id: str,
    actor_id: Annotated[str, Depends(get_actor_id)],
    role_service: Annotated[RoleService, Depends(get_role_service)],
) -> Response:
    """Revoke role from a user."""
    await role_service.revoke_role(workshop_id, actor_id, role_id, user_id)
    return Response(status_code=204)


@router.get("/users/{user_id}/roles", response_model=list[RoleAssignmentResponse])
async def get_user_roles(
    workshop_id: str,
    user_id: str,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[str, Depends(require_permission("view", "role"))],
):
    """List a user's role assignments in the workshop."""
    assignments = await role_service.get_user_roles(workshop_id, user_id)
    return [RoleAssignmentResponse.model_validate(a) for a in assignments]


@router.get("/roles", response_model=list[RoleResponse])
async def list_roles(
    workshop_id: str,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[str, Depends(require_permission("view", "role"))],
):
    """List the workshop's roles."""
    roles = await role_service.list_roles(workshop_id)
    return [RoleResponse.model_validate(r) for r in roles]


@router.get("/roles/{role_id}", response_model=RoleResponse)
async def get_role(
    workshop_id: str,
    role_id: str,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[str, Depends(require_permission("view", "role"))],
):
    """Get one role of the workshop."""
    role = await role_service.get_role(workshop_id, role_id)
    return RoleResponse.model_validate(role)
