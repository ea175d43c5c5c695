"""Permissions API: check one or several (action, resource) pairs for the calling actor.

Only owners, managers and active members of the workshop may ask.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from workshop_access.api.v1.dependencies import (
    get_actor_id,
    get_permission_engine,
    require_workshop_membership,
)
from workshop_access.application.services.permission_engine import PermissionEngine
from workshop_access.schemas.permission import (
    BatchCheckRequest,
    BatchCheckResponse,
    PermissionCheckRequest,
    PermissionResultResponse,
)

router = APIRouter(dependencies=[Depends(require_workshop_membership)])


@router.post("/check", response_model=PermissionResultResponse)
async def check_permission(
    workshop_id: str,
    body: PermissionCheckRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
):
    """Return the decision for the calling actor (denials are 200 with granted=false)."""
    result = await engine.check_permission(
        actor_id,
        workshop_id,
        body.action,
        body.resource,
        body.context.to_context() if body.context else None,
    )
    return PermissionResultResponse.model_validate(result)


@router.post("/check-any", response_model=BatchCheckResponse)
async def check_any(
    workshop_id: str,
    body: BatchCheckRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
):
    """True if any of the requested pairs is granted."""
    result = await engine.has_any_permission(
        actor_id,
        workshop_id,
        [item.to_request() for item in body.requests],
        body.context.to_context() if body.context else None,
    )
    return BatchCheckResponse(result=result)


@router.post("/check-all", response_model=BatchCheckResponse)
async def check_all(
    workshop_id: str,
    body: BatchCheckRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
):
    """True if every requested pair is granted."""
    result = await engine.has_all_permissions(
        actor_id,
        workshop_id,
        [item.to_request() for item in body.requests],
        body.context.to_context() if body.context else None,
    )
    return BatchCheckResponse(result=result)
