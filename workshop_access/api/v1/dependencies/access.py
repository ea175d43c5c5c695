"""Actor identity, permission engine and role service dependencies."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request

from workshop_access.application.services.permission_engine import PermissionEngine
from workshop_access.application.services.role_service import RoleService
from workshop_access.core.config import get_settings
from workshop_access.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CollaboratorUnavailableException,
)
from workshop_access.domain.value_objects import PermissionContext

logger = logging.getLogger(__name__)


def get_actor_id(request: Request) -> str:
    """Return the authenticated actor id from the configured header.

    The gateway authenticates the caller and forwards its id; format is
    checked by the engine, so a malformed id is denied rather than rejected here.
    """
    actor_id = request.headers.get(get_settings().actor_header_name)
    if not actor_id:
        raise AuthenticationException("Missing actor identity")
    return actor_id


def get_permission_engine(request: Request) -> PermissionEngine:
    """Permission engine built in lifespan (app.state.permission_engine)."""
    engine = getattr(request.app.state, "permission_engine", None)
    if engine is None:
        raise RuntimeError("Permission engine not initialized (lifespan not run)")
    return engine


def get_role_service(request: Request) -> RoleService:
    """Role service built in lifespan (app.state.role_service)."""
    service = getattr(request.app.state, "role_service", None)
    if service is None:
        raise RuntimeError("Role service not initialized (lifespan not run)")
    return service


def require_permission(action: str, resource: str):
    """Dependency factory: require that the actor may perform action on resource.

    The workshop comes from the workshop_id path parameter; project_id and
    team_id path parameters, when present, narrow the check.
    """

    async def _require(
        request: Request,
        actor_id: Annotated[str, Depends(get_actor_id)],
        engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
    ) -> str:
        params = request.path_params
        workshop_id = params.get("workshop_id")
        if not workshop_id:
            raise AuthorizationException(message="Workshop ID is required")
        context = None
        if params.get("project_id") or params.get("team_id"):
            context = PermissionContext(
                project_id=params.get("project_id"),
                team_id=params.get("team_id"),
            )
        result = await engine.check_permission(
            actor_id, workshop_id, action, resource, context
        )
        if not result.granted:
            raise AuthorizationException(resource=resource, action=action)
        return actor_id

    return _require


async def require_workshop_membership(
    workshop_id: str,
    actor_id: Annotated[str, Depends(get_actor_id)],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
) -> str:
    """Require that the actor owns, manages or is an active member of the workshop.

    Raises:
        AuthorizationException: If the actor has no seat in the workshop.
        CollaboratorUnavailableException: If a directory lookup fails.
    """
    try:
        if await engine.workshops.is_owner_or_manager(workshop_id, actor_id):
            return actor_id
        membership = await engine.memberships.find_active(workshop_id, actor_id)
    except Exception as e:
        logger.exception("Membership lookup failed for actor %s in workshop %s", actor_id, workshop_id)
        raise CollaboratorUnavailableException("workshop membership", e) from e
    if membership is None:
        raise AuthorizationException(message="Workshop membership required")
    return actor_id
