"""Role application service: role and assignment mutations with cache invalidation.

Only workshop owners and managers may mutate roles. Every mutation
awaits the engine's invalidation for the affected users before
returning, so the next check recomputes from the stores.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from workshop_access.application.dtos.role import RoleCreate, RoleUpdate
from workshop_access.application.interfaces.repositories import (
    RoleAssignmentStore,
    RoleStore,
    WorkshopDirectory,
)
from workshop_access.application.interfaces.services import IPermissionInvalidator
from workshop_access.core.id_validation import is_valid_id_format
from workshop_access.domain.entities import Role, RoleAssignment
from workshop_access.domain.entities.role import SCOPES_REQUIRING_SCOPE_ID
from workshop_access.domain.exceptions import (
    AuthorizationException,
    DuplicateAssignmentException,
    ResourceNotFoundException,
    ValidationException,
)
from workshop_access.shared.telemetry.tracing import traced
from workshop_access.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)


class RoleService:
    """Create, edit, delete, assign and revoke workshop roles."""

    def __init__(
        self,
        roles: RoleStore,
        assignments: RoleAssignmentStore,
        workshops: WorkshopDirectory,
        invalidator: IPermissionInvalidator,
    ) -> None:
        self._roles = roles
        self._assignments = assignments
        self._workshops = workshops
        self._invalidator = invalidator

    @traced("role_service.create_role")
    async def create_role(self, tenant_id: str, actor_id: str, data: RoleCreate) -> Role:
        """Create a role in the workshop.

        Raises:
            AuthorizationException: If actor is not owner/manager.
            ValidationException: If the pinned scope_id is malformed or not allowed for the scope.
        """
        await self._require_manager(tenant_id, actor_id, "create")
        if data.scope_id is not None and not is_valid_id_format(data.scope_id):
            raise ValidationException("Invalid scope ID format", field="scope_id")
        role = Role(
            id=generate_cuid(),
            tenant_id=tenant_id,
            name=data.name,
            scope=data.scope,
            scope_id=data.scope_id,
            permissions=list(data.permissions),
            description=data.description,
            is_default=data.is_default,
        )
        created = await self._roles.create(role)
        logger.info("Role %s created in workshop %s by %s", created.id, tenant_id, actor_id)
        return created

    @traced("role_service.update_role")
    async def update_role(
        self, tenant_id: str, actor_id: str, role_id: str, data: RoleUpdate
    ) -> Role:
        """Apply a partial update and invalidate every user holding the role."""
        await self._require_manager(tenant_id, actor_id, "update")
        role = await self._get_role(tenant_id, role_id)
        changes: dict = {}
        if data.name is not None:
            changes["name"] = data.name
        if data.description is not None:
            changes["description"] = data.description
        if data.permissions is not None:
            changes["permissions"] = list(data.permissions)
        updated = await self._roles.update(replace(role, **changes))
        assignments = await self._assignments.find_by_role(role_id)
        await self._invalidate_users(tenant_id, {a.user_id for a in assignments})
        logger.info(
            "Role %s updated in workshop %s by %s (%s holder(s))",
            role_id,
            tenant_id,
            actor_id,
            len(assignments),
        )
        return updated

    @traced("role_service.delete_role")
    async def delete_role(self, tenant_id: str, actor_id: str, role_id: str) -> None:
        """Delete role and its assignments, then invalidate former holders."""
        await self._require_manager(tenant_id, actor_id, "delete")
        await self._get_role(tenant_id, role_id)
        assignments = await self._assignments.find_by_role(role_id)
        await self._assignments.delete_by_role(role_id)
        await self._roles.delete(role_id)
        await self._invalidate_users(tenant_id, {a.user_id for a in assignments})
        logger.info("Role %s deleted from workshop %s by %s", role_id, tenant_id, actor_id)

    @traced("role_service.assign_role")
    async def assign_role(
        self,
        tenant_id: str,
        actor_id: str,
        role_id: str,
        user_id: str,
        scope_id: str | None = None,
    ) -> RoleAssignment:
        """Assign role to user at the role's scope.

        The scope id is the role's pinned one, else the provided one; it is
        required for team, project and task roles and ignored otherwise.

        Raises:
            ValidationException: If user_id or a required scope_id is malformed or missing.
            DuplicateAssignmentException: If the same assignment already exists.
        """
        if not is_valid_id_format(user_id):
            raise ValidationException("Invalid user ID format", field="user_id")
        await self._require_manager(tenant_id, actor_id, "assign")
        role = await self._get_role(tenant_id, role_id)

        final_scope_id: str | None = None
        if role.scope in SCOPES_REQUIRING_SCOPE_ID:
            final_scope_id = role.scope_id or scope_id
            if not is_valid_id_format(final_scope_id):
                raise ValidationException(
                    f"Scope ID (Project/Team) is required for {role.scope.value} scoped roles",
                    field="scope_id",
                )

        if await self._assignments.exists(tenant_id, role_id, user_id, role.scope, final_scope_id):
            raise DuplicateAssignmentException(role_id, user_id, final_scope_id)

        assignment = await self._assignments.create(
            RoleAssignment(
                id=generate_cuid(),
                tenant_id=tenant_id,
                role_id=role_id,
                user_id=user_id,
                scope=role.scope,
                scope_id=final_scope_id,
                assigned_by=actor_id,
                role=role,
            )
        )
        await self._invalidator.invalidate_user(user_id, tenant_id)
        logger.info(
            "Role %s assigned to %s in workshop %s (scope=%s:%s)",
            role_id,
            user_id,
            tenant_id,
            role.scope.value,
            final_scope_id,
        )
        return assignment

    @traced("role_service.revoke_role")
    async def revoke_role(
        self, tenant_id: str, actor_id: str, role_id: str, user_id: str
    ) -> int:
        """Remove every assignment of role from user. Returns count removed."""
        await self._require_manager(tenant_id, actor_id, "revoke")
        removed = await self._assignments.delete_by_user_and_role(tenant_id, user_id, role_id)
        await self._invalidator.invalidate_user(user_id, tenant_id)
        logger.info(
            "Role %s revoked from %s in workshop %s (%s assignment(s))",
            role_id,
            user_id,
            tenant_id,
            removed,
        )
        return removed

    async def list_roles(self, tenant_id: str) -> list[Role]:
        """Return every role defined in the workshop, ordered by name."""
        roles = await self._roles.get_by_tenant(tenant_id)
        return sorted(roles, key=lambda r: (r.name, r.id))

    async def get_role(self, tenant_id: str, role_id: str) -> Role:
        """Return one role of the workshop.

        Raises:
            ResourceNotFoundException: If the role is unknown or belongs to another workshop.
        """
        return await self._get_role(tenant_id, role_id)

    async def get_user_roles(self, tenant_id: str, user_id: str) -> list[RoleAssignment]:
        """Return the user's assignments in the workshop."""
        return await self._assignments.find_by_user(tenant_id, user_id)

    async def on_member_removed(self, tenant_id: str, user_id: str) -> None:
        """Hook for membership services: member left or was removed."""
        await self._invalidator.invalidate_user(user_id, tenant_id)

    async def on_manager_changed(self, tenant_id: str, user_id: str) -> None:
        """Hook for workshop/project services: user gained or lost a manager seat."""
        await self._invalidator.invalidate_user(user_id, tenant_id)

    async def _require_manager(self, tenant_id: str, actor_id: str, verb: str) -> None:
        if not await self._workshops.is_owner_or_manager(tenant_id, actor_id):
            raise AuthorizationException(
                message=f"Only workshop managers can {verb} roles"
            )

    async def _get_role(self, tenant_id: str, role_id: str) -> Role:
        role = await self._roles.get_by_id(role_id)
        if role is None or role.tenant_id != tenant_id:
            raise ResourceNotFoundException("role", role_id)
        return role

    async def _invalidate_users(self, tenant_id: str, user_ids: set[str]) -> None:
        for user_id in sorted(user_ids):
            await self._invalidator.invalidate_user(user_id, tenant_id)
