"""Directory and store interfaces (ports) consumed by the permission engine.

Protocols define contracts for the collaborators (DIP). The engine only
reads through them; RoleStore and RoleAssignmentStore writes are used
by RoleService.
"""

from __future__ import annotations

from typing import Protocol

from workshop_access.domain.entities import (
    MembershipRecord,
    ProjectRecord,
    Role,
    RoleAssignment,
    TeamRecord,
    WorkshopRecord,
)
from workshop_access.domain.enums import PermissionScope


class WorkshopDirectory(Protocol):
    """Workshop ownership, managers and visibility."""

    async def is_owner_or_manager(self, tenant_id: str, user_id: str) -> bool:
        """Return True if user owns or manages the workshop."""

    async def find_by_id(self, tenant_id: str) -> WorkshopRecord | None:
        """Return workshop or None."""


class MembershipDirectory(Protocol):
    """Workshop membership lookup."""

    async def find_active(self, tenant_id: str, user_id: str) -> MembershipRecord | None:
        """Return the user's membership record in the workshop, or None."""


class ProjectDirectory(Protocol):
    """Project manager/maintainer lookup."""

    async def find_by_id(self, project_id: str) -> ProjectRecord | None:
        """Return project or None."""


class TeamDirectory(Protocol):
    """Team membership lookup."""

    async def find_teams_for_member(self, tenant_id: str, user_id: str) -> list[TeamRecord]:
        """Return teams in the workshop that the user currently belongs to."""


class RoleStore(Protocol):
    """Role definitions."""

    async def get_by_id(self, role_id: str) -> Role | None:
        """Return role or None."""

    async def get_by_tenant(self, tenant_id: str) -> list[Role]:
        """Return all roles defined in the workshop."""

    async def create(self, role: Role) -> Role:
        """Persist a new role."""

    async def update(self, role: Role) -> Role:
        """Persist changes to an existing role."""

    async def delete(self, role_id: str) -> None:
        """Delete role (no-op when missing)."""


class RoleAssignmentStore(Protocol):
    """User↔role↔scope bindings. Returned assignments carry their resolved Role."""

    async def find_by_user_and_scope(
        self,
        tenant_id: str,
        user_id: str,
        scope: PermissionScope,
        scope_id: str | None = None,
    ) -> list[RoleAssignment]:
        """Return assignments at exactly (scope, scope_id); scope_id None matches unscoped only."""

    async def find_by_user(self, tenant_id: str, user_id: str) -> list[RoleAssignment]:
        """Return all assignments of a user in the workshop."""

    async def find_by_role(self, role_id: str) -> list[RoleAssignment]:
        """Return all assignments of a role."""

    async def exists(
        self,
        tenant_id: str,
        role_id: str,
        user_id: str,
        scope: PermissionScope,
        scope_id: str | None = None,
    ) -> bool:
        """Return True if the exact assignment exists."""

    async def create(self, assignment: RoleAssignment) -> RoleAssignment:
        """Persist a new assignment."""

    async def delete_by_user_and_role(self, tenant_id: str, user_id: str, role_id: str) -> int:
        """Delete the user's assignments of role; return count deleted."""

    async def delete_by_role(self, role_id: str) -> int:
        """Delete every assignment of role; return count deleted."""
