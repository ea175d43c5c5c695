"""Dict-backed directories and role stores (implement application.interfaces).

Reads return snapshots: records are frozen, and assignments are returned
as copies carrying the role as currently stored.
"""

from __future__ import annotations

from dataclasses import replace

from workshop_access.domain.entities import (
    MembershipRecord,
    ProjectRecord,
    Role,
    RoleAssignment,
    TeamRecord,
    WorkshopRecord,
)
from workshop_access.domain.enums import MembershipState, PermissionScope


class InMemoryWorkshopDirectory:
    """Workshops keyed by id."""

    def __init__(self, workshops: list[WorkshopRecord] | None = None) -> None:
        self._workshops = {w.id: w for w in workshops or []}

    def add(self, workshop: WorkshopRecord) -> None:
        self._workshops[workshop.id] = workshop

    async def is_owner_or_manager(self, tenant_id: str, user_id: str) -> bool:
        workshop = self._workshops.get(tenant_id)
        return workshop is not None and workshop.is_owner_or_manager(user_id)

    async def find_by_id(self, tenant_id: str) -> WorkshopRecord | None:
        return self._workshops.get(tenant_id)


class InMemoryMembershipDirectory:
    """Memberships keyed by (tenant_id, user_id)."""

    def __init__(self, memberships: list[MembershipRecord] | None = None) -> None:
        self._memberships = {(m.tenant_id, m.user_id): m for m in memberships or []}

    def add(self, membership: MembershipRecord) -> None:
        self._memberships[(membership.tenant_id, membership.user_id)] = membership

    def remove(self, tenant_id: str, user_id: str) -> None:
        self._memberships.pop((tenant_id, user_id), None)

    async def find_active(self, tenant_id: str, user_id: str) -> MembershipRecord | None:
        membership = self._memberships.get((tenant_id, user_id))
        if membership is None or membership.state != MembershipState.ACTIVE:
            return None
        return membership


class InMemoryProjectDirectory:
    """Projects keyed by id."""

    def __init__(self, projects: list[ProjectRecord] | None = None) -> None:
        self._projects = {p.id: p for p in projects or []}

    def add(self, project: ProjectRecord) -> None:
        self._projects[project.id] = project

    async def find_by_id(self, project_id: str) -> ProjectRecord | None:
        return self._projects.get(project_id)


class InMemoryTeamDirectory:
    """Teams keyed by id."""

    def __init__(self, teams: list[TeamRecord] | None = None) -> None:
        self._teams = {t.id: t for t in teams or []}

    def add(self, team: TeamRecord) -> None:
        self._teams[team.id] = team

    async def find_teams_for_member(self, tenant_id: str, user_id: str) -> list[TeamRecord]:
        return [
            team
            for team in self._teams.values()
            if team.workshop_id == tenant_id and user_id in team.member_ids
        ]


class InMemoryRoleStore:
    """Roles keyed by id."""

    def __init__(self, roles: list[Role] | None = None) -> None:
        self._roles = {r.id: r for r in roles or []}

    async def get_by_id(self, role_id: str) -> Role | None:
        return self._roles.get(role_id)

    async def get_by_tenant(self, tenant_id: str) -> list[Role]:
        return [r for r in self._roles.values() if r.tenant_id == tenant_id]

    async def create(self, role: Role) -> Role:
        if role.id in self._roles:
            raise ValueError(f"Role already exists: {role.id}")
        self._roles[role.id] = role
        return role

    async def update(self, role: Role) -> Role:
        if role.id not in self._roles:
            raise KeyError(role.id)
        self._roles[role.id] = role
        return role

    async def delete(self, role_id: str) -> None:
        self._roles.pop(role_id, None)


class InMemoryRoleAssignmentStore:
    """Assignments in insertion order; roles resolved from a RoleStore on read.

    Assignments whose role no longer exists are not returned.
    """

    def __init__(self, roles: InMemoryRoleStore) -> None:
        self._roles = roles
        self._assignments: list[RoleAssignment] = []

    async def _resolved(self, assignments: list[RoleAssignment]) -> list[RoleAssignment]:
        resolved = []
        for assignment in assignments:
            role = await self._roles.get_by_id(assignment.role_id)
            if role is not None:
                resolved.append(replace(assignment, role=role))
        return resolved

    async def find_by_user_and_scope(
        self,
        tenant_id: str,
        user_id: str,
        scope: PermissionScope,
        scope_id: str | None = None,
    ) -> list[RoleAssignment]:
        return await self._resolved(
            [
                a
                for a in self._assignments
                if a.tenant_id == tenant_id
                and a.user_id == user_id
                and a.scope == scope
                and a.scope_id == scope_id
            ]
        )

    async def find_by_user(self, tenant_id: str, user_id: str) -> list[RoleAssignment]:
        return await self._resolved(
            [a for a in self._assignments if a.tenant_id == tenant_id and a.user_id == user_id]
        )

    async def find_by_role(self, role_id: str) -> list[RoleAssignment]:
        return [a for a in self._assignments if a.role_id == role_id]

    async def exists(
        self,
        tenant_id: str,
        role_id: str,
        user_id: str,
        scope: PermissionScope,
        scope_id: str | None = None,
    ) -> bool:
        return any(
            a.tenant_id == tenant_id
            and a.role_id == role_id
            and a.user_id == user_id
            and a.scope == scope
            and a.scope_id == scope_id
            for a in self._assignments
        )

    async def create(self, assignment: RoleAssignment) -> RoleAssignment:
        self._assignments.append(replace(assignment, role=None))
        return assignment

    async def delete_by_user_and_role(self, tenant_id: str, user_id: str, role_id: str) -> int:
        return self._remove(
            lambda a: a.tenant_id == tenant_id and a.user_id == user_id and a.role_id == role_id
        )

    async def delete_by_role(self, role_id: str) -> int:
        return self._remove(lambda a: a.role_id == role_id)

    def _remove(self, predicate) -> int:
        kept = [a for a in self._assignments if not predicate(a)]
        removed = len(self._assignments) - len(kept)
        self._assignments = kept
        return removed
