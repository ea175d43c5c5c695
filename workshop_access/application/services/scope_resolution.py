"""Scope tier strategies for layered permission evaluation.

Each strategy resolves the candidate scope ids of its tier for one
check. An empty list means the tier is skipped; [None] means the tier is
evaluated once with no scope id.
"""

from __future__ import annotations

import logging
from typing import Protocol

from workshop_access.application.interfaces.repositories import TeamDirectory
from workshop_access.domain.enums import PermissionScope
from workshop_access.domain.value_objects import PermissionContext

logger = logging.getLogger(__name__)

# Narrowest first. TASK is assignable but not an evaluation tier.
EVALUATION_ORDER: tuple[PermissionScope, ...] = (
    PermissionScope.INDIVIDUAL,
    PermissionScope.TEAM,
    PermissionScope.PROJECT,
    PermissionScope.WORKSHOP,
)


class ScopeResolutionStrategy(Protocol):
    """Resolves candidate scope ids for one scope tier."""

    async def resolve_candidate_scope_ids(
        self,
        context: PermissionContext | None,
        actor_id: str,
        tenant_id: str,
    ) -> list[str | None]:
        """Return scope ids to evaluate for this tier (empty to skip it)."""


class UnscopedStrategy:
    """WORKSHOP and INDIVIDUAL tiers: global within the workshop or to the user."""

    async def resolve_candidate_scope_ids(
        self,
        context: PermissionContext | None,
        actor_id: str,
        tenant_id: str,
    ) -> list[str | None]:
        return [None]


class ProjectStrategy:
    """PROJECT tier: only the context project; skipped without one."""

    async def resolve_candidate_scope_ids(
        self,
        context: PermissionContext | None,
        actor_id: str,
        tenant_id: str,
    ) -> list[str | None]:
        if context is not None and context.project_id:
            return [context.project_id]
        return []


class TeamStrategy:
    """TEAM tier: the context team, else every team the actor belongs to."""

    def __init__(self, teams: TeamDirectory) -> None:
        self.teams = teams

    async def resolve_candidate_scope_ids(
        self,
        context: PermissionContext | None,
        actor_id: str,
        tenant_id: str,
    ) -> list[str | None]:
        if context is not None and context.team_id:
            return [context.team_id]
        teams = await self.teams.find_teams_for_member(tenant_id, actor_id)
        logger.debug(
            "Resolved %s team(s) for actor %s in workshop %s",
            len(teams),
            actor_id,
            tenant_id,
        )
        return [team.id for team in teams]


def build_default_strategies(
    teams: TeamDirectory,
) -> dict[PermissionScope, ScopeResolutionStrategy]:
    """Strategy table keyed by scope, covering every tier in EVALUATION_ORDER."""
    unscoped = UnscopedStrategy()
    return {
        PermissionScope.INDIVIDUAL: unscoped,
        PermissionScope.TEAM: TeamStrategy(teams),
        PermissionScope.PROJECT: ProjectStrategy(),
        PermissionScope.WORKSHOP: unscoped,
    }
