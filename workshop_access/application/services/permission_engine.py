"""Permission engine: decides whether an actor may perform an action in a workshop.

Evaluation: identifier validation, decision cache, fast paths (workshop
owner/manager, project manager/maintainer, public visibility, active
membership), then layered scope evaluation narrowest-first. The first
tier that yields a decision wins; within a tier a deny beats any grant.
Every computed decision is cached; failures are never cached.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from workshop_access.application.interfaces.repositories import (
    MembershipDirectory,
    ProjectDirectory,
    RoleAssignmentStore,
    TeamDirectory,
    WorkshopDirectory,
)
from workshop_access.application.interfaces.services import (
    IDecisionCache,
    IInvalidationBroadcaster,
)
from workshop_access.application.services.action_matching import (
    ACTION_ALIASES,
    MAINTAINER_ACTIONS,
    VIEW_ACTIONS,
    permission_matches,
)
from workshop_access.application.services.scope_resolution import (
    EVALUATION_ORDER,
    ScopeResolutionStrategy,
    build_default_strategies,
)
from workshop_access.core.constants import CACHE_KEY_SEP
from workshop_access.core.id_validation import is_valid_id_format
from workshop_access.domain.enums import PermissionScope, WorkshopVisibility
from workshop_access.domain.exceptions import (
    CollaboratorUnavailableException,
    WorkshopAccessException,
)
from workshop_access.domain.value_objects import (
    PermissionContext,
    PermissionRequest,
    PermissionResult,
)
from workshop_access.infrastructure.cache.decision_cache import DecisionCache
from workshop_access.infrastructure.cache.keys import decision_key, user_prefix
from workshop_access.infrastructure.messaging.invalidation_pubsub import (
    InvalidationEvent,
    InvalidationKind,
)
from workshop_access.shared.telemetry.tracing import add_span_attributes, traced
from workshop_access.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

INVALID_ID_REASON = "invalid id format"
INVALID_ACTION_REASON = "invalid action or resource"
NO_PERMISSION_REASON = "no explicit permission found"


class PermissionEngine:
    """Layered permission evaluation with an instance-owned decision cache.

    Collaborators are read-only from the engine's perspective. Mutators of
    roles, assignments and memberships must await invalidate_user /
    invalidate_workshop / invalidate_all as part of their own operation.
    When a broadcaster is given, invalidations are also published so other
    instances drop their copies (see run_invalidation_listener).
    """

    def __init__(
        self,
        workshops: WorkshopDirectory,
        memberships: MembershipDirectory,
        projects: ProjectDirectory,
        teams: TeamDirectory,
        assignments: RoleAssignmentStore,
        cache: IDecisionCache | None = None,
        broadcaster: IInvalidationBroadcaster | None = None,
        strategies: Mapping[PermissionScope, ScopeResolutionStrategy] | None = None,
        action_aliases: Mapping[str, frozenset[str]] = ACTION_ALIASES,
        instance_id: str | None = None,
    ) -> None:
        self.workshops = workshops
        self.memberships = memberships
        self.projects = projects
        self.teams = teams
        self.assignments = assignments
        self.cache = cache if cache is not None else DecisionCache()
        self.broadcaster = broadcaster
        self.strategies = dict(strategies or build_default_strategies(teams))
        self.action_aliases = action_aliases
        self.instance_id = instance_id or generate_cuid()
        missing = [scope for scope in EVALUATION_ORDER if scope not in self.strategies]
        if missing:
            raise ValueError(f"No scope resolution strategy for: {missing}")

    # ---- Decisions ----

    @traced("permission.check")
    async def check_permission(
        self,
        actor_id: str,
        tenant_id: str,
        action: str,
        resource: str,
        context: PermissionContext | None = None,
    ) -> PermissionResult:
        """Decide whether actor may perform action on resource in the workshop.

        Never raises for a denial. Raises CollaboratorUnavailableException
        when a directory or store lookup fails; nothing is cached then.
        """
        rejected = self._reject_malformed(actor_id, tenant_id, action, resource, context)
        if rejected is not None:
            return rejected

        key = decision_key(actor_id, tenant_id, action, resource, context)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            result = await self._decide(actor_id, tenant_id, action, resource, context)
        except WorkshopAccessException:
            raise
        except Exception as e:
            logger.exception(
                "Permission check aborted for actor %s in workshop %s (%s %s)",
                actor_id,
                tenant_id,
                action,
                resource,
            )
            raise CollaboratorUnavailableException("permission evaluation", e) from e

        self.cache.set(key, result)
        add_span_attributes(
            **{
                "permission.granted": result.granted,
                "permission.source": result.source.value if result.source else "",
            }
        )
        return result

    async def has_any_permission(
        self,
        actor_id: str,
        tenant_id: str,
        requests: Iterable[PermissionRequest],
        context: PermissionContext | None = None,
    ) -> bool:
        """Return True on the first granted request (False for no requests)."""
        for request in requests:
            result = await self.check_permission(
                actor_id, tenant_id, request.action, request.resource, context
            )
            if result.granted:
                return True
        return False

    async def has_all_permissions(
        self,
        actor_id: str,
        tenant_id: str,
        requests: Iterable[PermissionRequest],
        context: PermissionContext | None = None,
    ) -> bool:
        """Return False on the first denied request (True for no requests)."""
        for request in requests:
            result = await self.check_permission(
                actor_id, tenant_id, request.action, request.resource, context
            )
            if not result.granted:
                return False
        return True

    def _reject_malformed(
        self,
        actor_id: str,
        tenant_id: str,
        action: str,
        resource: str,
        context: PermissionContext | None,
    ) -> PermissionResult | None:
        ids = [actor_id, tenant_id]
        if context is not None:
            ids.extend(i for i in (context.project_id, context.team_id) if i is not None)
        if not all(is_valid_id_format(i) for i in ids):
            return PermissionResult.deny(INVALID_ID_REASON)
        for value in (action, resource):
            if not value or CACHE_KEY_SEP in value:
                return PermissionResult.deny(INVALID_ACTION_REASON)
        return None

    async def _decide(
        self,
        actor_id: str,
        tenant_id: str,
        action: str,
        resource: str,
        context: PermissionContext | None,
    ) -> PermissionResult:
        if await self.workshops.is_owner_or_manager(tenant_id, actor_id):
            return PermissionResult.allow(
                PermissionScope.WORKSHOP, "workshop owner/manager has full access"
            )

        if context is not None and context.project_id:
            project = await self.projects.find_by_id(context.project_id)
            if project is not None and project.workshop_id in (None, tenant_id):
                if project.manager_id == actor_id:
                    return PermissionResult.allow(
                        PermissionScope.PROJECT, "project manager has full access to project"
                    )
                if actor_id in project.maintainer_ids and action in MAINTAINER_ACTIONS:
                    return PermissionResult.allow(
                        PermissionScope.PROJECT, "project maintainer has elevated access"
                    )

        if action in VIEW_ACTIONS:
            workshop = await self.workshops.find_by_id(tenant_id)
            if workshop is not None:
                if workshop.visibility == WorkshopVisibility.PUBLIC:
                    return PermissionResult.allow(
                        PermissionScope.WORKSHOP, "public workshop view access"
                    )
                membership = await self.memberships.find_active(tenant_id, actor_id)
                if membership is not None and membership.is_active:
                    return PermissionResult.allow(
                        PermissionScope.WORKSHOP, "active member base view access"
                    )

        return await self._evaluate_layered(actor_id, tenant_id, action, resource, context)

    async def _evaluate_layered(
        self,
        actor_id: str,
        tenant_id: str,
        action: str,
        resource: str,
        context: PermissionContext | None,
    ) -> PermissionResult:
        for scope in EVALUATION_ORDER:
            scope_ids = await self.strategies[scope].resolve_candidate_scope_ids(
                context, actor_id, tenant_id
            )
            if not scope_ids:
                continue
            decision = await self._evaluate_tier(
                scope, scope_ids, actor_id, tenant_id, action, resource
            )
            if decision is not None:
                logger.debug(
                    "Decision at %s tier for actor %s in workshop %s: granted=%s",
                    scope.value,
                    actor_id,
                    tenant_id,
                    decision.granted,
                )
                return decision
        return PermissionResult.deny(NO_PERMISSION_REASON)

    async def _evaluate_tier(
        self,
        scope: PermissionScope,
        scope_ids: list[str | None],
        actor_id: str,
        tenant_id: str,
        action: str,
        resource: str,
    ) -> PermissionResult | None:
        """Return deny on the first matching DENY, grant if any GRANT matched, else None."""
        granted = False
        for scope_id in scope_ids:
            assignments = await self.assignments.find_by_user_and_scope(
                tenant_id, actor_id, scope, scope_id
            )
            for assignment in assignments:
                for permission in assignment.permissions:
                    if not permission_matches(permission, action, resource, self.action_aliases):
                        continue
                    if permission.is_deny:
                        return PermissionResult.deny(
                            f"explicitly denied at {scope.value} level", source=scope
                        )
                    granted = True
        if granted:
            return PermissionResult.allow(scope, f"explicitly granted at {scope.value} level")
        return None

    # ---- Invalidation ----

    async def invalidate_user(self, actor_id: str, tenant_id: str) -> None:
        """Drop cached decisions of actor in workshop, here and on other instances."""
        event = InvalidationEvent.for_user(self.instance_id, actor_id, tenant_id)
        self.apply_invalidation(event)
        await self._broadcast(event)

    async def invalidate_workshop(self, tenant_id: str) -> None:
        """Drop cached decisions of every actor in workshop, here and on other instances."""
        event = InvalidationEvent.for_workshop(self.instance_id, tenant_id)
        self.apply_invalidation(event)
        await self._broadcast(event)

    async def invalidate_all(self) -> None:
        """Drop every cached decision, here and on other instances."""
        event = InvalidationEvent.for_all(self.instance_id)
        self.apply_invalidation(event)
        await self._broadcast(event)

    def apply_invalidation(self, event: InvalidationEvent) -> int:
        """Apply event to the local cache only. Returns count of dropped decisions."""
        if event.kind == InvalidationKind.USER:
            dropped = self.cache.delete_prefix(user_prefix(event.actor_id, event.tenant_id))
        elif event.kind == InvalidationKind.WORKSHOP:
            dropped = self.cache.delete_segment(event.tenant_id)
        else:
            dropped = self.cache.clear()
        logger.info(
            "Permission cache INVALIDATE %s (tenant=%s actor=%s origin=%s): %s decisions",
            event.kind.value,
            event.tenant_id,
            event.actor_id,
            event.origin,
            dropped,
        )
        return dropped

    async def _broadcast(self, event: InvalidationEvent) -> None:
        if self.broadcaster is None:
            return
        if not await self.broadcaster.publish(event):
            logger.warning(
                "Invalidation %s not broadcast; other instances rely on TTL",
                event.kind.value,
            )
