"""Application services: permission engine, matching rules, scope strategies, roles."""

from workshop_access.application.services.action_matching import (
    ACTION_ALIASES,
    action_matches,
    permission_matches,
)
from workshop_access.application.services.permission_engine import PermissionEngine
from workshop_access.application.services.role_service import RoleService
from workshop_access.application.services.scope_resolution import (
    EVALUATION_ORDER,
    ProjectStrategy,
    ScopeResolutionStrategy,
    TeamStrategy,
    UnscopedStrategy,
    build_default_strategies,
)

__all__ = [
    "ACTION_ALIASES",
    "EVALUATION_ORDER",
    "PermissionEngine",
    "ProjectStrategy",
    "RoleService",
    "ScopeResolutionStrategy",
    "TeamStrategy",
    "UnscopedStrategy",
    "action_matches",
    "build_default_strategies",
    "permission_matches",
]
