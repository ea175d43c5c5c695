"""Permission matching rules: wildcards and action aliases.

ACTION_ALIASES maps a granted action to the requested actions it also
covers. An action always covers itself. Extend the table to add aliases.
"""

from __future__ import annotations

from collections.abc import Mapping

from workshop_access.core.constants import WILDCARD
from workshop_access.domain.entities import Permission


class _AnyAction(frozenset):
    """Sentinel alias set that contains every action."""

    def __contains__(self, item: object) -> bool:
        return True

    def __repr__(self) -> str:
        return "ANY_ACTION"


ANY_ACTION: frozenset[str] = _AnyAction()

ACTION_ALIASES: Mapping[str, frozenset[str]] = {
    WILDCARD: ANY_ACTION,
    "manage": ANY_ACTION,
    "write": frozenset({"create", "update", "patch", "delete", "write"}),
    "read": frozenset({"view", "read", "list"}),
}

# Actions served by the base-membership and public-visibility fast paths.
VIEW_ACTIONS = frozenset({"view", "read"})

# Actions a project maintainer may perform without an explicit role.
MAINTAINER_ACTIONS = frozenset({"read", "view", "write", "update", "manage"})


def action_matches(
    granted_action: str,
    requested_action: str,
    aliases: Mapping[str, frozenset[str]] = ACTION_ALIASES,
) -> bool:
    """Return True if a permission for granted_action covers requested_action."""
    if granted_action == requested_action:
        return True
    return requested_action in aliases.get(granted_action, frozenset())


def resource_matches(granted_resource: str, requested_resource: str) -> bool:
    return granted_resource == WILDCARD or granted_resource == requested_resource


def permission_matches(
    permission: Permission,
    action: str,
    resource: str,
    aliases: Mapping[str, frozenset[str]] = ACTION_ALIASES,
) -> bool:
    """Return True if permission applies to (action, resource)."""
    return resource_matches(permission.resource, resource) and action_matches(
        permission.action, action, aliases
    )
