"""Decision cache key builders. Single place for key format (DRY).

Key layout: actor|tenant|action|resource|project|team, with absent
context fields serialized as empty strings. Components must not contain
CACHE_KEY_SEP to avoid ambiguous or colliding keys.
"""

from workshop_access.core.constants import CACHE_KEY_SEP
from workshop_access.domain.value_objects import PermissionContext


def validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value contains CACHE_KEY_SEP.
    """
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def decision_key(
    actor_id: str,
    tenant_id: str,
    action: str,
    resource: str,
    context: PermissionContext | None = None,
) -> str:
    """Cache key for one permission decision."""
    project_id = (context.project_id if context else None) or ""
    team_id = (context.team_id if context else None) or ""
    components = [
        (actor_id, "actor_id"),
        (tenant_id, "tenant_id"),
        (action, "action"),
        (resource, "resource"),
        (project_id, "project_id"),
        (team_id, "team_id"),
    ]
    for value, name in components:
        validate_key_component(value, name)
    return CACHE_KEY_SEP.join(value for value, _ in components)


def user_prefix(actor_id: str, tenant_id: str) -> str:
    """Prefix shared by every decision key of one actor in one workshop."""
    validate_key_component(actor_id, "actor_id")
    validate_key_component(tenant_id, "tenant_id")
    return f"{actor_id}{CACHE_KEY_SEP}{tenant_id}{CACHE_KEY_SEP}"
