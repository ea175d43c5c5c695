"""Presentation-layer dependency injection.

Services are built once in the app lifespan and stored on app.state;
routes depend only on these dependencies. Tests override them via
app.dependency_overrides.
"""

from workshop_access.api.v1.dependencies.access import (
    get_actor_id,
    get_permission_engine,
    get_role_service,
    require_permission,
    require_workshop_membership,
)

__all__ = [
    "get_actor_id",
    "get_permission_engine",
    "get_role_service",
    "require_permission",
    "require_workshop_membership",
]
