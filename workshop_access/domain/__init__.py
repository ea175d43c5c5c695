"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from workshop_access.domain.entities import (
    MembershipRecord,
    Permission,
    ProjectRecord,
    Role,
    RoleAssignment,
    TeamRecord,
    WorkshopRecord,
)
from workshop_access.domain.enums import (
    MembershipState,
    PermissionPolarity,
    PermissionScope,
    WorkshopVisibility,
)
from workshop_access.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CollaboratorUnavailableException,
    DuplicateAssignmentException,
    ResourceNotFoundException,
    ValidationException,
    WorkshopAccessException,
)
from workshop_access.domain.value_objects import (
    PermissionContext,
    PermissionRequest,
    PermissionResult,
)

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "CollaboratorUnavailableException",
    "DuplicateAssignmentException",
    "MembershipRecord",
    "MembershipState",
    "Permission",
    "PermissionContext",
    "PermissionPolarity",
    "PermissionRequest",
    "PermissionResult",
    "PermissionScope",
    "ProjectRecord",
    "ResourceNotFoundException",
    "Role",
    "RoleAssignment",
    "TeamRecord",
    "ValidationException",
    "WorkshopAccessException",
    "WorkshopRecord",
    "WorkshopVisibility",
]
