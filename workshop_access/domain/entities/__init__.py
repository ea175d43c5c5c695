"""Domain entities and records.

Roles and assignments are owned by workshop managers; directory records
are read-only projections supplied by the surrounding application.
"""

from workshop_access.domain.entities.directory import (
    MembershipRecord,
    ProjectRecord,
    TeamRecord,
    WorkshopRecord,
)
from workshop_access.domain.entities.role import Permission, Role, RoleAssignment

__all__ = [
    "MembershipRecord",
    "Permission",
    "ProjectRecord",
    "Role",
    "RoleAssignment",
    "TeamRecord",
    "WorkshopRecord",
]
