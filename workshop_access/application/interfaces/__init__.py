"""Application interfaces (ports): directory collaborators and service protocols."""

from workshop_access.application.interfaces.repositories import (
    MembershipDirectory,
    ProjectDirectory,
    RoleAssignmentStore,
    RoleStore,
    TeamDirectory,
    WorkshopDirectory,
)
from workshop_access.application.interfaces.services import (
    IDecisionCache,
    IInvalidationBroadcaster,
    IPermissionInvalidator,
)

__all__ = [
    "IDecisionCache",
    "IInvalidationBroadcaster",
    "IPermissionInvalidator",
    "MembershipDirectory",
    "ProjectDirectory",
    "RoleAssignmentStore",
    "RoleStore",
    "TeamDirectory",
    "WorkshopDirectory",
]
