"""In-memory directory and role store implementations.

Used for local wiring (lifespan) and tests. Production deployments pass
their own implementations of the application.interfaces protocols.
"""

from workshop_access.infrastructure.directories.memory import (
    InMemoryMembershipDirectory,
    InMemoryProjectDirectory,
    InMemoryRoleAssignmentStore,
    InMemoryRoleStore,
    InMemoryTeamDirectory,
    InMemoryWorkshopDirectory,
)

__all__ = [
    "InMemoryMembershipDirectory",
    "InMemoryProjectDirectory",
    "InMemoryRoleAssignmentStore",
    "InMemoryRoleStore",
    "InMemoryTeamDirectory",
    "InMemoryWorkshopDirectory",
]
