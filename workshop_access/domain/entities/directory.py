"""Directory records consumed by the permission engine.

Read-only snapshots of workshop ownership, memberships, projects and
teams. The surrounding application owns their persistence.
"""

from dataclasses import dataclass, field

from workshop_access.domain.enums import MembershipState, WorkshopVisibility


@dataclass(frozen=True)
class WorkshopRecord:
    """Workshop ownership and visibility."""

    id: str
    owner_id: str
    visibility: WorkshopVisibility = WorkshopVisibility.PRIVATE
    manager_ids: frozenset[str] = field(default_factory=frozenset)

    def is_owner_or_manager(self, user_id: str) -> bool:
        return user_id == self.owner_id or user_id in self.manager_ids


@dataclass(frozen=True)
class MembershipRecord:
    """A user's membership in a workshop."""

    tenant_id: str
    user_id: str
    state: MembershipState = MembershipState.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.state == MembershipState.ACTIVE


@dataclass(frozen=True)
class ProjectRecord:
    """Project manager and maintainers. workshop_id is None when unknown."""

    id: str
    manager_id: str | None = None
    maintainer_ids: frozenset[str] = field(default_factory=frozenset)
    workshop_id: str | None = None


@dataclass(frozen=True)
class TeamRecord:
    """Team and its current members."""

    id: str
    workshop_id: str
    member_ids: frozenset[str] = field(default_factory=frozenset)
