"""Value objects for permission checks.

Immutable inputs (context, request) and the cacheable decision outcome.
"""

from dataclasses import dataclass

from workshop_access.domain.enums import PermissionScope


@dataclass(frozen=True)
class PermissionContext:
    """Narrows which PROJECT/TEAM scope a check evaluates."""

    project_id: str | None = None
    team_id: str | None = None

    def is_empty(self) -> bool:
        return not self.project_id and not self.team_id


@dataclass(frozen=True)
class PermissionRequest:
    """An (action, resource) pair for the batch helpers."""

    action: str
    resource: str


@dataclass(frozen=True)
class PermissionResult:
    """Outcome of a permission check.

    reason is for logs and audit only; callers branch on granted and
    source, never on reason text.
    """

    granted: bool
    reason: str
    source: PermissionScope | None = None

    @classmethod
    def allow(cls, source: PermissionScope, reason: str) -> "PermissionResult":
        return cls(granted=True, reason=reason, source=source)

    @classmethod
    def deny(
        cls, reason: str, source: PermissionScope | None = None
    ) -> "PermissionResult":
        return cls(granted=False, reason=reason, source=source)
