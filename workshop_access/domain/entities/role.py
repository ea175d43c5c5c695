"""Role and role assignment entities.

A Role is an ordered list of permission entries bound to a scope. A
RoleAssignment binds a user to a role at a concrete scope within a
workshop. Validation runs on construction.
"""

from dataclasses import dataclass, field
from datetime import datetime

from workshop_access.core.constants import CACHE_KEY_SEP
from workshop_access.domain.enums import PermissionPolarity, PermissionScope
from workshop_access.domain.exceptions import ValidationException
from workshop_access.shared.utils.datetime import utc_now

# Scopes whose assignments are evaluated against a concrete scope id.
SCOPES_REQUIRING_SCOPE_ID = frozenset(
    {PermissionScope.TEAM, PermissionScope.PROJECT, PermissionScope.TASK}
)


@dataclass(frozen=True)
class Permission:
    """One permission entry. resource and action may be the wildcard '*'."""

    resource: str
    action: str
    polarity: PermissionPolarity = PermissionPolarity.GRANT

    def __post_init__(self) -> None:
        for name, value in (("resource", self.resource), ("action", self.action)):
            if not value or not value.strip():
                raise ValidationException(f"Permission {name} is required", field=name)
            if CACHE_KEY_SEP in value:
                raise ValidationException(
                    f"Permission {name} must not contain {CACHE_KEY_SEP!r}",
                    field=name,
                )

    @property
    def is_deny(self) -> bool:
        return self.polarity == PermissionPolarity.DENY


@dataclass
class Role:
    """Domain entity for a workshop role.

    scope_id pins the role to one team/project/task; when None the
    scope id is chosen per assignment.
    """

    id: str
    tenant_id: str
    name: str
    scope: PermissionScope = PermissionScope.WORKSHOP
    scope_id: str | None = None
    permissions: list[Permission] = field(default_factory=list)
    description: str | None = None
    is_default: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate role business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Role ID is required", field="id")
        if not self.name or not self.name.strip():
            raise ValidationException("Role name is required", field="name")
        if self.scope_id is not None and self.scope not in SCOPES_REQUIRING_SCOPE_ID:
            raise ValidationException(
                f"{self.scope.value} roles cannot be pinned to a scope id",
                field="scope_id",
            )


@dataclass
class RoleAssignment:
    """Binding of a user to a role at (scope, scope_id) within a workshop.

    role is the resolved Role when the store loads it alongside the
    assignment; when present, scope and scope_id must agree with it.
    """

    id: str
    tenant_id: str
    role_id: str
    user_id: str
    scope: PermissionScope
    assigned_by: str
    scope_id: str | None = None
    assigned_at: datetime = field(default_factory=utc_now)
    role: Role | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate scope/scope_id rules. Raises ValidationException if invalid."""
        if self.scope in SCOPES_REQUIRING_SCOPE_ID:
            if not self.scope_id:
                raise ValidationException(
                    f"Scope ID is required for {self.scope.value} scoped roles",
                    field="scope_id",
                )
        elif self.scope_id is not None:
            raise ValidationException(
                f"{self.scope.value} assignments cannot carry a scope id",
                field="scope_id",
            )
        if self.role is None:
            return
        if self.role.id != self.role_id:
            raise ValidationException("Assignment role does not match role_id", field="role")
        if self.role.scope != self.scope:
            raise ValidationException(
                "Assignment scope must match the role scope", field="scope"
            )
        if self.role.scope_id is not None and self.role.scope_id != self.scope_id:
            raise ValidationException(
                "Assignment scope id must match the role scope id", field="scope_id"
            )

    @property
    def permissions(self) -> list[Permission]:
        """Ordered permissions of the resolved role (empty when unresolved)."""
        return list(self.role.permissions) if self.role is not None else []
