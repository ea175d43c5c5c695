"""DTOs for role use cases."""

from dataclasses import dataclass, field

from workshop_access.domain.entities import Permission
from workshop_access.domain.enums import PermissionScope


@dataclass(frozen=True)
class RoleCreate:
    """Input for RoleService.create_role."""

    name: str
    scope: PermissionScope = PermissionScope.WORKSHOP
    scope_id: str | None = None
    permissions: tuple[Permission, ...] = field(default_factory=tuple)
    description: str | None = None
    is_default: bool = False


@dataclass(frozen=True)
class RoleUpdate:
    """Partial update for RoleService.update_role. None leaves a field unchanged."""

    name: str | None = None
    description: str | None = None
    permissions: tuple[Permission, ...] | None = None
