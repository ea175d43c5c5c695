"""Role API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from workshop_access.domain.entities import Permission
from workshop_access.domain.enums import PermissionPolarity, PermissionScope


class PermissionEntry(BaseModel):
    """One permission entry of a role. '*' is accepted for resource and action."""

    model_config = ConfigDict(from_attributes=True)

    resource: str = Field(..., min_length=1, max_length=64)
    action: str = Field(..., min_length=1, max_length=64)
    polarity: PermissionPolarity = PermissionPolarity.GRANT

    def to_permission(self) -> Permission:
        return Permission(resource=self.resource, action=self.action, polarity=self.polarity)


class RoleCreateRequest(BaseModel):
    """Request body for creating a role."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=500)
    scope: PermissionScope = PermissionScope.WORKSHOP
    scope_id: str | None = None
    permissions: list[PermissionEntry] = Field(default_factory=list, max_length=100)
    is_default: bool = False


class RoleUpdateRequest(BaseModel):
    """Request body for updating a role (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=500)
    permissions: list[PermissionEntry] | None = Field(default=None, max_length=100)


class RoleResponse(BaseModel):
    """Role detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    description: str | None
    scope: PermissionScope
    scope_id: str | None
    permissions: list[PermissionEntry]
    is_default: bool


class RoleAssignRequest(BaseModel):
    """Request body for assigning a role to a user."""

    user_id: str
    scope_id: str | None = None


class RoleAssignmentResponse(BaseModel):
    """Role assignment response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    role_id: str
    user_id: str
    scope: PermissionScope
    scope_id: str | None
    assigned_by: str
    assigned_at: datetime
