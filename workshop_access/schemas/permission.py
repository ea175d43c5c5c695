"""Permission check API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from workshop_access.domain.enums import PermissionScope
from workshop_access.domain.value_objects import PermissionContext, PermissionRequest


class PermissionContextSchema(BaseModel):
    """Optional project/team narrowing for a check."""

    project_id: str | None = None
    team_id: str | None = None

    def to_context(self) -> PermissionContext:
        return PermissionContext(project_id=self.project_id, team_id=self.team_id)


class PermissionRequestItem(BaseModel):
    """One (action, resource) pair."""

    action: str = Field(..., min_length=1, max_length=64)
    resource: str = Field(..., min_length=1, max_length=64)

    def to_request(self) -> PermissionRequest:
        return PermissionRequest(action=self.action, resource=self.resource)


class PermissionCheckRequest(PermissionRequestItem):
    """Request body for POST /permissions/check."""

    context: PermissionContextSchema | None = None


class BatchCheckRequest(BaseModel):
    """Request body for POST /permissions/check-any and /check-all."""

    requests: list[PermissionRequestItem] = Field(default_factory=list, max_length=50)
    context: PermissionContextSchema | None = None


class PermissionResultResponse(BaseModel):
    """Decision returned by POST /permissions/check."""

    model_config = ConfigDict(from_attributes=True)

    granted: bool
    reason: str
    source: PermissionScope | None = None


class BatchCheckResponse(BaseModel):
    """Result of a batch check."""

    result: bool
