"""Domain value objects: permission check inputs and outcomes."""

from workshop_access.domain.value_objects.decision import (
    PermissionContext,
    PermissionRequest,
    PermissionResult,
)

__all__ = ["PermissionContext", "PermissionRequest", "PermissionResult"]
