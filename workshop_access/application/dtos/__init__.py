"""Application DTOs: inputs to use-case services (no dependency on transport)."""

from workshop_access.application.dtos.role import RoleCreate, RoleUpdate

__all__ = ["RoleCreate", "RoleUpdate"]
