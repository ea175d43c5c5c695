"""Domain exceptions for workshop access control.

Defines domain-level exceptions that represent business rule violations
and collaborator failures. Presentation layer maps them to HTTP responses
in exception handlers.
"""

from typing import Any


class WorkshopAccessException(Exception):
    """Base exception for all workshop access errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(WorkshopAccessException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(WorkshopAccessException):
    """Raised when the request carries no usable actor identity."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(WorkshopAccessException):
    """Raised when the actor lacks required permissions for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'task', 'role').
            action: Optional action that was attempted (e.g. 'update').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(WorkshopAccessException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'role').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateAssignmentException(WorkshopAccessException):
    """Raised when assigning a role that is already assigned at the same scope."""

    def __init__(self, role_id: str, user_id: str, scope_id: str | None = None) -> None:
        super().__init__(
            "Role already assigned to this user at this scope",
            "DUPLICATE_ASSIGNMENT",
            {"role_id": role_id, "user_id": user_id, "scope_id": scope_id},
        )


class CollaboratorUnavailableException(WorkshopAccessException):
    """Raised when a directory or role store lookup fails during a permission check.

    The check is aborted: nothing is granted and nothing is cached.
    """

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        """Initialize with the failing operation and the underlying error.

        Args:
            operation: Name of the evaluation step or collaborator call.
            cause: Underlying exception, if any (also chained via raise ... from).
        """
        details: dict[str, Any] = {"operation": operation}
        if cause is not None:
            details["cause"] = type(cause).__name__
        super().__init__(
            f"Permission check failed: {operation} unavailable",
            "COLLABORATOR_UNAVAILABLE",
            details,
        )
