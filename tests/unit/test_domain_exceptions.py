"""Tests for domain exceptions (error_code, message, details, to_dict)."""

from workshop_access.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CollaboratorUnavailableException,
    DuplicateAssignmentException,
    ResourceNotFoundException,
    ValidationException,
    WorkshopAccessException,
)


def test_base_exception_default_error_code() -> None:
    """Base WorkshopAccessException uses class name as error_code when not provided."""
    exc = WorkshopAccessException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "WorkshopAccessException"
    assert exc.details == {}


def test_to_dict() -> None:
    exc = WorkshopAccessException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="scope_id")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "scope_id"}
    assert ValidationException("Invalid").details == {}


def test_authentication_exception() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_with_resource_and_action() -> None:
    """Resource and action build the message and details."""
    exc = AuthorizationException(resource="role", action="view")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission denied: view on role"
    assert exc.details == {"resource": "role", "action": "view"}


def test_authorization_exception_custom_message() -> None:
    exc = AuthorizationException(message="Only workshop managers can assign roles")
    assert exc.message == "Only workshop managers can assign roles"
    assert exc.details == {}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("role", "abc")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.message == "role not found: abc"
    assert exc.details == {"resource_type": "role", "resource_id": "abc"}


def test_duplicate_assignment_exception() -> None:
    exc = DuplicateAssignmentException("r1", "u1", "s1")
    assert exc.error_code == "DUPLICATE_ASSIGNMENT"
    assert exc.details == {"role_id": "r1", "user_id": "u1", "scope_id": "s1"}


def test_collaborator_unavailable_exception() -> None:
    exc = CollaboratorUnavailableException("permission evaluation", TimeoutError())
    assert exc.error_code == "COLLABORATOR_UNAVAILABLE"
    assert exc.details == {"operation": "permission evaluation", "cause": "TimeoutError"}
    assert "cause" not in CollaboratorUnavailableException("lookup").details
