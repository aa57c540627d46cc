"""Domain-specific exceptions for the employee API.

These exceptions provide a clean separation between domain/service-layer
errors and HTTP responses, avoiding string matching in routers.
"""

from typing import Any
from uuid import UUID


class EmployeeAPIError(Exception):
    """Base exception for all employee API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(EmployeeAPIError):
    """Raised when a required field is missing or a domain rule is violated."""

    pass


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(EmployeeAPIError):
    """Base class for resource not found errors."""

    pass


class EmployeeNotFoundError(NotFoundError):
    """Raised when no active employee matches the given ID."""

    def __init__(self, employee_id: UUID | str | None = None) -> None:
        if employee_id is None:
            message = "Employee not found"
            details = {}
        else:
            message = f"Employee with ID '{employee_id}' not found."
            details = {"employee_id": str(employee_id)}
        super().__init__(message, details)


class PhoneNotFoundError(NotFoundError):
    """Raised when removing a phone the employee does not own."""

    def __init__(self) -> None:
        super().__init__("Phone number not found for this employee.")


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(EmployeeAPIError):
    """Base class for uniqueness and state-transition conflicts."""

    pass


class DocNumberAlreadyExistsError(ConflictError):
    """Raised when creating an employee with a document number already stored."""

    def __init__(self, doc_number: str) -> None:
        super().__init__(
            f"Employee with document number '{doc_number}' already exists.",
            {"doc_number": doc_number},
        )


class EmailAlreadyExistsError(ConflictError):
    """Raised when an email address is already used by another employee."""

    def __init__(self, email: str, on_update: bool = False) -> None:
        if on_update:
            message = f"Email '{email}' is already in use by another employee."
        else:
            message = f"Employee with email '{email}' already exists."
        super().__init__(message, {"email": email})


class DuplicatePhoneError(ConflictError):
    """Raised when adding a phone number the employee already owns."""

    def __init__(self) -> None:
        super().__init__("This phone number already exists for the employee.")


class EmployeeStateConflictError(ConflictError):
    """Raised on a no-op activation or deactivation."""

    pass


# =============================================================================
# Authorization Errors (403)
# =============================================================================


class AuthorizationError(EmployeeAPIError):
    """Base class for authorization errors."""

    pass


class InsufficientRoleError(AuthorizationError):
    """Raised when a requester assigns a role above their own."""

    def __init__(self, requester_role: str | None = None, requested_role: str | None = None) -> None:
        details: dict[str, Any] = {}
        if requester_role:
            details["requester_role"] = requester_role
        if requested_role:
            details["requested_role"] = requested_role
        super().__init__("You cannot create a user with higher permissions than your own.", details)
