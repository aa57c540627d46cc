"""Tests for error translation, sanitization and secure logging."""

import pytest
from fastapi import HTTPException

from employee_api.exceptions import (
    DocNumberAlreadyExistsError,
    EmployeeNotFoundError,
    EmployeeStateConflictError,
    InsufficientRoleError,
    ValidationError,
)
from employee_api.middleware.error_handler import is_safe_error_message, sanitize_error_detail
from employee_api.security.password import PasswordService
from employee_api.utils.errors import raise_for_domain_error
from employee_api.utils.secure_logging import sanitize_exception_message


class TestDomainErrorTranslation:
    @pytest.mark.parametrize(
        "error,status_code",
        [
            (EmployeeNotFoundError("abc"), 404),
            (DocNumberAlreadyExistsError("12345"), 409),
            (EmployeeStateConflictError("Employee is already deactivated."), 409),
            (InsufficientRoleError("manager", "director"), 403),
            (ValidationError("First name is required."), 400),
        ],
    )
    def test_status_codes(self, error, status_code: int) -> None:
        with pytest.raises(HTTPException) as exc_info:
            raise_for_domain_error(error)

        assert exc_info.value.status_code == status_code
        assert exc_info.value.detail == error.message


class TestSanitizeErrorDetail:
    def test_domain_messages_pass_through(self) -> None:
        for message in [
            "Employee with ID '1' not found.",
            "Employee with email 'a@b.com' already exists.",
            "Employee must be at least 18 years old.",
            "You cannot create a user with higher permissions than your own.",
        ]:
            assert is_safe_error_message(message)

    def test_unknown_messages_are_replaced(self) -> None:
        detail = 'relation "employees" violates constraint at /srv/app/db.py'

        assert sanitize_error_detail(detail, 500) == "Internal server error"
        assert sanitize_error_detail(detail, 409) == "Conflict with existing resource"

    def test_validation_list_keeps_field_and_message_only(self) -> None:
        errors = [
            {"loc": ("body", "password"), "msg": "String too short", "input": "abc"},
            {"loc": ("body", "email"), "msg": "Invalid email", "input": "x"},
        ]

        assert sanitize_error_detail(errors, 422) == "password: String too short; email: Invalid email"


class TestSanitizeExceptionMessage:
    def test_redacts_sensitive_values(self) -> None:
        password_hash = PasswordService(rounds=4).hash_password("secret123")
        error = RuntimeError(
            f"failed for john@company.com at postgresql://u:p@db:5432/app hash={password_hash}"
        )

        message = sanitize_exception_message(error)

        assert "john@company.com" not in message
        assert "postgresql://" not in message
        assert password_hash not in message

    def test_truncates_long_messages(self) -> None:
        assert len(sanitize_exception_message(RuntimeError("x " * 500))) == 200


class TestPasswordService:
    def test_hash_and_verify(self) -> None:
        service = PasswordService(rounds=4)
        hashed = service.hash_password("secret123")

        assert hashed != "secret123"
        assert service.verify_password("secret123", hashed)
        assert not service.verify_password("wrong", hashed)

    def test_malformed_hash_does_not_verify(self) -> None:
        assert PasswordService(rounds=4).verify_password("secret123", "not-a-hash") is False
