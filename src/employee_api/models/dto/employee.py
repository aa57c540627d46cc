"""Employee DTOs."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from employee_api.constants.validation import (
    DOC_NUMBER_MAX_LENGTH,
    DOC_NUMBER_MIN_LENGTH,
    MANAGER_NAME_MAX_LENGTH,
    MAX_PHONES_PER_EMPLOYEE,
    NAME_MAX_LENGTH,
    PASSWORD_MAX_BYTES,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    PHONE_NUMBER_MAX_LENGTH,
    PHONE_TYPE_MAX_LENGTH,
)
from employee_api.models.domain.role import EmployeeRole


class PhoneNumberDto(BaseModel):
    """Phone number as exchanged with clients."""

    number: str = Field(min_length=1, max_length=PHONE_NUMBER_MAX_LENGTH, description="Phone number")
    type: str = Field(min_length=1, max_length=PHONE_TYPE_MAX_LENGTH, description="Label, e.g. Mobile")

    class Config:
        """Pydantic config."""

        from_attributes = True


class EmployeeResponse(BaseModel):
    """Employee response DTO.

    Never carries the password hash or the active flag.
    """

    id: UUID
    first_name: str
    last_name: str
    email: str
    doc_number: str
    date_of_birth: date
    phones: list[PhoneNumberDto] = Field(default_factory=list)
    manager_name: str | None = None
    role: EmployeeRole = EmployeeRole.EMPLOYEE


class EmployeeCreate(BaseModel):
    """DTO for creating an employee."""

    first_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH, description="First name")
    last_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH, description="Last name")
    email: EmailStr = Field(description="Employee email address")
    doc_number: str = Field(
        min_length=DOC_NUMBER_MIN_LENGTH,
        max_length=DOC_NUMBER_MAX_LENGTH,
        description="Identity document number",
    )
    date_of_birth: date = Field(description="Date of birth")
    password: str = Field(
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        description="Plain text password, hashed before storage",
    )
    phones: list[PhoneNumberDto] = Field(
        default_factory=list,
        max_length=MAX_PHONES_PER_EMPLOYEE,
        description="Phone numbers",
    )
    manager_name: str | None = Field(default=None, max_length=MANAGER_NAME_MAX_LENGTH, description="Manager name")
    role: EmployeeRole = Field(default=EmployeeRole.EMPLOYEE, description="Role assigned to the employee")

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        """Reject passwords longer than bcrypt accepts once UTF-8 encoded."""
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(
                f"Password must not exceed {PASSWORD_MAX_BYTES} bytes when UTF-8 encoded"
            )
        return v


class EmployeeUpdate(BaseModel):
    """DTO for updating an employee.

    The document number, password and role cannot be changed here.
    """

    first_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH, description="First name")
    last_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH, description="Last name")
    email: EmailStr = Field(description="Employee email address")
    # Accepted for client compatibility; the stored birth date is never changed
    date_of_birth: date | None = Field(default=None, description="Ignored")
    phones: list[PhoneNumberDto] = Field(
        default_factory=list,
        max_length=MAX_PHONES_PER_EMPLOYEE,
        description="Replacement phone list",
    )
    manager_name: str | None = Field(default=None, max_length=MANAGER_NAME_MAX_LENGTH, description="Manager name")
