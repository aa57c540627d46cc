"""Data Transfer Objects package."""

from employee_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    PhoneNumberDto,
)

__all__ = [
    "EmployeeCreate",
    "EmployeeResponse",
    "EmployeeUpdate",
    "PhoneNumberDto",
]
