"""Domain models package."""

from employee_api.models.domain.employee import Employee, calculate_age
from employee_api.models.domain.phone_number import PhoneNumber
from employee_api.models.domain.role import EmployeeRole

__all__ = [
    "Employee",
    "EmployeeRole",
    "PhoneNumber",
    "calculate_age",
]
