"""Services package."""

from employee_api.services.employee_service import EmployeeService, build_employee_response

__all__ = [
    "EmployeeService",
    "build_employee_response",
]
