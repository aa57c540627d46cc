"""Centralized dependency injection factories for FastAPI."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.database import get_db
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.security.password import get_password_service
from employee_api.services.employee_service import EmployeeService


# =============================================================================
# Employee Service Factories
# =============================================================================


def get_employee_repository(db: AsyncSession = Depends(get_db)) -> EmployeeRepository:
    """Get EmployeeRepository instance bound to the request session."""
    return EmployeeRepository(db)


def get_employee_service(
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(employee_repo, get_password_service())
