"""Employees router - create, read, update and soft-delete employees."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from employee_api.dependencies import get_employee_service
from employee_api.exceptions import EmployeeAPIError
from employee_api.models.dto.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from employee_api.security.rate_limit import API_DEFAULT_LIMIT, WRITE_OPERATION_LIMIT, limiter
from employee_api.services.employee_service import EmployeeService
from employee_api.utils.errors import raise_for_domain_error, raise_not_found

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(WRITE_OPERATION_LIMIT)
async def create_employee(
    request: Request,
    body: EmployeeCreate,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Create a new employee."""
    try:
        employee = await service.create_employee(body)
    except EmployeeAPIError as e:
        raise_for_domain_error(e)
    logger.info(f"Created employee {employee.id}")
    return employee


@router.get("", response_model=list[EmployeeResponse])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_employees(
    request: Request,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> list[EmployeeResponse]:
    """List all active employees."""
    employees = await service.get_all_employees()
    logger.debug(f"Retrieved {len(employees)} employees")
    return employees


@router.get("/{employee_id}", response_model=EmployeeResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_employee(
    request: Request,
    employee_id: UUID,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get a single active employee by ID."""
    employee = await service.get_employee_by_id(employee_id)
    if employee is None:
        raise_not_found("Employee")
    return employee


@router.put("/{employee_id}", response_model=EmployeeResponse)
@limiter.limit(WRITE_OPERATION_LIMIT)
async def update_employee(
    request: Request,
    employee_id: UUID,
    body: EmployeeUpdate,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Update an employee's details and replace its phone list.

    The document number, password and role cannot be changed.
    """
    try:
        return await service.update_employee(employee_id, body)
    except EmployeeAPIError as e:
        raise_for_domain_error(e)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(WRITE_OPERATION_LIMIT)
async def delete_employee(
    request: Request,
    employee_id: UUID,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> None:
    """Deactivate an employee. The record is kept but no longer listed."""
    try:
        await service.delete_employee(employee_id)
    except EmployeeAPIError as e:
        raise_for_domain_error(e)
