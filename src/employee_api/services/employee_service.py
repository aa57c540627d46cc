"""Employee service: create, read, update and soft-delete use cases."""

import logging
from uuid import UUID

from employee_api.exceptions import (
    DocNumberAlreadyExistsError,
    EmailAlreadyExistsError,
    EmployeeNotFoundError,
    InsufficientRoleError,
)
from employee_api.models.domain.employee import Employee
from employee_api.models.domain.phone_number import PhoneNumber
from employee_api.models.domain.role import EmployeeRole
from employee_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    PhoneNumberDto,
)
from employee_api.services.interfaces import (
    EmployeeProjector,
    EmployeeRepositoryInterface,
    PasswordHasherInterface,
)

logger = logging.getLogger(__name__)


def build_employee_response(employee: Employee) -> EmployeeResponse:
    """Build an EmployeeResponse from the aggregate.

    The password hash and the active flag are left out.
    """
    return EmployeeResponse(
        id=employee.id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        email=employee.email,
        doc_number=employee.doc_number,
        date_of_birth=employee.date_of_birth,
        phones=[PhoneNumberDto(number=p.number, type=p.type) for p in employee.phones],
        manager_name=employee.manager_name,
        role=employee.role,
    )


class EmployeeService:
    """Service for managing employees."""

    def __init__(
        self,
        employee_repo: EmployeeRepositoryInterface,
        password_service: PasswordHasherInterface,
        projector: EmployeeProjector = build_employee_response,
    ) -> None:
        """Initialize service with its collaborators.

        Args:
            employee_repo: Persistence port
            password_service: Password hashing port
            projector: Converts aggregates to response DTOs
        """
        self.employee_repo = employee_repo
        self.password_service = password_service
        self.projector = projector

    async def create_employee(
        self,
        data: EmployeeCreate,
        requester_role: EmployeeRole | None = None,
    ) -> EmployeeResponse:
        """Create an employee.

        Args:
            data: Employee creation data
            requester_role: Role of the caller; when given, the new employee
                may not be assigned a role that outranks it

        Returns:
            Created EmployeeResponse

        Raises:
            DocNumberAlreadyExistsError: If the document number is taken
            EmailAlreadyExistsError: If the email is taken
            InsufficientRoleError: If requester_role ranks below data.role
            ValidationError: If the aggregate rejects the data (e.g. under 18)
            ConflictError: If the phone list repeats a number/type pair, or
                a unique constraint rejects the insert
        """
        if await self.employee_repo.exists_by_doc_number(data.doc_number):
            raise DocNumberAlreadyExistsError(data.doc_number)

        if await self.employee_repo.exists_by_email(data.email):
            raise EmailAlreadyExistsError(data.email)

        requested_role = EmployeeRole(data.role)
        if requester_role is not None and requested_role.outranks(EmployeeRole(requester_role)):
            raise InsufficientRoleError(str(requester_role), str(requested_role))

        password_hash = self.password_service.hash_password(data.password)

        employee = Employee(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            doc_number=data.doc_number,
            date_of_birth=data.date_of_birth,
            password_hash=password_hash,
            manager_name=data.manager_name,
            role=requested_role,
        )

        for phone in data.phones or []:
            employee.add_phone(PhoneNumber(phone.number, phone.type))

        await self.employee_repo.add_one(employee)
        await self.employee_repo.commit()

        logger.info(f"Employee {employee.id} created")
        return self.projector(employee)

    async def get_employee_by_id(self, employee_id: UUID) -> EmployeeResponse | None:
        """Get an active employee.

        Args:
            employee_id: Employee UUID

        Returns:
            EmployeeResponse, or None if no active employee has this ID
        """
        employee = await self.employee_repo.find_by_id(employee_id)
        if employee is None:
            return None
        return self.projector(employee)

    async def get_all_employees(self) -> list[EmployeeResponse]:
        """Get every active employee.

        Returns:
            List of EmployeeResponse
        """
        employees = await self.employee_repo.find_all()
        return [self.projector(employee) for employee in employees]

    async def update_employee(self, employee_id: UUID, data: EmployeeUpdate) -> EmployeeResponse:
        """Update an employee's details and replace its phone list.

        Args:
            employee_id: Employee UUID
            data: Employee update data

        Returns:
            Updated EmployeeResponse

        Raises:
            EmployeeNotFoundError: If no active employee has this ID
            EmailAlreadyExistsError: If the new email belongs to another employee
            ValidationError: If the aggregate rejects the new details
            ConflictError: If the new phone list repeats a number/type pair
        """
        employee = await self.employee_repo.find_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        if data.email.lower() != employee.email.lower():
            if await self.employee_repo.exists_by_email(data.email, exclude_id=employee_id):
                raise EmailAlreadyExistsError(data.email, on_update=True)

        employee.update_details(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            manager_name=data.manager_name,
        )

        # Full replace, not a merge
        for phone in employee.phones:
            employee.remove_phone(phone)
        for phone in data.phones or []:
            employee.add_phone(PhoneNumber(phone.number, phone.type))

        await self.employee_repo.mark_updated(employee)
        await self.employee_repo.commit()

        logger.info(f"Employee {employee_id} updated")
        return self.projector(employee)

    async def delete_employee(self, employee_id: UUID) -> None:
        """Soft-delete an employee by deactivating it.

        The record stays in storage but is excluded from every active-only read.

        Args:
            employee_id: Employee UUID

        Raises:
            EmployeeNotFoundError: If no active employee has this ID
        """
        employee = await self.employee_repo.find_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        employee.deactivate()

        await self.employee_repo.mark_updated(employee)
        await self.employee_repo.commit()

        logger.info(f"Employee {employee_id} deactivated")
