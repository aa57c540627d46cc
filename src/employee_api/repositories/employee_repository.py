"""Employee repository."""

import re
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from employee_api.exceptions import ConflictError, EmployeeNotFoundError
from employee_api.models.domain.employee import Employee
from employee_api.models.domain.phone_number import PhoneNumber
from employee_api.models.orm.employee import (
    DOC_NUMBER_CONSTRAINT,
    EMAIL_CONSTRAINT,
    PHONE_CONSTRAINT,
    EmployeeORM,
    EmployeePhoneORM,
)
from employee_api.repositories.base import BaseRepository
from employee_api.services.interfaces import EmployeeRepositoryInterface

# PostgreSQL: duplicate key value violates unique constraint "<name>"
CONSTRAINT_NAME_PATTERN = re.compile(r'constraint "([^"]+)"')

# Constraint name -> (message, field)
UNIQUE_CONSTRAINT_CONFLICTS: dict[str, tuple[str, str]] = {
    DOC_NUMBER_CONSTRAINT: ("Employee with this document number already exists.", "doc_number"),
    EMAIL_CONSTRAINT: ("Employee with this email already exists.", "email"),
    PHONE_CONSTRAINT: ("This phone number already exists for the employee.", "phones"),
}


def violated_constraint(error: IntegrityError) -> str | None:
    """Name of the constraint behind an IntegrityError, if the driver reports one.

    asyncpg exposes it as ``constraint_name`` on the original exception, which
    SQLAlchemy keeps as the cause of its DBAPI wrapper. Otherwise the name is
    read from the quoted identifier in the first line of the message; the key
    values only appear after it.
    """
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if isinstance(name, str) and name:
            return name
    match = CONSTRAINT_NAME_PATTERN.search(str(orig if orig is not None else error))
    return match.group(1) if match else None


def to_domain(employee_orm: EmployeeORM) -> Employee:
    """Rebuild the aggregate from a row with its phones loaded."""
    return Employee.rehydrate(
        id=employee_orm.id,
        is_active=employee_orm.is_active,
        first_name=employee_orm.first_name,
        last_name=employee_orm.last_name,
        email=employee_orm.email,
        doc_number=employee_orm.doc_number,
        date_of_birth=employee_orm.date_of_birth,
        password_hash=employee_orm.password_hash,
        manager_name=employee_orm.manager_name,
        role=employee_orm.role,
        phones=[PhoneNumber(p.number, p.type) for p in employee_orm.phones],
    )


class EmployeeRepository(BaseRepository[EmployeeORM], EmployeeRepositoryInterface):
    """Repository for employee aggregates.

    Keeps the rows it loaded or added during the session so that
    mark_updated() can copy aggregate state back onto them.
    """

    model = EmployeeORM

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self._rows: dict[UUID, EmployeeORM] = {}

    def _active_query(self):
        return (
            select(EmployeeORM)
            .where(EmployeeORM.is_active.is_(True))
            .options(selectinload(EmployeeORM.phones))
        )

    def _track(self, employee_orm: EmployeeORM) -> Employee:
        self._rows[employee_orm.id] = employee_orm
        return to_domain(employee_orm)

    async def add_one(self, employee: Employee) -> None:
        """Stage a new employee and its phones for insertion.

        Args:
            employee: Newly constructed aggregate
        """
        employee_orm = EmployeeORM(
            id=employee.id,
            is_active=employee.is_active,
            first_name=employee.first_name,
            last_name=employee.last_name,
            email=employee.email,
            doc_number=employee.doc_number,
            date_of_birth=employee.date_of_birth,
            password_hash=employee.password_hash,
            manager_name=employee.manager_name,
            role=str(employee.role),
            phones=[
                EmployeePhoneORM(number=phone.number, type=phone.type, position=position)
                for position, phone in enumerate(employee.phones)
            ],
        )
        self.session.add(employee_orm)
        self._rows[employee.id] = employee_orm

    async def find_by_id(self, employee_id: UUID) -> Employee | None:
        """Get an active employee by ID.

        Args:
            employee_id: Employee UUID

        Returns:
            Employee or None if not found or inactive
        """
        result = await self.session.execute(
            self._active_query().where(EmployeeORM.id == employee_id)
        )
        employee_orm = result.scalar_one_or_none()
        if employee_orm is None:
            return None
        return self._track(employee_orm)

    async def find_by_doc_number(self, doc_number: str) -> Employee | None:
        """Get an active employee by document number.

        Args:
            doc_number: Identity document number

        Returns:
            Employee or None if not found or inactive
        """
        result = await self.session.execute(
            self._active_query().where(EmployeeORM.doc_number == doc_number)
        )
        employee_orm = result.scalar_one_or_none()
        if employee_orm is None:
            return None
        return self._track(employee_orm)

    async def find_all(self) -> list[Employee]:
        """Get all active employees.

        Returns:
            List of employees ordered by last name, first name
        """
        result = await self.session.execute(
            self._active_query().order_by(EmployeeORM.last_name, EmployeeORM.first_name, EmployeeORM.id)
        )
        return [self._track(employee_orm) for employee_orm in result.scalars().all()]

    async def mark_updated(self, employee: Employee) -> None:
        """Copy the aggregate's mutable state onto its row.

        The document number is never written back. Phones are matched by
        (number, type) so unchanged phones keep their rows and the unique
        constraint on employee_phones is never hit mid-flush.

        Args:
            employee: Aggregate previously loaded or added through this repository

        Raises:
            EmployeeNotFoundError: If no row exists for the employee
        """
        employee_orm = self._rows.get(employee.id)
        if employee_orm is None:
            employee_orm = await self.get(employee.id, selectinload(EmployeeORM.phones))
            if employee_orm is None:
                raise EmployeeNotFoundError(employee.id)
            self._rows[employee.id] = employee_orm

        employee_orm.first_name = employee.first_name
        employee_orm.last_name = employee.last_name
        employee_orm.email = employee.email
        employee_orm.manager_name = employee.manager_name
        employee_orm.is_active = employee.is_active

        wanted = {(phone.number, phone.type): position for position, phone in enumerate(employee.phones)}
        for phone_orm in list(employee_orm.phones):
            position = wanted.pop((phone_orm.number, phone_orm.type), None)
            if position is None:
                employee_orm.phones.remove(phone_orm)
            elif phone_orm.position != position:
                phone_orm.position = position
        for (number, phone_type), position in wanted.items():
            employee_orm.phones.append(
                EmployeePhoneORM(number=number, type=phone_type, position=position)
            )

    async def exists_by_doc_number(self, doc_number: str) -> bool:
        """Check if a document number is already stored.

        Inactive employees count, since the unique constraint covers them.

        Args:
            doc_number: Identity document number

        Returns:
            True if document number exists, False otherwise
        """
        result = await self.session.execute(
            select(func.count()).select_from(EmployeeORM).where(EmployeeORM.doc_number == doc_number)
        )
        return result.scalar_one() > 0

    async def exists_by_email(self, email: str, exclude_id: UUID | None = None) -> bool:
        """Check if an email already exists.

        Args:
            email: Email to check (case-insensitive)
            exclude_id: Optionally exclude an employee ID from the check

        Returns:
            True if email exists, False otherwise
        """
        query = select(func.count()).select_from(EmployeeORM).where(
            func.lower(EmployeeORM.email) == email.lower()
        )
        if exclude_id:
            query = query.where(EmployeeORM.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar_one() > 0

    def conflict_from_integrity_error(self, error: IntegrityError) -> ConflictError:
        """Map unique-constraint violations on employees to conflicts."""
        conflict = UNIQUE_CONSTRAINT_CONFLICTS.get(violated_constraint(error) or "")
        if conflict is None:
            return ConflictError("Employee already exists")
        message, field = conflict
        return ConflictError(message, {"field": field})
