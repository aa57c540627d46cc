"""Tests for EmployeeRepository mapping logic that needs no database."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy import UniqueConstraint
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, OperationalError

from employee_api.exceptions import ConflictError, EmployeeNotFoundError
from employee_api.models.domain import Employee, EmployeeRole, PhoneNumber
from employee_api.models.orm import EmployeeORM, EmployeePhoneORM
from employee_api.repositories.employee_repository import EmployeeRepository, to_domain


def make_row(*phones: tuple[str, str]) -> EmployeeORM:
    return EmployeeORM(
        id=uuid4(),
        is_active=True,
        first_name="John",
        last_name="Doe",
        email="john.doe@company.com",
        doc_number="12345678",
        date_of_birth=date(1990, 1, 1),
        password_hash="hashed::secret123",
        manager_name=None,
        role="employee",
        phones=[
            EmployeePhoneORM(number=number, type=phone_type, position=position)
            for position, (number, phone_type) in enumerate(phones)
        ],
    )


def make_session() -> AsyncMock:
    session = AsyncMock()
    session.add = MagicMock()
    session.new = set()
    session.dirty = set()
    session.deleted = set()
    return session


class TestSchema:
    def test_email_unique_index_ignores_case(self) -> None:
        table = EmployeeORM.__table__
        index = next(i for i in table.indexes if i.name == "uq_employees_email_lower")

        assert index.unique
        expression = str(index.expressions[0].compile(dialect=postgresql.dialect()))
        assert expression.replace(" ", "").lower() == "lower(employees.email)"
        assert not table.c.email.unique

    def test_doc_number_constraint_is_named(self) -> None:
        names = {c.name for c in EmployeeORM.__table__.constraints if isinstance(c, UniqueConstraint)}

        assert "uq_employees_doc_number" in names


class TestToDomain:
    def test_maps_row_and_phones(self) -> None:
        row = make_row(("555-1234", "Mobile"), ("555-0000", "Home"))

        employee = to_domain(row)

        assert employee.id == row.id
        assert employee.role is EmployeeRole.EMPLOYEE
        assert employee.phones == (PhoneNumber("555-1234", "Mobile"), PhoneNumber("555-0000", "Home"))


class TestAddOne:
    @pytest.mark.anyio
    async def test_stages_row_with_positioned_phones(self) -> None:
        session = make_session()
        repo = EmployeeRepository(session)
        employee = Employee(
            first_name="John",
            last_name="Doe",
            email="john.doe@company.com",
            doc_number="12345678",
            date_of_birth=date(1990, 1, 1),
            password_hash="hashed::secret123",
            role=EmployeeRole.MANAGER,
        )
        employee.add_phone(PhoneNumber("1", "Home"))
        employee.add_phone(PhoneNumber("2", "Work"))

        await repo.add_one(employee)

        row = session.add.call_args.args[0]
        assert row.id == employee.id
        assert row.role == "manager"
        assert [(p.number, p.type, p.position) for p in row.phones] == [
            ("1", "Home", 0),
            ("2", "Work", 1),
        ]


class TestMarkUpdated:
    @pytest.mark.anyio
    async def test_copies_details_and_diffs_phones(self) -> None:
        row = make_row(("555-1234", "Mobile"), ("555-0000", "Home"))
        kept = row.phones[1]
        repo = EmployeeRepository(make_session())
        employee = repo._track(row)

        employee.update_details("Johnny", "Doe", "johnny@company.com", manager_name="Boss")
        employee.remove_phone(PhoneNumber("555-1234", "Mobile"))
        employee.add_phone(PhoneNumber("555-9999", "Work"))
        employee.deactivate()

        await repo.mark_updated(employee)

        assert row.first_name == "Johnny"
        assert row.email == "johnny@company.com"
        assert row.manager_name == "Boss"
        assert row.is_active is False
        assert row.doc_number == "12345678"
        assert [(p.number, p.type, p.position) for p in row.phones] == [
            ("555-0000", "Home", 0),
            ("555-9999", "Work", 1),
        ]
        assert row.phones[0] is kept

    @pytest.mark.anyio
    async def test_untracked_missing_employee_raises(self) -> None:
        session = make_session()
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        session.execute.return_value = result
        repo = EmployeeRepository(session)
        employee = to_domain(make_row())

        with pytest.raises(EmployeeNotFoundError):
            await repo.mark_updated(employee)


class TestCommit:
    @pytest.mark.anyio
    async def test_returns_number_of_staged_objects(self) -> None:
        session = make_session()
        session.new = {object(), object()}
        repo = EmployeeRepository(session)

        assert await repo.commit() == 2
        session.commit.assert_awaited_once()

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "constraint,message",
        [
            ("uq_employees_doc_number", "Employee with this document number already exists."),
            ("uq_employees_email_lower", "Employee with this email already exists."),
            ("uq_employee_phones_number_type", "This phone number already exists for the employee."),
        ],
    )
    async def test_unique_violation_becomes_conflict(self, constraint: str, message: str) -> None:
        session = make_session()
        session.commit.side_effect = IntegrityError(
            "INSERT",
            {},
            Exception(f'duplicate key value violates unique constraint "{constraint}"'),
        )
        repo = EmployeeRepository(session)

        with pytest.raises(ConflictError) as exc_info:
            await repo.commit()

        assert exc_info.value.message == message
        session.rollback.assert_awaited_once()

    @pytest.mark.anyio
    async def test_key_values_do_not_affect_classification(self) -> None:
        session = make_session()
        session.commit.side_effect = IntegrityError(
            "INSERT",
            {},
            Exception(
                'duplicate key value violates unique constraint "uq_employees_email_lower"\n'
                "DETAIL:  Key (lower(email::text))=(doc_number@company.com) already exists."
            ),
        )
        repo = EmployeeRepository(session)

        with pytest.raises(ConflictError) as exc_info:
            await repo.commit()

        assert exc_info.value.details == {"field": "email"}

    @pytest.mark.anyio
    async def test_driver_constraint_name_is_preferred(self) -> None:
        driver_error = Exception("duplicate key")
        driver_error.constraint_name = "uq_employees_doc_number"
        wrapper = Exception("email doc_number")
        wrapper.__cause__ = driver_error
        session = make_session()
        session.commit.side_effect = IntegrityError("INSERT", {}, wrapper)
        repo = EmployeeRepository(session)

        with pytest.raises(ConflictError) as exc_info:
            await repo.commit()

        assert exc_info.value.details == {"field": "doc_number"}

    @pytest.mark.anyio
    async def test_unknown_constraint_is_generic_conflict(self) -> None:
        session = make_session()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("unique violation"))
        repo = EmployeeRepository(session)

        with pytest.raises(ConflictError) as exc_info:
            await repo.commit()

        assert exc_info.value.message == "Employee already exists"

    @pytest.mark.anyio
    async def test_other_database_errors_propagate_after_rollback(self) -> None:
        session = make_session()
        session.commit.side_effect = OperationalError("COMMIT", {}, Exception("connection lost"))
        repo = EmployeeRepository(session)

        with pytest.raises(OperationalError):
            await repo.commit()

        session.rollback.assert_awaited_once()
