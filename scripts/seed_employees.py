#!/usr/bin/env python
"""Seed the database with an initial director account."""

import asyncio
import logging
from datetime import date

from employee_api.database import async_session_maker, engine
from employee_api.exceptions import EmployeeAPIError
from employee_api.models.domain.role import EmployeeRole
from employee_api.models.dto.employee import EmployeeCreate, PhoneNumberDto
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.security.password import get_password_service
from employee_api.services.employee_service import EmployeeService
from employee_api.utils.secure_logging import configure_logging

logger = logging.getLogger("seed_employees")


async def seed_director(
    email: str,
    password: str,
    doc_number: str,
    first_name: str,
    last_name: str,
    date_of_birth: date,
    phone: str | None = None,
) -> bool:
    """Create a director account through the regular service path."""
    data = EmployeeCreate(
        first_name=first_name,
        last_name=last_name,
        email=email,
        doc_number=doc_number,
        date_of_birth=date_of_birth,
        password=password,
        phones=[PhoneNumberDto(number=phone, type="mobile")] if phone else [],
        role=EmployeeRole.DIRECTOR,
    )

    try:
        async with async_session_maker() as session:
            service = EmployeeService(EmployeeRepository(session), get_password_service())
            try:
                employee = await service.create_employee(data)
            except EmployeeAPIError as e:
                logger.error(f"Seeding failed: {e.message}")
                return False
    finally:
        await engine.dispose()

    logger.info(f"Director created: {employee.id}")
    return True


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create an initial director account")
    parser.add_argument("--email", required=True, help="Email address")
    parser.add_argument("--password", required=True, help="Password (min 8 chars)")
    parser.add_argument("--doc-number", required=True, help="Document number")
    parser.add_argument("--first-name", required=True, help="First name")
    parser.add_argument("--last-name", required=True, help="Last name")
    parser.add_argument(
        "--date-of-birth",
        required=True,
        type=date.fromisoformat,
        help="Birth date (YYYY-MM-DD)",
    )
    parser.add_argument("--phone", help="Mobile phone number")
    args = parser.parse_args()

    configure_logging()
    ok = asyncio.run(
        seed_director(
            args.email,
            args.password,
            args.doc_number,
            args.first_name,
            args.last_name,
            args.date_of_birth,
            args.phone,
        )
    )
    raise SystemExit(0 if ok else 1)
