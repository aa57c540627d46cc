"""Employee aggregate.

The aggregate owns every invariant on a single employee record: required
fields, the minimum age, phone uniqueness and the activation lifecycle.
Attributes are read-only from outside; state changes only through the
methods below, which re-check the invariants on each call.
"""

from collections.abc import Iterable
from datetime import date
from uuid import UUID, uuid4

from employee_api.exceptions import (
    DuplicatePhoneError,
    EmployeeStateConflictError,
    PhoneNotFoundError,
    ValidationError,
)
from employee_api.models.domain.phone_number import PhoneNumber
from employee_api.models.domain.role import EmployeeRole

MINIMUM_AGE = 18


def _require(value: str | None, message: str) -> None:
    """Raise ValidationError if value is empty or whitespace only."""
    if value is None or not value.strip():
        raise ValidationError(message)


def calculate_age(date_of_birth: date, today: date | None = None) -> int:
    """Calculate age in whole years as of today.

    Args:
        date_of_birth: Birth date
        today: Reference date (defaults to the current date)

    Returns:
        Completed years, one less if this year's birthday is still ahead
    """
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


class Employee:
    """Employee aggregate root."""

    def __init__(
        self,
        first_name: str,
        last_name: str,
        email: str,
        doc_number: str,
        date_of_birth: date,
        password_hash: str,
        manager_name: str | None = None,
        role: EmployeeRole = EmployeeRole.EMPLOYEE,
    ) -> None:
        """Create a new, active employee with no phones.

        Raises:
            ValidationError: If a required field is blank or the employee is under 18
        """
        _require(first_name, "First name is required.")
        _require(last_name, "Last name is required.")
        _require(email, "Email is required.")
        _require(doc_number, "Document number is required.")
        _require(password_hash, "Password hash is required.")

        if calculate_age(date_of_birth) < MINIMUM_AGE:
            raise ValidationError(
                f"Employee must be at least {MINIMUM_AGE} years old.",
                {"field": "date_of_birth"},
            )

        self._id = uuid4()
        self._is_active = True
        self._first_name = first_name
        self._last_name = last_name
        self._email = email
        self._doc_number = doc_number
        self._date_of_birth = date_of_birth
        self._password_hash = password_hash
        self._manager_name = manager_name
        self._role = EmployeeRole(role)
        self._phones: list[PhoneNumber] = []

    @classmethod
    def rehydrate(
        cls,
        id: UUID,
        is_active: bool,
        first_name: str,
        last_name: str,
        email: str,
        doc_number: str,
        date_of_birth: date,
        password_hash: str,
        manager_name: str | None,
        role: EmployeeRole | str,
        phones: Iterable[PhoneNumber] = (),
    ) -> "Employee":
        """Rebuild an employee from stored state.

        The age check only applies when an employee is first created, so it
        is not repeated here. Required fields are still enforced.
        """
        _require(first_name, "First name is required.")
        _require(last_name, "Last name is required.")
        _require(email, "Email is required.")
        _require(doc_number, "Document number is required.")
        _require(password_hash, "Password hash is required.")

        employee = cls.__new__(cls)
        employee._id = id
        employee._is_active = is_active
        employee._first_name = first_name
        employee._last_name = last_name
        employee._email = email
        employee._doc_number = doc_number
        employee._date_of_birth = date_of_birth
        employee._password_hash = password_hash
        employee._manager_name = manager_name
        employee._role = EmployeeRole(role)
        employee._phones = []
        for phone in phones:
            employee.add_phone(phone)
        return employee

    # -------------------------------------------------------------------------
    # Read-only attributes
    # -------------------------------------------------------------------------

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def email(self) -> str:
        return self._email

    @property
    def doc_number(self) -> str:
        return self._doc_number

    @property
    def date_of_birth(self) -> date:
        return self._date_of_birth

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def manager_name(self) -> str | None:
        return self._manager_name

    @property
    def role(self) -> EmployeeRole:
        return self._role

    @property
    def phones(self) -> tuple[PhoneNumber, ...]:
        """Snapshot of the owned phone numbers, in insertion order."""
        return tuple(self._phones)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_phone(self, phone: PhoneNumber) -> None:
        """Add a phone number.

        Raises:
            DuplicatePhoneError: If an equal number/type pair is already present
        """
        if phone in self._phones:
            raise DuplicatePhoneError()
        self._phones.append(phone)

    def remove_phone(self, phone: PhoneNumber) -> None:
        """Remove the first phone equal to the given one.

        Raises:
            PhoneNotFoundError: If no equal phone is present
        """
        try:
            self._phones.remove(phone)
        except ValueError:
            raise PhoneNotFoundError() from None

    def update_details(
        self,
        first_name: str,
        last_name: str,
        email: str,
        manager_name: str | None = None,
    ) -> None:
        """Overwrite the mutable personal and contact fields.

        Document number, identity, role, password hash, birth date and the
        active flag are left untouched.

        Raises:
            ValidationError: If first name, last name or email is blank
        """
        _require(first_name, "First name is required.")
        _require(last_name, "Last name is required.")
        _require(email, "Email is required.")

        self._first_name = first_name
        self._last_name = last_name
        self._email = email
        self._manager_name = manager_name

    def deactivate(self) -> None:
        """Mark the employee inactive (soft delete)."""
        if not self._is_active:
            raise EmployeeStateConflictError("Employee is already deactivated.")
        self._is_active = False

    def activate(self) -> None:
        """Mark a deactivated employee active again."""
        if self._is_active:
            raise EmployeeStateConflictError("Employee is already active.")
        self._is_active = True

    def __repr__(self) -> str:
        return f"<Employee id={self._id} active={self._is_active}>"
