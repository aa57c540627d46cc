"""Service interfaces.

Abstract ports the employee service depends on. Concrete adapters live in
``employee_api.repositories`` and ``employee_api.security``; tests plug in
fakes or mocks.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from uuid import UUID

from employee_api.models.domain.employee import Employee
from employee_api.models.dto.employee import EmployeeResponse


class EmployeeRepositoryInterface(ABC):
    """Persistence port for the employee aggregate.

    Every ``find_*`` method only returns active employees. The ``exists_*``
    checks look at all stored rows, matching the unique constraints of the
    underlying store.
    """

    @abstractmethod
    async def add_one(self, employee: Employee) -> None:
        """Stage a new employee for insertion on the next commit."""

    @abstractmethod
    async def find_by_id(self, employee_id: UUID) -> Employee | None:
        """Get an active employee by ID."""

    @abstractmethod
    async def find_by_doc_number(self, doc_number: str) -> Employee | None:
        """Get an active employee by document number."""

    @abstractmethod
    async def find_all(self) -> list[Employee]:
        """Get all active employees."""

    @abstractmethod
    async def mark_updated(self, employee: Employee) -> None:
        """Stage the current state of a loaded employee for the next commit."""

    @abstractmethod
    async def exists_by_doc_number(self, doc_number: str) -> bool:
        """Check if any stored employee has this document number."""

    @abstractmethod
    async def exists_by_email(self, email: str, exclude_id: UUID | None = None) -> bool:
        """Check if any stored employee, other than exclude_id, has this email."""

    @abstractmethod
    async def commit(self) -> int:
        """Write all staged changes atomically.

        Returns:
            Number of rows written

        Raises:
            ConflictError: If a uniqueness constraint rejects the write
        """


class PasswordHasherInterface(ABC):
    """One-way password hashing port."""

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """Hash a plain text password."""

    @abstractmethod
    def verify_password(self, password: str, hashed: str) -> bool:
        """Check a plain text password against a stored hash."""


EmployeeProjector = Callable[[Employee], EmployeeResponse]
