"""Employee role domain model."""

from enum import StrEnum


class EmployeeRole(StrEnum):
    """Role assigned to an employee."""

    EMPLOYEE = "employee"
    MANAGER = "manager"
    DIRECTOR = "director"

    @property
    def priority(self) -> int:
        """Privilege rank; higher outranks lower."""
        return ROLE_PRIORITY[self]

    def outranks(self, other: "EmployeeRole") -> bool:
        """Check if this role is strictly more privileged than another."""
        return self.priority > other.priority


ROLE_PRIORITY: dict[EmployeeRole, int] = {
    EmployeeRole.EMPLOYEE: 10,
    EmployeeRole.MANAGER: 50,
    EmployeeRole.DIRECTOR: 100,
}
