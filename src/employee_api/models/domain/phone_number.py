"""Phone number value object."""

from dataclasses import dataclass

from employee_api.exceptions import ValidationError


@dataclass(frozen=True)
class PhoneNumber:
    """A phone number owned by an employee.

    Two instances with the same number and type are interchangeable.
    """

    number: str
    type: str

    def __post_init__(self) -> None:
        if not self.number or not self.number.strip():
            raise ValidationError("Phone number cannot be empty.", {"field": "number"})
        if not self.type or not self.type.strip():
            raise ValidationError("Phone type cannot be empty.", {"field": "type"})

    def __str__(self) -> str:
        return f"{self.type}: {self.number}"
