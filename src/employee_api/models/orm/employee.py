"""Employee ORM models."""

from datetime import date
from uuid import UUID

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from employee_api.models.orm.base import Base, TimestampMixin, UUIDMixin

DOC_NUMBER_CONSTRAINT = "uq_employees_doc_number"
EMAIL_CONSTRAINT = "uq_employees_email_lower"
PHONE_CONSTRAINT = "uq_employee_phones_number_type"


class EmployeeORM(Base, UUIDMixin, TimestampMixin):
    """Employee database model."""

    __tablename__ = "employees"

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    doc_number: Mapped[str] = mapped_column(String(50), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    manager_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default="employee")

    # Load explicitly with selectinload() when needed
    phones: Mapped[list["EmployeePhoneORM"]] = relationship(
        "EmployeePhoneORM",
        back_populates="employee",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="EmployeePhoneORM.position",
    )

    # Uniqueness is enforced here as well as by the service pre-checks,
    # which are not atomic with the insert
    __table_args__ = (
        UniqueConstraint("doc_number", name=DOC_NUMBER_CONSTRAINT),
        Index("idx_employees_is_active", "is_active"),
    )


# Emails are unique regardless of case
Index(EMAIL_CONSTRAINT, func.lower(EmployeeORM.email), unique=True)


class EmployeePhoneORM(Base, UUIDMixin):
    """Phone number owned by an employee."""

    __tablename__ = "employee_phones"

    employee_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    number: Mapped[str] = mapped_column(String(50), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    employee: Mapped[EmployeeORM] = relationship("EmployeeORM", back_populates="phones")

    __table_args__ = (
        UniqueConstraint("employee_id", "number", "type", name=PHONE_CONSTRAINT),
        Index("idx_employee_phones_employee_id", "employee_id"),
    )
