"""Employee model."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_manager.models.base import Base, TimestampMixin
from payroll_manager.models.enums import CompensationMode

if TYPE_CHECKING:
    from payroll_manager.models.payroll import PayStatement


class Employee(Base, TimestampMixin):
    """Employee record with compensation profile.

    Exactly one of hourly_rate / annual_salary is meaningful, selected by
    pay_type. Maintained by the employee management workflow; the payroll
    engine only reads it.
    """

    __tablename__ = "employee"

    employee_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)
    pay_type: Mapped[str] = mapped_column(
        String, nullable=False, default=CompensationMode.HOURLY.value
    )
    hourly_rate: Mapped[Decimal] = mapped_column(
        Numeric(12, 4), nullable=False, default=Decimal("0")
    )
    annual_salary: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    retirement_percent: Mapped[Decimal] = mapped_column(
        Numeric(7, 4), nullable=False, default=Decimal("0")
    )
    health_insurance_per_period: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    other_deductions_per_period: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    default_hours_per_period: Mapped[int] = mapped_column(
        Integer, nullable=False, default=80
    )
    job_title: Mapped[str | None] = mapped_column(String, nullable=True)
    department: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "pay_type IN ('hourly', 'salary')",
            name="employee_pay_type_check",
        ),
    )

    # Relationships
    statements: Mapped[list[PayStatement]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
    )

    @property
    def full_name(self) -> str:
        """Display name."""
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def compensation_mode(self) -> CompensationMode:
        return CompensationMode(self.pay_type)

    @property
    def is_hourly(self) -> bool:
        return self.compensation_mode is CompensationMode.HOURLY
