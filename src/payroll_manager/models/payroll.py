"""Pay period, pay statement, and line item models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_manager.models.base import Base, TimestampMixin
from payroll_manager.models.enums import DeductionType, EarningType, TaxType, check_values

if TYPE_CHECKING:
    from payroll_manager.models.employee import Employee


ZERO = Decimal("0")


# ===== Pay Periods =====


class PayPeriod(Base, TimestampMixin):
    """Pay period (pay run) instance."""

    __tablename__ = "pay_period"

    pay_period_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)
    pay_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        CheckConstraint("period_end >= period_start", name="pay_period_dates_check"),
        CheckConstraint("pay_date > period_end", name="pay_period_pay_date_check"),
    )

    # Relationships
    statements: Mapped[list[PayStatement]] = relationship(
        back_populates="pay_period",
        cascade="all, delete-orphan",
    )


# ===== Pay Statements =====


class PayStatement(Base, TimestampMixin):
    """Immutable pay statement (one per employee per pay period).

    Numeric fields are a snapshot taken when the statement was computed and
    are never recalculated from later configuration.
    """

    __tablename__ = "pay_statement"

    pay_statement_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    employee_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    pay_period_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("pay_period.pay_period_id", ondelete="CASCADE"),
        nullable=False,
    )
    hours_worked: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=ZERO)
    gross_pay: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=ZERO)
    pre_tax_401k: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=ZERO)
    pre_tax_deductions: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=ZERO
    )
    tax_federal: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=ZERO)
    tax_state: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=ZERO)
    tax_social_security: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=ZERO
    )
    tax_medicare: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=ZERO)
    post_tax_deductions: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=ZERO
    )
    net_pay: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=ZERO)

    # Year-to-date as of this statement's pay date
    ytd_gross: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=ZERO)
    ytd_taxes: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=ZERO)
    ytd_net: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=ZERO)

    __table_args__ = (
        UniqueConstraint("employee_id", "pay_period_id", name="pay_statement_one_per_period"),
    )

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="statements")
    pay_period: Mapped[PayPeriod] = relationship(back_populates="statements")
    earnings: Mapped[list[EarningLine]] = relationship(
        back_populates="statement",
        cascade="all, delete-orphan",
        order_by="EarningLine.line_number",
    )
    deductions: Mapped[list[DeductionLine]] = relationship(
        back_populates="statement",
        cascade="all, delete-orphan",
        order_by="DeductionLine.line_number",
    )
    taxes: Mapped[list[TaxLine]] = relationship(
        back_populates="statement",
        cascade="all, delete-orphan",
        order_by="TaxLine.line_number",
    )

    @property
    def total_taxes(self) -> Decimal:
        return self.tax_federal + self.tax_state + self.tax_social_security + self.tax_medicare

    @property
    def total_deductions(self) -> Decimal:
        return self.pre_tax_deductions + self.post_tax_deductions

    def earnings_of(self, earning_type: EarningType) -> Decimal:
        """Sum earning line amounts of one type."""
        return sum(
            (line.amount for line in self.earnings if line.earning_type == earning_type.value),
            ZERO,
        )

    def hours_of(self, earning_type: EarningType) -> Decimal:
        """Sum earning line hours of one type."""
        return sum(
            (line.hours for line in self.earnings if line.earning_type == earning_type.value),
            ZERO,
        )

    @property
    def regular_earnings(self) -> Decimal:
        return self.earnings_of(EarningType.REGULAR)

    @property
    def overtime_earnings(self) -> Decimal:
        return self.earnings_of(EarningType.OVERTIME)

    @property
    def bonus_earnings(self) -> Decimal:
        return self.earnings_of(EarningType.BONUS)

    @property
    def commission_earnings(self) -> Decimal:
        return self.earnings_of(EarningType.COMMISSION)

    @property
    def regular_hours(self) -> Decimal:
        return self.hours_of(EarningType.REGULAR)

    @property
    def overtime_hours(self) -> Decimal:
        return self.hours_of(EarningType.OVERTIME)


# ===== Line Items =====


class EarningLine(Base):
    """Earning line on a pay statement."""

    __tablename__ = "earning_line"

    earning_line_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    pay_statement_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("pay_statement.pay_statement_id", ondelete="CASCADE"),
        nullable=False,
    )
    line_number: Mapped[int] = mapped_column(Integer, nullable=False)
    earning_type: Mapped[str] = mapped_column(String, nullable=False)
    hours: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=ZERO)
    rate: Mapped[Decimal] = mapped_column(Numeric(14, 4), nullable=False, default=ZERO)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False, default="")

    __table_args__ = (
        CheckConstraint(
            f"earning_type IN ({check_values(EarningType)})",
            name="earning_line_type_check",
        ),
    )

    # Relationships
    statement: Mapped[PayStatement] = relationship(back_populates="earnings")


class DeductionLine(Base):
    """Deduction line on a pay statement."""

    __tablename__ = "deduction_line"

    deduction_line_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    pay_statement_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("pay_statement.pay_statement_id", ondelete="CASCADE"),
        nullable=False,
    )
    line_number: Mapped[int] = mapped_column(Integer, nullable=False)
    deduction_type: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    is_pretax: Mapped[bool] = mapped_column(Boolean, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False, default="")

    __table_args__ = (
        CheckConstraint(
            f"deduction_type IN ({check_values(DeductionType)})",
            name="deduction_line_type_check",
        ),
    )

    # Relationships
    statement: Mapped[PayStatement] = relationship(back_populates="deductions")


class TaxLine(Base):
    """Employee tax withholding line on a pay statement."""

    __tablename__ = "tax_line"

    tax_line_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    pay_statement_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("pay_statement.pay_statement_id", ondelete="CASCADE"),
        nullable=False,
    )
    line_number: Mapped[int] = mapped_column(Integer, nullable=False)
    tax_type: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(7, 4), nullable=False)
    taxable_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False, default="")

    __table_args__ = (
        CheckConstraint(
            f"tax_type IN ({check_values(TaxType)})",
            name="tax_line_type_check",
        ),
    )

    # Relationships
    statement: Mapped[PayStatement] = relationship(back_populates="taxes")
