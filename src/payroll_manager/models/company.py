"""Company settings model."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from payroll_manager.models.base import Base, TimestampMixin


class CompanySettings(Base, TimestampMixin):
    """Company-wide rate configuration.

    Exactly one row is expected. The integer key preserves creation order,
    which the settings service uses to pick the surviving row when
    duplicates are found.
    """

    __tablename__ = "company_settings"

    company_settings_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    company_name: Mapped[str] = mapped_column(String, nullable=False, default="")
    company_address: Mapped[str] = mapped_column(String, nullable=False, default="")
    tax_id: Mapped[str] = mapped_column(String, nullable=False, default="")
    federal_tax_percent: Mapped[Decimal] = mapped_column(
        Numeric(7, 4), nullable=False, default=Decimal("12")
    )
    state_tax_percent: Mapped[Decimal] = mapped_column(
        Numeric(7, 4), nullable=False, default=Decimal("5")
    )
    social_security_percent: Mapped[Decimal] = mapped_column(
        Numeric(7, 4), nullable=False, default=Decimal("6.2")
    )
    medicare_percent: Mapped[Decimal] = mapped_column(
        Numeric(7, 4), nullable=False, default=Decimal("1.45")
    )
    pay_periods_per_year: Mapped[int] = mapped_column(Integer, nullable=False, default=26)
    default_hours_per_period: Mapped[int] = mapped_column(
        Integer, nullable=False, default=80
    )
