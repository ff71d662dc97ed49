"""ORM models."""

from payroll_manager.models.base import Base, TimestampMixin
from payroll_manager.models.company import CompanySettings
from payroll_manager.models.employee import Employee
from payroll_manager.models.enums import CompensationMode, DeductionType, EarningType, TaxType
from payroll_manager.models.payroll import (
    DeductionLine,
    EarningLine,
    PayPeriod,
    PayStatement,
    TaxLine,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "CompanySettings",
    "Employee",
    "CompensationMode",
    "DeductionType",
    "EarningType",
    "TaxType",
    "PayPeriod",
    "PayStatement",
    "EarningLine",
    "DeductionLine",
    "TaxLine",
]
