"""Enumerations shared by the ORM models and the calculation pipeline."""

from __future__ import annotations

from enum import Enum


class CompensationMode(str, Enum):
    """How an employee is paid."""

    HOURLY = "hourly"
    SALARY = "salary"


class EarningType(str, Enum):
    """Earning line types."""

    REGULAR = "Regular"
    OVERTIME = "Overtime"
    BONUS = "Bonus"
    COMMISSION = "Commission"


class DeductionType(str, Enum):
    """Deduction line types."""

    PRETAX_401K = "PreTax401k"
    HEALTH_INSURANCE = "HealthInsurance"
    DENTAL_INSURANCE = "DentalInsurance"
    VISION_INSURANCE = "VisionInsurance"
    LIFE_INSURANCE = "LifeInsurance"
    OTHER_PRETAX = "OtherPreTax"
    OTHER_POSTTAX = "OtherPostTax"

    @property
    def is_pretax(self) -> bool:
        """Whether this deduction reduces taxable income."""
        return self is not DeductionType.OTHER_POSTTAX


class TaxType(str, Enum):
    """Employee tax line types."""

    FEDERAL_INCOME = "FederalIncome"
    STATE_INCOME = "StateIncome"
    SOCIAL_SECURITY = "SocialSecurity"
    MEDICARE = "Medicare"


def check_values(enum_cls: type[Enum]) -> str:
    """Render enum values for a SQL IN (...) check constraint."""
    return ", ".join(f"'{member.value}'" for member in enum_cls)
