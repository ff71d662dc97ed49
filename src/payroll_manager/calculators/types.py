"""Type definitions for calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from payroll_manager.models.enums import DeductionType, EarningType, TaxType

if TYPE_CHECKING:
    from payroll_manager.models import CompanySettings, PayStatement

ZERO = Decimal("0")


@dataclass(frozen=True)
class RateConfig:
    """Immutable snapshot of company rate configuration.

    Percent fields are expressed as percentages, e.g. Decimal("6.2").
    """

    company_name: str = "My Company"
    company_address: str = ""
    tax_id: str = ""
    federal_tax_percent: Decimal = Decimal("12")
    state_tax_percent: Decimal = Decimal("5")
    social_security_percent: Decimal = Decimal("6.2")
    medicare_percent: Decimal = Decimal("1.45")
    pay_periods_per_year: int = 26
    default_hours_per_period: int = 80

    @classmethod
    def from_model(cls, settings: CompanySettings) -> RateConfig:
        return cls(
            company_name=settings.company_name,
            company_address=settings.company_address,
            tax_id=settings.tax_id,
            federal_tax_percent=Decimal(settings.federal_tax_percent),
            state_tax_percent=Decimal(settings.state_tax_percent),
            social_security_percent=Decimal(settings.social_security_percent),
            medicare_percent=Decimal(settings.medicare_percent),
            pay_periods_per_year=settings.pay_periods_per_year,
            default_hours_per_period=settings.default_hours_per_period,
        )

    @property
    def effective_periods_per_year(self) -> int:
        """Periods per year, falling back to biweekly when unset."""
        return self.pay_periods_per_year if self.pay_periods_per_year > 0 else 26

    def to_dict(self) -> dict[str, Any]:
        return {
            "company_name": self.company_name,
            "company_address": self.company_address,
            "tax_id": self.tax_id,
            "federal_tax_percent": self.federal_tax_percent,
            "state_tax_percent": self.state_tax_percent,
            "social_security_percent": self.social_security_percent,
            "medicare_percent": self.medicare_percent,
            "pay_periods_per_year": self.pay_periods_per_year,
            "default_hours_per_period": self.default_hours_per_period,
        }


@dataclass
class StatementInput:
    """Per-period inputs for one employee's statement."""

    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    bonus_amount: Decimal = ZERO
    commission_amount: Decimal = ZERO
    bonus_description: str | None = None
    commission_description: str | None = None

    @property
    def total_hours(self) -> Decimal:
        return self.regular_hours + self.overtime_hours


@dataclass
class PriorYtd:
    """Year-to-date totals from statements dated before the current one."""

    gross: Decimal = ZERO
    taxes: Decimal = ZERO
    retirement: Decimal = ZERO
    social_security: Decimal = ZERO
    net: Decimal = ZERO

    @classmethod
    def from_statements(cls, statements: list[PayStatement]) -> PriorYtd:
        """Sum stored values of previously persisted statements."""
        prior = cls()
        for statement in statements:
            prior.gross += statement.gross_pay
            prior.taxes += statement.total_taxes
            prior.retirement += statement.pre_tax_401k
            prior.social_security += statement.tax_social_security
            prior.net += statement.net_pay
        return prior


@dataclass
class EarningLineCandidate:
    """An earning line before persistence."""

    earning_type: EarningType
    amount: Decimal
    hours: Decimal = ZERO
    rate: Decimal = ZERO
    description: str = ""


@dataclass
class DeductionLineCandidate:
    """A deduction line before persistence."""

    deduction_type: DeductionType
    amount: Decimal
    description: str = ""

    @property
    def is_pretax(self) -> bool:
        return self.deduction_type.is_pretax


@dataclass
class TaxLineCandidate:
    """An employee tax line before persistence."""

    tax_type: TaxType
    amount: Decimal
    rate: Decimal  # Percent
    taxable_amount: Decimal
    description: str = ""


@dataclass
class StatementCalculation:
    """Result of calculating pay for one employee and one pay date."""

    pay_date: date
    earnings: list[EarningLineCandidate] = field(default_factory=list)
    deductions: list[DeductionLineCandidate] = field(default_factory=list)
    taxes: list[TaxLineCandidate] = field(default_factory=list)

    hours_worked: Decimal = ZERO
    gross_pay: Decimal = ZERO
    pre_tax_401k: Decimal = ZERO
    pre_tax_deductions: Decimal = ZERO
    taxable_income: Decimal = ZERO
    tax_federal: Decimal = ZERO
    tax_state: Decimal = ZERO
    tax_social_security: Decimal = ZERO
    tax_medicare: Decimal = ZERO
    post_tax_deductions: Decimal = ZERO
    net_pay: Decimal = ZERO

    ytd_gross: Decimal = ZERO
    ytd_taxes: Decimal = ZERO
    ytd_net: Decimal = ZERO

    @property
    def total_taxes(self) -> Decimal:
        return self.tax_federal + self.tax_state + self.tax_social_security + self.tax_medicare
