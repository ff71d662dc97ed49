"""Employee tax calculation with flat configured rates and statutory caps."""

from __future__ import annotations

from decimal import Decimal

from payroll_manager.calculators.line_builder import LineItemBuilder
from payroll_manager.calculators.types import TaxLineCandidate
from payroll_manager.config import StatutoryLimits, get_settings
from payroll_manager.models.enums import TaxType

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class TaxCalculator:
    """Calculates employee withholding for one statement.

    Rates are percentages taken from the company rate configuration. Caps
    come from StatutoryLimits:
    - Social Security stops once YTD gross reaches the wage base
    - Medicare adds a surtax on the part of gross above the threshold
    - Federal and state income tax are flat rates on taxable income
    """

    def __init__(self, limits: StatutoryLimits | None = None):
        self.limits = limits or get_settings().limits

    def social_security_wages(self, gross: Decimal, prior_ytd_gross: Decimal) -> Decimal:
        """Portion of this period's gross still under the wage base."""
        remaining_base = max(ZERO, self.limits.social_security_wage_base - prior_ytd_gross)
        return min(gross, remaining_base)

    def additional_medicare_wages(self, gross: Decimal, prior_ytd_gross: Decimal) -> Decimal:
        """Portion of this period's gross above the surtax threshold."""
        threshold = self.limits.medicare_additional_threshold
        excess_after = max(ZERO, prior_ytd_gross + gross - threshold)
        excess_before = max(ZERO, prior_ytd_gross - threshold)
        return excess_after - excess_before

    def calculate_social_security(
        self,
        gross: Decimal,
        prior_ytd_gross: Decimal,
        rate_percent: Decimal,
    ) -> TaxLineCandidate | None:
        """Social Security tax on gross pay, capped by the annual wage base."""
        taxable = self.social_security_wages(gross, prior_ytd_gross)
        tax = LineItemBuilder.round_to_cents(taxable * rate_percent / HUNDRED)
        if tax <= 0:
            return None
        return LineItemBuilder.create_tax_line(
            TaxType.SOCIAL_SECURITY,
            amount=tax,
            rate=rate_percent,
            taxable_amount=taxable,
            description=f"Social Security ({LineItemBuilder.format_percent(rate_percent)}%)",
        )

    def calculate_medicare(
        self,
        gross: Decimal,
        prior_ytd_gross: Decimal,
        rate_percent: Decimal,
    ) -> TaxLineCandidate | None:
        """Medicare tax on all gross pay plus the additional surtax."""
        base_tax = gross * rate_percent / HUNDRED
        additional_wages = self.additional_medicare_wages(gross, prior_ytd_gross)
        additional_tax = additional_wages * self.limits.medicare_additional_rate

        total = LineItemBuilder.round_to_cents(base_tax + additional_tax)
        if total <= 0:
            return None

        rate_text = LineItemBuilder.format_percent(rate_percent)
        if additional_tax > 0:
            additional_percent = self.limits.medicare_additional_rate * HUNDRED
            line_rate = rate_percent + additional_percent
            description = (
                f"Medicare ({rate_text}% + "
                f"{LineItemBuilder.format_percent(additional_percent)}% Additional)"
            )
        else:
            line_rate = rate_percent
            description = f"Medicare ({rate_text}%)"

        return LineItemBuilder.create_tax_line(
            TaxType.MEDICARE,
            amount=total,
            rate=line_rate,
            taxable_amount=gross,
            description=description,
        )

    def calculate_income_tax(
        self,
        tax_type: TaxType,
        taxable_income: Decimal,
        rate_percent: Decimal,
    ) -> TaxLineCandidate:
        """Flat income tax; the line is emitted even when the amount is zero."""
        label = {
            TaxType.FEDERAL_INCOME: "Federal Income Tax",
            TaxType.STATE_INCOME: "State Income Tax",
        }[tax_type]
        return LineItemBuilder.create_tax_line(
            tax_type,
            amount=taxable_income * rate_percent / HUNDRED,
            rate=rate_percent,
            taxable_amount=taxable_income,
            description=f"{label} ({LineItemBuilder.format_percent(rate_percent)}%)",
        )
