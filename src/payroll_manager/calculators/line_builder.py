"""Line item builder for pay statements."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from payroll_manager.calculators.types import (
    DeductionLineCandidate,
    EarningLineCandidate,
    TaxLineCandidate,
)
from payroll_manager.models.enums import DeductionType, EarningType, TaxType


class LineItemBuilder:
    """Builds statement line items.

    Rounding:
    - Every line amount is rounded to cents (ROUND_HALF_UP) when created
    - Totals are sums of rounded lines, so Σ lines always equals the total

    All amounts are positive; the line kind decides whether it adds to or
    subtracts from net pay.
    """

    OUTPUT_PRECISION = Decimal("0.01")  # 2 decimal places for persistence
    RATE_PRECISION = Decimal("0.0001")

    @staticmethod
    def round_to_cents(amount: Decimal) -> Decimal:
        """Round amount to 2 decimal places (cents)."""
        return amount.quantize(LineItemBuilder.OUTPUT_PRECISION, rounding=ROUND_HALF_UP)

    @staticmethod
    def round_rate(rate: Decimal) -> Decimal:
        """Round a rate to 4 decimal places."""
        return rate.quantize(LineItemBuilder.RATE_PRECISION, rounding=ROUND_HALF_UP)

    @staticmethod
    def format_percent(percent: Decimal) -> str:
        """Render a percentage without trailing zeros (6.20 -> 6.2)."""
        return format(Decimal(percent).normalize(), "f")

    @staticmethod
    def create_earning_line(
        earning_type: EarningType,
        amount: Decimal,
        hours: Decimal = Decimal("0"),
        rate: Decimal = Decimal("0"),
        description: str | None = None,
    ) -> EarningLineCandidate:
        """Create an earning line item."""
        return EarningLineCandidate(
            earning_type=earning_type,
            amount=LineItemBuilder.round_to_cents(amount),
            hours=hours,
            rate=LineItemBuilder.round_rate(rate),
            description=description or earning_type.value,
        )

    @staticmethod
    def create_deduction_line(
        deduction_type: DeductionType,
        amount: Decimal,
        description: str,
    ) -> DeductionLineCandidate:
        """Create a deduction line item."""
        return DeductionLineCandidate(
            deduction_type=deduction_type,
            amount=LineItemBuilder.round_to_cents(amount),
            description=description,
        )

    @staticmethod
    def create_tax_line(
        tax_type: TaxType,
        amount: Decimal,
        rate: Decimal,
        taxable_amount: Decimal,
        description: str,
    ) -> TaxLineCandidate:
        """Create an employee tax line item."""
        return TaxLineCandidate(
            tax_type=tax_type,
            amount=LineItemBuilder.round_to_cents(amount),
            rate=rate,
            taxable_amount=LineItemBuilder.round_to_cents(taxable_amount),
            description=description,
        )

    @staticmethod
    def calculate_gross_from_lines(lines: list[EarningLineCandidate]) -> Decimal:
        """GROSS = Σ(EARNING)"""
        gross = Decimal("0")
        for line in lines:
            gross += line.amount
        return gross

    @staticmethod
    def calculate_pretax_from_lines(lines: list[DeductionLineCandidate]) -> Decimal:
        """Sum of deductions that reduce taxable income."""
        return sum((line.amount for line in lines if line.is_pretax), Decimal("0"))

    @staticmethod
    def calculate_posttax_from_lines(lines: list[DeductionLineCandidate]) -> Decimal:
        """Sum of deductions taken after taxes."""
        return sum((line.amount for line in lines if not line.is_pretax), Decimal("0"))

    @staticmethod
    def sum_taxes_by_type(lines: list[TaxLineCandidate]) -> dict[TaxType, Decimal]:
        """Sum tax amounts by type."""
        totals: dict[TaxType, Decimal] = {tt: Decimal("0") for tt in TaxType}
        for line in lines:
            totals[line.tax_type] += line.amount
        return totals
