"""Tests for line item builder."""

from decimal import Decimal

from payroll_manager.calculators.line_builder import LineItemBuilder
from payroll_manager.models.enums import DeductionType, EarningType, TaxType


class TestLineItemBuilder:
    """Test line item builder functionality."""

    def test_round_to_cents(self):
        """Test rounding to 2 decimal places."""
        assert LineItemBuilder.round_to_cents(Decimal("10.124")) == Decimal("10.12")

        # Half-up rounding
        assert LineItemBuilder.round_to_cents(Decimal("10.125")) == Decimal("10.13")
        assert LineItemBuilder.round_to_cents(Decimal("1.005")) == Decimal("1.01")

    def test_round_rate(self):
        assert LineItemBuilder.round_rate(Decimal("37.50005")) == Decimal("37.5001")

    def test_format_percent_drops_trailing_zeros(self):
        assert LineItemBuilder.format_percent(Decimal("6.2000")) == "6.2"
        assert LineItemBuilder.format_percent(Decimal("10")) == "10"
        assert LineItemBuilder.format_percent(Decimal("1.45")) == "1.45"
        assert LineItemBuilder.format_percent(Decimal("0.900")) == "0.9"

    def test_create_earning_line(self):
        """Earning amounts are rounded at creation."""
        line = LineItemBuilder.create_earning_line(
            EarningType.REGULAR,
            amount=Decimal("3269.230769"),
            hours=Decimal("0"),
            rate=Decimal("3269.230769"),
            description="Salary (26 periods/year)",
        )

        assert line.earning_type is EarningType.REGULAR
        assert line.amount == Decimal("3269.23")
        assert line.rate == Decimal("3269.2308")
        assert line.description == "Salary (26 periods/year)"

    def test_earning_line_description_defaults_to_type(self):
        line = LineItemBuilder.create_earning_line(EarningType.BONUS, amount=Decimal("500"))
        assert line.description == "Bonus"

    def test_create_deduction_line(self):
        line = LineItemBuilder.create_deduction_line(
            DeductionType.PRETAX_401K, Decimal("80.004"), "401(k) Contribution (4%)"
        )

        assert line.amount == Decimal("80.00")
        assert line.is_pretax is True

    def test_posttax_deduction_is_not_pretax(self):
        line = LineItemBuilder.create_deduction_line(
            DeductionType.OTHER_POSTTAX, Decimal("50"), "Other Deductions"
        )
        assert line.is_pretax is False

    def test_create_tax_line(self):
        line = LineItemBuilder.create_tax_line(
            TaxType.FEDERAL_INCOME,
            amount=Decimal("326.923"),
            rate=Decimal("10"),
            taxable_amount=Decimal("3269.23"),
            description="Federal Income Tax (10%)",
        )

        assert line.amount == Decimal("326.92")
        assert line.taxable_amount == Decimal("3269.23")
        assert line.rate == Decimal("10")


class TestLineTotals:
    """Totals are sums of already rounded lines."""

    def test_gross_from_lines(self):
        lines = [
            LineItemBuilder.create_earning_line(EarningType.REGULAR, Decimal("1000.004")),
            LineItemBuilder.create_earning_line(EarningType.OVERTIME, Decimal("1500.004")),
        ]
        assert LineItemBuilder.calculate_gross_from_lines(lines) == Decimal("2500.00")

    def test_pretax_and_posttax_split(self):
        lines = [
            LineItemBuilder.create_deduction_line(
                DeductionType.PRETAX_401K, Decimal("80"), "401(k)"
            ),
            LineItemBuilder.create_deduction_line(
                DeductionType.HEALTH_INSURANCE, Decimal("100"), "Health Insurance"
            ),
            LineItemBuilder.create_deduction_line(
                DeductionType.OTHER_POSTTAX, Decimal("50"), "Other Deductions"
            ),
        ]

        assert LineItemBuilder.calculate_pretax_from_lines(lines) == Decimal("180")
        assert LineItemBuilder.calculate_posttax_from_lines(lines) == Decimal("50")

    def test_empty_lines_total_zero(self):
        assert LineItemBuilder.calculate_gross_from_lines([]) == Decimal("0")

    def test_sum_taxes_by_type_includes_every_type(self):
        lines = [
            LineItemBuilder.create_tax_line(
                TaxType.SOCIAL_SECURITY, Decimal("155"), Decimal("6.2"), Decimal("2500"), "SS"
            ),
        ]
        totals = LineItemBuilder.sum_taxes_by_type(lines)

        assert set(totals) == set(TaxType)
        assert totals[TaxType.SOCIAL_SECURITY] == Decimal("155.00")
        assert totals[TaxType.MEDICARE] == Decimal("0")
