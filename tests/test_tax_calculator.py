"""Tests for tax calculator."""

from decimal import Decimal

import pytest

from payroll_manager.calculators.tax_calculator import TaxCalculator
from payroll_manager.config import StatutoryLimits
from payroll_manager.models.enums import TaxType

SS_RATE = Decimal("6.2")
MEDICARE_RATE = Decimal("1.45")


@pytest.fixture
def calc() -> TaxCalculator:
    return TaxCalculator(StatutoryLimits())


class TestSocialSecurity:
    """Social Security is capped by the annual wage base."""

    def test_full_gross_below_wage_base(self, calc):
        line = calc.calculate_social_security(Decimal("2500.00"), Decimal("0"), SS_RATE)

        assert line.tax_type is TaxType.SOCIAL_SECURITY
        assert line.amount == Decimal("155.00")
        assert line.taxable_amount == Decimal("2500.00")
        assert line.description == "Social Security (6.2%)"

    def test_partial_wages_when_crossing_base(self, calc):
        line = calc.calculate_social_security(Decimal("2000.00"), Decimal("168000"), SS_RATE)

        assert line.taxable_amount == Decimal("600.00")
        assert line.amount == Decimal("37.20")

    def test_no_line_once_wage_base_reached(self, calc):
        assert calc.calculate_social_security(
            Decimal("2000.00"), Decimal("168600"), SS_RATE
        ) is None

    def test_no_line_for_zero_gross(self, calc):
        assert calc.calculate_social_security(Decimal("0"), Decimal("0"), SS_RATE) is None

    def test_custom_wage_base(self):
        calc = TaxCalculator(StatutoryLimits(social_security_wage_base=Decimal("1000")))
        assert calc.social_security_wages(Decimal("2500"), Decimal("0")) == Decimal("1000")


class TestMedicare:
    """Medicare applies to all gross pay plus the surtax above the threshold."""

    def test_base_medicare(self, calc):
        line = calc.calculate_medicare(Decimal("2500.00"), Decimal("0"), MEDICARE_RATE)

        assert line.amount == Decimal("36.25")
        assert line.rate == MEDICARE_RATE
        assert line.taxable_amount == Decimal("2500.00")
        assert line.description == "Medicare (1.45%)"

    def test_surtax_on_portion_above_threshold(self, calc):
        line = calc.calculate_medicare(Decimal("2000.00"), Decimal("199000"), MEDICARE_RATE)

        # 2000 * 1.45% = 29.00, 1000 * 0.9% = 9.00
        assert line.amount == Decimal("38.00")
        assert line.rate == Decimal("2.35")
        assert line.description == "Medicare (1.45% + 0.9% Additional)"

    def test_surtax_on_full_gross_above_threshold(self, calc):
        assert calc.additional_medicare_wages(
            Decimal("2000"), Decimal("250000")
        ) == Decimal("2000")

    def test_no_line_for_zero_gross(self, calc):
        assert calc.calculate_medicare(Decimal("0"), Decimal("0"), MEDICARE_RATE) is None


class TestIncomeTax:
    """Flat income taxes on taxable income."""

    def test_federal_income_tax(self, calc):
        line = calc.calculate_income_tax(
            TaxType.FEDERAL_INCOME, Decimal("3269.23"), Decimal("10")
        )

        assert line.amount == Decimal("326.92")
        assert line.taxable_amount == Decimal("3269.23")
        assert line.description == "Federal Income Tax (10%)"

    def test_state_income_tax(self, calc):
        line = calc.calculate_income_tax(TaxType.STATE_INCOME, Decimal("1820"), Decimal("5"))

        assert line.amount == Decimal("91.00")
        assert line.description == "State Income Tax (5%)"

    def test_zero_rate_still_emits_line(self, calc):
        line = calc.calculate_income_tax(TaxType.STATE_INCOME, Decimal("1820"), Decimal("0"))

        assert line is not None
        assert line.amount == Decimal("0.00")
