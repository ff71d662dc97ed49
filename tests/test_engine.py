"""Tests for PayrollEngine.

Pure calculation tests use transient employees; YTD tests go through the
in-memory database.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from payroll_manager.calculators.engine import PayrollEngine
from payroll_manager.calculators.types import PriorYtd, StatementInput
from payroll_manager.models import PayPeriod
from payroll_manager.models.enums import DeductionType, EarningType, TaxType

PAY_DATE = date(2024, 1, 15)


@pytest.fixture
def payroll_engine(limits) -> PayrollEngine:
    return PayrollEngine(None, limits)


class TestHourlyCalculation:
    """Hourly earnings with overtime."""

    def test_regular_and_overtime(self, payroll_engine, rates, make_employee):
        employee = make_employee()
        inputs = StatementInput(regular_hours=Decimal("40"), overtime_hours=Decimal("40"))

        calc = payroll_engine.calculate(employee, rates, inputs, PriorYtd(), PAY_DATE)

        assert calc.gross_pay == Decimal("2500.00")
        assert calc.hours_worked == Decimal("80")
        assert calc.tax_social_security == Decimal("155.00")
        assert calc.tax_medicare == Decimal("36.25")
        assert calc.tax_federal == Decimal("250.00")
        assert calc.tax_state == Decimal("125.00")
        assert calc.total_taxes == Decimal("566.25")
        assert calc.net_pay == Decimal("1933.75")

    def test_earning_lines(self, payroll_engine, rates, make_employee):
        employee = make_employee()
        inputs = StatementInput(regular_hours=Decimal("40"), overtime_hours=Decimal("10"))

        calc = payroll_engine.calculate(employee, rates, inputs, PriorYtd(), PAY_DATE)

        regular, overtime = calc.earnings
        assert regular.earning_type is EarningType.REGULAR
        assert regular.description == "Regular Pay"
        assert regular.amount == Decimal("1000.00")
        assert overtime.earning_type is EarningType.OVERTIME
        assert overtime.description == "Overtime Pay (1.5x)"
        assert overtime.rate == Decimal("37.5000")
        assert overtime.amount == Decimal("375.00")

    def test_zero_hours_emits_no_earning_lines(self, payroll_engine, rates, make_employee):
        calc = payroll_engine.calculate(
            make_employee(), rates, StatementInput(), PriorYtd(), PAY_DATE
        )

        assert calc.earnings == []
        assert calc.gross_pay == Decimal("0")
        assert calc.net_pay == Decimal("0")
        # Income tax lines are always present, FICA lines only when owed
        assert [line.tax_type for line in calc.taxes] == [
            TaxType.FEDERAL_INCOME,
            TaxType.STATE_INCOME,
        ]

    def test_bonus_and_commission(self, payroll_engine, rates, make_employee):
        inputs = StatementInput(
            regular_hours=Decimal("80"),
            bonus_amount=Decimal("500"),
            commission_amount=Decimal("250"),
            bonus_description="Holiday Bonus",
        )

        calc = payroll_engine.calculate(make_employee(), rates, inputs, PriorYtd(), PAY_DATE)

        assert calc.gross_pay == Decimal("2750.00")
        assert [line.description for line in calc.earnings] == [
            "Regular Pay",
            "Holiday Bonus",
            "Commission",
        ]


class TestSalaryCalculation:
    """Salaried earnings are annual salary over periods per year."""

    def test_biweekly_salary(self, payroll_engine, rates, make_employee):
        employee = make_employee(
            pay_type="salary", hourly_rate=Decimal("0"), annual_salary=Decimal("85000")
        )

        calc = payroll_engine.calculate(
            employee, rates, StatementInput(), PriorYtd(), PAY_DATE
        )

        assert calc.gross_pay == Decimal("3269.23")
        assert calc.earnings[0].description == "Salary (26 periods/year)"
        assert calc.tax_social_security == Decimal("202.69")
        assert calc.tax_medicare == Decimal("47.40")
        assert calc.tax_federal == Decimal("326.92")
        assert calc.tax_state == Decimal("163.46")
        assert calc.net_pay == Decimal("2528.76")

    def test_salary_ignores_hours(self, payroll_engine, rates, make_employee):
        employee = make_employee(pay_type="salary", annual_salary=Decimal("52000"))
        inputs = StatementInput(regular_hours=Decimal("40"), overtime_hours=Decimal("20"))

        calc = payroll_engine.calculate(employee, rates, inputs, PriorYtd(), PAY_DATE)

        assert calc.gross_pay == Decimal("2000.00")

    def test_unset_periods_fall_back_to_biweekly(self, payroll_engine, rates, make_employee):
        employee = make_employee(pay_type="salary", annual_salary=Decimal("52000"))
        config = replace(rates, pay_periods_per_year=0)

        calc = payroll_engine.calculate(
            employee, config, StatementInput(), PriorYtd(), PAY_DATE
        )

        assert calc.gross_pay == Decimal("2000.00")


class TestDeductions:
    """Pre-tax and post-tax deductions."""

    def test_pretax_reduces_taxable_income(self, payroll_engine, rates, make_employee):
        employee = make_employee(
            retirement_percent=Decimal("4"),
            health_insurance_per_period=Decimal("100"),
            other_deductions_per_period=Decimal("50"),
        )
        inputs = StatementInput(regular_hours=Decimal("80"))

        calc = payroll_engine.calculate(employee, rates, inputs, PriorYtd(), PAY_DATE)

        assert calc.gross_pay == Decimal("2000.00")
        assert calc.pre_tax_401k == Decimal("80.00")
        assert calc.pre_tax_deductions == Decimal("180.00")
        assert calc.taxable_income == Decimal("1820.00")
        # FICA on gross, income taxes on taxable income
        assert calc.tax_social_security == Decimal("124.00")
        assert calc.tax_medicare == Decimal("29.00")
        assert calc.tax_federal == Decimal("182.00")
        assert calc.tax_state == Decimal("91.00")
        assert calc.post_tax_deductions == Decimal("50.00")
        assert calc.net_pay == Decimal("1344.00")

        assert [line.deduction_type for line in calc.deductions] == [
            DeductionType.PRETAX_401K,
            DeductionType.HEALTH_INSURANCE,
            DeductionType.OTHER_POSTTAX,
        ]
        assert calc.deductions[0].description == "401(k) Contribution (4%)"

    def test_401k_capped_by_remaining_limit(self, payroll_engine, rates, make_employee):
        employee = make_employee(retirement_percent=Decimal("10"))
        inputs = StatementInput(regular_hours=Decimal("80"))
        prior = PriorYtd(gross=Decimal("100000"), retirement=Decimal("22950"))

        calc = payroll_engine.calculate(employee, rates, inputs, prior, PAY_DATE)

        assert calc.pre_tax_401k == Decimal("50.00")

    def test_no_401k_line_once_limit_reached(self, payroll_engine, rates, make_employee):
        employee = make_employee(retirement_percent=Decimal("10"))
        inputs = StatementInput(regular_hours=Decimal("80"))
        prior = PriorYtd(gross=Decimal("230000"), retirement=Decimal("23000"))

        calc = payroll_engine.calculate(employee, rates, inputs, prior, PAY_DATE)

        assert calc.pre_tax_401k == Decimal("0")
        assert calc.deductions == []


class TestWageCaps:
    """Statutory caps driven by prior YTD gross."""

    def test_no_social_security_above_wage_base(self, payroll_engine, rates, make_employee):
        inputs = StatementInput(regular_hours=Decimal("80"))
        prior = PriorYtd(gross=Decimal("168600"))

        calc = payroll_engine.calculate(make_employee(), rates, inputs, prior, PAY_DATE)

        assert calc.tax_social_security == Decimal("0")
        assert TaxType.SOCIAL_SECURITY not in {line.tax_type for line in calc.taxes}

    def test_additional_medicare_above_threshold(self, payroll_engine, rates, make_employee):
        inputs = StatementInput(regular_hours=Decimal("80"))
        prior = PriorYtd(gross=Decimal("199000"))

        calc = payroll_engine.calculate(make_employee(), rates, inputs, prior, PAY_DATE)

        assert calc.tax_medicare == Decimal("38.00")

    def test_ytd_includes_prior(self, payroll_engine, rates, make_employee):
        inputs = StatementInput(regular_hours=Decimal("80"))
        prior = PriorYtd(
            gross=Decimal("2000"), taxes=Decimal("400"), net=Decimal("1600")
        )

        calc = payroll_engine.calculate(make_employee(), rates, inputs, prior, PAY_DATE)

        assert calc.ytd_gross == Decimal("4000.00")
        assert calc.ytd_taxes == Decimal("400") + calc.total_taxes
        assert calc.ytd_net == Decimal("1600") + calc.net_pay


class TestSplitHours:
    """Legacy single-hours entry point."""

    def test_hours_above_threshold_are_overtime(self, payroll_engine):
        inputs = payroll_engine.split_hours(Decimal("80"))

        assert inputs.regular_hours == Decimal("40")
        assert inputs.overtime_hours == Decimal("40")

    def test_hours_below_threshold_are_regular(self, payroll_engine):
        inputs = payroll_engine.split_hours(Decimal("32"))

        assert inputs.regular_hours == Decimal("32")
        assert inputs.overtime_hours == Decimal("0")


@pytest.mark.asyncio
class TestStatementPersistence:
    """Statements built by the engine and YTD across pay dates."""

    async def test_build_statement_numbers_lines(
        self, session, limits, rates, hourly_employee, pay_period
    ):
        engine = PayrollEngine(session, limits)
        inputs = StatementInput(regular_hours=Decimal("40"), overtime_hours=Decimal("40"))

        statement = await engine.compute_statement(hourly_employee, pay_period, rates, inputs)

        assert statement.employee_id == hourly_employee.employee_id
        assert statement.pay_period_id == pay_period.pay_period_id
        assert [line.line_number for line in statement.earnings] == [1, 2]
        assert [line.line_number for line in statement.taxes] == [1, 2, 3, 4]
        assert statement.earnings[1].earning_type == EarningType.OVERTIME.value
        assert sum(line.amount for line in statement.earnings) == statement.gross_pay
        assert sum(line.amount for line in statement.taxes) == statement.total_taxes

    async def test_ytd_accumulates_over_pay_dates(
        self, session, limits, rates, hourly_employee, pay_period
    ):
        engine = PayrollEngine(session, limits)
        inputs = StatementInput(regular_hours=Decimal("80"))

        first = await engine.compute_statement(hourly_employee, pay_period, rates, inputs)
        session.add(first)
        await session.flush()

        second_period = PayPeriod(
            period_start=date(2024, 1, 15),
            period_end=date(2024, 1, 28),
            pay_date=date(2024, 1, 29),
        )
        session.add(second_period)
        await session.flush()

        second = await engine.compute_statement(hourly_employee, second_period, rates, inputs)

        assert second.ytd_gross == first.gross_pay + second.gross_pay
        assert second.ytd_net == first.net_pay + second.net_pay
        assert second.ytd_taxes == first.total_taxes + second.total_taxes

    async def test_prior_year_statements_excluded(
        self, session, limits, rates, hourly_employee
    ):
        engine = PayrollEngine(session, limits)
        inputs = StatementInput(regular_hours=Decimal("80"))

        december = PayPeriod(
            period_start=date(2023, 12, 11),
            period_end=date(2023, 12, 24),
            pay_date=date(2023, 12, 25),
        )
        session.add(december)
        await session.flush()
        session.add(await engine.compute_statement(hourly_employee, december, rates, inputs))
        await session.flush()

        calc = await engine.preview_statement(hourly_employee, PAY_DATE, rates, inputs)

        assert calc.ytd_gross == calc.gross_pay

    async def test_legacy_hours_entry_point(
        self, session, limits, rates, hourly_employee, pay_period
    ):
        engine = PayrollEngine(session, limits)

        statement = await engine.compute_statement_from_hours(
            hourly_employee, pay_period, rates, Decimal("80")
        )

        assert statement.gross_pay == Decimal("2500.00")
        assert statement.overtime_hours == Decimal("40")
        assert statement.net_pay == Decimal("1933.75")
