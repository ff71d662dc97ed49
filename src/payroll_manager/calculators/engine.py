"""Payroll calculation engine - main orchestrator."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_manager.calculators.line_builder import LineItemBuilder
from payroll_manager.calculators.tax_calculator import TaxCalculator
from payroll_manager.calculators.types import (
    DeductionLineCandidate,
    EarningLineCandidate,
    PriorYtd,
    RateConfig,
    StatementCalculation,
    StatementInput,
)
from payroll_manager.config import StatutoryLimits, get_settings
from payroll_manager.models import (
    DeductionLine,
    EarningLine,
    Employee,
    PayPeriod,
    PayStatement,
    TaxLine,
)
from payroll_manager.models.enums import DeductionType, EarningType, TaxType
from payroll_manager.repository import PayrollRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class PayrollEngine:
    """Main payroll calculation engine.

    Calculation pipeline (stable order per statement):
    1) Build earnings lines (hourly/overtime or salary, bonus, commission)
    2) Load prior YTD from statements paid earlier in the same year
    3) Apply pre-tax deductions (401(k) within the annual limit, health)
    4) Compute taxable income
    5) Social Security (wage base) and Medicare (with surtax) on gross
    6) Federal and state income tax on taxable income
    7) Apply post-tax deductions
    8) Net pay and YTD totals

    The engine never persists anything; callers add the returned
    statement to the record store.
    """

    def __init__(self, session: AsyncSession, limits: StatutoryLimits | None = None):
        self.session = session
        self.repository = PayrollRepository(session)
        self.limits = limits or get_settings().limits
        self.tax_calculator = TaxCalculator(self.limits)

    async def compute_statement(
        self,
        employee: Employee,
        pay_period: PayPeriod,
        config: RateConfig,
        inputs: StatementInput,
    ) -> PayStatement:
        """Compute an unsaved statement for one employee and pay period."""
        prior = await self._get_prior_ytd(employee, pay_period.pay_date)
        calculation = self.calculate(employee, config, inputs, prior, pay_period.pay_date)
        return self.build_statement(calculation, employee, pay_period)

    async def compute_statement_from_hours(
        self,
        employee: Employee,
        pay_period: PayPeriod,
        config: RateConfig,
        total_hours: Decimal,
    ) -> PayStatement:
        """Legacy entry point taking a single hours figure.

        Hours up to the standard threshold are regular, the rest overtime,
        regardless of pay frequency.
        """
        return await self.compute_statement(
            employee, pay_period, config, self.split_hours(total_hours)
        )

    async def preview_statement(
        self,
        employee: Employee,
        pay_date: date,
        config: RateConfig,
        inputs: StatementInput,
    ) -> StatementCalculation:
        """Run the full calculation for a draft pay date without building a statement."""
        prior = await self._get_prior_ytd(employee, pay_date)
        return self.calculate(employee, config, inputs, prior, pay_date)

    def split_hours(self, total_hours: Decimal) -> StatementInput:
        standard = self.limits.standard_hours_per_period
        return StatementInput(
            regular_hours=min(total_hours, standard),
            overtime_hours=max(ZERO, total_hours - standard),
        )

    def calculate(
        self,
        employee: Employee,
        config: RateConfig,
        inputs: StatementInput,
        prior: PriorYtd,
        pay_date: date,
    ) -> StatementCalculation:
        """Pure calculation of one statement from a configuration snapshot."""
        calc = StatementCalculation(pay_date=pay_date)

        # 1) Earnings
        calc.earnings = self._build_earnings_lines(employee, config, inputs)
        calc.gross_pay = LineItemBuilder.calculate_gross_from_lines(calc.earnings)
        calc.hours_worked = sum((line.hours for line in calc.earnings), ZERO)

        # 2-3) Pre-tax deductions
        retirement_line = self._calculate_retirement(employee, calc.gross_pay, prior)
        if retirement_line is not None:
            calc.deductions.append(retirement_line)
            calc.pre_tax_401k = retirement_line.amount

        health = Decimal(employee.health_insurance_per_period or 0)
        if health > 0:
            calc.deductions.append(
                LineItemBuilder.create_deduction_line(
                    DeductionType.HEALTH_INSURANCE, health, "Health Insurance"
                )
            )

        # 4) Taxable income
        calc.pre_tax_deductions = LineItemBuilder.calculate_pretax_from_lines(calc.deductions)
        calc.taxable_income = calc.gross_pay - calc.pre_tax_deductions

        # 5) FICA on gross
        ss_line = self.tax_calculator.calculate_social_security(
            calc.gross_pay, prior.gross, config.social_security_percent
        )
        if ss_line is not None:
            calc.taxes.append(ss_line)

        medicare_line = self.tax_calculator.calculate_medicare(
            calc.gross_pay, prior.gross, config.medicare_percent
        )
        if medicare_line is not None:
            calc.taxes.append(medicare_line)

        # 6) Income taxes, always emitted
        calc.taxes.append(
            self.tax_calculator.calculate_income_tax(
                TaxType.FEDERAL_INCOME, calc.taxable_income, config.federal_tax_percent
            )
        )
        calc.taxes.append(
            self.tax_calculator.calculate_income_tax(
                TaxType.STATE_INCOME, calc.taxable_income, config.state_tax_percent
            )
        )

        taxes = LineItemBuilder.sum_taxes_by_type(calc.taxes)
        calc.tax_federal = taxes[TaxType.FEDERAL_INCOME]
        calc.tax_state = taxes[TaxType.STATE_INCOME]
        calc.tax_social_security = taxes[TaxType.SOCIAL_SECURITY]
        calc.tax_medicare = taxes[TaxType.MEDICARE]

        # 7) Post-tax deductions
        other = Decimal(employee.other_deductions_per_period or 0)
        if other > 0:
            calc.deductions.append(
                LineItemBuilder.create_deduction_line(
                    DeductionType.OTHER_POSTTAX, other, "Other Deductions"
                )
            )
        calc.post_tax_deductions = LineItemBuilder.calculate_posttax_from_lines(calc.deductions)

        # 8) Net and YTD
        calc.net_pay = calc.taxable_income - calc.total_taxes - calc.post_tax_deductions
        calc.ytd_gross = prior.gross + calc.gross_pay
        calc.ytd_taxes = prior.taxes + calc.total_taxes
        calc.ytd_net = prior.net + calc.net_pay

        return calc

    def build_statement(
        self,
        calculation: StatementCalculation,
        employee: Employee,
        pay_period: PayPeriod,
    ) -> PayStatement:
        """Turn a calculation into an unsaved statement with line items attached."""
        statement = PayStatement(
            employee_id=employee.employee_id,
            pay_period_id=pay_period.pay_period_id,
            hours_worked=calculation.hours_worked,
            gross_pay=calculation.gross_pay,
            pre_tax_401k=calculation.pre_tax_401k,
            pre_tax_deductions=calculation.pre_tax_deductions,
            tax_federal=calculation.tax_federal,
            tax_state=calculation.tax_state,
            tax_social_security=calculation.tax_social_security,
            tax_medicare=calculation.tax_medicare,
            post_tax_deductions=calculation.post_tax_deductions,
            net_pay=calculation.net_pay,
            ytd_gross=calculation.ytd_gross,
            ytd_taxes=calculation.ytd_taxes,
            ytd_net=calculation.ytd_net,
        )

        statement.earnings = [
            EarningLine(
                line_number=number,
                earning_type=line.earning_type.value,
                hours=line.hours,
                rate=line.rate,
                amount=line.amount,
                description=line.description,
            )
            for number, line in enumerate(calculation.earnings, start=1)
        ]
        statement.deductions = [
            DeductionLine(
                line_number=number,
                deduction_type=line.deduction_type.value,
                amount=line.amount,
                is_pretax=line.is_pretax,
                description=line.description,
            )
            for number, line in enumerate(calculation.deductions, start=1)
        ]
        statement.taxes = [
            TaxLine(
                line_number=number,
                tax_type=line.tax_type.value,
                amount=line.amount,
                rate=line.rate,
                taxable_amount=line.taxable_amount,
                description=line.description,
            )
            for number, line in enumerate(calculation.taxes, start=1)
        ]
        return statement

    def _build_earnings_lines(
        self,
        employee: Employee,
        config: RateConfig,
        inputs: StatementInput,
    ) -> list[EarningLineCandidate]:
        lines: list[EarningLineCandidate] = []

        if employee.is_hourly:
            rate = Decimal(employee.hourly_rate)
            if inputs.regular_hours > 0:
                lines.append(
                    LineItemBuilder.create_earning_line(
                        EarningType.REGULAR,
                        amount=inputs.regular_hours * rate,
                        hours=inputs.regular_hours,
                        rate=rate,
                        description="Regular Pay",
                    )
                )
            if inputs.overtime_hours > 0:
                multiplier = self.limits.overtime_multiplier
                overtime_rate = rate * multiplier
                lines.append(
                    LineItemBuilder.create_earning_line(
                        EarningType.OVERTIME,
                        amount=inputs.overtime_hours * overtime_rate,
                        hours=inputs.overtime_hours,
                        rate=overtime_rate,
                        description=f"Overtime Pay ({LineItemBuilder.format_percent(multiplier)}x)",
                    )
                )
        else:
            periods = config.effective_periods_per_year
            per_period = Decimal(employee.annual_salary) / periods
            lines.append(
                LineItemBuilder.create_earning_line(
                    EarningType.REGULAR,
                    amount=per_period,
                    rate=per_period,
                    description=f"Salary ({periods} periods/year)",
                )
            )

        if inputs.bonus_amount > 0:
            lines.append(
                LineItemBuilder.create_earning_line(
                    EarningType.BONUS,
                    amount=inputs.bonus_amount,
                    rate=inputs.bonus_amount,
                    description=inputs.bonus_description or "Bonus",
                )
            )
        if inputs.commission_amount > 0:
            lines.append(
                LineItemBuilder.create_earning_line(
                    EarningType.COMMISSION,
                    amount=inputs.commission_amount,
                    rate=inputs.commission_amount,
                    description=inputs.commission_description or "Commission",
                )
            )

        return lines

    def _calculate_retirement(
        self,
        employee: Employee,
        gross: Decimal,
        prior: PriorYtd,
    ) -> DeductionLineCandidate | None:
        """401(k) contribution capped by what remains of the annual limit."""
        percent = Decimal(employee.retirement_percent or 0)
        requested = gross * percent / HUNDRED
        remaining_limit = self.limits.annual_401k_limit - prior.retirement
        amount = LineItemBuilder.round_to_cents(max(ZERO, min(requested, remaining_limit)))
        if amount <= 0:
            return None
        return LineItemBuilder.create_deduction_line(
            DeductionType.PRETAX_401K,
            amount,
            f"401(k) Contribution ({LineItemBuilder.format_percent(percent)}%)",
        )

    # === Data Loading Methods ===

    async def _get_prior_ytd(self, employee: Employee, pay_date: date) -> PriorYtd:
        """Sum stored values of the employee's earlier statements this year."""
        statements = await self.repository.prior_statements(
            employee.employee_id, pay_date.year, pay_date
        )
        logger.debug(
            "Loaded %d prior statements for employee %s before %s",
            len(statements),
            employee.employee_id,
            pay_date,
        )
        return PriorYtd.from_statements(statements)
