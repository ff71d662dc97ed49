"""Payroll calculation engine."""

from payroll_manager.calculators.engine import PayrollEngine
from payroll_manager.calculators.line_builder import LineItemBuilder
from payroll_manager.calculators.pay_period import (
    PayFrequency,
    PayPeriodDates,
    get_pay_frequency,
    next_period,
    next_period_from_date,
)
from payroll_manager.calculators.tax_calculator import TaxCalculator
from payroll_manager.calculators.types import (
    PriorYtd,
    RateConfig,
    StatementCalculation,
    StatementInput,
)

__all__ = [
    "PayrollEngine",
    "LineItemBuilder",
    "TaxCalculator",
    "PayFrequency",
    "PayPeriodDates",
    "get_pay_frequency",
    "next_period",
    "next_period_from_date",
    "PriorYtd",
    "RateConfig",
    "StatementCalculation",
    "StatementInput",
]
