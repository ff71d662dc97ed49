"""Payroll manager services."""

from payroll_manager.services.aggregation_service import (
    AggregationService,
    CompanyTotals,
    EmployeeTotals,
)
from payroll_manager.services.employee_service import (
    EmployeeProfile,
    EmployeeService,
    InvalidEmployeeError,
    PaySummary,
)
from payroll_manager.services.pay_run_service import (
    InvalidPayPeriodError,
    PayrollEntry,
    PayRunService,
)
from payroll_manager.services.settings_service import CompanySettingsService

__all__ = [
    "AggregationService",
    "CompanyTotals",
    "EmployeeProfile",
    "EmployeeService",
    "EmployeeTotals",
    "InvalidEmployeeError",
    "InvalidPayPeriodError",
    "PaySummary",
    "PayrollEntry",
    "PayRunService",
    "CompanySettingsService",
]
