"""Year-to-date, quarter-to-date, and date-range rollups over pay statements."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_manager.models import PayStatement
from payroll_manager.repository import PayrollRepository

ZERO = Decimal("0")


def get_quarter(value: date | datetime) -> int:
    """Quarter number (1-4) of a date."""
    return (value.month - 1) // 3 + 1


def quarter_range(year: int, quarter: int) -> tuple[datetime, datetime]:
    """First instant and last second of a calendar quarter."""
    if quarter not in (1, 2, 3, 4):
        raise ValueError(f"Quarter must be 1-4, got {quarter}")
    first_month = (quarter - 1) * 3 + 1
    last_month = first_month + 2
    last_day = calendar.monthrange(year, last_month)[1]
    return datetime(year, first_month, 1), datetime(year, last_month, last_day, 23, 59, 59)


def get_quarter_range(value: date | datetime) -> tuple[datetime, datetime]:
    """Quarter boundaries containing a date."""
    return quarter_range(value.year, get_quarter(value))


def year_range(year: int) -> tuple[datetime, datetime]:
    return datetime(year, 1, 1), datetime(year, 12, 31, 23, 59, 59)


@dataclass
class PayrollTotals:
    """Summed statement amounts."""

    gross_pay: Decimal = ZERO
    federal_tax: Decimal = ZERO
    state_tax: Decimal = ZERO
    social_security: Decimal = ZERO
    medicare: Decimal = ZERO
    pre_tax_401k: Decimal = ZERO
    pre_tax_deductions: Decimal = ZERO
    post_tax_deductions: Decimal = ZERO
    net_pay: Decimal = ZERO
    statement_count: int = 0

    @property
    def total_taxes(self) -> Decimal:
        return self.federal_tax + self.state_tax + self.social_security + self.medicare

    @property
    def total_deductions(self) -> Decimal:
        return self.pre_tax_deductions + self.post_tax_deductions

    def add(self, statement: PayStatement) -> None:
        self.gross_pay += statement.gross_pay
        self.federal_tax += statement.tax_federal
        self.state_tax += statement.tax_state
        self.social_security += statement.tax_social_security
        self.medicare += statement.tax_medicare
        self.pre_tax_401k += statement.pre_tax_401k
        self.pre_tax_deductions += statement.pre_tax_deductions
        self.post_tax_deductions += statement.post_tax_deductions
        self.net_pay += statement.net_pay
        self.statement_count += 1

    def add_all(self, statements: Iterable[PayStatement]) -> None:
        for statement in statements:
            self.add(statement)


@dataclass
class EmployeeTotals(PayrollTotals):
    """Totals for one employee."""

    employee_id: UUID | None = None
    employee_name: str = ""
    year: int | None = None
    quarter: int | None = None


@dataclass
class CompanyTotals(PayrollTotals):
    """Totals across all employees."""

    year: int | None = None
    quarter: int | None = None
    employee_ids: set[UUID] = field(default_factory=set)

    @property
    def employee_count(self) -> int:
        return len(self.employee_ids)

    def add(self, statement: PayStatement) -> None:
        super().add(statement)
        self.employee_ids.add(statement.employee_id)


class AggregationService:
    """Read-side rollups over persisted statements.

    Ranges filter on each statement's pay date, inclusive on both ends.
    """

    get_quarter = staticmethod(get_quarter)
    get_quarter_range = staticmethod(get_quarter_range)
    quarter_range = staticmethod(quarter_range)

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = PayrollRepository(session)

    async def employee_ytd_totals(self, employee_id: UUID, year: int) -> EmployeeTotals:
        """Calendar-year totals; raises EmployeeNotFoundError for unknown ids."""
        employee = await self.repository.find_employee(employee_id)
        start, end = year_range(year)
        statements = await self.repository.statements_in_range(start, end, employee_id)
        totals = EmployeeTotals(
            employee_id=employee_id, employee_name=employee.full_name, year=year
        )
        totals.add_all(statements)
        return totals

    async def employee_qtd_totals(
        self, employee_id: UUID, reference_date: date | datetime
    ) -> EmployeeTotals:
        employee = await self.repository.find_employee(employee_id)
        start, end = get_quarter_range(reference_date)
        statements = await self.repository.statements_in_range(start, end, employee_id)
        totals = EmployeeTotals(
            employee_id=employee_id,
            employee_name=employee.full_name,
            year=reference_date.year,
            quarter=get_quarter(reference_date),
        )
        totals.add_all(statements)
        return totals

    async def company_ytd_totals(self, year: int) -> CompanyTotals:
        start, end = year_range(year)
        totals = await self.company_totals(start, end)
        totals.year = year
        return totals

    async def company_qtd_totals(self, reference_date: date | datetime) -> CompanyTotals:
        start, end = get_quarter_range(reference_date)
        totals = await self.company_totals(start, end)
        totals.year = reference_date.year
        totals.quarter = get_quarter(reference_date)
        return totals

    async def company_totals(
        self, start: date | datetime, end: date | datetime
    ) -> CompanyTotals:
        statements = await self.repository.statements_in_range(start, end)
        totals = CompanyTotals()
        totals.add_all(statements)
        return totals

    async def all_employee_totals(
        self, start: date | datetime, end: date | datetime
    ) -> list[EmployeeTotals]:
        """Per-employee totals for a range, ordered by display name."""
        statements = await self.repository.statements_in_range(start, end)

        by_employee: dict[UUID, EmployeeTotals] = {}
        for statement in statements:
            totals = by_employee.get(statement.employee_id)
            if totals is None:
                employee = statement.employee
                totals = EmployeeTotals(
                    employee_id=statement.employee_id,
                    employee_name=employee.full_name if employee is not None else "Unknown",
                    year=statement.pay_period.pay_date.year,
                )
                by_employee[statement.employee_id] = totals
            totals.add(statement)

        return sorted(by_employee.values(), key=lambda t: t.employee_name)

