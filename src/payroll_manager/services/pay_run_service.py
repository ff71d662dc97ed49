"""Pay run service - orchestrates pay periods and statement generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_manager.calculators.engine import PayrollEngine
from payroll_manager.calculators.pay_period import (
    PayPeriodDates,
    get_pay_frequency,
    next_period,
    next_period_from_date,
)
from payroll_manager.calculators.types import StatementCalculation, StatementInput
from payroll_manager.config import StatutoryLimits
from payroll_manager.models import PayPeriod, PayStatement
from payroll_manager.repository import DuplicateStatementError, PayrollRepository
from payroll_manager.services.settings_service import CompanySettingsService

logger = logging.getLogger(__name__)


class InvalidPayPeriodError(Exception):
    """Raised when pay period dates violate start <= end < pay date."""

    def __init__(self, period_start: date, period_end: date, pay_date: date):
        self.period_start = period_start
        self.period_end = period_end
        self.pay_date = pay_date
        super().__init__(
            f"Invalid pay period {period_start} - {period_end} paid {pay_date}: "
            "expected start <= end < pay date"
        )


@dataclass
class PayrollEntry:
    """One employee's inputs for a pay run.

    When inputs is omitted, total_hours (or the employee's default hours)
    is split into regular and overtime hours.
    """

    employee_id: UUID
    inputs: StatementInput | None = None
    total_hours: Decimal | None = None


class PayRunService:
    """Service for the pay run workflow.

    Operations:
    - next_pay_period: dates for the next period at the configured frequency
    - create_pay_period: validate and insert a period
    - list_pay_periods: persisted periods, most recent first
    - run_payroll: compute and persist statements for a period
    - statements_for_period: statements generated for a period
    - preview_statement: calculate without persisting
    - delete_statement: remove a statement and its line items
    """

    def __init__(
        self,
        session: AsyncSession,
        settings_service: CompanySettingsService,
        limits: StatutoryLimits | None = None,
    ):
        self.session = session
        self.settings_service = settings_service
        self.repository = PayrollRepository(session)
        self.engine = PayrollEngine(session, limits)

    async def next_pay_period(
        self,
        reference_date: date | None = None,
        today: date | None = None,
    ) -> PayPeriodDates:
        """Next period from a reference date, or after the last persisted period."""
        config = await self.settings_service.get_settings()
        frequency = get_pay_frequency(config.pay_periods_per_year)
        if reference_date is not None:
            return next_period_from_date(reference_date, frequency)
        last_period = await self.repository.last_pay_period()
        return next_period(last_period, frequency, today)

    async def create_pay_period(
        self,
        period_start: date,
        period_end: date,
        pay_date: date,
    ) -> PayPeriod:
        if not period_start <= period_end < pay_date:
            raise InvalidPayPeriodError(period_start, period_end, pay_date)

        period = await self.repository.add_pay_period(
            PayPeriod(period_start=period_start, period_end=period_end, pay_date=pay_date)
        )
        logger.info(
            "Created pay period %s (%s - %s, paid %s)",
            period.pay_period_id,
            period_start,
            period_end,
            pay_date,
        )
        return period

    async def list_pay_periods(self) -> list[PayPeriod]:
        return await self.repository.list_pay_periods()

    async def run_payroll(
        self,
        pay_period_id: UUID,
        entries: list[PayrollEntry] | None = None,
    ) -> list[PayStatement]:
        """Compute statements for every entry, then persist them together.

        Without entries, every active employee is paid their default hours.
        Nothing is added to the session unless every statement computed.
        """
        period = await self.repository.get_pay_period(pay_period_id)
        config = await self.settings_service.get_settings()
        if entries is None:
            employees = await self.repository.list_active_employees()
            entries = [PayrollEntry(employee.employee_id) for employee in employees]

        seen: set[UUID] = set()
        statements: list[PayStatement] = []
        for entry in entries:
            if entry.employee_id in seen or await self.repository.statement_exists(
                entry.employee_id, pay_period_id
            ):
                raise DuplicateStatementError(entry.employee_id, pay_period_id)
            seen.add(entry.employee_id)

            employee = await self.repository.find_employee(entry.employee_id)
            if entry.inputs is not None:
                statement = await self.engine.compute_statement(
                    employee, period, config, entry.inputs
                )
            else:
                hours = entry.total_hours
                if hours is None:
                    hours = Decimal(employee.default_hours_per_period)
                statement = await self.engine.compute_statement_from_hours(
                    employee, period, config, hours
                )
            statements.append(statement)

        for statement in statements:
            await self.repository.add_statement(statement)

        logger.info(
            "Generated %d statements for pay period %s (gross %s)",
            len(statements),
            pay_period_id,
            sum((s.gross_pay for s in statements), Decimal("0")),
        )
        return statements

    async def preview_statement(
        self,
        employee_id: UUID,
        pay_date: date,
        inputs: StatementInput,
    ) -> StatementCalculation:
        employee = await self.repository.find_employee(employee_id)
        config = await self.settings_service.get_settings()
        return await self.engine.preview_statement(employee, pay_date, config, inputs)

    async def statements_for_period(self, pay_period_id: UUID) -> list[PayStatement]:
        """Statements for an existing period, ordered by employee name."""
        await self.repository.get_pay_period(pay_period_id)
        return await self.repository.statements_for_period(pay_period_id)

    async def get_statement(self, pay_statement_id: UUID) -> PayStatement:
        return await self.repository.get_statement(pay_statement_id)

    async def delete_statement(self, pay_statement_id: UUID) -> None:
        await self.repository.delete_statement(pay_statement_id)
        logger.info("Deleted pay statement %s", pay_statement_id)
