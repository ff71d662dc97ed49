"""Employee service - maintains employee records and their pay summaries."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_manager.models import Employee, PayStatement
from payroll_manager.models.enums import CompensationMode
from payroll_manager.repository import PayrollRepository
from payroll_manager.services.aggregation_service import AggregationService

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class InvalidEmployeeError(Exception):
    """Raised when an employee profile fails validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


@dataclass
class EmployeeProfile:
    """Editable employee fields."""

    first_name: str
    last_name: str
    pay_type: CompensationMode = CompensationMode.HOURLY
    hourly_rate: Decimal = ZERO
    annual_salary: Decimal = ZERO
    retirement_percent: Decimal = ZERO
    health_insurance_per_period: Decimal = ZERO
    other_deductions_per_period: Decimal = ZERO
    default_hours_per_period: int = 80
    is_active: bool = True
    job_title: str | None = None
    department: str | None = None

    def validate(self) -> list[str]:
        errors = []
        if not self.first_name.strip():
            errors.append("First name is required")
        if not self.last_name.strip():
            errors.append("Last name is required")

        mode = CompensationMode(self.pay_type)
        if mode is CompensationMode.HOURLY and self.hourly_rate <= 0:
            errors.append("Hourly rate must be greater than 0")
        if mode is CompensationMode.SALARY and self.annual_salary <= 0:
            errors.append("Annual salary must be greater than 0")

        if not 0 <= self.retirement_percent <= 100:
            errors.append("401k percent must be between 0 and 100")
        if self.health_insurance_per_period < 0:
            errors.append("Health insurance cannot be negative")
        if self.other_deductions_per_period < 0:
            errors.append("Other deductions cannot be negative")
        if self.default_hours_per_period < 0:
            errors.append("Default hours cannot be negative")
        return errors

    def apply_to(self, employee: Employee) -> Employee:
        for name, value in asdict(self).items():
            setattr(employee, name, value)
        employee.first_name = self.first_name.strip()
        employee.last_name = self.last_name.strip()
        employee.pay_type = CompensationMode(self.pay_type).value
        return employee


@dataclass
class PaySummary:
    """Most recent statement and year-to-date totals for one employee."""

    last_pay_date: date | None = None
    last_gross: Decimal = ZERO
    last_net: Decimal = ZERO
    ytd_gross: Decimal = ZERO
    ytd_taxes: Decimal = ZERO
    ytd_net: Decimal = ZERO


class EmployeeService:
    """Service for employee records.

    Writes are flushed but not committed; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = PayrollRepository(session)

    async def list_employees(
        self,
        active: bool | None = None,
        pay_type: CompensationMode | None = None,
    ) -> list[Employee]:
        return await self.repository.list_employees(
            active=active,
            pay_type=pay_type.value if pay_type is not None else None,
        )

    async def get_employee(self, employee_id: UUID) -> Employee:
        return await self.repository.find_employee(employee_id)

    async def create_employee(self, profile: EmployeeProfile) -> Employee:
        _check(profile)
        employee = await self.repository.add_employee(profile.apply_to(Employee()))
        logger.info("Created employee %s (%s)", employee.employee_id, employee.full_name)
        return employee

    async def update_employee(self, employee_id: UUID, profile: EmployeeProfile) -> Employee:
        """Replace an employee's profile; existing statements are unaffected."""
        employee = await self.repository.find_employee(employee_id)
        _check(profile)
        profile.apply_to(employee)
        await self.session.flush()
        logger.info("Updated employee %s", employee_id)
        return employee

    async def delete_employee(self, employee_id: UUID) -> None:
        """Delete an employee together with their pay statements."""
        await self.repository.delete_employee(employee_id)
        logger.info("Deleted employee %s", employee_id)

    async def statements(self, employee_id: UUID, year: int | None = None) -> list[PayStatement]:
        await self.repository.find_employee(employee_id)
        return await self.repository.statements_for_employee(employee_id, year)

    async def pay_summary(self, employee_id: UUID, today: date | None = None) -> PaySummary:
        """Last statement amounts and current-year totals."""
        year = (today or date.today()).year
        totals = await AggregationService(self.session).employee_ytd_totals(employee_id, year)
        summary = PaySummary(
            ytd_gross=totals.gross_pay,
            ytd_taxes=totals.total_taxes,
            ytd_net=totals.net_pay,
        )

        last = await self.repository.latest_statement(employee_id)
        if last is not None:
            summary.last_pay_date = last.pay_period.pay_date
            summary.last_gross = last.gross_pay
            summary.last_net = last.net_pay
        return summary


def _check(profile: EmployeeProfile) -> None:
    errors = profile.validate()
    if errors:
        raise InvalidEmployeeError(errors)
