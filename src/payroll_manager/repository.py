"""Record store for employees, pay periods, and pay statements."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from payroll_manager.models import Employee, PayPeriod, PayStatement


class RecordNotFoundError(Exception):
    """Raised when a requested record does not exist."""

    entity = "Record"

    def __init__(self, record_id: UUID):
        self.record_id = record_id
        super().__init__(f"{self.entity} {record_id} not found")


class EmployeeNotFoundError(RecordNotFoundError):
    entity = "Employee"


class PayPeriodNotFoundError(RecordNotFoundError):
    entity = "Pay period"


class StatementNotFoundError(RecordNotFoundError):
    entity = "Pay statement"


class DuplicateStatementError(Exception):
    """Raised when an employee already has a statement for a pay period."""

    def __init__(self, employee_id: UUID, pay_period_id: UUID):
        self.employee_id = employee_id
        self.pay_period_id = pay_period_id
        super().__init__(
            f"Employee {employee_id} already has a statement for pay period {pay_period_id}"
        )


def as_date(value: date | datetime) -> date:
    """Normalize a datetime bound to its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


class PayrollRepository:
    """Async record store backed by an SQLAlchemy session.

    Writes are flushed but never committed; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # === Employees ===

    async def find_employee(self, employee_id: UUID) -> Employee:
        employee = await self.session.get(Employee, employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    async def list_employees(
        self,
        active: bool | None = None,
        pay_type: str | None = None,
    ) -> list[Employee]:
        """Employees ordered by last then first name, optionally filtered."""
        query = select(Employee).order_by(Employee.last_name, Employee.first_name)
        if active is not None:
            query = query.where(Employee.is_active.is_(active))
        if pay_type is not None:
            query = query.where(Employee.pay_type == pay_type)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_active_employees(self) -> list[Employee]:
        return await self.list_employees(active=True)

    async def add_employee(self, employee: Employee) -> Employee:
        self.session.add(employee)
        await self.session.flush()
        return employee

    async def delete_employee(self, employee_id: UUID) -> None:
        """Delete an employee and, by cascade, their statements and line items."""
        result = await self.session.execute(
            select(Employee)
            .where(Employee.employee_id == employee_id)
            .options(
                selectinload(Employee.statements).selectinload(PayStatement.earnings),
                selectinload(Employee.statements).selectinload(PayStatement.deductions),
                selectinload(Employee.statements).selectinload(PayStatement.taxes),
            )
            .execution_options(populate_existing=True)
        )
        employee = result.scalar_one_or_none()
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        await self.session.delete(employee)
        await self.session.flush()

    # === Pay Periods ===

    async def get_pay_period(self, pay_period_id: UUID) -> PayPeriod:
        period = await self.session.get(PayPeriod, pay_period_id)
        if period is None:
            raise PayPeriodNotFoundError(pay_period_id)
        return period

    async def last_pay_period(self) -> PayPeriod | None:
        """Pay period with the latest end date, if any."""
        result = await self.session.execute(
            select(PayPeriod)
            .order_by(PayPeriod.period_end.desc(), PayPeriod.pay_date.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_pay_periods(self) -> list[PayPeriod]:
        """Pay periods, most recent pay date first, with their statements."""
        result = await self.session.execute(
            select(PayPeriod)
            .options(selectinload(PayPeriod.statements))
            .order_by(PayPeriod.pay_date.desc())
        )
        return list(result.scalars().all())

    async def add_pay_period(self, period: PayPeriod) -> PayPeriod:
        self.session.add(period)
        await self.session.flush()
        return period

    # === Pay Statements ===

    async def prior_statements(
        self,
        employee_id: UUID,
        year: int,
        before: date | datetime,
    ) -> list[PayStatement]:
        """Statements in the given calendar year paid strictly before a date."""
        result = await self.session.execute(
            select(PayStatement)
            .join(PayStatement.pay_period)
            .where(
                PayStatement.employee_id == employee_id,
                PayPeriod.pay_date >= date(year, 1, 1),
                PayPeriod.pay_date < as_date(before),
            )
            .order_by(PayPeriod.pay_date)
        )
        return list(result.scalars().all())

    async def statements_in_range(
        self,
        start: date | datetime,
        end: date | datetime,
        employee_id: UUID | None = None,
    ) -> list[PayStatement]:
        """Statements whose pay date falls within [start, end]."""
        query = (
            select(PayStatement)
            .join(PayStatement.pay_period)
            .where(
                PayPeriod.pay_date >= as_date(start),
                PayPeriod.pay_date <= as_date(end),
            )
            .options(
                selectinload(PayStatement.employee),
                selectinload(PayStatement.pay_period),
            )
            .order_by(PayPeriod.pay_date)
        )
        if employee_id is not None:
            query = query.where(PayStatement.employee_id == employee_id)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def statements_for_period(self, pay_period_id: UUID) -> list[PayStatement]:
        result = await self.session.execute(
            select(PayStatement)
            .join(PayStatement.employee)
            .where(PayStatement.pay_period_id == pay_period_id)
            .options(
                selectinload(PayStatement.employee),
                selectinload(PayStatement.pay_period),
            )
            .order_by(Employee.last_name, Employee.first_name)
        )
        return list(result.scalars().all())

    async def statements_for_employee(
        self,
        employee_id: UUID,
        year: int | None = None,
    ) -> list[PayStatement]:
        """An employee's statements, most recent pay date first."""
        query = (
            select(PayStatement)
            .join(PayStatement.pay_period)
            .where(PayStatement.employee_id == employee_id)
            .options(
                selectinload(PayStatement.employee),
                selectinload(PayStatement.pay_period),
            )
            .order_by(PayPeriod.pay_date.desc())
        )
        if year is not None:
            query = query.where(
                PayPeriod.pay_date >= date(year, 1, 1),
                PayPeriod.pay_date <= date(year, 12, 31),
            )

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def latest_statement(self, employee_id: UUID) -> PayStatement | None:
        """The employee's statement with the latest pay date, if any."""
        statements = await self.statements_for_employee(employee_id)
        return statements[0] if statements else None

    async def get_statement(self, pay_statement_id: UUID) -> PayStatement:
        """Load a statement with its employee, period, and line items."""
        result = await self.session.execute(
            select(PayStatement)
            .where(PayStatement.pay_statement_id == pay_statement_id)
            .options(
                selectinload(PayStatement.employee),
                selectinload(PayStatement.pay_period),
                selectinload(PayStatement.earnings),
                selectinload(PayStatement.deductions),
                selectinload(PayStatement.taxes),
            )
        )
        statement = result.scalar_one_or_none()
        if statement is None:
            raise StatementNotFoundError(pay_statement_id)
        return statement

    async def statement_exists(self, employee_id: UUID, pay_period_id: UUID) -> bool:
        result = await self.session.execute(
            select(PayStatement.pay_statement_id).where(
                PayStatement.employee_id == employee_id,
                PayStatement.pay_period_id == pay_period_id,
            )
        )
        return result.first() is not None

    async def add_statement(self, statement: PayStatement) -> PayStatement:
        """Insert a statement together with its line items."""
        if await self.statement_exists(statement.employee_id, statement.pay_period_id):
            raise DuplicateStatementError(statement.employee_id, statement.pay_period_id)
        self.session.add(statement)
        await self.session.flush()
        return statement

    async def delete_statement(self, pay_statement_id: UUID) -> None:
        """Delete a statement and, by cascade, its line items."""
        statement = await self.get_statement(pay_statement_id)
        await self.session.delete(statement)
        await self.session.flush()
