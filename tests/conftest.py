"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from payroll_manager.calculators.types import RateConfig
from payroll_manager.config import StatutoryLimits
from payroll_manager.database import create_schema, create_session_factory
from payroll_manager.models import Employee, PayPeriod
from payroll_manager.services.settings_service import CompanySettingsService


@pytest.fixture
def limits() -> StatutoryLimits:
    """2024 statutory limits."""
    return StatutoryLimits()


@pytest.fixture
def rates() -> RateConfig:
    """Flat rates used throughout the calculation tests."""
    return RateConfig(
        federal_tax_percent=Decimal("10"),
        state_tax_percent=Decimal("5"),
        social_security_percent=Decimal("6.2"),
        medicare_percent=Decimal("1.45"),
        pay_periods_per_year=26,
    )


@pytest_asyncio.fixture
async def engine():
    """In-memory database shared by every session in a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def settings_service(session_factory, rates) -> CompanySettingsService:
    """Settings service already holding the test rates."""
    service = CompanySettingsService(session_factory)
    await service.save_settings(rates)
    return service


def build_employee(**overrides) -> Employee:
    """Build an unsaved hourly employee; keyword arguments override fields."""
    fields = {
        "first_name": "Jane",
        "last_name": "Doe",
        "pay_type": "hourly",
        "hourly_rate": Decimal("25.00"),
        "annual_salary": Decimal("0"),
        "retirement_percent": Decimal("0"),
        "health_insurance_per_period": Decimal("0"),
        "other_deductions_per_period": Decimal("0"),
        "default_hours_per_period": 80,
    }
    fields.update(overrides)
    return Employee(**fields)


@pytest.fixture
def make_employee():
    return build_employee


@pytest_asyncio.fixture
async def hourly_employee(session: AsyncSession) -> Employee:
    employee = build_employee()
    session.add(employee)
    await session.commit()
    return employee


@pytest_asyncio.fixture
async def salaried_employee(session: AsyncSession) -> Employee:
    employee = build_employee(
        first_name="Sam",
        last_name="Adams",
        pay_type="salary",
        hourly_rate=Decimal("0"),
        annual_salary=Decimal("85000"),
    )
    session.add(employee)
    await session.commit()
    return employee


@pytest_asyncio.fixture
async def pay_period(session: AsyncSession) -> PayPeriod:
    """Biweekly period 2024-01-01 to 2024-01-14, paid 2024-01-15."""
    period = PayPeriod(
        period_start=date(2024, 1, 1),
        period_end=date(2024, 1, 14),
        pay_date=date(2024, 1, 15),
    )
    session.add(period)
    await session.commit()
    return period
