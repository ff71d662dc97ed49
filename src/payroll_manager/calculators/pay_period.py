"""Pay period date calculation.

Stateless: every call derives the next period from its inputs alone.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from payroll_manager.models import PayPeriod

ONE_DAY = timedelta(days=1)
MONDAY = 0


class PayFrequency(int, Enum):
    """Supported pay frequencies, valued by periods per year."""

    BIWEEKLY = 26
    MONTHLY = 12
    SEMIMONTHLY = 24


@dataclass(frozen=True)
class PayPeriodDates:
    """Start, end and pay date of a pay period."""

    period_start: date
    period_end: date
    pay_date: date

    @property
    def days(self) -> int:
        """Inclusive length of the period in days."""
        return (self.period_end - self.period_start).days + 1


def get_pay_frequency(periods_per_year: int) -> PayFrequency:
    """Map periods per year to a frequency.

    Unknown values (including 52) fall back to biweekly.
    """
    try:
        return PayFrequency(periods_per_year)
    except ValueError:
        return PayFrequency.BIWEEKLY


def next_period(
    last_period: PayPeriod | PayPeriodDates | None,
    frequency: PayFrequency,
    today: date | None = None,
) -> PayPeriodDates:
    """Next period after the last one, or after today when there is none."""
    if last_period is None:
        return next_period_from_date(today or date.today(), frequency)
    return next_period_from_date(last_period.period_end, frequency)


def next_period_from_date(reference_date: date, frequency: PayFrequency) -> PayPeriodDates:
    """Next period following a reference date (usually the last period end).

    Biweekly periods start on the first Monday strictly after the reference
    date, so a Monday reference skips to the following week. Chained from a
    period end (a Sunday) this gives contiguous periods.
    """
    if frequency is PayFrequency.MONTHLY:
        return _monthly(reference_date)
    if frequency is PayFrequency.SEMIMONTHLY:
        return _semimonthly(reference_date)
    return _biweekly(reference_date)


def _last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def _biweekly(reference_date: date) -> PayPeriodDates:
    # First Monday strictly after the reference; Monday to Sunday, 14 days.
    days_until_monday = (MONDAY - reference_date.weekday()) % 7 or 7
    period_start = reference_date + timedelta(days=days_until_monday)
    period_end = period_start + timedelta(days=13)
    return PayPeriodDates(period_start, period_end, period_end + ONE_DAY)


def _monthly(reference_date: date) -> PayPeriodDates:
    start = reference_date + ONE_DAY
    if start.day == 1:
        period_start = start
    elif start.month == 12:
        period_start = date(start.year + 1, 1, 1)
    else:
        period_start = date(start.year, start.month + 1, 1)

    period_end = _last_day_of_month(period_start.year, period_start.month)
    return PayPeriodDates(period_start, period_end, period_end + ONE_DAY)


def _semimonthly(reference_date: date) -> PayPeriodDates:
    # Halves are 1-15 and 16-last; the day after the reference picks the half.
    start = reference_date + ONE_DAY
    if start.day <= 15:
        period_start = date(start.year, start.month, 1)
        period_end = date(start.year, start.month, 15)
    else:
        period_start = date(start.year, start.month, 16)
        period_end = _last_day_of_month(start.year, start.month)
    return PayPeriodDates(period_start, period_end, period_end + ONE_DAY)


def calculate_biweekly_period(reference_date: date) -> tuple[date, date]:
    """Fourteen-day window ending on the Monday on or before the reference."""
    days_since_monday = (reference_date.weekday() - MONDAY) % 7
    period_start = reference_date - timedelta(days=days_since_monday + 13)
    return period_start, period_start + timedelta(days=13)


def get_next_biweekly_pay_date(reference_date: date) -> date:
    """Pay date (day after the window end) for calculate_biweekly_period."""
    _, period_end = calculate_biweekly_period(reference_date)
    return period_end + ONE_DAY
