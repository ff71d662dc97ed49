"""Tests for pay period date calculation."""

from datetime import date, timedelta

import pytest

from payroll_manager.calculators.pay_period import (
    PayFrequency,
    PayPeriodDates,
    calculate_biweekly_period,
    get_next_biweekly_pay_date,
    get_pay_frequency,
    next_period,
    next_period_from_date,
)


class TestPayFrequency:
    """Mapping of periods per year to a frequency."""

    @pytest.mark.parametrize(
        "periods, expected",
        [
            (26, PayFrequency.BIWEEKLY),
            (12, PayFrequency.MONTHLY),
            (24, PayFrequency.SEMIMONTHLY),
            (52, PayFrequency.BIWEEKLY),
            (0, PayFrequency.BIWEEKLY),
        ],
    )
    def test_get_pay_frequency(self, periods, expected):
        assert get_pay_frequency(periods) is expected


class TestBiweekly:
    """Biweekly periods run Monday through the second Sunday."""

    def test_period_after_monday_reference(self):
        dates = next_period_from_date(date(2024, 1, 15), PayFrequency.BIWEEKLY)

        assert dates == PayPeriodDates(date(2024, 1, 22), date(2024, 2, 4), date(2024, 2, 5))
        assert dates.days == 14

    def test_period_after_sunday_reference_starts_next_day(self):
        dates = next_period_from_date(date(2024, 1, 14), PayFrequency.BIWEEKLY)

        assert dates.period_start == date(2024, 1, 15)
        assert dates.period_end == date(2024, 1, 28)

    def test_midweek_reference(self):
        dates = next_period_from_date(date(2024, 1, 17), PayFrequency.BIWEEKLY)
        assert dates.period_start == date(2024, 1, 22)

    def test_chain_is_contiguous(self):
        dates = next_period_from_date(date(2024, 1, 14), PayFrequency.BIWEEKLY)
        for _ in range(30):
            following = next_period(dates, PayFrequency.BIWEEKLY)
            assert following.period_start == dates.period_end + timedelta(days=1)
            assert following.period_start.weekday() == 0
            assert following.days == 14
            assert following.pay_date == following.period_end + timedelta(days=1)
            dates = following


class TestMonthly:
    """Monthly periods cover whole calendar months."""

    def test_after_month_end(self):
        dates = next_period_from_date(date(2024, 1, 31), PayFrequency.MONTHLY)
        assert dates == PayPeriodDates(date(2024, 2, 1), date(2024, 2, 29), date(2024, 3, 1))

    def test_mid_month_reference_moves_to_next_month(self):
        dates = next_period_from_date(date(2024, 1, 15), PayFrequency.MONTHLY)
        assert dates.period_start == date(2024, 2, 1)

    def test_year_rollover(self):
        dates = next_period_from_date(date(2024, 12, 15), PayFrequency.MONTHLY)
        assert dates == PayPeriodDates(date(2025, 1, 1), date(2025, 1, 31), date(2025, 2, 1))

    def test_chain_is_contiguous(self):
        dates = next_period_from_date(date(2023, 12, 31), PayFrequency.MONTHLY)
        for _ in range(24):
            following = next_period(dates, PayFrequency.MONTHLY)
            assert following.period_start == dates.period_end + timedelta(days=1)
            assert following.period_start.day == 1
            dates = following


class TestSemimonthly:
    """Semi-monthly halves are the 1st-15th and 16th-last day."""

    def test_second_half_of_month(self):
        dates = next_period_from_date(date(2024, 1, 15), PayFrequency.SEMIMONTHLY)
        assert dates == PayPeriodDates(date(2024, 1, 16), date(2024, 1, 31), date(2024, 2, 1))

    def test_first_half_of_next_month(self):
        dates = next_period_from_date(date(2024, 1, 31), PayFrequency.SEMIMONTHLY)
        assert dates == PayPeriodDates(date(2024, 2, 1), date(2024, 2, 15), date(2024, 2, 16))

    def test_february_leap_year(self):
        dates = next_period_from_date(date(2024, 2, 15), PayFrequency.SEMIMONTHLY)
        assert dates.period_end == date(2024, 2, 29)

    def test_february_non_leap_year(self):
        dates = next_period_from_date(date(2023, 2, 15), PayFrequency.SEMIMONTHLY)
        assert dates.period_end == date(2023, 2, 28)
        assert dates.pay_date == date(2023, 3, 1)

    def test_chain_starts_on_first_or_sixteenth(self):
        dates = next_period_from_date(date(2023, 12, 31), PayFrequency.SEMIMONTHLY)
        for _ in range(48):
            following = next_period(dates, PayFrequency.SEMIMONTHLY)
            assert following.period_start.day in (1, 16)
            assert following.period_start == dates.period_end + timedelta(days=1)
            dates = following


class TestNextPeriod:
    """Choosing the reference date for the next period."""

    def test_without_last_period_uses_today(self):
        dates = next_period(None, PayFrequency.BIWEEKLY, today=date(2024, 1, 15))
        assert dates.period_start == date(2024, 1, 22)

    def test_with_last_period_uses_its_end(self):
        last = PayPeriodDates(date(2024, 1, 1), date(2024, 1, 14), date(2024, 1, 15))
        dates = next_period(last, PayFrequency.BIWEEKLY, today=date(2030, 6, 1))
        assert dates.period_start == date(2024, 1, 15)


class TestBiweeklyWindow:
    """Fourteen-day window ending on the Monday on or before a date."""

    def test_monday_reference(self):
        start, end = calculate_biweekly_period(date(2024, 1, 15))

        assert start == date(2024, 1, 2)
        assert end == date(2024, 1, 15)

    def test_midweek_reference(self):
        start, end = calculate_biweekly_period(date(2024, 1, 17))

        assert end == date(2024, 1, 15)
        assert (end - start).days == 13

    def test_pay_date_is_day_after_window(self):
        assert get_next_biweekly_pay_date(date(2024, 1, 17)) == date(2024, 1, 16)
