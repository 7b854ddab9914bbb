"""Unit tests for billing cycle calculations"""

import pytest
import pytz
from datetime import date, datetime
from decimal import Decimal

from src.domain.billing_cycle import (
    prorate,
    cycle_start,
    next_cycle_start,
    bill_due_date,
    is_suspension_day,
    bill_description,
    billing_period,
    to_storage,
    from_storage,
    round_currency,
)
from src.domain.customer import PeriodUnit

JAKARTA = pytz.timezone("Asia/Jakarta")


def jakarta(*args):
    return JAKARTA.localize(datetime(*args))


class TestProrate:
    """Test first-month pro-rata charge"""

    def test_mid_month_activation_is_prorated(self):
        """
        Given: Activation on 15 January, price 300000
        When: Pro-rata is calculated
        Then: 17 of 31 days are charged, rounded half-up
        """
        result = prorate(date(2025, 1, 15), Decimal("300000"))

        assert result.is_pro_rata_applied is True
        assert result.pro_rata_amount == Decimal("164516")
        assert result.remaining_days == 17
        assert result.days_in_month == 31

    def test_activation_on_first_day_charges_full_price(self):
        result = prorate(date(2025, 1, 1), Decimal("300000"))

        assert result.is_pro_rata_applied is False
        assert result.pro_rata_amount == Decimal("300000")
        assert result.remaining_days == 31
        assert result.days_in_month == 31

    def test_activation_on_last_day_charges_one_day(self):
        result = prorate(date(2025, 1, 31), Decimal("310000"))

        assert result.is_pro_rata_applied is True
        assert result.pro_rata_amount == Decimal("10000")
        assert result.remaining_days == 1

    def test_leap_february(self):
        result = prorate(date(2024, 2, 15), Decimal("290000"))

        assert result.days_in_month == 29
        assert result.remaining_days == 15
        assert result.pro_rata_amount == Decimal("150000")

    def test_non_leap_february(self):
        result = prorate(date(2025, 2, 15), Decimal("280000"))

        assert result.days_in_month == 28
        assert result.remaining_days == 14
        assert result.pro_rata_amount == Decimal("140000")

    def test_days_unit_returns_full_price(self):
        """
        Given: A subscription counted in days
        When: Pro-rata is calculated
        Then: Full price is returned and days echo the period
        """
        result = prorate(date(2025, 1, 15), Decimal("50000"), 7, PeriodUnit.DAYS)

        assert result.is_pro_rata_applied is False
        assert result.pro_rata_amount == Decimal("50000")
        assert result.remaining_days == 7
        assert result.days_in_month == 7

    def test_unknown_unit_returns_full_price(self):
        result = prorate(date(2025, 1, 15), 300000, 12, "years")

        assert result.is_pro_rata_applied is False
        assert result.pro_rata_amount == Decimal("300000")
        assert result.remaining_days == 12
        assert result.days_in_month == 12

    def test_accepts_datetime_and_string_unit(self):
        result = prorate(datetime(2025, 1, 15, 9, 30), 300000, 1, "months")

        assert result.pro_rata_amount == Decimal("164516")

    def test_amount_never_exceeds_price(self):
        price = Decimal("333333")
        for day in range(1, 32):
            result = prorate(date(2025, 1, day), price)
            assert result.pro_rata_amount <= price
            assert result.is_pro_rata_applied == (day > 1)


class TestRoundCurrency:
    def test_rounds_half_up(self):
        assert round_currency(Decimal("10.5")) == Decimal("11")
        assert round_currency(Decimal("10.49")) == Decimal("10")


class TestCycleBoundaries:
    """Test civil calendar boundaries"""

    def test_cycle_start_is_first_of_month_midnight(self):
        start = cycle_start(jakarta(2025, 3, 17, 14, 0))

        assert start.replace(tzinfo=None) == datetime(2025, 3, 1)
        assert start.utcoffset().total_seconds() == 7 * 3600

    def test_cycle_start_in_utc_is_previous_day(self):
        start = to_storage(cycle_start(jakarta(2025, 3, 17, 14, 0)))

        assert start == datetime(2025, 2, 28, 17, 0, tzinfo=pytz.utc)

    def test_next_cycle_start_rolls_year(self):
        nxt = next_cycle_start(jakarta(2025, 12, 10, 8, 0))

        assert nxt.replace(tzinfo=None) == datetime(2026, 1, 1)

    def test_due_date_keeps_time_of_day(self):
        due = bill_due_date(jakarta(2025, 2, 1, 9, 15))

        assert due.replace(tzinfo=None) == datetime(2025, 2, 5, 9, 15)

    def test_due_date_with_custom_day(self):
        due = bill_due_date(jakarta(2025, 2, 1, 0, 0), due_day=10)

        assert due.day == 10

    def test_suspension_day(self):
        assert is_suspension_day(jakarta(2025, 2, 6, 0, 1)) is True
        assert is_suspension_day(jakarta(2025, 2, 5, 23, 59)) is False
        assert is_suspension_day(jakarta(2025, 2, 7, 0, 0), suspension_day=7) is True

    def test_suspension_day_uses_civil_date(self):
        """
        Given: 2025-02-05 18:00 UTC, which is 2025-02-06 01:00 in Jakarta
        When: The suspension gate is checked in civil time
        Then: It is the suspension day
        """
        utc_instant = pytz.utc.localize(datetime(2025, 2, 5, 18, 0))

        assert is_suspension_day(utc_instant.astimezone(JAKARTA)) is True

    def test_bill_description(self):
        assert bill_description(jakarta(2025, 1, 1, 0, 0)) == "Tagihan bulanan January 2025"

    def test_billing_period_uses_civil_month(self):
        assert billing_period(jakarta(2025, 2, 1, 0, 5)) == "2025-02"
        assert billing_period(jakarta(2025, 12, 31, 23, 59)) == "2025-12"


class TestStorageConversion:
    def test_to_storage_converts_to_aware_utc(self):
        stored = to_storage(jakarta(2025, 1, 1, 7, 0))

        assert stored == datetime(2025, 1, 1, 0, 0, tzinfo=pytz.utc)
        assert stored.utcoffset().total_seconds() == 0

    def test_to_storage_treats_naive_values_as_utc(self):
        stored = to_storage(datetime(2025, 1, 1, 7, 0))

        assert stored.tzinfo is not None
        assert stored == datetime(2025, 1, 1, 7, 0, tzinfo=pytz.utc)

    def test_from_storage_round_trip(self):
        civil = jakarta(2025, 6, 30, 23, 30)

        assert from_storage(to_storage(civil), "Asia/Jakarta") == civil

    def test_from_storage_accepts_naive_utc(self):
        civil = from_storage(datetime(2025, 6, 30, 16, 30), "Asia/Jakarta")

        assert civil == jakarta(2025, 6, 30, 23, 30)
        assert civil.tzinfo.zone == "Asia/Jakarta"
