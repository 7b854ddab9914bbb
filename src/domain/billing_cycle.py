"""Billing cycle calculations

Pure functions for pro-rata charges and civil-calendar cycle boundaries.
All functions take an explicit ``now`` (timezone-aware, in the operator's
civil timezone) instead of reading a process-wide clock.
"""

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

import pytz

from src.domain.customer import PeriodUnit


@dataclass(frozen=True)
class ProRataResult:
    is_pro_rata_applied: bool
    pro_rata_amount: Decimal
    remaining_days: int
    days_in_month: int


def round_currency(amount: Decimal) -> Decimal:
    """Round half-up to the nearest rupiah"""
    return Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def prorate(
    active_date: Union[date, datetime],
    package_price: Union[Decimal, int, float, str],
    active_period: int = 1,
    active_period_unit: Union[PeriodUnit, str] = PeriodUnit.MONTHS,
) -> ProRataResult:
    """
    Calculate the first-month charge for a customer activated mid-month

    The activation day itself is billable, so a customer activated on the 1st
    pays the full price and no pro-rata is applied.

    Args:
        active_date: Activation date (civil calendar)
        package_price: Monthly package price
        active_period: Period length, echoed back for non-monthly units
        active_period_unit: "months" pro-rates; any other unit bills the full price

    Returns:
        ProRataResult
    """
    price = Decimal(str(package_price))
    if isinstance(active_date, datetime):
        active_date = active_date.date()

    unit = getattr(active_period_unit, "value", active_period_unit)
    if unit != PeriodUnit.MONTHS.value:
        return ProRataResult(
            is_pro_rata_applied=False,
            pro_rata_amount=price,
            remaining_days=active_period,
            days_in_month=active_period,
        )

    _, days_in_month = monthrange(active_date.year, active_date.month)
    remaining_days = days_in_month - active_date.day + 1
    daily_rate = price / days_in_month

    return ProRataResult(
        is_pro_rata_applied=remaining_days < days_in_month,
        pro_rata_amount=round_currency(daily_rate * remaining_days),
        remaining_days=remaining_days,
        days_in_month=days_in_month,
    )


def _localize(reference: datetime, naive: datetime) -> datetime:
    tz = reference.tzinfo
    if tz is None:
        return naive
    if hasattr(tz, "localize"):
        # pytz zones must localize, replace() would pick the LMT offset
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def cycle_start(now: datetime) -> datetime:
    """First instant of the calendar month containing ``now``"""
    return _localize(now, datetime(now.year, now.month, 1))


def next_cycle_start(now: datetime) -> datetime:
    """First instant of the month after ``now``"""
    if now.month == 12:
        return _localize(now, datetime(now.year + 1, 1, 1))
    return _localize(now, datetime(now.year, now.month + 1, 1))


def bill_due_date(now: datetime, due_day: int = 5) -> datetime:
    """Due date of a bill created at ``now``: ``due_day`` of the same month, same time of day"""
    _, last_day = monthrange(now.year, now.month)
    naive = now.replace(tzinfo=None, day=min(due_day, last_day))
    return _localize(now, naive)


def is_suspension_day(now: datetime, suspension_day: int = 6) -> bool:
    return now.day == suspension_day


def billing_period(now: datetime) -> str:
    """Civil month key of a bill created at ``now``, e.g. 2025-02"""
    return now.strftime("%Y-%m")


def bill_description(now: datetime) -> str:
    return f"Tagihan bulanan {now.strftime('%B %Y')}"


def to_storage(value: datetime) -> datetime:
    """Convert a civil datetime to the aware UTC instant stored in the database

    Naive values are taken to be UTC already.
    """
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def from_storage(value: datetime, tz: Union[str, pytz.BaseTzInfo]) -> datetime:
    """Convert a stored UTC datetime (aware, or naive UTC) to civil time in ``tz``"""
    zone = pytz.timezone(tz) if isinstance(tz, str) else tz
    return to_storage(value).astimezone(zone)
