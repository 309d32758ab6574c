"""Date manipulation utilities"""

from datetime import date, timedelta
from typing import Tuple

from dateutil.relativedelta import relativedelta


def next_period(month: int, year: int) -> Tuple[int, int]:
    """Return the (month, year) after the given one, wrapping December into January"""
    month += 1
    if month > 12:
        month = 1
        year += 1
    return month, year


def month_window(month: int, year: int) -> Tuple[date, date]:
    """Half-open date range [first day of month, first day of next month)"""
    next_month, next_year = next_period(month, year)
    return date(year, month, 1), date(next_year, next_month, 1)


def same_day_in_period(from_date: date, month: int, year: int, clamp: bool = False) -> date:
    """
    Move a date into another (month, year) keeping its day-of-month.

    A day the target month does not have overflows into the following
    month (Apr 31 is May 1). With clamp=True it lands on the month's last
    day instead.
    """
    if clamp:
        return date(year, month, 1) + relativedelta(day=from_date.day)
    return date(year, month, 1) + timedelta(days=from_date.day - 1)


def add_months(from_date: date, months: int, clamp: bool = False) -> date:
    """
    Advance a date by whole calendar months keeping the day-of-month.

    Jan 31 + 1 month is Mar 2 in 2024 (Feb 29 with clamp=True).
    """
    target = date(from_date.year, from_date.month, 1) + relativedelta(months=months)
    return same_day_in_period(from_date, target.month, target.year, clamp=clamp)
