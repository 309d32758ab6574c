"""Unit tests for month arithmetic"""

from datetime import date

from mei_finance.utils.date_utils import add_months, month_window, next_period, same_day_in_period


def test_next_period_wraps_december():
    assert next_period(12, 2024) == (1, 2025)
    assert next_period(6, 2024) == (7, 2024)


def test_month_window_is_half_open():
    assert month_window(12, 2024) == (date(2024, 12, 1), date(2025, 1, 1))
    assert month_window(2, 2024) == (date(2024, 2, 1), date(2024, 3, 1))


def test_add_months_overflows_short_months():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 3, 2)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 3, 3)
    assert add_months(date(2024, 1, 15), 13) == date(2025, 2, 15)
    assert add_months(date(2024, 3, 31), 0) == date(2024, 3, 31)


def test_add_months_clamped():
    assert add_months(date(2024, 1, 31), 1, clamp=True) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1, clamp=True) == date(2023, 2, 28)


def test_same_day_in_period():
    assert same_day_in_period(date(2024, 1, 31), 4, 2024) == date(2024, 5, 1)
    assert same_day_in_period(date(2024, 1, 31), 4, 2024, clamp=True) == date(2024, 4, 30)
    assert same_day_in_period(date(2024, 12, 5), 1, 2025) == date(2025, 1, 5)
