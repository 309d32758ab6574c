"""Planning of the recurring transactions carried into the next month"""

from decimal import Decimal
from typing import Iterable, Optional

from mei_finance.domain.models import RolloverPlan
from mei_finance.utils.date_utils import next_period, same_day_in_period


def plan_next_month(
    month: int,
    year: int,
    transactions: Iterable,
    das_value: Optional[Decimal] = None,
) -> RolloverPlan:
    """
    Copy recurring transactions of (month, year) into the following period.

    Each copy keeps kind, category, amount, description and the recurring
    flag; its date keeps the day-of-month, overflowing into the month after
    the target when the target is shorter (Mar 31 becomes May 1).
    Non-recurring rows are ignored.
    """
    target_month, target_year = next_period(month, year)

    copies = [
        {
            "kind": txn.kind,
            "category": txn.category,
            "amount": txn.amount,
            "date": same_day_in_period(txn.date, target_month, target_year),
            "description": txn.description,
            "is_recurring": txn.is_recurring,
        }
        for txn in transactions
        if txn.is_recurring
    ]

    return RolloverPlan(month=target_month, year=target_year, transactions=copies, das_value=das_value)
