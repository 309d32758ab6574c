"""Monthly totals, tax estimates and dashboard alerts"""

from decimal import Decimal
from typing import Iterable, Optional

from mei_finance.config import settings
from mei_finance.domain.models import MonthlyAlerts, MonthlyTotals, TransactionKind

ZERO = Decimal("0")


def _kind(txn) -> str:
    kind = txn.kind
    return kind.value if isinstance(kind, TransactionKind) else kind


def sum_by_kind(transactions: Iterable, kind: TransactionKind, recurring_only: bool = False) -> Decimal:
    """Sum transaction amounts of one kind"""
    return sum(
        (
            Decimal(t.amount)
            for t in transactions
            if _kind(t) == kind.value and (t.is_recurring or not recurring_only)
        ),
        ZERO,
    )


def calculate_net_balance(
    total_income: Decimal,
    total_extras: Decimal,
    total_expenses: Decimal,
    das_value: Decimal,
) -> Decimal:
    return total_income + total_extras - total_expenses - das_value


def estimate_income_tax(monthly_income: Decimal, mode: Optional[str] = None) -> Decimal:
    """
    Illustrative income tax estimate for the month.

    In ``simplified`` mode the estimate is always zero. In ``estimated`` mode
    the monthly income is annualized and 7.5% of whatever exceeds the
    exemption threshold is returned.
    """
    mode = mode or settings.income_tax_mode
    if mode != "estimated":
        return ZERO

    annualized = Decimal(monthly_income) * 12
    threshold = settings.income_tax_exemption_threshold
    if annualized <= threshold:
        return ZERO
    return ((annualized - threshold) * settings.income_tax_rate).quantize(Decimal("0.01"))


def build_monthly_totals(
    month: int,
    year: int,
    transactions: Iterable,
    extra_income: Iterable,
    das_value: Optional[Decimal],
    income_tax_mode: Optional[str] = None,
) -> MonthlyTotals:
    """Aggregate one month's rows into the figures stored by archiving"""
    transactions = list(transactions)
    total_income = sum_by_kind(transactions, TransactionKind.INCOME)
    total_expenses = sum_by_kind(transactions, TransactionKind.EXPENSE)
    total_extras = sum((Decimal(e.amount) for e in extra_income), ZERO)
    das = Decimal(das_value) if das_value is not None else settings.default_das_value

    return MonthlyTotals(
        month=month,
        year=year,
        total_income=total_income,
        total_expenses=total_expenses,
        total_extras=total_extras,
        das_value=das,
        income_tax_estimate=estimate_income_tax(total_income + total_extras, income_tax_mode),
        net_balance=calculate_net_balance(total_income, total_extras, total_expenses, das),
    )


def build_alerts(transactions: Iterable, extra_income: Iterable, das_value: Decimal) -> MonthlyAlerts:
    """Alerts panel: exemption threshold, low balance and fixed-cost projection"""
    transactions = list(transactions)
    income = sum_by_kind(transactions, TransactionKind.INCOME)
    expenses = sum_by_kind(transactions, TransactionKind.EXPENSE)
    extras = sum((Decimal(e.amount) for e in extra_income), ZERO)
    das_value = Decimal(das_value)

    income_with_extras = income + extras
    annual_projection = income_with_extras * 12
    monthly_balance = income_with_extras - expenses - das_value

    fixed_costs = sum_by_kind(transactions, TransactionKind.EXPENSE, recurring_only=True) + das_value
    if income_with_extras > 0:
        coverage = (fixed_costs / income_with_extras * 100).quantize(Decimal("0.1"))
    else:
        coverage = ZERO
    remaining_after_fixed = income_with_extras - fixed_costs
    suggested_reserve = (income_with_extras * settings.suggested_reserve_rate).quantize(Decimal("0.01"))

    return MonthlyAlerts(
        income_with_extras=income_with_extras,
        annual_projection=annual_projection,
        above_exemption=annual_projection > settings.income_tax_exemption_threshold,
        monthly_balance=monthly_balance,
        low_balance=monthly_balance < settings.low_balance_threshold,
        received_extras=extras > 0,
        das_due_day=settings.das_due_day,
        fixed_costs=fixed_costs,
        fixed_costs_coverage=coverage,
        remaining_after_fixed=remaining_after_fixed,
        suggested_reserve=suggested_reserve,
        available_for_variable=remaining_after_fixed - suggested_reserve,
    )
