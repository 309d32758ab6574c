"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID


class TransactionKind(str, Enum):
    """Direction of a cash transaction"""

    INCOME = "income"
    EXPENSE = "expense"


class GoalStatus(str, Enum):
    COMPLETED = "completed"
    OVERDUE = "overdue"
    ALMOST = "almost"
    IN_PROGRESS = "in_progress"


@dataclass
class Installment:
    """Single scheduled payment of a card purchase"""

    installment_number: int
    amount: Decimal
    due_date: date
    paid: bool = False


@dataclass
class CardSummary:
    """Dashboard snapshot for one credit card"""

    card_id: UUID
    name: str
    credit_limit: Decimal
    current_balance: Decimal
    available_limit: Decimal
    next_due_date: Optional[date]
    next_due_amount: Decimal
    transactions_count: int
    total_purchases: Decimal
    usage_percentage: Decimal
    high_usage: bool


@dataclass
class MonthlyTotals:
    """Figures archived into a monthly summary"""

    month: int
    year: int
    total_income: Decimal
    total_expenses: Decimal
    total_extras: Decimal
    das_value: Decimal
    income_tax_estimate: Decimal
    net_balance: Decimal


@dataclass
class MonthlyAlerts:
    """Warnings and cash-flow projection for the month dashboard"""

    income_with_extras: Decimal
    annual_projection: Decimal
    above_exemption: bool
    monthly_balance: Decimal
    low_balance: bool
    received_extras: bool
    das_due_day: int
    fixed_costs: Decimal
    fixed_costs_coverage: Decimal
    remaining_after_fixed: Decimal
    suggested_reserve: Decimal
    available_for_variable: Decimal


@dataclass
class TotalSavings:
    total_accumulated: Decimal
    months_count: int
    monthly_average: Decimal


@dataclass
class GoalProgress:
    """Savings goal measured against accumulated savings"""

    current_amount: Decimal
    percentage: Decimal
    status: GoalStatus


@dataclass
class RolloverPlan:
    """Transactions and DAS value to carry into the next period"""

    month: int
    year: int
    transactions: list
    das_value: Optional[Decimal]
