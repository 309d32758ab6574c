"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from mei_finance.domain.models import GoalStatus, TransactionKind


class ORMModel(BaseModel):
    """Response schema populated from ORM rows or domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


# Transactions


class TransactionCreate(BaseModel):
    """Request body for POST /v1/transactions"""

    kind: TransactionKind
    category: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0, decimal_places=2)
    date: date
    description: str = Field(..., min_length=1)
    is_recurring: bool = False


class TransactionRead(ORMModel):
    id: UUID
    kind: TransactionKind
    category: str
    amount: Decimal
    date: date
    description: str
    is_recurring: bool


class ExtraIncomeCreate(BaseModel):
    """Request body for POST /v1/extra-income; period defaults to the date's month"""

    amount: Decimal = Field(..., ge=0, decimal_places=2)
    description: str = Field(..., min_length=1)
    date: date
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=1900)


class ExtraIncomeRead(ORMModel):
    id: UUID
    amount: Decimal
    description: str
    date: date
    month: int
    year: int


# Monthly settings and summaries


class MonthlySettingsUpdate(BaseModel):
    das_value: Decimal = Field(..., ge=0, decimal_places=2)


class MonthlySettingsRead(ORMModel):
    id: UUID
    month: int
    year: int
    das_value: Decimal


class MonthlySummaryRead(ORMModel):
    id: UUID
    month: int
    year: int
    total_income: Decimal
    total_expenses: Decimal
    total_extras: Decimal
    das_value: Decimal
    income_tax_estimate: Decimal
    net_balance: Decimal


class ArchiveResponse(BaseModel):
    """Response for POST /v1/months/{year}/{month}/archive"""

    created: bool
    summary: MonthlySummaryRead


class RolloverResponse(ORMModel):
    """Response for POST /v1/months/{year}/{month}/prepare-next"""

    month: int
    year: int
    copied_transactions: int
    das_value: Optional[Decimal] = None


class MonthlyTotalsSchema(ORMModel):
    month: int
    year: int
    total_income: Decimal
    total_expenses: Decimal
    total_extras: Decimal
    das_value: Decimal
    income_tax_estimate: Decimal
    net_balance: Decimal


class MonthlyAlertsSchema(ORMModel):
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


class MonthOverviewResponse(ORMModel):
    totals: MonthlyTotalsSchema
    alerts: MonthlyAlertsSchema


class DeleteAllResponse(BaseModel):
    deleted: int


# Savings


class MonthlySavingUpsert(BaseModel):
    amount: Decimal = Field(..., ge=0, decimal_places=2)
    description: Optional[str] = None


class MonthlySavingRead(ORMModel):
    id: UUID
    month: int
    year: int
    amount: Decimal
    description: Optional[str] = None


class TotalSavingsResponse(ORMModel):
    total_accumulated: Decimal
    months_count: int
    monthly_average: Decimal


class SavingsGoalCreate(BaseModel):
    title: str = Field(..., min_length=1)
    target_amount: Decimal = Field(..., gt=0, decimal_places=2)
    deadline: date
    description: Optional[str] = None


class SavingsGoalUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    target_amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    deadline: Optional[date] = None
    description: Optional[str] = None


class SavingsGoalRead(BaseModel):
    """Goal with its progress against accumulated savings"""

    id: UUID
    title: str
    target_amount: Decimal
    deadline: date
    description: Optional[str] = None
    current_amount: Decimal
    percentage: Decimal
    status: GoalStatus


# Credit cards


class CardPurchaseInput(BaseModel):
    """Card purchase fields shared by card creation and POST /v1/cards/transactions"""

    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    installment_count: int = Field(1, ge=1, le=72)
    first_installment_date: date
    category: str = Field("Geral", min_length=1)


class CardTransactionCreate(CardPurchaseInput):
    card_id: UUID


class CreditCardCreate(BaseModel):
    """Request body for POST /v1/cards, optionally with initial purchases"""

    name: str = Field(..., min_length=1)
    credit_limit: Decimal = Field(..., gt=0, decimal_places=2)
    closing_day: int = Field(..., ge=1, le=31)
    due_day: int = Field(..., ge=1, le=31)
    purchases: List[CardPurchaseInput] = []


class CreditCardUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    credit_limit: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    closing_day: Optional[int] = Field(None, ge=1, le=31)
    due_day: Optional[int] = Field(None, ge=1, le=31)


class CreditCardRead(ORMModel):
    id: UUID
    name: str
    credit_limit: Decimal
    closing_day: int
    due_day: int


class CardInstallmentRead(ORMModel):
    id: UUID
    card_transaction_id: UUID
    installment_number: int
    amount: Decimal
    due_date: date
    paid: bool


class CardTransactionRead(ORMModel):
    id: UUID
    card_id: UUID
    description: str
    amount: Decimal
    installment_count: int
    first_installment_date: date
    category: str
    installments: List[CardInstallmentRead] = []


class InstallmentPaidUpdate(BaseModel):
    paid: bool


class CardSummaryResponse(ORMModel):
    """Snapshot returned by GET /v1/cards/summary"""

    card_id: UUID
    name: str
    credit_limit: Decimal
    current_balance: Decimal
    available_limit: Decimal
    next_due_date: Optional[date] = None
    next_due_amount: Decimal
    transactions_count: int
    total_purchases: Decimal
    usage_percentage: Decimal
    high_usage: bool


# Setup


class FeatureStatus(BaseModel):
    ready: bool
    missing_tables: List[str]


class SetupStatusResponse(BaseModel):
    features: Dict[str, FeatureStatus]
