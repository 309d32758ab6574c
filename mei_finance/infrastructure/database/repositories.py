"""Data access layer for finance entities"""

import functools
import logging
import uuid
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mei_finance.config import settings
from mei_finance.domain.exceptions import NotFoundError, StoreUnavailableError
from mei_finance.domain.models import Installment, MonthlyTotals
from mei_finance.infrastructure.database.models import (
    CardInstallment,
    CardTransaction,
    CreditCard,
    ExtraIncome,
    MonthlySaving,
    MonthlySettings,
    MonthlySummary,
    SavingsGoal,
    Transaction,
)
from mei_finance.infrastructure.observability.metrics import store_failures_counter
from mei_finance.utils.date_utils import month_window

logger = logging.getLogger(__name__)


def _store_failure(db: Session, operation: str, error: Exception) -> None:
    db.rollback()
    store_failures_counter.labels(operation=operation).inc()
    logger.error(f"Data store error during {operation}: {error}", extra={"operation": operation})


def read_or_default(operation: str, default: Callable[[], Any]):
    """
    Reads never fail the caller: store errors are logged and an empty value returned.

    Callers that write based on what they read pass strict=True, which
    raises StoreUnavailableError instead of answering with the default.
    """

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(self, *args, strict: bool = False, **kwargs):
            try:
                return fn(self, *args, **kwargs)
            except SQLAlchemyError as e:
                _store_failure(self.db, operation, e)
                if strict:
                    raise StoreUnavailableError(operation) from e
                return default()

        return wrapper

    return decorator


def guarded_write(operation: str):
    """Writes roll back and surface as a retryable StoreUnavailableError"""

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            try:
                return fn(self, *args, **kwargs)
            except SQLAlchemyError as e:
                _store_failure(self.db, operation, e)
                raise StoreUnavailableError(operation) from e

        return wrapper

    return decorator


def commit(db: Session, operation: str) -> None:
    """Commit the unit of work opened by a request"""
    try:
        db.commit()
    except SQLAlchemyError as e:
        _store_failure(db, operation, e)
        raise StoreUnavailableError(operation) from e


class TransactionRepository:
    """Repository for income and expense transactions"""

    def __init__(self, db: Session):
        self.db = db

    @read_or_default("list_transactions", list)
    def list_for_period(self, month: int, year: int, recurring_only: bool = False) -> List[Transaction]:
        """Transactions dated within the month, oldest first"""
        start, end = month_window(month, year)
        query = self.db.query(Transaction).filter(Transaction.date >= start, Transaction.date < end)
        if recurring_only:
            query = query.filter(Transaction.is_recurring.is_(True))
        return query.order_by(Transaction.date.asc()).all()

    @guarded_write("add_transaction")
    def create(self, **fields) -> Transaction:
        db_transaction = Transaction(**fields)
        self.db.add(db_transaction)
        self.db.flush()
        return db_transaction

    @guarded_write("add_transactions")
    def create_many(self, rows: Iterable[Dict[str, Any]]) -> List[Transaction]:
        db_transactions = [Transaction(**row) for row in rows]
        self.db.add_all(db_transactions)
        self.db.flush()
        return db_transactions

    @guarded_write("delete_transaction")
    def delete(self, transaction_id: uuid.UUID) -> None:
        db_transaction = self.db.get(Transaction, transaction_id)
        if db_transaction is None:
            raise NotFoundError("Transaction", transaction_id)
        self.db.delete(db_transaction)
        self.db.flush()


class ExtraIncomeRepository:
    def __init__(self, db: Session):
        self.db = db

    @read_or_default("list_extra_income", list)
    def list_for_period(self, month: int, year: int) -> List[ExtraIncome]:
        """Extra income booked to (month, year), newest first"""
        return (
            self.db.query(ExtraIncome)
            .filter(ExtraIncome.month == month, ExtraIncome.year == year)
            .order_by(ExtraIncome.date.desc())
            .all()
        )

    @guarded_write("add_extra_income")
    def create(self, **fields) -> ExtraIncome:
        db_extra = ExtraIncome(**fields)
        self.db.add(db_extra)
        self.db.flush()
        return db_extra

    @guarded_write("delete_extra_income")
    def delete(self, extra_income_id: uuid.UUID) -> None:
        db_extra = self.db.get(ExtraIncome, extra_income_id)
        if db_extra is None:
            raise NotFoundError("Extra income", extra_income_id)
        self.db.delete(db_extra)
        self.db.flush()


class SettingsRepository:
    """Repository for per-month DAS settings"""

    def __init__(self, db: Session):
        self.db = db

    @read_or_default("get_monthly_settings", lambda: None)
    def get_for_period(self, month: int, year: int) -> Optional[MonthlySettings]:
        return (
            self.db.query(MonthlySettings)
            .filter(MonthlySettings.month == month, MonthlySettings.year == year)
            .one_or_none()
        )

    def get_or_create(self, month: int, year: int) -> MonthlySettings:
        """Settings for the period, created with the default DAS value on first access"""
        existing = self.get_for_period(month, year, strict=True)
        if existing is not None:
            return existing
        return self.upsert(month, year, settings.default_das_value)

    @guarded_write("upsert_monthly_settings")
    def upsert(self, month: int, year: int, das_value: Decimal) -> MonthlySettings:
        db_settings = (
            self.db.query(MonthlySettings)
            .filter(MonthlySettings.month == month, MonthlySettings.year == year)
            .one_or_none()
        )
        if db_settings is None:
            db_settings = MonthlySettings(month=month, year=year, das_value=das_value)
            self.db.add(db_settings)
        else:
            db_settings.das_value = das_value
        self.db.flush()
        return db_settings


class SummaryRepository:
    """Repository for archived monthly summaries"""

    def __init__(self, db: Session):
        self.db = db

    @read_or_default("list_monthly_summaries", list)
    def list_all(self) -> List[MonthlySummary]:
        """All summaries, most recent period first"""
        return (
            self.db.query(MonthlySummary)
            .order_by(MonthlySummary.year.desc(), MonthlySummary.month.desc())
            .all()
        )

    @read_or_default("get_monthly_summary", lambda: None)
    def get_for_period(self, month: int, year: int) -> Optional[MonthlySummary]:
        return (
            self.db.query(MonthlySummary)
            .filter(MonthlySummary.month == month, MonthlySummary.year == year)
            .one_or_none()
        )

    @guarded_write("save_monthly_summary")
    def upsert(self, totals: MonthlyTotals) -> Tuple[MonthlySummary, bool]:
        """
        Insert or overwrite the summary for the totals' period.

        Returns:
            (summary row, True when a new row was created)
        """
        db_summary = (
            self.db.query(MonthlySummary)
            .filter(MonthlySummary.month == totals.month, MonthlySummary.year == totals.year)
            .one_or_none()
        )
        created = db_summary is None
        if created:
            db_summary = MonthlySummary(month=totals.month, year=totals.year)
            self.db.add(db_summary)

        db_summary.total_income = totals.total_income
        db_summary.total_expenses = totals.total_expenses
        db_summary.total_extras = totals.total_extras
        db_summary.das_value = totals.das_value
        db_summary.income_tax_estimate = totals.income_tax_estimate
        db_summary.net_balance = totals.net_balance
        self.db.flush()
        return db_summary, created

    @guarded_write("delete_monthly_summary")
    def delete(self, summary_id: uuid.UUID) -> None:
        db_summary = self.db.get(MonthlySummary, summary_id)
        if db_summary is None:
            raise NotFoundError("Monthly summary", summary_id)
        self.db.delete(db_summary)
        self.db.flush()

    @guarded_write("delete_all_monthly_summaries")
    def delete_all(self) -> int:
        """Remove every archived summary; returns how many were deleted"""
        deleted = self.db.query(MonthlySummary).delete(synchronize_session=False)
        self.db.flush()
        return deleted


class SavingsRepository:
    """Repository for monthly savings contributions"""

    def __init__(self, db: Session):
        self.db = db

    @read_or_default("list_monthly_savings", list)
    def list_all(self) -> List[MonthlySaving]:
        return (
            self.db.query(MonthlySaving)
            .order_by(MonthlySaving.year.desc(), MonthlySaving.month.desc())
            .all()
        )

    @read_or_default("get_monthly_saving", lambda: None)
    def get_for_period(self, month: int, year: int) -> Optional[MonthlySaving]:
        return (
            self.db.query(MonthlySaving)
            .filter(MonthlySaving.month == month, MonthlySaving.year == year)
            .one_or_none()
        )

    @guarded_write("upsert_monthly_saving")
    def upsert(self, month: int, year: int, amount: Decimal, description: Optional[str] = None) -> MonthlySaving:
        db_saving = (
            self.db.query(MonthlySaving)
            .filter(MonthlySaving.month == month, MonthlySaving.year == year)
            .one_or_none()
        )
        if db_saving is None:
            db_saving = MonthlySaving(month=month, year=year)
            self.db.add(db_saving)
        db_saving.amount = amount
        db_saving.description = description
        self.db.flush()
        return db_saving

    @guarded_write("delete_monthly_saving")
    def delete(self, saving_id: uuid.UUID) -> None:
        db_saving = self.db.get(MonthlySaving, saving_id)
        if db_saving is None:
            raise NotFoundError("Monthly saving", saving_id)
        self.db.delete(db_saving)
        self.db.flush()


class SavingsGoalRepository:
    def __init__(self, db: Session):
        self.db = db

    @read_or_default("list_savings_goals", list)
    def list_all(self) -> List[SavingsGoal]:
        return self.db.query(SavingsGoal).order_by(SavingsGoal.deadline.asc()).all()

    @guarded_write("add_savings_goal")
    def create(self, **fields) -> SavingsGoal:
        db_goal = SavingsGoal(**fields)
        self.db.add(db_goal)
        self.db.flush()
        return db_goal

    @guarded_write("update_savings_goal")
    def update(self, goal_id: uuid.UUID, **fields) -> SavingsGoal:
        db_goal = self.db.get(SavingsGoal, goal_id)
        if db_goal is None:
            raise NotFoundError("Savings goal", goal_id)
        for name, value in fields.items():
            setattr(db_goal, name, value)
        self.db.flush()
        return db_goal

    @guarded_write("delete_savings_goal")
    def delete(self, goal_id: uuid.UUID) -> None:
        db_goal = self.db.get(SavingsGoal, goal_id)
        if db_goal is None:
            raise NotFoundError("Savings goal", goal_id)
        self.db.delete(db_goal)
        self.db.flush()


class CardRepository:
    """Repository for credit cards"""

    def __init__(self, db: Session):
        self.db = db

    @read_or_default("list_credit_cards", list)
    def list_all(self) -> List[CreditCard]:
        return self.db.query(CreditCard).order_by(CreditCard.name.asc()).all()

    def get(self, card_id: uuid.UUID) -> CreditCard:
        db_card = self.db.get(CreditCard, card_id)
        if db_card is None:
            raise NotFoundError("Credit card", card_id)
        return db_card

    @guarded_write("add_credit_card")
    def create(self, **fields) -> CreditCard:
        db_card = CreditCard(**fields)
        self.db.add(db_card)
        self.db.flush()
        return db_card

    @guarded_write("update_credit_card")
    def update(self, card_id: uuid.UUID, **fields) -> CreditCard:
        db_card = self.get(card_id)
        for name, value in fields.items():
            setattr(db_card, name, value)
        self.db.flush()
        return db_card

    @guarded_write("delete_credit_card")
    def delete(self, card_id: uuid.UUID) -> None:
        """Delete a card together with its purchases and their installments"""
        self.db.delete(self.get(card_id))
        self.db.flush()


class CardTransactionRepository:
    """Repository for card purchases and their installment schedules"""

    def __init__(self, db: Session):
        self.db = db

    @read_or_default("list_card_transactions", list)
    def find(
        self,
        card_id: Optional[uuid.UUID] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> List[CardTransaction]:
        """Purchases, newest first, optionally narrowed to a card and a purchase month"""
        query = self.db.query(CardTransaction)
        if card_id is not None:
            query = query.filter(CardTransaction.card_id == card_id)
        if month and year:
            start, end = month_window(month, year)
            query = query.filter(
                CardTransaction.first_installment_date >= start,
                CardTransaction.first_installment_date < end,
            )
        return query.order_by(CardTransaction.first_installment_date.desc()).all()

    @guarded_write("add_card_transaction")
    def create(self, installments: List[Installment], **fields) -> CardTransaction:
        """Persist a purchase and, in the same flush, its installment rows"""
        db_transaction = CardTransaction(**fields)
        self.db.add(db_transaction)
        self.db.flush()

        for inst in installments:
            self.db.add(
                CardInstallment(
                    card_transaction_id=db_transaction.id,
                    installment_number=inst.installment_number,
                    amount=inst.amount,
                    due_date=inst.due_date,
                    paid=inst.paid,
                )
            )
        self.db.flush()
        return db_transaction

    @guarded_write("delete_card_transaction")
    def delete(self, transaction_id: uuid.UUID) -> None:
        db_transaction = self.db.get(CardTransaction, transaction_id)
        if db_transaction is None:
            raise NotFoundError("Card transaction", transaction_id)
        self.db.delete(db_transaction)
        self.db.flush()


class InstallmentRepository:
    def __init__(self, db: Session):
        self.db = db

    @read_or_default("list_card_installments", list)
    def find(
        self,
        card_id: Optional[uuid.UUID] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        paid: Optional[bool] = None,
    ) -> List[CardInstallment]:
        """Installments ordered by due date, optionally filtered by card, due month and paid flag"""
        query = self.db.query(CardInstallment)
        if card_id is not None:
            query = query.join(CardTransaction).filter(CardTransaction.card_id == card_id)
        if month and year:
            start, end = month_window(month, year)
            query = query.filter(CardInstallment.due_date >= start, CardInstallment.due_date < end)
        if paid is not None:
            query = query.filter(CardInstallment.paid.is_(paid))
        return query.order_by(CardInstallment.due_date.asc(), CardInstallment.installment_number.asc()).all()

    @guarded_write("update_installment_paid")
    def set_paid(self, installment_id: uuid.UUID, paid: bool) -> CardInstallment:
        db_installment = self.db.get(CardInstallment, installment_id)
        if db_installment is None:
            raise NotFoundError("Card installment", installment_id)
        db_installment.paid = paid
        self.db.flush()
        return db_installment
