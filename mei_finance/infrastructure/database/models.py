"""SQLAlchemy ORM models for the finance tables"""

import uuid
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

from mei_finance.domain.models import TransactionKind

Base = declarative_base()

Money = Numeric(12, 2, asdecimal=True)


class Transaction(Base):
    """Income or expense entry"""

    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    kind = Column(Enum(TransactionKind, native_enum=False, values_callable=lambda e: [m.value for m in e]), nullable=False)
    category = Column(Text, nullable=False)
    amount = Column(Money, nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    is_recurring = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class ExtraIncome(Base):
    """Extra income received outside regular transactions"""

    __tablename__ = "extra_income"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    amount = Column(Money, nullable=False)
    description = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class MonthlySettings(Base):
    __tablename__ = "monthly_settings"
    __table_args__ = (UniqueConstraint("month", "year", name="uq_monthly_settings_period"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    das_value = Column(Money, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class MonthlySummary(Base):
    """Archived totals of a closed month"""

    __tablename__ = "monthly_summary"
    __table_args__ = (UniqueConstraint("month", "year", name="uq_monthly_summary_period"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    total_income = Column(Money, nullable=False)
    total_expenses = Column(Money, nullable=False)
    total_extras = Column(Money, nullable=False)
    das_value = Column(Money, nullable=False)
    income_tax_estimate = Column(Money, nullable=False, default=0)
    net_balance = Column(Money, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class MonthlySaving(Base):
    __tablename__ = "monthly_savings"
    __table_args__ = (UniqueConstraint("month", "year", name="uq_monthly_savings_period"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    amount = Column(Money, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class SavingsGoal(Base):
    __tablename__ = "savings_goals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    target_amount = Column(Money, nullable=False)
    deadline = Column(Date, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class CreditCard(Base):
    """Credit card with its limit and billing days"""

    __tablename__ = "credit_cards"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    credit_limit = Column(Money, nullable=False)
    closing_day = Column(Integer, nullable=False)
    due_day = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transactions = relationship("CardTransaction", back_populates="card", cascade="all, delete-orphan")


class CardTransaction(Base):
    """Card purchase, possibly split into installments"""

    __tablename__ = "card_transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    card_id = Column(Uuid, ForeignKey("credit_cards.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    amount = Column(Money, nullable=False)
    installment_count = Column(Integer, nullable=False, default=1)
    first_installment_date = Column(Date, nullable=False)
    category = Column(Text, nullable=False, default="Geral")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    card = relationship("CreditCard", back_populates="transactions")
    installments = relationship(
        "CardInstallment",
        back_populates="card_transaction",
        cascade="all, delete-orphan",
        order_by="CardInstallment.installment_number",
    )


class CardInstallment(Base):
    """Individual installment within a card purchase"""

    __tablename__ = "card_installments"
    __table_args__ = (
        UniqueConstraint("card_transaction_id", "installment_number", name="uq_card_installment_number"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    card_transaction_id = Column(
        Uuid, ForeignKey("card_transactions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    installment_number = Column(Integer, nullable=False)
    amount = Column(Money, nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    card_transaction = relationship("CardTransaction", back_populates="installments")
