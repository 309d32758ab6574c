"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from mei_finance.api.dependencies import get_today
from mei_finance.api.main import create_app
from mei_finance.domain.models import TransactionKind
from mei_finance.infrastructure.database.models import Base, CreditCard, ExtraIncome, Transaction
from mei_finance.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TODAY = date(2024, 3, 10)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a fixed 'today'"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def march_2024(db: Session) -> None:
    """March 2024 activity: 5000 income, 1200 expense, 300 extra income"""
    db.add_all(
        [
            Transaction(
                kind=TransactionKind.INCOME,
                category="Serviços",
                amount=Decimal("5000.00"),
                date=date(2024, 3, 5),
                description="Consultoria",
                is_recurring=True,
            ),
            Transaction(
                kind=TransactionKind.EXPENSE,
                category="Aluguel",
                amount=Decimal("1200.00"),
                date=date(2024, 3, 31),
                description="Aluguel escritório",
                is_recurring=True,
            ),
            Transaction(
                kind=TransactionKind.EXPENSE,
                category="Mercado",
                amount=Decimal("450.00"),
                date=date(2024, 4, 1),
                description="Fora do mês",
                is_recurring=False,
            ),
            ExtraIncome(
                amount=Decimal("300.00"),
                description="Venda avulsa",
                date=date(2024, 3, 20),
                month=3,
                year=2024,
            ),
        ]
    )
    db.commit()


@pytest.fixture
def card(db: Session) -> CreditCard:
    db_card = CreditCard(name="Nubank", credit_limit=Decimal("2000.00"), closing_day=5, due_day=15)
    db.add(db_card)
    db.commit()
    return db_card
