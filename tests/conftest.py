"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finance_tracker.api.dependencies import get_today
from finance_tracker.api.main import create_app
from finance_tracker.infrastructure.database.models import Base
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.domain.models import (
    Card,
    FinancialData,
    FixedExpense,
    Income,
    Installment,
    Purchase,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed "today" for API tests
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
    """Create FastAPI test client with test database and a fixed today"""
    app = create_app(run_startup=False)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def sample_data() -> FinancialData:
    """
    Snapshot with one salary, two fixed expenses and one card.

    The card (due day 5) has a 3x purchase from January: the February
    installment is paid, March and April are open.
    """
    purchase = Purchase(
        id="purchase-1",
        purchase_date=date(2024, 1, 15),
        store="Loja Centro",
        item="100,50",
        total_installments=3,
        installments=(
            Installment(month_year="2024-02", amount=Decimal("50.00"), paid=True),
            Installment(month_year="2024-03", amount=Decimal("50.00"), paid=False),
            Installment(month_year="2024-04", amount=Decimal("50.00"), paid=False),
        ),
    )
    return FinancialData(
        income=(
            Income(id="income-1", date=date(2024, 3, 1), description="Salário", amount=Decimal("3000.00")),
        ),
        fixed_expenses=(
            FixedExpense(
                id="rent",
                description="Aluguel",
                amount=Decimal("1200.00"),
                due_date=10,
                paid_months=("2024-02", "2024-03"),
            ),
            FixedExpense(
                id="internet",
                description="Internet",
                amount=Decimal("100.00"),
                due_date=20,
                paid_months=("2024-02",),
            ),
        ),
        cards=(Card(id="card-1", name="Nubank", due_date=5, purchases=(purchase,)),),
    )
