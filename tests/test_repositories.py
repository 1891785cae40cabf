"""Repository tests against a standalone in-memory engine."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from profitpulse.infra.database import create_session_factory
from profitpulse.infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelDebtRepository,
    SQLModelProductRepository,
    SQLModelSaleRepository,
    SQLModelTransactionRepository,
)
from profitpulse.models import Budget, BusinessSale, BusinessSaleItem


@pytest.fixture
def db_engine():
    """Create in-memory database engine for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


def test_session_factory_rolls_back_on_error(session_factory, db_engine):
    with pytest.raises(RuntimeError):
        with session_factory() as session:
            session.add(Budget(category="Food", limit_amount=10.0, spent=1.0))
            session.flush()
            raise RuntimeError("boom")

    with Session(db_engine) as session:
        assert session.get(Budget, "Food") is None


def test_debt_repository_crud(session_factory, debt_factory):
    repo = SQLModelDebtRepository(session_factory)
    debt = repo.create(debt_factory())
    repo.create(debt_factory(name="Card", balance=0.0))

    assert repo.get_by_id(debt.id).name == "Car Loan"
    assert [d.name for d in repo.list_all()] == ["Car Loan", "Card"]
    assert [d.name for d in repo.list_active()] == ["Car Loan"]

    debt.balance = 900.0
    assert repo.update(debt).balance == 900.0
    assert repo.get_by_id(debt.id).balance == 900.0

    repo.delete(debt.id)
    assert repo.get_by_id(debt.id) is None


def test_transaction_repository_queries(session_factory, transaction_factory):
    repo = SQLModelTransactionRepository(session_factory)
    template = transaction_factory(recurrence="monthly", next_due_date=date(2024, 3, 1))
    repo.create_many(
        [
            template,
            transaction_factory(category="Transport", occurred_on=date(2024, 1, 5)),
            transaction_factory(txn_type="income", category="Salary", occurred_on=date(2024, 2, 20)),
        ]
    )

    assert [t.id for t in repo.list_recurring()] == [template.id]
    assert [t.occurred_on for t in repo.list_all()] == [
        date(2024, 1, 5),
        date(2024, 2, 1),
        date(2024, 2, 20),
    ]
    assert [t.category for t in repo.search(txn_type="expense")] == ["Food", "Transport"]
    assert [t.category for t in repo.search(txn_type="all", category="Salary")] == ["Salary"]

    template.is_recurring = False
    repo.update(template)
    assert repo.list_recurring() == []

    repo.delete(template.id)
    assert repo.get_by_id(template.id) is None


def test_transactions_by_source_debt(session_factory, transaction_factory, debt_factory):
    debt = SQLModelDebtRepository(session_factory).create(debt_factory())
    repo = SQLModelTransactionRepository(session_factory)
    linked = repo.create(transaction_factory(category="Debt", source_debt_id=debt.id))
    repo.create(transaction_factory())

    assert [t.id for t in repo.list_by_source_debt(debt.id)] == [linked.id]


def test_budget_repository_upsert(session_factory):
    repo = SQLModelBudgetRepository(session_factory)
    repo.upsert(Budget(category="Food", limit_amount=120.0, spent=100.0))
    repo.upsert(Budget(category="Food", limit_amount=120.0, spent=150.0))

    budgets = repo.list_all()
    assert len(budgets) == 1
    assert budgets[0].spent == 150.0

    repo.delete("Food")
    assert repo.get("Food") is None


def test_product_and_sale_repositories(session_factory, product_factory):
    products = SQLModelProductRepository(session_factory)
    sales = SQLModelSaleRepository(session_factory)
    laptop = products.save(product_factory())

    sale = BusinessSale(invoice_number="INV-20240301-ABCD", total_amount=1299.99)
    item = BusinessSaleItem(sale_id=sale.id, sku=laptop.sku, quantity=1, unit_price=1299.99, total_price=1299.99)
    sales.create(sale, [item])

    assert products.get_by_sku("LAP001").id == laptop.id
    assert [s.invoice_number for s in sales.list_all()] == ["INV-20240301-ABCD"]
    assert [i.sku for i in sales.items_for(sale.id)] == ["LAP001"]

    sales.delete(sale.id)
    assert sales.list_all() == []
    assert sales.items_for(sale.id) == []
