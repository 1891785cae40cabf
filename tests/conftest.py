"""Pytest configuration and shared fixtures for ProfitPulse tests.

Every test that touches storage gets its own in-memory SQLite database via
``create_app_context``; nothing is written outside ``tmp_path``.
"""

from __future__ import annotations

import logging
from datetime import date

import pytest

from profitpulse.config import TestingConfig
from profitpulse.context import create_app_context
from profitpulse.logging_config import ROOT_LOGGER
from profitpulse.models import AccountsEntry, Debt, Product, Transaction
from profitpulse.services.entitlements import AllowlistEntitlements

PAID_USER = "owner@example.com"


# =============================================================================
# Configuration & context fixtures
# =============================================================================


@pytest.fixture
def app_config(tmp_path, monkeypatch):
    """Testing configuration whose data directory lives under tmp_path."""

    monkeypatch.setenv("PROFITPULSE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("PROFITPULSE_DATABASE_URL", raising=False)
    monkeypatch.delenv("PROFITPULSE_PAID_USERS", raising=False)
    return TestingConfig()


@pytest.fixture
def ctx(app_config):
    """Application context backed by a fresh in-memory database.

    Yields:
        AppContext: wired with repositories and a FinanceBook
    """
    context = create_app_context(
        app_config,
        entitlements=AllowlistEntitlements([PAID_USER]),
        user_email=PAID_USER,
    )
    yield context
    context.dispose()


@pytest.fixture
def book(ctx):
    return ctx.book


@pytest.fixture
def clean_app_logger():
    """Detach and close handlers installed by setup_logging."""

    root_logger = logging.getLogger(ROOT_LOGGER)
    yield root_logger
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def transaction_factory():
    """Factory for unsaved transactions with sensible defaults."""

    def _create_transaction(
        amount: float = 50.0,
        txn_type: str = "expense",
        category: str = "Food",
        occurred_on: date = date(2024, 2, 1),
        recurrence: str = "none",
        **overrides,
    ) -> Transaction:
        is_recurring = overrides.pop("is_recurring", recurrence != "none")
        return Transaction(
            type=txn_type,
            category=category,
            amount=amount,
            occurred_on=occurred_on,
            description=overrides.pop("description", f"{category} entry"),
            is_recurring=is_recurring,
            recurrence=recurrence,
            **overrides,
        )

    return _create_transaction


@pytest.fixture
def debt_factory():
    """Factory for unsaved debts."""

    def _create_debt(
        name: str = "Car Loan",
        balance: float = 1200.0,
        interest_rate: float = 12.0,
        monthly_payment: float = 200.0,
        minimum_payment: float = 50.0,
    ) -> Debt:
        return Debt(
            name=name,
            balance=balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
            monthly_payment=monthly_payment,
        )

    return _create_debt


@pytest.fixture
def product_factory():
    def _create_product(
        sku: str = "LAP001",
        name: str = "Laptop Pro X1",
        price: float = 1299.99,
        cost: float = 899.99,
        quantity: int = 15,
        min_stock_level: int | None = 5,
    ) -> Product:
        return Product(
            sku=sku,
            name=name,
            price=price,
            cost=cost,
            quantity=quantity,
            category="Electronics",
            min_stock_level=min_stock_level,
        )

    return _create_product


@pytest.fixture
def accounts_entry_factory():
    def _create_entry(
        entry_type: str = "payable",
        amount: float = 5000.0,
        due_date: date = date(2024, 3, 15),
        recurrence: str = "none",
        status: str = "pending",
    ) -> AccountsEntry:
        return AccountsEntry(
            type=entry_type,
            amount=amount,
            due_date=due_date,
            recurrence=recurrence,
            status=status,
            description="Monthly Inventory Restock",
            contact_name="Tech Suppliers Inc",
            contact_email="orders@techsuppliers.com",
        )

    return _create_entry


# =============================================================================
# Helpers
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Money is plain float throughout, so comparisons allow a cent of drift.
    """
    assert abs(actual - expected) <= tolerance, (
        f"Expected {expected}, got {actual} (difference: {abs(actual - expected)})"
    )
