"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelAccountsRepository,
    SQLModelBudgetRepository,
    SQLModelDebtRepository,
    SQLModelProductRepository,
    SQLModelSaleRepository,
    SQLModelTransactionRepository,
)
from .logging_config import get_logger
from .services.business import BusinessBook
from .services.entitlements import AllowlistEntitlements, Entitlements
from .services.ledger_service import FinanceBook

logger = get_logger("context")


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory

    transaction_repo: SQLModelTransactionRepository
    debt_repo: SQLModelDebtRepository
    budget_repo: SQLModelBudgetRepository
    product_repo: SQLModelProductRepository
    sale_repo: SQLModelSaleRepository
    accounts_repo: SQLModelAccountsRepository

    book: FinanceBook
    entitlements: Entitlements
    current_user_email: Optional[str] = None

    def business(self) -> BusinessBook:
        """Open the business module for the current user.

        Raises:
            PermissionError: if the user has no paid subscription
        """
        return BusinessBook(
            products=self.product_repo,
            sales=self.sale_repo,
            accounts=self.accounts_repo,
            entitlements=self.entitlements,
            user_email=self.current_user_email,
        )

    def dispose(self) -> None:
        self.engine.dispose()


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    entitlements: Optional[Entitlements] = None,
    user_email: Optional[str] = None,
) -> AppContext:
    """Create the engine, schema, repositories and ledger in one go."""

    if config is None:
        config = BaseConfig()

    engine, session_factory = bootstrap_database(config)

    transaction_repo = SQLModelTransactionRepository(session_factory)
    debt_repo = SQLModelDebtRepository(session_factory)
    budget_repo = SQLModelBudgetRepository(session_factory)

    book = FinanceBook(
        transaction_repo=transaction_repo,
        debt_repo=debt_repo,
        budget_repo=budget_repo,
        currency=config.DEFAULT_CURRENCY,
        preview_months=config.SCHEDULE_PREVIEW_MONTHS,
        upcoming_days=config.UPCOMING_WINDOW_DAYS,
    )

    logger.info(
        "Application context ready",
        extra={"in_memory": config.in_memory, "currency": config.DEFAULT_CURRENCY},
    )
    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        transaction_repo=transaction_repo,
        debt_repo=debt_repo,
        budget_repo=budget_repo,
        product_repo=SQLModelProductRepository(session_factory),
        sale_repo=SQLModelSaleRepository(session_factory),
        accounts_repo=SQLModelAccountsRepository(session_factory),
        book=book,
        entitlements=entitlements or AllowlistEntitlements(config.PAID_USERS),
        current_user_email=user_email,
    )
