"""SQLModel repository implementations."""

from .budget import SQLModelBudgetRepository
from .business import (
    SQLModelAccountsRepository,
    SQLModelProductRepository,
    SQLModelSaleRepository,
)
from .debt import SQLModelDebtRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "SQLModelAccountsRepository",
    "SQLModelBudgetRepository",
    "SQLModelDebtRepository",
    "SQLModelProductRepository",
    "SQLModelSaleRepository",
    "SQLModelTransactionRepository",
]
