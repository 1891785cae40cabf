"""SQLModel table exports."""

from .budget import Budget
from .business import AccountsEntry, BusinessSale, BusinessSaleItem, Product
from .debt import Debt
from .ids import new_id
from .transaction import Transaction

__all__ = [
    "AccountsEntry",
    "Budget",
    "BusinessSale",
    "BusinessSaleItem",
    "Debt",
    "Product",
    "Transaction",
    "new_id",
]
