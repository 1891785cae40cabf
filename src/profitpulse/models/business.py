"""Business module tables: inventory, sales and payables/receivables."""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from ..constants import Recurrence
from ..dates import utcnow
from .ids import new_id


class Product(SQLModel, table=True):
    """Inventory item sold by the business."""

    __tablename__: ClassVar[str] = "product"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str = Field(nullable=False, max_length=120)
    description: str = Field(default="", max_length=255)
    sku: str = Field(nullable=False, unique=True, index=True, max_length=64)
    price: float = Field(default=0.0, nullable=False)
    cost: float = Field(default=0.0, nullable=False)
    quantity: int = Field(default=0, nullable=False)
    category: str = Field(default="Uncategorized", max_length=64)
    min_stock_level: Optional[int] = Field(default=None)
    supplier: Optional[str] = Field(default=None, max_length=120)


class BusinessSale(SQLModel, table=True):
    """Sale, refund or exchange recorded against the inventory."""

    __tablename__: ClassVar[str] = "business_sale"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    invoice_number: str = Field(nullable=False, index=True, max_length=32)
    timestamp: datetime = Field(
        default_factory=utcnow, nullable=False, sa_type=DateTime(timezone=True)
    )
    type: str = Field(default="sale", nullable=False, max_length=16)
    total_amount: float = Field(default=0.0, nullable=False)
    profit_margin: float = Field(default=0.0, nullable=False)
    employee_id: str = Field(default="default", max_length=32)
    notes: Optional[str] = Field(default=None, max_length=255)
    status: str = Field(default="pending", max_length=16)
    payment_status: str = Field(default="unpaid", max_length=16)
    payment_method: Optional[str] = Field(default=None, max_length=32)
    customer_name: Optional[str] = Field(default=None, max_length=120)
    customer_email: Optional[str] = Field(default=None, max_length=120)


class BusinessSaleItem(SQLModel, table=True):
    """Line item of a :class:`BusinessSale`."""

    __tablename__: ClassVar[str] = "business_sale_item"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    sale_id: str = Field(foreign_key="business_sale.id", nullable=False, index=True, max_length=32)
    sku: str = Field(nullable=False, max_length=64)
    description: str = Field(default="", max_length=120)
    quantity: int = Field(default=1, nullable=False)
    unit_price: float = Field(default=0.0, nullable=False)
    total_price: float = Field(default=0.0, nullable=False)
    cost: float = Field(default=0.0, nullable=False)


class AccountsEntry(SQLModel, table=True):
    """Payable or receivable with an optional repeat rule."""

    __tablename__: ClassVar[str] = "accounts_entry"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    type: str = Field(default="payable", nullable=False, max_length=16, index=True)
    amount: float = Field(default=0.0, nullable=False)
    due_date: date = Field(nullable=False, index=True)
    recurrence: str = Field(default=Recurrence.NONE, nullable=False, max_length=16)
    next_due_date: Optional[date] = Field(default=None)
    description: str = Field(default="", max_length=255)
    status: str = Field(default="pending", nullable=False, max_length=16, index=True)
    related_transaction_id: Optional[str] = Field(default=None, max_length=32)
    contact_name: str = Field(default="", max_length=120)
    contact_email: str = Field(default="", max_length=120)
    contact_phone: Optional[str] = Field(default=None, max_length=32)
