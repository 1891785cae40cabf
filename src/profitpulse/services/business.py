"""Business module: payables/receivables, inventory and sales."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Mapping, Optional
from uuid import uuid4

from ..constants import Recurrence
from ..constants.categories import ACCOUNTS_RECURRENCE_OPTIONS
from ..dates import as_date, as_utc, utcnow
from ..infra.repositories import (
    SQLModelAccountsRepository,
    SQLModelProductRepository,
    SQLModelSaleRepository,
)
from ..models.business import AccountsEntry, BusinessSale, BusinessSaleItem, Product
from .entitlements import Entitlements, require_business_access
from .recurrence import next_due_date

logger = logging.getLogger(__name__)

ACCOUNT_TYPES = ("payable", "receivable")
SALE_TYPES = ("sale", "refund", "exchange")


# ---------------------------------------------------------------------------
# Payables / receivables
# ---------------------------------------------------------------------------


def prepare_accounts_entry(entry: AccountsEntry) -> AccountsEntry:
    """Validate a new entry and derive its next due date from the repeat rule."""

    if entry.type not in ACCOUNT_TYPES:
        raise ValueError(f"Unknown accounts entry type: {entry.type!r}")
    if not entry.amount or entry.amount <= 0:
        raise ValueError("Accounts entry amount must be positive.")
    if not entry.description:
        raise ValueError("Accounts entry description is required.")
    if entry.recurrence not in ACCOUNTS_RECURRENCE_OPTIONS:
        raise ValueError(f"Unsupported recurrence for accounts: {entry.recurrence!r}")

    if entry.recurrence == Recurrence.NONE:
        entry.next_due_date = None
    else:
        entry.next_due_date = next_due_date(entry.due_date, entry.recurrence)
    return entry


def outstanding_totals(entries: Iterable[AccountsEntry]) -> dict[str, float]:
    """Sum unpaid payables and receivables."""

    totals = {kind: 0.0 for kind in ACCOUNT_TYPES}
    for entry in entries:
        if entry.status != "paid" and entry.type in totals:
            totals[entry.type] += entry.amount
    return totals


def refresh_overdue(entries: Iterable[AccountsEntry], today: date | datetime) -> list[AccountsEntry]:
    """Mark pending entries past their due date as overdue; return the changed ones."""

    day = as_date(today)
    changed: list[AccountsEntry] = []
    for entry in entries:
        if entry.status == "pending" and as_date(entry.due_date) < day:
            entry.status = "overdue"
            changed.append(entry)
    return changed


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------


def stock_status(product: Product) -> str:
    if product.quantity <= 0:
        return "out-of-stock"
    if product.min_stock_level and product.quantity <= product.min_stock_level:
        return "low-stock"
    return "in-stock"


def low_stock(products: Iterable[Product]) -> list[Product]:
    """Products at or below their minimum level (no minimum counts as zero)."""

    return [p for p in products if p.quantity <= (p.min_stock_level or 0)]


def inventory_valuation(products: Iterable[Product]) -> dict[str, float]:
    items = list(products)
    retail = sum(p.price * p.quantity for p in items)
    cost = sum(p.cost * p.quantity for p in items)
    return {"retail_value": retail, "cost": cost, "potential_profit": retail - cost}


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class SaleLine:
    """Requested line of a sale before prices are looked up."""

    sku: str
    quantity: int = 1


@dataclass(slots=True)
class SaleResult:
    sale: BusinessSale
    items: list[BusinessSaleItem]
    adjusted_products: list[Product] = field(default_factory=list)


def invoice_number(now: datetime) -> str:
    return f"INV-{now:%Y%m%d}-{uuid4().hex[:4].upper()}"


def record_sale(
    products: Mapping[str, Product],
    *,
    kind: str,
    lines: Iterable[SaleLine],
    now: Optional[datetime] = None,
    employee_id: str = "default",
    customer_name: Optional[str] = None,
    customer_email: Optional[str] = None,
    payment_method: Optional[str] = None,
    notes: Optional[str] = None,
) -> SaleResult:
    """Price the lines from inventory and adjust stock.

    *products* is keyed by SKU. Sales take stock out; refunds and exchanges
    put it back. Only sales carry a profit margin.
    """

    if kind not in SALE_TYPES:
        raise ValueError(f"Unknown business transaction type: {kind!r}")
    requested = list(lines)
    if not requested:
        raise ValueError("A business transaction needs at least one item.")

    timestamp = as_utc(now) if now is not None else utcnow()
    sale = BusinessSale(
        invoice_number=invoice_number(timestamp),
        timestamp=timestamp,
        type=kind,
        employee_id=employee_id,
        customer_name=customer_name,
        customer_email=customer_email,
        payment_method=payment_method,
        notes=notes,
    )

    items: list[BusinessSaleItem] = []
    requested_by_sku: dict[str, int] = {}
    for line in requested:
        product = products.get(line.sku)
        if product is None:
            raise ValueError(f"Product not found in inventory: {line.sku}")
        if line.quantity <= 0:
            raise ValueError("Item quantity must be positive.")
        requested_by_sku[line.sku] = requested_by_sku.get(line.sku, 0) + line.quantity
        if kind == "sale" and product.quantity < requested_by_sku[line.sku]:
            raise ValueError(
                f"Insufficient stock for {line.sku}. Only {product.quantity} units available."
            )
        items.append(
            BusinessSaleItem(
                sale_id=sale.id,
                sku=product.sku,
                description=product.name,
                quantity=line.quantity,
                unit_price=product.price,
                total_price=line.quantity * product.price,
                cost=product.cost,
            )
        )

    adjusted: dict[str, Product] = {}
    for item in items:
        product = products[item.sku]
        product.quantity += -item.quantity if kind == "sale" else item.quantity
        adjusted[product.sku] = product

    sale.total_amount = sum(item.total_price for item in items)
    if kind == "sale":
        sale.profit_margin = sum((item.unit_price - item.cost) * item.quantity for item in items)
    return SaleResult(sale=sale, items=items, adjusted_products=list(adjusted.values()))


def business_summary(
    sales: Iterable[BusinessSale],
    products: Iterable[Product],
    accounts: Iterable[AccountsEntry] = (),
) -> dict[str, float | int]:
    """Revenue, expenses and stock figures for the business dashboard.

    Expenses are refunds plus the cost of stock on hand.
    """

    sale_list = list(sales)
    product_list = list(products)
    revenue = sum(s.total_amount for s in sale_list if s.type == "sale")
    refunds = sum(s.total_amount for s in sale_list if s.type == "refund")
    valuation = inventory_valuation(product_list)
    expenses = refunds + valuation["cost"]
    return {
        "revenue": revenue,
        "expenses": expenses,
        "net_profit": revenue - expenses,
        "inventory_value": valuation["retail_value"],
        "low_stock_items": len(low_stock(product_list)),
        "overdue_accounts": sum(1 for a in accounts if a.status == "overdue"),
        "pending_sales": sum(1 for s in sale_list if s.status == "pending"),
    }


class BusinessBook:
    """Paid-tier store for inventory, sales and payables/receivables."""

    def __init__(
        self,
        *,
        products: SQLModelProductRepository,
        sales: SQLModelSaleRepository,
        accounts: SQLModelAccountsRepository,
        entitlements: Entitlements,
        user_email: Optional[str],
    ) -> None:
        require_business_access(entitlements, user_email)
        self.products = products
        self.sales = sales
        self.accounts = accounts

    def add_product(self, product: Product) -> Product:
        if not product.name or not product.sku or not product.price:
            raise ValueError("Products need a name, SKU and price.")
        if self.products.get_by_sku(product.sku) is not None:
            raise ValueError(f"SKU already exists: {product.sku}")
        stored = self.products.save(product)
        logger.info("Product added", extra={"sku": stored.sku})
        return stored

    def record(self, *, kind: str, lines: Iterable[SaleLine], **details) -> SaleResult:
        """Record a sale/refund/exchange and persist the stock changes."""

        inventory = {p.sku: p for p in self.products.list_all()}
        result = record_sale(inventory, kind=kind, lines=lines, **details)
        self.sales.create(result.sale, result.items)
        self.products.save_many(result.adjusted_products)
        logger.info(
            "Business transaction recorded",
            extra={
                "invoice": result.sale.invoice_number,
                "type": kind,
                "total": result.sale.total_amount,
            },
        )
        return result

    def add_accounts_entry(self, entry: AccountsEntry) -> AccountsEntry:
        return self.accounts.save(prepare_accounts_entry(entry))

    def mark_overdue(self, today: date | datetime) -> list[AccountsEntry]:
        changed = refresh_overdue(self.accounts.list_all(), today)
        if changed:
            self.accounts.save_many(changed)
            logger.info("Accounts entries marked overdue", extra={"count": len(changed)})
        return changed

    def summary(self) -> dict[str, float | int]:
        return business_summary(
            self.sales.list_all(), self.products.list_all(), self.accounts.list_all()
        )
