"""SQLModel repositories for the business module."""

from __future__ import annotations

from typing import Iterable, Optional

from sqlmodel import select

from ...models.business import AccountsEntry, BusinessSale, BusinessSaleItem, Product
from ..database import SessionFactory


class SQLModelProductRepository:
    """Inventory items keyed by id, looked up by SKU."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_sku(self, sku: str) -> Optional[Product]:
        with self.session_factory() as session:
            return session.exec(select(Product).where(Product.sku == sku)).first()

    def list_all(self) -> list[Product]:
        with self.session_factory() as session:
            statement = select(Product).order_by(Product.name)  # type: ignore[arg-type]
            return list(session.exec(statement).all())

    def save(self, product: Product) -> Product:
        with self.session_factory() as session:
            merged = session.merge(product)
            session.commit()
            session.refresh(merged)
            return merged

    def save_many(self, products: Iterable[Product]) -> None:
        with self.session_factory() as session:
            for product in products:
                session.merge(product)

    def delete(self, product_id: str) -> None:
        with self.session_factory() as session:
            product = session.get(Product, product_id)
            if product:
                session.delete(product)


class SQLModelSaleRepository:
    """Sales, refunds and exchanges with their line items."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def list_all(self) -> list[BusinessSale]:
        with self.session_factory() as session:
            statement = select(BusinessSale).order_by(BusinessSale.timestamp)  # type: ignore[arg-type]
            return list(session.exec(statement).all())

    def items_for(self, sale_id: str) -> list[BusinessSaleItem]:
        with self.session_factory() as session:
            statement = select(BusinessSaleItem).where(BusinessSaleItem.sale_id == sale_id)
            return list(session.exec(statement).all())

    def create(self, sale: BusinessSale, items: Iterable[BusinessSaleItem]) -> BusinessSale:
        with self.session_factory() as session:
            session.add(sale)
            session.flush()
            session.add_all(list(items))
            session.commit()
            session.refresh(sale)
            return sale

    def delete(self, sale_id: str) -> None:
        with self.session_factory() as session:
            for item in session.exec(
                select(BusinessSaleItem).where(BusinessSaleItem.sale_id == sale_id)
            ).all():
                session.delete(item)
            sale = session.get(BusinessSale, sale_id)
            if sale:
                session.delete(sale)


class SQLModelAccountsRepository:
    """Payables and receivables."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, entry_id: str) -> Optional[AccountsEntry]:
        with self.session_factory() as session:
            return session.get(AccountsEntry, entry_id)

    def list_all(self) -> list[AccountsEntry]:
        with self.session_factory() as session:
            statement = select(AccountsEntry).order_by(AccountsEntry.due_date)  # type: ignore[arg-type]
            return list(session.exec(statement).all())

    def save(self, entry: AccountsEntry) -> AccountsEntry:
        with self.session_factory() as session:
            merged = session.merge(entry)
            session.commit()
            session.refresh(merged)
            return merged

    def save_many(self, entries: Iterable[AccountsEntry]) -> None:
        with self.session_factory() as session:
            for entry in entries:
                session.merge(entry)

    def delete(self, entry_id: str) -> None:
        with self.session_factory() as session:
            entry = session.get(AccountsEntry, entry_id)
            if entry:
                session.delete(entry)
