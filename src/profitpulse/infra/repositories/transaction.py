"""SQLModel implementation of the transaction repository."""

from __future__ import annotations

from typing import Iterable, Optional

from sqlmodel import select

from ...models.transaction import Transaction
from ..database import SessionFactory


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        with self.session_factory() as session:
            return session.get(Transaction, transaction_id)

    def list_all(self) -> list[Transaction]:
        """List all transactions, oldest first."""
        with self.session_factory() as session:
            statement = select(Transaction).order_by(Transaction.occurred_on)  # type: ignore[arg-type]
            return list(session.exec(statement).all())

    def list_recurring(self) -> list[Transaction]:
        """List live recurring templates."""
        with self.session_factory() as session:
            statement = select(Transaction).where(Transaction.is_recurring == True)  # noqa: E712
            return list(session.exec(statement).all())

    def list_by_source_debt(self, debt_id: str) -> list[Transaction]:
        """List transactions generated by a debt's payment plan."""
        with self.session_factory() as session:
            statement = select(Transaction).where(Transaction.source_debt_id == debt_id)
            return list(session.exec(statement).all())

    def search(
        self,
        *,
        txn_type: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[Transaction]:
        """Filter by type and category; ``None`` or ``"all"`` disables a filter."""
        with self.session_factory() as session:
            statement = select(Transaction)
            if txn_type and txn_type != "all":
                statement = statement.where(Transaction.type == txn_type)
            if category and category != "all":
                statement = statement.where(Transaction.category == category)
            statement = statement.order_by(Transaction.occurred_on.desc())  # type: ignore[attr-defined]
            return list(session.exec(statement).all())

    def create(self, transaction: Transaction) -> Transaction:
        with self.session_factory() as session:
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            return transaction

    def create_many(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        items = list(transactions)
        with self.session_factory() as session:
            session.add_all(items)
            session.commit()
            for item in items:
                session.refresh(item)
        return items

    def update(self, transaction: Transaction) -> Transaction:
        with self.session_factory() as session:
            merged = session.merge(transaction)
            session.commit()
            session.refresh(merged)
            return merged

    def delete(self, transaction_id: str) -> None:
        with self.session_factory() as session:
            transaction = session.get(Transaction, transaction_id)
            if transaction:
                session.delete(transaction)
