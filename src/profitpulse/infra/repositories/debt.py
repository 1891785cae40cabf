"""SQLModel implementation of the debt repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.debt import Debt
from ..database import SessionFactory


class SQLModelDebtRepository:
    """SQLModel-based debt repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, debt_id: str) -> Optional[Debt]:
        """Retrieve a debt by ID."""
        with self.session_factory() as session:
            return session.get(Debt, debt_id)

    def list_all(self) -> list[Debt]:
        """List all debts ordered by name."""
        with self.session_factory() as session:
            statement = select(Debt).order_by(Debt.name)  # type: ignore[arg-type]
            return list(session.exec(statement).all())

    def list_active(self) -> list[Debt]:
        """List debts with a balance still outstanding."""
        with self.session_factory() as session:
            statement = select(Debt).where(Debt.balance > 0).order_by(Debt.name)  # type: ignore[arg-type]
            return list(session.exec(statement).all())

    def create(self, debt: Debt) -> Debt:
        """Create a new debt."""
        with self.session_factory() as session:
            session.add(debt)
            session.commit()
            session.refresh(debt)
            return debt

    def update(self, debt: Debt) -> Debt:
        """Persist changes to an existing debt."""
        with self.session_factory() as session:
            merged = session.merge(debt)
            session.commit()
            session.refresh(merged)
            return merged

    def delete(self, debt_id: str) -> None:
        """Delete a debt by ID."""
        with self.session_factory() as session:
            debt = session.get(Debt, debt_id)
            if debt:
                session.delete(debt)
