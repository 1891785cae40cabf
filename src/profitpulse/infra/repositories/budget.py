"""SQLModel implementation of the budget repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.budget import Budget
from ..database import SessionFactory


class SQLModelBudgetRepository:
    """Budgets keyed by expense category."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self, category: str) -> Optional[Budget]:
        with self.session_factory() as session:
            return session.get(Budget, category)

    def list_all(self) -> list[Budget]:
        with self.session_factory() as session:
            statement = select(Budget).order_by(Budget.category)  # type: ignore[arg-type]
            return list(session.exec(statement).all())

    def upsert(self, budget: Budget) -> Budget:
        """Insert or replace the budget for its category."""
        with self.session_factory() as session:
            merged = session.merge(budget)
            session.commit()
            session.refresh(merged)
            return merged

    def delete(self, category: str) -> None:
        with self.session_factory() as session:
            budget = session.get(Budget, category)
            if budget:
                session.delete(budget)
