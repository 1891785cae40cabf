"""Budgeting domain services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..models.budget import Budget

# A category seen for the first time gets a limit 20% above its first expense.
NEW_BUDGET_HEADROOM = 1.2


@dataclass(slots=True)
class BudgetVariance:
    """Lightweight DTO for reporting variance."""

    category: str
    planned: float
    actual: float

    @property
    def delta(self) -> float:
        return self.actual - self.planned

    @property
    def utilization(self) -> float:
        if self.planned <= 0:
            return 0.0
        return self.actual / self.planned


def apply_expense(budget: Optional[Budget], *, category: str, amount: float) -> Budget:
    """Add an expense to its category budget, creating the budget if needed."""

    if budget is None:
        return Budget(category=category, limit_amount=amount * NEW_BUDGET_HEADROOM, spent=amount)
    budget.spent = budget.spent + amount
    return budget


def reverse_expense(budget: Budget, *, amount: float) -> Budget:
    """Take a removed expense back out of its budget."""

    budget.spent = budget.spent - amount
    return budget


def compute_variances(budgets: Iterable[Budget]) -> list[BudgetVariance]:
    """Compose budget vs actual variances for display."""

    variances = [
        BudgetVariance(
            category=budget.category,
            planned=round(budget.limit_amount, 2),
            actual=round(budget.spent, 2),
        )
        for budget in budgets
    ]
    variances.sort(key=lambda v: v.category)
    return variances


def over_budget(variances: Iterable[BudgetVariance]) -> list[BudgetVariance]:
    return [v for v in variances if v.delta > 0]
