"""Dashboard aggregates over transactions and debts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from ..dates import days_until
from ..models.debt import Debt
from ..models.transaction import Transaction

UPCOMING_WINDOW_DAYS = 5


@dataclass(slots=True)
class DashboardSummary:
    """Headline numbers for the personal dashboard."""

    income: float
    expenses: float
    balance: float
    total_debt: float
    monthly_debt_payments: float
    upcoming: list[Transaction]


def compute_summary(transactions: Iterable[Transaction]) -> dict[str, float]:
    """Compute income, expenses, and balance totals from the provided transactions."""

    txs = list(transactions)
    income = sum(t.amount for t in txs if t.type == "income" and t.amount)
    expenses = sum(t.amount for t in txs if t.type == "expense" and t.amount)
    return {"income": income, "expenses": expenses, "balance": income - expenses}


def debt_totals(debts: Iterable[Debt]) -> dict[str, float]:
    """Total outstanding balance and committed monthly payments."""

    items = list(debts)
    return {
        "total_debt": sum(d.balance for d in items if d.balance),
        "monthly_payments": sum(d.monthly_payment for d in items),
    }


def upcoming_payments(
    transactions: Iterable[Transaction],
    today: date | datetime,
    *,
    within_days: int = UPCOMING_WINDOW_DAYS,
) -> list[Transaction]:
    """Live recurring entries whose next due date falls within ``[0, within_days]`` days."""

    upcoming = [
        t
        for t in transactions
        if t.is_recurring
        and t.next_due_date is not None
        and 0 <= days_until(t.next_due_date, today) <= within_days
    ]
    upcoming.sort(key=lambda t: t.next_due_date)
    return upcoming


def spending_by_category(transactions: Iterable[Transaction]) -> list[dict[str, object]]:
    """Roll up expense totals by category, largest first."""

    totals: dict[str, float] = {}
    for tx in transactions:
        if tx.type != "expense":
            continue
        totals[tx.category] = totals.get(tx.category, 0.0) + tx.amount
    breakdown: list[dict[str, object]] = [
        {"category": name, "amount": amount} for name, amount in totals.items()
    ]
    breakdown.sort(key=lambda entry: entry["amount"], reverse=True)
    return breakdown


def build_dashboard(
    transactions: Iterable[Transaction],
    debts: Iterable[Debt],
    today: date | datetime,
    *,
    within_days: int = UPCOMING_WINDOW_DAYS,
) -> DashboardSummary:
    txs = list(transactions)
    summary = compute_summary(txs)
    totals = debt_totals(debts)
    return DashboardSummary(
        income=summary["income"],
        expenses=summary["expenses"],
        balance=summary["balance"],
        total_debt=totals["total_debt"],
        monthly_debt_payments=totals["monthly_payments"],
        upcoming=upcoming_payments(txs, today, within_days=within_days),
    )
