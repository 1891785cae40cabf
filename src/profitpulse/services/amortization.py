"""Debt amortization schedules.

The calculator applies a fixed nominal payment every calendar month with
monthly compounding of the annual rate. It never raises: a payment that
does not cover the accruing interest simply runs until the safety cap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Protocol, Sequence

from ..dates import add_months

logger = logging.getLogger(__name__)

# Loop guard: the schedule stops once it holds more than this many rows.
MAX_PERIODS = 360
PREVIEW_PERIODS = 12


class DebtTerms(Protocol):
    """Anything carrying the three inputs of an amortization run."""

    balance: float
    interest_rate: float
    monthly_payment: float


@dataclass(slots=True, frozen=True)
class AmortizationEntry:
    """Represents a single projected month of a payoff schedule."""

    date: date
    payment: float
    principal: float
    interest: float
    remaining_balance: float


@dataclass(slots=True, frozen=True)
class DebtOverview:
    """Aggregates a debt list row needs next to its schedule table."""

    preview: list[AmortizationEntry]
    months_to_payoff: int
    total_interest: float
    payoff_date: Optional[date]
    covers_interest: bool
    capped: bool


def monthly_interest(balance: float, interest_rate: float) -> float:
    """Interest accrued on *balance* in one month at a nominal annual rate."""

    return balance * (interest_rate / 100) / 12


def compute_schedule(debt: DebtTerms, start_date: date | None = None) -> list[AmortizationEntry]:
    """Project the month-by-month payoff of *debt* starting at *start_date*.

    ``principal`` is ``min(payment - interest, balance)`` so a payment below
    the interest produces zero or negative principal and the balance never
    falls. Those schedules stop at ``MAX_PERIODS + 1`` rows. The payment is
    not capped on the final row, so it can exceed principal plus interest.
    """

    balance = debt.balance
    rate = debt.interest_rate
    payment = debt.monthly_payment
    current_date = start_date or date.today()
    schedule: list[AmortizationEntry] = []

    while balance > 0 and len(schedule) <= MAX_PERIODS:
        interest = monthly_interest(balance, rate)
        principal = min(payment - interest, balance)
        balance = balance - principal
        schedule.append(
            AmortizationEntry(
                date=current_date,
                payment=payment,
                principal=principal,
                interest=interest,
                remaining_balance=balance,
            )
        )
        current_date = add_months(current_date, 1)

    if len(schedule) > MAX_PERIODS:
        logger.debug(
            "Amortization hit the period cap",
            extra={"periods": len(schedule), "remaining_balance": balance},
        )
    return schedule


def covers_interest(debt: DebtTerms) -> bool:
    """True when the monthly payment exceeds the first month's interest."""

    return debt.monthly_payment > monthly_interest(debt.balance, debt.interest_rate)


def schedule_summary(schedule: Sequence[AmortizationEntry]) -> tuple[Optional[date], float, int]:
    """Return (payoff_date, total_interest, months)."""

    if not schedule:
        return None, 0.0, 0
    total_interest = sum(entry.interest for entry in schedule)
    return schedule[-1].date, total_interest, len(schedule)


def debt_overview(
    debt: DebtTerms, start_date: date | None = None, *, preview_months: int = PREVIEW_PERIODS
) -> DebtOverview:
    """Compute the schedule once and derive what the debt list displays."""

    schedule = compute_schedule(debt, start_date)
    payoff_date, total_interest, months = schedule_summary(schedule)
    capped = months > MAX_PERIODS
    return DebtOverview(
        preview=schedule[: max(preview_months, 0)],
        months_to_payoff=months,
        total_interest=total_interest,
        payoff_date=None if capped else payoff_date,
        covers_interest=covers_interest(debt),
        capped=capped,
    )


__all__ = [
    "AmortizationEntry",
    "DebtOverview",
    "DebtTerms",
    "MAX_PERIODS",
    "compute_schedule",
    "covers_interest",
    "debt_overview",
    "monthly_interest",
    "schedule_summary",
]
