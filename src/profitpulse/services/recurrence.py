"""Recurring transaction scheduling.

Both functions here are pure: they read transactions and return new
values, leaving it to the caller to persist the materialized instances and
retire the templates they came from.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Iterable

from ..constants import Recurrence
from ..dates import add_days, add_months, as_date, same_day
from ..models.ids import new_id
from ..models.transaction import Transaction

_STEPS: dict[str, Callable[[date], date]] = {
    Recurrence.DAILY: lambda value: add_days(value, 1),
    Recurrence.WEEKLY: lambda value: add_days(value, 7),
    Recurrence.FOUR_WEEKLY: lambda value: add_days(value, 28),
    Recurrence.MONTHLY: lambda value: add_months(value, 1),
}


def next_due_date(current_date: date, recurrence: str | None) -> date:
    """Apply one recurrence step to *current_date*.

    ``none`` and unrecognized rules return *current_date* unchanged.
    """

    step = _STEPS.get(recurrence or Recurrence.NONE)
    if step is None:
        return current_date
    return step(current_date)


def is_due(transaction: Transaction, today: date | datetime) -> bool:
    """True when a recurring transaction's next due date is *today*."""

    return bool(transaction.is_recurring) and same_day(transaction.next_due_date, today)


def materialize_due(
    transactions: Iterable[Transaction],
    today: date | datetime,
    *,
    id_factory: Callable[[], str] = new_id,
) -> list[Transaction]:
    """Create one new transaction for every recurring entry due *today*.

    Each instance copies its template, is dated *today*, gets a fresh id and
    has its ``next_due_date`` advanced by the template's recurrence rule.
    """

    day = as_date(today)
    created: list[Transaction] = []
    for transaction in transactions:
        if not is_due(transaction, day):
            continue
        data = transaction.model_dump(exclude={"id"})
        data.update(
            id=id_factory(),
            occurred_on=day,
            next_due_date=next_due_date(day, transaction.recurrence),
            last_paid_date=day,
        )
        created.append(Transaction(**data))
    return created


__all__ = ["is_due", "materialize_due", "next_due_date"]
