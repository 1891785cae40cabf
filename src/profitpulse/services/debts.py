"""Helpers linking debts to the recurring payments they generate."""

from __future__ import annotations

from datetime import date

from ..constants import DEBT_CATEGORY, Recurrence
from ..dates import add_months
from ..models.debt import Debt
from ..models.transaction import Transaction

# Fields a debt update may touch; ``id`` is fixed at creation.
EDITABLE_FIELDS = ("name", "balance", "interest_rate", "minimum_payment", "monthly_payment")


def payment_description(debt: Debt) -> str:
    return f"Monthly Payment - {debt.name}"


def build_payment_transaction(*, debt: Debt, today: date, currency: str | None = None) -> Transaction:
    """Construct the recurring monthly expense that services *debt*."""

    return Transaction(
        type="expense",
        category=DEBT_CATEGORY,
        amount=float(debt.monthly_payment),
        occurred_on=today,
        description=payment_description(debt),
        label=debt.name,
        payment_date=today,
        original_amount=float(debt.monthly_payment),
        original_currency=currency,
        is_recurring=True,
        recurrence=Recurrence.MONTHLY,
        next_due_date=add_months(today, 1),
        source_debt_id=debt.id,
    )


def validate_debt(debt: Debt) -> None:
    """Reject input the debt form should never submit."""

    if not debt.name or not debt.name.strip():
        raise ValueError("Debt name is required.")
    for field_name in ("balance", "interest_rate", "minimum_payment", "monthly_payment"):
        value = getattr(debt, field_name)
        if value is None or value < 0:
            raise ValueError(f"Debt {field_name} must be zero or positive.")


def apply_updates(debt: Debt, updates: dict[str, object]) -> bool:
    """Copy editable fields onto *debt*; return True if the payment changed."""

    unknown = set(updates) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update debt fields: {', '.join(sorted(unknown))}")
    previous_payment = debt.monthly_payment
    for key, value in updates.items():
        setattr(debt, key, value)
    return debt.monthly_payment != previous_payment
