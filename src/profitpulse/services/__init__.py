"""Service module exports."""

from . import (
    amortization,
    budgeting,
    business,
    currency,
    debts,
    entitlements,
    ledger_service,
    recurrence,
    reports,
)

__all__ = [
    "amortization",
    "budgeting",
    "business",
    "currency",
    "debts",
    "entitlements",
    "ledger_service",
    "recurrence",
    "reports",
]
