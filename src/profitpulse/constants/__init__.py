"""Shared constants for ledger dropdowns and recurrence rules."""

from .categories import (
    DEBT_CATEGORY,
    RECURRENCE_OPTIONS,
    Recurrence,
)

__all__ = [
    "DEBT_CATEGORY",
    "RECURRENCE_OPTIONS",
    "Recurrence",
]
