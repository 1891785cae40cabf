"""
Category and recurrence definitions used by the ledger and the business module.
"""

# Category used for the recurring payment attached to every debt
DEBT_CATEGORY = "Debt"


class Recurrence:
    """Recurrence rule names as stored on transactions and accounts entries."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    FOUR_WEEKLY = "4weekly"
    MONTHLY = "monthly"


# (value, label) pairs in the order the transaction form shows them
RECURRENCE_OPTIONS = [
    (Recurrence.NONE, "One-time"),
    (Recurrence.DAILY, "Daily"),
    (Recurrence.WEEKLY, "Weekly"),
    (Recurrence.FOUR_WEEKLY, "4 Weekly"),
    (Recurrence.MONTHLY, "Monthly"),
]

# Payables/receivables only offer a subset
ACCOUNTS_RECURRENCE_OPTIONS = [
    Recurrence.NONE,
    Recurrence.DAILY,
    Recurrence.WEEKLY,
    Recurrence.MONTHLY,
]
