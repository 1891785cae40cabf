"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ..constants import Recurrence
from .ids import new_id


class Transaction(SQLModel, table=True):
    """A single income or expense entry, optionally recurring.

    A recurring transaction is a template: when ``next_due_date`` arrives a
    copy is materialized and the copy carries the schedule forward.
    """

    __tablename__: ClassVar[str] = "transaction"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    type: str = Field(default="expense", nullable=False, max_length=16, index=True)
    category: str = Field(default="Other", nullable=False, max_length=64, index=True)
    amount: float = Field(default=0.0, nullable=False, description="Always positive; type gives the sign")
    occurred_on: date = Field(default_factory=date.today, nullable=False, index=True)
    description: str = Field(default="", max_length=255)
    label: Optional[str] = Field(default=None, max_length=80)
    payment_date: Optional[date] = Field(default=None)

    # Amount as entered, before conversion into the display currency
    original_amount: Optional[float] = Field(default=None)
    original_currency: Optional[str] = Field(default=None, max_length=3)

    is_recurring: bool = Field(default=False, nullable=False, index=True)
    recurrence: str = Field(default=Recurrence.NONE, nullable=False, max_length=16)
    next_due_date: Optional[date] = Field(default=None, index=True)
    last_paid_date: Optional[date] = Field(default=None)

    # Debt whose recurring payment produced this entry
    source_debt_id: Optional[str] = Field(
        default=None, foreign_key="debt.id", index=True, max_length=32
    )

    @property
    def is_expense(self) -> bool:
        return self.type == "expense"

    @property
    def signed_amount(self) -> float:
        return -self.amount if self.is_expense else self.amount
