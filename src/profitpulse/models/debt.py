"""Debt and loan entities."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import Field, SQLModel

from .ids import new_id


class Debt(SQLModel, table=True):
    """Loan or credit obligation tracked by the debt manager.

    ``interest_rate`` is the nominal annual percentage (18.5 means 18.5%).
    ``minimum_payment`` is informational; amortization uses ``monthly_payment``.
    """

    __tablename__: ClassVar[str] = "debt"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str = Field(nullable=False, max_length=80, index=True)
    balance: float = Field(default=0.0, nullable=False)
    interest_rate: float = Field(default=0.0, nullable=False)
    minimum_payment: float = Field(default=0.0, nullable=False)
    monthly_payment: float = Field(default=0.0, nullable=False)
