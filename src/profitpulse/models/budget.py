"""Budget-vs-spend table."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import Field, SQLModel


class Budget(SQLModel, table=True):
    """Spending envelope for one expense category."""

    __tablename__: ClassVar[str] = "budget"

    category: str = Field(primary_key=True, max_length=64)
    limit_amount: float = Field(default=0.0, nullable=False)
    spent: float = Field(default=0.0, nullable=False)
