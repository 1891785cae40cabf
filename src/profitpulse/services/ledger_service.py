"""Ledger orchestration: transactions, debts, budgets and the recurring pass.

``FinanceBook`` is the single writer for the personal ledger. Every
transaction, whether typed in, generated for a debt, or materialized from a
recurring template, goes through ``add_transaction`` so budgets stay in step.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..constants import Recurrence
from ..dates import as_date
from ..infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelDebtRepository,
    SQLModelTransactionRepository,
)
from ..models.budget import Budget
from ..models.debt import Debt
from ..models.ids import new_id
from ..models.transaction import Transaction
from . import amortization, budgeting, debts as debt_rules, reports
from .recurrence import is_due, materialize_due, next_due_date

logger = logging.getLogger(__name__)

TRANSACTION_TYPES = ("income", "expense")
RECURRING_RULES = (
    Recurrence.DAILY,
    Recurrence.WEEKLY,
    Recurrence.FOUR_WEEKLY,
    Recurrence.MONTHLY,
)


class FinanceBook:
    """Owns the canonical lists of transactions, debts and budgets."""

    def __init__(
        self,
        *,
        transaction_repo: SQLModelTransactionRepository,
        debt_repo: SQLModelDebtRepository,
        budget_repo: SQLModelBudgetRepository,
        currency: str = "GBP",
        preview_months: int = 12,
        upcoming_days: int = reports.UPCOMING_WINDOW_DAYS,
    ) -> None:
        self.transaction_repo = transaction_repo
        self.debt_repo = debt_repo
        self.budget_repo = budget_repo
        self.currency = currency
        self.preview_months = preview_months
        self.upcoming_days = upcoming_days

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def add_transaction(self, transaction: Transaction) -> Transaction:
        """Validate, store and budget a new transaction."""

        self._validate(transaction)
        if not transaction.id:
            transaction.id = new_id()
        if transaction.original_amount is None:
            transaction.original_amount = transaction.amount
            transaction.original_currency = transaction.original_currency or self.currency
        if transaction.is_recurring:
            transaction.next_due_date = next_due_date(
                as_date(transaction.occurred_on), transaction.recurrence
            )
        else:
            transaction.recurrence = Recurrence.NONE
            transaction.next_due_date = None

        stored = self.transaction_repo.create(transaction)
        if stored.is_expense:
            self._apply_to_budget(stored.category, stored.amount)
        logger.info(
            "Transaction added",
            extra={"transaction_id": stored.id, "type": stored.type, "recurring": stored.is_recurring},
        )
        return stored

    def update_transaction(self, transaction: Transaction) -> Transaction:
        """Replace a stored transaction, moving its budget effect with it."""

        existing = self.transaction_repo.get_by_id(transaction.id)
        if existing is None:
            raise LookupError(f"Transaction {transaction.id} not found")
        self._validate(transaction)
        if transaction.is_recurring:
            transaction.next_due_date = next_due_date(
                as_date(transaction.occurred_on), transaction.recurrence
            )
        else:
            transaction.recurrence = Recurrence.NONE
            transaction.next_due_date = None

        if existing.is_expense:
            self._reverse_from_budget(existing.category, existing.amount)
        stored = self.transaction_repo.update(transaction)
        if stored.is_expense:
            self._apply_to_budget(stored.category, stored.amount)
        logger.info("Transaction updated", extra={"transaction_id": stored.id})
        return stored

    def delete_transaction(self, transaction_id: str) -> None:
        existing = self.transaction_repo.get_by_id(transaction_id)
        if existing is None:
            return
        if existing.is_expense:
            self._reverse_from_budget(existing.category, existing.amount)
        self.transaction_repo.delete(transaction_id)
        logger.info("Transaction deleted", extra={"transaction_id": transaction_id})

    def list_transactions(self, *, txn_type: str = "all", category: str = "all") -> list[Transaction]:
        return self.transaction_repo.search(txn_type=txn_type, category=category)

    # ------------------------------------------------------------------
    # Recurring pass
    # ------------------------------------------------------------------

    def run_recurring_pass(self, today: date | datetime | None = None) -> list[Transaction]:
        """Materialize every recurring transaction due *today*.

        The new instance takes over as the recurring template and the source
        stops recurring, so a second pass on the same day finds nothing due.
        """

        day = as_date(today or date.today())
        due = [t for t in self.transaction_repo.list_recurring() if is_due(t, day)]
        created: list[Transaction] = []
        # materialize_due emits one instance per due template, in order
        for template, instance in zip(due, materialize_due(due, day)):
            template.is_recurring = False
            self.transaction_repo.update(template)
            created.append(self.add_transaction(instance))

        if created:
            logger.info(
                "Recurring pass materialized transactions",
                extra={"count": len(created), "day": day.isoformat()},
            )
        else:
            logger.debug("Recurring pass found nothing due", extra={"day": day.isoformat()})
        return created

    # ------------------------------------------------------------------
    # Debts
    # ------------------------------------------------------------------

    def add_debt(self, debt: Debt, *, today: date | None = None) -> Debt:
        """Store *debt* and schedule its monthly payment as a recurring expense."""

        debt_rules.validate_debt(debt)
        if not debt.id:
            debt.id = new_id()
        stored = self.debt_repo.create(debt)
        payment = debt_rules.build_payment_transaction(
            debt=stored, today=today or date.today(), currency=self.currency
        )
        self.add_transaction(payment)
        logger.info("Debt added", extra={"debt_id": stored.id})
        return stored

    def update_debt(self, debt_id: str, updates: dict[str, object]) -> Debt:
        """Apply *updates*; a new monthly payment flows into the linked payment."""

        debt = self.debt_repo.get_by_id(debt_id)
        if debt is None:
            raise LookupError(f"Debt {debt_id} not found")
        payment_changed = debt_rules.apply_updates(debt, updates)
        debt_rules.validate_debt(debt)
        stored = self.debt_repo.update(debt)

        if payment_changed:
            for linked in self.transaction_repo.list_by_source_debt(debt_id):
                if not linked.is_recurring:
                    continue
                linked.amount = float(stored.monthly_payment)
                linked.original_amount = linked.amount
                linked.description = debt_rules.payment_description(stored)
                linked.label = stored.name
                self._replace_keeping_schedule(linked)
        logger.info(
            "Debt updated", extra={"debt_id": debt_id, "payment_changed": payment_changed}
        )
        return stored

    def delete_debt(self, debt_id: str) -> None:
        """Remove *debt* and every transaction its payment plan produced."""

        for linked in self.transaction_repo.list_by_source_debt(debt_id):
            self.delete_transaction(linked.id)
        self.debt_repo.delete(debt_id)
        logger.info("Debt deleted", extra={"debt_id": debt_id})

    def list_debts(self) -> list[Debt]:
        return self.debt_repo.list_all()

    def debt_overview(
        self, debt_id: str, start_date: date | None = None
    ) -> amortization.DebtOverview:
        debt = self.debt_repo.get_by_id(debt_id)
        if debt is None:
            raise LookupError(f"Debt {debt_id} not found")
        overview = amortization.debt_overview(
            debt, start_date, preview_months=self.preview_months
        )
        if not overview.covers_interest:
            logger.warning(
                "Monthly payment does not cover interest",
                extra={"debt_id": debt_id, "months": overview.months_to_payoff},
            )
        return overview

    # ------------------------------------------------------------------
    # Budgets and dashboard
    # ------------------------------------------------------------------

    def budget_variances(self) -> list[budgeting.BudgetVariance]:
        return budgeting.compute_variances(self.budget_repo.list_all())

    def dashboard(self, today: date | datetime | None = None) -> reports.DashboardSummary:
        return reports.build_dashboard(
            self.transaction_repo.list_all(),
            self.debt_repo.list_all(),
            today or date.today(),
            within_days=self.upcoming_days,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _validate(self, transaction: Transaction) -> None:
        if transaction.type not in TRANSACTION_TYPES:
            raise ValueError(f"Unknown transaction type: {transaction.type!r}")
        if transaction.amount is None or transaction.amount < 0:
            raise ValueError("Transaction amount must be zero or positive.")
        if not transaction.category:
            raise ValueError("Transaction category is required.")
        if transaction.is_recurring and transaction.recurrence not in RECURRING_RULES:
            raise ValueError(
                f"Recurring transactions need one of {', '.join(RECURRING_RULES)}, "
                f"got {transaction.recurrence!r}."
            )

    def _replace_keeping_schedule(self, transaction: Transaction) -> None:
        """Update amount fields without re-deriving the due date."""

        existing = self.transaction_repo.get_by_id(transaction.id)
        if existing is not None and existing.is_expense:
            self._reverse_from_budget(existing.category, existing.amount)
        stored = self.transaction_repo.update(transaction)
        if stored.is_expense:
            self._apply_to_budget(stored.category, stored.amount)

    def _apply_to_budget(self, category: str, amount: float) -> None:
        budget = budgeting.apply_expense(
            self.budget_repo.get(category), category=category, amount=amount
        )
        self.budget_repo.upsert(budget)

    def _reverse_from_budget(self, category: str, amount: float) -> None:
        budget: Optional[Budget] = self.budget_repo.get(category)
        if budget is None:
            return
        self.budget_repo.upsert(budgeting.reverse_expense(budget, amount=amount))
