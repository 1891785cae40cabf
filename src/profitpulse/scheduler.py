"""Background scheduler for the daily recurring-transaction pass."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler as APScheduler
from apscheduler.triggers.cron import CronTrigger

if TYPE_CHECKING:
    from .context import AppContext

logger = logging.getLogger("profitpulse.scheduler")

RECURRING_JOB_ID = "recurring_pass"


class RecurringScheduler:
    """Runs ``FinanceBook.run_recurring_pass`` once a day."""

    def __init__(self, ctx: AppContext, *, clock: Callable[[], date] = date.today):
        """Initialize the scheduler with app context.

        Args:
            ctx: Application context with the ledger and config
            clock: Source of "today", replaceable in tests
        """
        self.ctx = ctx
        self.clock = clock
        self.scheduler: Optional[APScheduler] = None

    @property
    def running(self) -> bool:
        return self.scheduler is not None

    def start(self) -> None:
        """Start the background scheduler."""
        if self.scheduler is not None:
            logger.warning("Scheduler already running")
            return

        self.scheduler = APScheduler()
        hour = self.ctx.config.RECURRING_CHECK_HOUR
        self.scheduler.add_job(
            func=self.run_now,
            trigger=CronTrigger(hour=hour, minute=0),
            id=RECURRING_JOB_ID,
            name="Daily recurring transactions",
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info(f"Scheduled recurring pass daily at {hour:02d}:00")

    def stop(self) -> None:
        """Stop the background scheduler gracefully."""
        if self.scheduler is not None:
            self.scheduler.shutdown(wait=True)
            self.scheduler = None
            logger.info("Background scheduler stopped")

    def run_now(self) -> int:
        """Run the recurring pass for today; return how many entries were created."""
        try:
            created = self.ctx.book.run_recurring_pass(self.clock())
        except Exception as exc:
            # A failed pass must not kill the scheduler thread; the next run retries.
            logger.error(f"Recurring pass failed: {exc}", exc_info=True)
            return 0
        return len(created)


def create_scheduler(ctx: AppContext, *, auto_start: bool = False) -> RecurringScheduler:
    """Create and optionally start a recurring-pass scheduler."""
    scheduler = RecurringScheduler(ctx)
    if auto_start:
        scheduler.start()
    return scheduler
