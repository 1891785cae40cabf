"""Background scheduler tests."""

from __future__ import annotations

from datetime import date

from apscheduler.triggers.cron import CronTrigger

from profitpulse.scheduler import RECURRING_JOB_ID, RecurringScheduler, create_scheduler


def test_run_now_materializes_due_entries(ctx, transaction_factory):
    ctx.book.add_transaction(
        transaction_factory(recurrence="weekly", occurred_on=date(2024, 3, 1))
    )
    scheduler = RecurringScheduler(ctx, clock=lambda: date(2024, 3, 8))

    assert scheduler.run_now() == 1
    assert scheduler.run_now() == 0
    assert len(ctx.book.list_transactions()) == 2


def test_run_now_logs_and_survives_failures(ctx, monkeypatch, caplog):
    def _boom(today):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(ctx.book, "run_recurring_pass", _boom)
    scheduler = RecurringScheduler(ctx, clock=lambda: date(2024, 3, 8))

    assert scheduler.run_now() == 0
    assert "Recurring pass failed" in caplog.text


def test_start_registers_daily_job(ctx):
    ctx.config.RECURRING_CHECK_HOUR = 6
    scheduler = RecurringScheduler(ctx)

    scheduler.start()
    try:
        assert scheduler.running
        job = scheduler.scheduler.get_job(RECURRING_JOB_ID)
        assert job is not None
        assert isinstance(job.trigger, CronTrigger)
        assert str(job.trigger.fields[job.trigger.FIELD_NAMES.index("hour")]) == "6"
    finally:
        scheduler.stop()

    assert not scheduler.running


def test_start_twice_keeps_one_scheduler(ctx):
    scheduler = create_scheduler(ctx, auto_start=True)
    first = scheduler.scheduler
    try:
        scheduler.start()
        assert scheduler.scheduler is first
    finally:
        scheduler.stop()


def test_create_scheduler_without_auto_start(ctx):
    scheduler = create_scheduler(ctx)

    assert not scheduler.running
    scheduler.stop()
