"""Calendar arithmetic shared by the amortization and recurrence services."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, timedelta, timezone


def as_date(value: date | datetime) -> date:
    """Drop the time-of-day component when *value* is a datetime."""

    if isinstance(value, datetime):
        return value.date()
    return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware ones are converted."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def add_months(value: date, months: int = 1) -> date:
    """Move *value* by whole calendar months.

    The day is clamped to the last day of the target month, so
    2024-01-31 + 1 month is 2024-02-29.
    """

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def same_day(left: date | datetime | None, right: date | datetime | None) -> bool:
    """Calendar equality, ignoring time of day."""

    if left is None or right is None:
        return False
    return as_date(left) == as_date(right)


def days_until(target: date | datetime, today: date | datetime) -> int:
    return (as_date(target) - as_date(today)).days
