"""Calendar helper tests."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from profitpulse.dates import add_months, as_date, days_until, same_day


@pytest.mark.parametrize(
    "start,months,expected",
    [
        (date(2024, 1, 31), 1, date(2024, 2, 29)),
        (date(2024, 12, 31), 2, date(2025, 2, 28)),
        (date(2024, 5, 15), 12, date(2025, 5, 15)),
        (date(2024, 3, 31), -1, date(2024, 2, 29)),
    ],
)
def test_add_months_clamps_to_month_end(start, months, expected):
    assert add_months(start, months) == expected


def test_same_day_ignores_time_and_none():
    assert same_day(datetime(2024, 3, 1, 23, 59), date(2024, 3, 1))
    assert not same_day(None, date(2024, 3, 1))


def test_days_until_and_as_date():
    assert as_date(datetime(2024, 3, 1, 8)) == date(2024, 3, 1)
    assert days_until(date(2024, 3, 6), datetime(2024, 3, 1, 20)) == 5
