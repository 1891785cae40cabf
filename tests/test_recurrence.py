"""Tests for recurring transaction scheduling."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from profitpulse.services.recurrence import is_due, materialize_due, next_due_date


class TestNextDueDate:
    @pytest.mark.parametrize(
        "current,expected",
        [
            (date(2024, 12, 15), date(2025, 1, 15)),
            (date(2024, 3, 1), date(2024, 4, 1)),
            (date(2024, 1, 31), date(2024, 2, 29)),
            (date(2023, 1, 31), date(2023, 2, 28)),
            (date(2024, 8, 31), date(2024, 9, 30)),
        ],
    )
    def test_monthly_advances_one_calendar_month(self, current, expected):
        assert next_due_date(current, "monthly") == expected

    def test_weekly_advances_seven_days(self):
        assert next_due_date(date(2024, 12, 28), "weekly") == date(2025, 1, 4)

    def test_four_weekly_advances_twenty_eight_days(self):
        assert next_due_date(date(2024, 2, 1), "4weekly") == date(2024, 2, 29)

    def test_daily_advances_one_day(self):
        assert next_due_date(date(2024, 2, 29), "daily") == date(2024, 3, 1)

    @pytest.mark.parametrize("rule", ["none", "yearly", "", None, "MONTHLY"])
    def test_unrecognized_rule_returns_input(self, rule):
        assert next_due_date(date(2024, 5, 5), rule) == date(2024, 5, 5)

    def test_keeps_time_of_day_for_datetimes(self):
        assert next_due_date(datetime(2024, 5, 5, 9, 30), "weekly") == datetime(2024, 5, 12, 9, 30)


class TestMaterializeDue:
    def test_monthly_template_due_today_emits_one_instance(self, transaction_factory):
        template = transaction_factory(
            amount=75.0,
            recurrence="monthly",
            next_due_date=date(2024, 3, 1),
            label="Gym",
        )

        created = materialize_due([template], date(2024, 3, 1))

        assert len(created) == 1
        instance = created[0]
        assert instance.next_due_date == date(2024, 4, 1)
        assert instance.occurred_on == date(2024, 3, 1)
        assert instance.last_paid_date == date(2024, 3, 1)
        assert instance.id != template.id
        assert instance.amount == 75.0
        assert instance.label == "Gym"
        assert instance.recurrence == "monthly"
        assert instance.is_recurring is True

    def test_time_of_day_is_ignored(self, transaction_factory):
        template = transaction_factory(recurrence="weekly", next_due_date=date(2024, 3, 1))

        created = materialize_due([template], datetime(2024, 3, 1, 23, 59))

        assert len(created) == 1
        assert created[0].occurred_on == date(2024, 3, 1)
        assert created[0].next_due_date == date(2024, 3, 8)

    def test_only_due_recurring_entries_materialize(self, transaction_factory):
        today = date(2024, 3, 1)
        due = transaction_factory(recurrence="daily", next_due_date=today)
        later = transaction_factory(recurrence="daily", next_due_date=date(2024, 3, 2))
        earlier = transaction_factory(recurrence="daily", next_due_date=date(2024, 2, 29))
        one_off = transaction_factory(next_due_date=today, is_recurring=False)
        no_date = transaction_factory(recurrence="monthly", next_due_date=None)

        created = materialize_due([due, later, earlier, one_off, no_date], today)

        assert len(created) == 1
        assert created[0].next_due_date == date(2024, 3, 2)

    def test_every_due_template_gets_its_own_instance(self, transaction_factory):
        today = date(2024, 3, 1)
        templates = [
            transaction_factory(category="Housing", recurrence="monthly", next_due_date=today),
            transaction_factory(category="Food", recurrence="weekly", next_due_date=today),
        ]

        created = materialize_due(templates, today)

        assert [t.category for t in created] == ["Housing", "Food"]
        assert len({t.id for t in created} | {t.id for t in templates}) == 4

    def test_input_is_not_mutated(self, transaction_factory):
        template = transaction_factory(recurrence="monthly", next_due_date=date(2024, 3, 1))
        before = template.model_dump()

        materialize_due([template], date(2024, 3, 1))

        assert template.model_dump() == before

    def test_id_factory_is_used(self, transaction_factory):
        template = transaction_factory(recurrence="monthly", next_due_date=date(2024, 3, 1))

        created = materialize_due([template], date(2024, 3, 1), id_factory=lambda: "fixed-id")

        assert created[0].id == "fixed-id"

    def test_unknown_rule_keeps_due_date(self, transaction_factory):
        template = transaction_factory(
            recurrence="fortnightly", next_due_date=date(2024, 3, 1), is_recurring=True
        )

        created = materialize_due([template], date(2024, 3, 1))

        assert created[0].next_due_date == date(2024, 3, 1)


def test_is_due_requires_recurring_flag(transaction_factory):
    txn = transaction_factory(next_due_date=date(2024, 3, 1), is_recurring=False)

    assert not is_due(txn, date(2024, 3, 1))
