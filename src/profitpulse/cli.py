"""Command line helpers for ProfitPulse."""

from __future__ import annotations

from datetime import date, datetime

import click

from .config import BaseConfig
from .constants import RECURRENCE_OPTIONS
from .logging_config import setup_logging
from .models.debt import Debt
from .services.amortization import debt_overview
from .services.recurrence import next_due_date


def _parse_date(ctx, param, value):
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise click.BadParameter("expected YYYY-MM-DD") from exc


@click.group()
def main() -> None:
    """ProfitPulse debt and recurrence tools."""
    setup_logging(BaseConfig())


@main.command("schedule")
@click.option("--balance", type=float, required=True, help="Outstanding principal")
@click.option("--rate", type=float, required=True, help="Annual interest rate in percent")
@click.option("--payment", type=float, required=True, help="Fixed monthly payment")
@click.option("--months", type=int, default=12, show_default=True, help="Rows to print")
@click.option("--start", callback=_parse_date, default=None, help="First payment date (YYYY-MM-DD)")
def schedule(balance: float, rate: float, payment: float, months: int, start: date | None) -> None:
    """Print an amortization preview for a single debt."""

    debt = Debt(name="cli", balance=balance, interest_rate=rate, monthly_payment=payment)
    overview = debt_overview(debt, start or date.today(), preview_months=months)

    click.echo(f"{'Date':<12}{'Payment':>12}{'Principal':>12}{'Interest':>12}{'Balance':>14}")
    for entry in overview.preview:
        click.echo(
            f"{entry.date.isoformat():<12}{entry.payment:>12.2f}{entry.principal:>12.2f}"
            f"{entry.interest:>12.2f}{entry.remaining_balance:>14.2f}"
        )
    click.echo(f"Months to payoff: {overview.months_to_payoff}")
    click.echo(f"Total interest: {overview.total_interest:.2f}")
    if not overview.covers_interest:
        click.echo("Warning: the monthly payment does not cover the interest.", err=True)


@main.command("next-due")
@click.argument("current", callback=_parse_date)
@click.argument("recurrence", type=click.Choice([value for value, _ in RECURRENCE_OPTIONS]))
def next_due(current: date, recurrence: str) -> None:
    """Print the due date following CURRENT under RECURRENCE."""

    click.echo(next_due_date(current, recurrence).isoformat())


if __name__ == "__main__":  # pragma: no cover
    main()
