"""Best-effort spot conversion between display currencies."""

from __future__ import annotations

from typing import Mapping

# Units per US dollar, used when no live rates have been supplied.
DEFAULT_RATES: dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.92,
    "GBP": 0.79,
    "JPY": 151.67,
    "AUD": 1.53,
    "CAD": 1.35,
    "CHF": 0.90,
    "CNY": 7.23,
}

SUPPORTED_CURRENCIES = tuple(DEFAULT_RATES)


def convert_amount(
    amount: float,
    from_currency: str,
    to_currency: str,
    rates: Mapping[str, float] | None = None,
) -> float:
    """Convert through USD; a currency missing from *rates* leaves *amount* as is."""

    table = DEFAULT_RATES if rates is None else rates
    source = table.get(from_currency.upper())
    target = table.get(to_currency.upper())
    if not source or not target:
        return amount
    return amount / source * target
