"""Access to the paid business module.

Callers hand the business services an ``Entitlements`` object; the services
never reach for auth or payment state themselves.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol


class Entitlements(Protocol):
    """Answers whether a user may use paid features."""

    def has_paid_subscription(self, email: Optional[str]) -> bool:  # pragma: no cover - interface
        ...


class AllowlistEntitlements:
    """Entitlements backed by a static set of paying e-mail addresses."""

    def __init__(self, paid_users: Iterable[str] = ()) -> None:
        self._paid = frozenset(user.strip().lower() for user in paid_users if user.strip())

    def has_paid_subscription(self, email: Optional[str]) -> bool:
        if not email:
            return False
        return email.strip().lower() in self._paid


def require_business_access(entitlements: Entitlements, email: Optional[str]) -> None:
    """Raise PermissionError unless *email* holds a paid subscription."""

    if not entitlements.has_paid_subscription(email):
        raise PermissionError("The business module requires a paid subscription.")
