"""Identifier generation for in-memory records."""

from __future__ import annotations

from uuid import uuid4


def new_id() -> str:
    """Return an opaque, unique record identifier."""

    return uuid4().hex
