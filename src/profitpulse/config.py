"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _env_list(name: str) -> frozenset[str]:
    value = os.getenv(name, "")
    return frozenset(item.strip().lower() for item in value.split(",") if item.strip())


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "ProfitPulse"
    IN_MEMORY_URL = "sqlite://"
    SCHEDULE_PREVIEW_MONTHS = 12
    UPCOMING_WINDOW_DAYS = 5

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("PROFITPULSE_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("PROFITPULSE_DATABASE_URL", self.IN_MEMORY_URL)
        self.DEFAULT_CURRENCY = os.getenv("PROFITPULSE_DEFAULT_CURRENCY", "GBP").upper()
        self.RECURRING_CHECK_HOUR = _env_int("PROFITPULSE_RECURRING_CHECK_HOUR", 0)
        self.PAID_USERS = _env_list("PROFITPULSE_PAID_USERS")
        if not 0 <= self.RECURRING_CHECK_HOUR <= 23:
            raise ValueError("PROFITPULSE_RECURRING_CHECK_HOUR must be between 0 and 23.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where log files live."""

        data_root = os.getenv("PROFITPULSE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def in_memory(self) -> bool:
        return self.DATABASE_URL in {self.IN_MEMORY_URL, "sqlite:///:memory:"}

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {"check_same_thread": False}
        engine_options: dict[str, Any] = {"connect_args": connect_args}
        if self.in_memory:
            # One shared connection, otherwise each session gets an empty database.
            engine_options["poolclass"] = StaticPool
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using the in-memory store."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite; always in memory."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = self.IN_MEMORY_URL
