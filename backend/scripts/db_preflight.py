"""Deployment preflight checks for the reorder engine.

Usage:
    python scripts/db_preflight.py

Reads the same environment the service reads and reports every control
that would make a scheduled run unsafe. Exits non-zero when any required
control fails.
"""

from __future__ import annotations

import os
import sys

# Kept in sync with autoreorder.config, which validates on import.
DEFAULT_SECRET_KEY = "autoreorder-secret-key-change-in-production"
PO_WRITE_MODES = {"transaction", "compensating"}


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def collect_checks() -> list[tuple[str, bool, str]]:
    environment = os.getenv("ENVIRONMENT", "development").strip().lower()
    database_url = os.getenv("DATABASE_URL", "sqlite:///./autoreorder.db")
    secret_key = os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY)
    auto_create_tables = _bool_env("AUTO_CREATE_TABLES", True)
    write_mode = os.getenv("PO_WRITE_MODE", "transaction")
    scheduler_token = os.getenv("REORDER_SCHEDULER_TOKEN", "")

    checks: list[tuple[str, bool, str]] = [
        (
            "PO_WRITE_MODE is supported",
            write_mode in PO_WRITE_MODES,
            f"PO_WRITE_MODE={write_mode}",
        ),
    ]

    if environment in {"production", "prod"}:
        checks.extend(
            [
                (
                    "DATABASE_URL is not SQLite",
                    "sqlite" not in database_url.lower(),
                    f"DATABASE_URL={database_url}",
                ),
                (
                    "SECRET_KEY is not the default value",
                    secret_key != DEFAULT_SECRET_KEY,
                    "SECRET_KEY is custom" if secret_key != DEFAULT_SECRET_KEY else "SECRET_KEY is default",
                ),
                (
                    "AUTO_CREATE_TABLES is disabled",
                    not auto_create_tables,
                    f"AUTO_CREATE_TABLES={auto_create_tables}",
                ),
                (
                    "REORDER_SCHEDULER_TOKEN is configured",
                    len(scheduler_token) >= 32,
                    "token length ok" if len(scheduler_token) >= 32 else "token missing or shorter than 32 chars",
                ),
            ]
        )
    return checks


def run() -> int:
    environment = os.getenv("ENVIRONMENT", "development").strip().lower()
    has_failures = False
    print("AutoReorder Preflight")
    print(f"- environment: {environment}")
    for title, ok, detail in collect_checks():
        marker = "PASS" if ok else "FAIL"
        print(f"[{marker}] {title} ({detail})")
        if not ok:
            has_failures = True

    if has_failures:
        print("\nPreflight failed. Resolve failed checks before enabling the scheduler.")
        return 1

    print("\nPreflight passed.")
    return 0


if __name__ == "__main__":
    sys.exit(run())
