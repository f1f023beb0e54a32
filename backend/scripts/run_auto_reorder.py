"""Scheduled auto reorder pass.

Usage:
    python scripts/run_auto_reorder.py [--as-of YYYY-MM-DD]

Prints the run summary as JSON and exits non-zero when the run reports errors,
so the invoking scheduler surfaces partial failures.
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date

from autoreorder.config import settings
from autoreorder.database import create_tables
from autoreorder.services.auto_reorder_runner import run_scheduled_reorder
from autoreorder.utils.logging import configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the scheduled auto reorder pass.")
    parser.add_argument("--as-of", type=date.fromisoformat, default=None, help="evaluation date (default: today, UTC)")
    args = parser.parse_args(argv)

    configure_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)
    create_tables()

    result = run_scheduled_reorder(as_of=args.as_of)
    print(json.dumps(result.to_response().model_dump(), default=str, indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
