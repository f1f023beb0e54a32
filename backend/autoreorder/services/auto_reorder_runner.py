"""
Auto Reorder Runner

Runner-style entry point for executing the scheduled reorder pass outside
the request/response flow (cron, systemd timer, CI job).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from autoreorder.database import SessionLocal
from autoreorder.services.auto_reorder_service import AutoReorderService, RunResult


def run_scheduled_reorder(as_of: Optional[date] = None, session_factory=SessionLocal) -> RunResult:
    """Execute one batch run in its own session and return the run summary."""
    db = session_factory()
    try:
        return AutoReorderService(db).run_scheduled(as_of or datetime.utcnow().date())
    finally:
        db.close()
