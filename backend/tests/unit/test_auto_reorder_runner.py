from datetime import date

from sqlalchemy.orm import sessionmaker

from autoreorder.models import PurchaseOrder
from autoreorder.services.auto_reorder_runner import run_scheduled_reorder


def test_runner_uses_its_own_session(engine, db, seed):
    seed.sku(seed.overall_class(20, 40), seed.vendor(), available=5)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    result = run_scheduled_reorder(as_of=date(2026, 10, 18), session_factory=factory)

    assert result.success
    assert result.trigger_type == "auto_schedule"
    assert len(result.created_pos) == 1
    assert db.query(PurchaseOrder).count() == 1
