"""
Reorder history: the write-ahead audit trail of reorder attempts and its
read-side queries.

``AuditTrail`` is scoped to one run. It remembers every entry it opened so
the orchestrator can detect and close entries a run failed to close.
"""
import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from autoreorder.config import settings
from autoreorder.core.exceptions import BusinessRuleViolationException, EntityNotFoundException
from autoreorder.models.reorder_history import REORDER_TRIGGER_TYPES, ReorderHistory
from autoreorder.repositories.reorder_history_repository import ReorderHistoryRepository
from autoreorder.schemas.reorder import ReorderStatisticsResponse
from autoreorder.services.eligibility_service import EligibleItem
from autoreorder.utils.events import ReorderHistoryClosedEvent, get_event_bus


logger = logging.getLogger(__name__)

CLOSING_STATUSES = {"po_created", "failed"}
STALE_PENDING_NOTE = "Expired: run ended before a purchase order outcome was recorded"

_TRIGGER_LABELS = {
    "auto_schedule": "Scheduled auto reorder",
    "inventory_change": "Inventory change reorder",
    "manual": "Manual reorder",
}


class AuditTrail:

    def __init__(self, db: Session):
        self._repo = ReorderHistoryRepository(db)
        self._bus = get_event_bus()
        self._unclosed: Dict[int, int] = {}

    def open(self, item: EligibleItem, trigger_type: str) -> int:
        if trigger_type not in REORDER_TRIGGER_TYPES:
            raise ValueError(f"Unknown trigger type '{trigger_type}'")

        entry = self._repo.create(
            ReorderHistory(
                sku_id=item.sku_id,
                trigger_type=trigger_type,
                trigger_timestamp=datetime.utcnow(),
                inventory_level=item.available,
                min_threshold=item.min_threshold,
                optimal_threshold=item.optimal_threshold,
                reorder_quantity=item.reorder_quantity,
                vendor_id=item.vendor_id,
                status="pending",
                notes=f"{_TRIGGER_LABELS[trigger_type]} for SKU: {item.sku_code}",
            )
        )
        self._unclosed[entry.id] = entry.sku_id
        logger.info(
            "reorder_history_opened history_id=%s sku=%s quantity=%s status_label=%s",
            entry.id, item.sku_code, item.reorder_quantity, item.status_label,
        )
        return entry.id

    def close(
        self,
        history_id: int,
        status: str,
        note: str,
        po_id: Optional[int] = None,
    ) -> ReorderHistory:
        return self.close_many([history_id], status, note, po_id=po_id)[0]

    def close_many(
        self,
        history_ids: List[int],
        status: str,
        note: str,
        po_id: Optional[int] = None,
    ) -> List[ReorderHistory]:
        """Close several pending entries with one commit; all or none become closed."""
        if status not in CLOSING_STATUSES:
            raise ValueError(f"Cannot close a reorder with status '{status}'")
        if status == "po_created" and po_id is None:
            raise ValueError("po_created requires a purchase order id")

        entries: List[ReorderHistory] = []
        for history_id in history_ids:
            entry = self._repo.get_by_id(history_id)
            if not entry:
                raise EntityNotFoundException("ReorderHistory", history_id)
            if entry.status != "pending":
                raise BusinessRuleViolationException(f"Reorder history {history_id} is already '{entry.status}'")
            entries.append(
                self._repo.update(entry, {"status": status, "notes": note, "purchase_order_id": po_id}, commit=False)
            )
        self._repo.db.commit()

        for entry in entries:
            self._unclosed.pop(entry.id, None)
            self._bus.publish(ReorderHistoryClosedEvent(
                history_id=entry.id,
                sku_id=entry.sku_id,
                status=status,
                purchase_order_id=po_id,
                notes=note,
            ))
        return entries

    def unclosed(self) -> List[int]:
        return list(self._unclosed)


class ReorderHistoryService:

    def __init__(self, db: Session):
        self._repo = ReorderHistoryRepository(db)

    def list_for_sku(self, sku_id: int) -> List[ReorderHistory]:
        return self._repo.list_for_sku(sku_id)

    def list_pending(self) -> List[ReorderHistory]:
        return self._repo.list_pending()

    def list_stale_pending(self, now: datetime, older_than_minutes: Optional[int] = None) -> List[ReorderHistory]:
        minutes = older_than_minutes if older_than_minutes is not None else settings.REORDER_STALE_PENDING_MINUTES
        return self._repo.list_pending(created_before=now - timedelta(minutes=minutes))

    def expire_stale_pending(self, now: datetime, older_than_minutes: Optional[int] = None) -> List[int]:
        """Close dangling ``pending`` entries as failed so their SKUs can be reordered again."""
        expired: List[int] = []
        for entry in self.list_stale_pending(now, older_than_minutes):
            self._repo.update(entry, {"status": "failed", "notes": STALE_PENDING_NOTE}, commit=False)
            expired.append(entry.id)
        self._repo.db.commit()
        if expired:
            logger.warning("reorder_history_expired count=%s history_ids=%s", len(expired), expired)
        return expired

    def statistics(self) -> ReorderStatisticsResponse:
        counts = self._repo.count_by_status_and_trigger()

        def by_status(status: str) -> int:
            return sum(c for (s, _), c in counts.items() if s == status)

        def by_trigger(trigger: str) -> int:
            return sum(c for (_, t), c in counts.items() if t == trigger)

        return ReorderStatisticsResponse(
            total_reorders=sum(counts.values()),
            pending_reorders=by_status("pending"),
            successful_reorders=by_status("po_created"),
            failed_reorders=by_status("failed"),
            auto_schedule_count=by_trigger("auto_schedule"),
            inventory_change_count=by_trigger("inventory_change"),
            manual_count=by_trigger("manual"),
        )
