"""
Auto Reorder Service: Run Orchestrator

Drives one reorder pass:

    scan -> group by vendor -> (per vendor) guard -> open audit entries
         -> materialize PO -> close audit entries -> aggregate

Vendor groups are processed independently: a failure inside one group is
recorded in the run result and the next group still runs. Nothing is raised
out of a run except trigger-level errors (unknown SKU on a manual call).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Set

from sqlalchemy.orm import Session

from autoreorder.core.exceptions import (
    BusinessRuleViolationException,
    MissingReorderFieldException,
)
from autoreorder.schemas.reorder import ManualReorderResponse, ReorderRunResponse
from autoreorder.services.eligibility_service import EligibilityScanner, EligibleItem
from autoreorder.services.purchase_order_service import NO_ITEMS_ERROR, PurchaseOrderMaterializer
from autoreorder.services.reorder_guard import OPEN_REORDER_REASON, ReorderGuard
from autoreorder.services.reorder_history_service import AuditTrail
from autoreorder.services.vendor_batcher import group_by_vendor
from autoreorder.utils.events import ReorderRunCompletedEvent, get_event_bus


logger = logging.getLogger(__name__)

UNCLOSED_NOTE = "Reorder run ended before a purchase order outcome was recorded"


@dataclass
class RunResult:
    trigger_type: str
    processed_count: int = 0
    created_pos: List[int] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def to_response(self) -> ReorderRunResponse:
        return ReorderRunResponse(
            success=self.success,
            message="Auto reorder run completed",
            trigger_type=self.trigger_type,
            processed_count=self.processed_count,
            created_pos=self.created_pos,
            errors=self.errors,
            skipped=self.skipped,
        )


class AutoReorderService:

    def __init__(self, db: Session, write_mode: Optional[str] = None):
        self._db = db
        self._scanner = EligibilityScanner(db)
        self._guard = ReorderGuard(db)
        self._audit = AuditTrail(db)
        self._materializer = PurchaseOrderMaterializer(db, write_mode=write_mode)
        self._bus = get_event_bus()

    def preview(self, as_of: date) -> List[EligibleItem]:
        return self._scanner.scan(as_of)

    def run_scheduled(self, as_of: date) -> RunResult:
        items = self._scanner.scan(as_of)
        return self._run(items, "auto_schedule")

    def run_for_skus(self, sku_ids: List[int], as_of: date, trigger_type: str = "inventory_change") -> RunResult:
        items = self._scanner.scan(as_of, sku_ids=sku_ids)
        return self._run(items, trigger_type)

    def run_manual(self, sku_id: int, as_of: date) -> ManualReorderResponse:
        try:
            item = self._scanner.evaluate_sku(sku_id, as_of)
        except (BusinessRuleViolationException, MissingReorderFieldException) as exc:
            logger.info("manual_reorder_rejected sku_id=%s reason=%s", sku_id, exc.message)
            return ManualReorderResponse(success=False, error=exc.message)

        result = RunResult(trigger_type="manual")
        opened = self._process_vendor_group(item.vendor_id, [item], "manual", result)
        self._publish_completed(result)

        messages = result.errors or result.skipped
        return ManualReorderResponse(
            success=bool(result.created_pos) and result.success,
            po_id=result.created_pos[0] if result.created_pos else None,
            reorder_history_id=opened.get(item.sku_id),
            error=messages[0] if messages else None,
        )

    def _run(self, items: List[EligibleItem], trigger_type: str) -> RunResult:
        logger.info("reorder_run_started trigger=%s eligible=%s", trigger_type, len(items))
        result = RunResult(trigger_type=trigger_type)

        for vendor_id, group in group_by_vendor(items).items():
            logger.info("reorder_vendor_group vendor_id=%s items=%s", vendor_id, len(group))
            self._process_vendor_group(vendor_id, group, trigger_type, result)

        logger.info(
            "reorder_run_completed trigger=%s processed=%s created_pos=%s errors=%s skipped=%s",
            trigger_type,
            result.processed_count,
            len(result.created_pos),
            len(result.errors),
            len(result.skipped),
        )
        self._publish_completed(result)
        return result

    def _process_vendor_group(
        self,
        vendor_id: int,
        items: List[EligibleItem],
        trigger_type: str,
        result: RunResult,
    ) -> Dict[int, int]:
        """Returns the audit entry id opened for each SKU in the group."""
        opened: Dict[int, int] = {}
        committed = None
        try:
            admitted, skipped = self._guard.admit(items)
            result.skipped.extend(f"SKU {i.sku_code}: {OPEN_REORDER_REASON}" for i in skipped)

            to_order: List[EligibleItem] = []
            for item in admitted:
                if item.reorder_quantity <= 0:
                    result.errors.append(
                        f"SKU {item.sku_code}: no reorder quantity needed "
                        f"(optimal {item.optimal_threshold}, available {item.available})"
                    )
                    continue
                opened[item.sku_id] = self._audit.open(item, trigger_type)
                to_order.append(item)

            if not to_order:
                logger.info("reorder_vendor_group_empty vendor_id=%s", vendor_id)
                return opened
            result.processed_count += len(to_order)

            outcome = self._materializer.materialize(vendor_id, to_order, trigger_type)
            if outcome.success:
                # The PO is committed from here on.
                committed = outcome
                result.created_pos.append(outcome.po_id)

            for rejected in outcome.rejected:
                self._audit.close(opened[rejected.item.sku_id], "failed", rejected.reason)
                result.errors.append(rejected.reason)

            if outcome.success:
                self._audit.close_many(
                    [opened[item.sku_id] for item in outcome.ordered],
                    "po_created",
                    f"PO created successfully: {outcome.po_number}",
                    po_id=outcome.po_id,
                )
            elif outcome.error == NO_ITEMS_ERROR:
                result.errors.append(f"Vendor {vendor_id}: {NO_ITEMS_ERROR}")
            else:
                self._audit.close_many([opened[item.sku_id] for item in outcome.ordered], "failed", outcome.error)
                result.errors.append(f"Failed to create PO for vendor {vendor_id}: {outcome.error}")
        except Exception as exc:
            logger.exception("reorder_vendor_group_failed vendor_id=%s", vendor_id)
            self._db.rollback()
            result.errors.append(f"Error processing vendor {vendor_id}: {exc}")
            if committed is not None:
                self._close_unclosed(
                    f"PO created successfully: {committed.po_number} (audit update retried after: {exc})",
                    po_id=committed.po_id,
                    history_ids={opened[item.sku_id] for item in committed.ordered},
                )
            self._close_unclosed(f"Vendor batch aborted: {exc}")

        self._close_unclosed(UNCLOSED_NOTE)
        return opened

    def _close_unclosed(
        self,
        note: str,
        po_id: Optional[int] = None,
        history_ids: Optional[Set[int]] = None,
    ) -> None:
        """
        Close entries this run opened but never closed. With ``po_id`` they
        are closed ``po_created`` against that committed PO, otherwise ``failed``.
        """
        status = "po_created" if po_id is not None else "failed"
        for history_id in self._audit.unclosed():
            if history_ids is not None and history_id not in history_ids:
                continue
            logger.error("reorder_history_unclosed history_id=%s status=%s", history_id, status)
            try:
                self._audit.close(history_id, status, note, po_id=po_id)
            except Exception:
                self._db.rollback()
                logger.exception("reorder_history_close_failed history_id=%s", history_id)

    def _publish_completed(self, result: RunResult) -> None:
        self._bus.publish(ReorderRunCompletedEvent(
            trigger_type=result.trigger_type,
            processed_count=result.processed_count,
            created_pos=list(result.created_pos),
            error_count=len(result.errors),
            skipped_count=len(result.skipped),
        ))
