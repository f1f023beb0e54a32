"""
Reorder Guard: at most one open reorder per SKU.

The check reads the audit trail and is not atomic with the audit write that
follows it, so two overlapping runs can both admit the same SKU.
"""
import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from autoreorder.repositories.reorder_history_repository import ReorderHistoryRepository
from autoreorder.services.eligibility_service import EligibleItem


logger = logging.getLogger(__name__)

OPEN_REORDER_REASON = "pending reorder already exists"


class ReorderGuard:
    def __init__(self, db: Session):
        self._repo = ReorderHistoryRepository(db)

    def has_open_reorder(self, sku_id: int) -> bool:
        return self._repo.has_open_for_sku(sku_id)

    def admit(self, items: List[EligibleItem]) -> Tuple[List[EligibleItem], List[EligibleItem]]:
        """Split ``items`` into (admitted, skipped), preserving order."""
        admitted: List[EligibleItem] = []
        skipped: List[EligibleItem] = []
        for item in items:
            if self.has_open_reorder(item.sku_id):
                logger.info(
                    "reorder_skipped sku=%s vendor_id=%s reason=%s",
                    item.sku_code,
                    item.vendor_id,
                    OPEN_REORDER_REASON,
                )
                skipped.append(item)
            else:
                admitted.append(item)
        return admitted, skipped
