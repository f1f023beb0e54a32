"""
Reorder History Repository
"""
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from autoreorder.models.reorder_history import OPEN_REORDER_STATUSES, ReorderHistory
from autoreorder.repositories.base import BaseRepository


class ReorderHistoryRepository(BaseRepository[ReorderHistory]):

    def __init__(self, db: Session):
        super().__init__(ReorderHistory, db)

    def has_open_for_sku(self, sku_id: int) -> bool:
        row = (
            self.db.query(ReorderHistory.id)
            .filter(
                ReorderHistory.sku_id == sku_id,
                ReorderHistory.status.in_(OPEN_REORDER_STATUSES),
            )
            .first()
        )
        return row is not None

    def list_for_sku(self, sku_id: int) -> List[ReorderHistory]:
        return (
            self.db.query(ReorderHistory)
            .filter(ReorderHistory.sku_id == sku_id)
            .order_by(ReorderHistory.trigger_timestamp.desc(), ReorderHistory.id.desc())
            .all()
        )

    def list_pending(self, created_before: Optional[datetime] = None) -> List[ReorderHistory]:
        q = self.db.query(ReorderHistory).filter(ReorderHistory.status == "pending")
        if created_before is not None:
            q = q.filter(ReorderHistory.trigger_timestamp < created_before)
        return q.order_by(ReorderHistory.trigger_timestamp.asc(), ReorderHistory.id.asc()).all()

    def count_by_status_and_trigger(self) -> Dict[Tuple[str, str], int]:
        rows = (
            self.db.query(ReorderHistory.status, ReorderHistory.trigger_type, func.count(ReorderHistory.id))
            .group_by(ReorderHistory.status, ReorderHistory.trigger_type)
            .all()
        )
        return {(status, trigger): count for status, trigger, count in rows}
