"""
Purchase Order Repository

Writes are flushed, not committed: the materializer owns the transaction
boundary around a header and its lines.
"""
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from autoreorder.models.purchase_order import PurchaseOrder, PurchaseOrderItem
from autoreorder.repositories.base import BaseRepository


class PurchaseOrderRepository(BaseRepository[PurchaseOrder]):

    def __init__(self, db: Session):
        super().__init__(PurchaseOrder, db)

    def latest_po_number(self) -> Optional[str]:
        row = (
            self.db.query(PurchaseOrder.po_number)
            .order_by(PurchaseOrder.created_at.desc(), PurchaseOrder.id.desc())
            .first()
        )
        return row[0] if row else None

    def add_header(self, header: PurchaseOrder) -> PurchaseOrder:
        self.db.add(header)
        self.db.flush()
        return header

    def add_items(self, items: List[PurchaseOrderItem]) -> List[PurchaseOrderItem]:
        self.db.add_all(items)
        self.db.flush()
        return items

    def delete_header(self, po_id: int) -> None:
        (
            self.db.query(PurchaseOrderItem)
            .filter(PurchaseOrderItem.purchase_order_id == po_id)
            .delete(synchronize_session=False)
        )
        self.db.query(PurchaseOrder).filter(PurchaseOrder.id == po_id).delete(synchronize_session=False)
        self.db.flush()

    def get_with_items(self, po_id: int) -> Optional[PurchaseOrder]:
        return (
            self.db.query(PurchaseOrder)
            .options(selectinload(PurchaseOrder.items))
            .filter(PurchaseOrder.id == po_id)
            .first()
        )
