"""
Catalog Repository: SKUs with their class threshold configuration.
"""
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from autoreorder.models.catalog import Sku, StockClass
from autoreorder.repositories.base import BaseRepository


class SkuRepository(BaseRepository[Sku]):

    def __init__(self, db: Session):
        super().__init__(Sku, db)

    def _with_thresholds(self):
        return self.db.query(Sku).options(
            joinedload(Sku.stock_class).selectinload(StockClass.monthly_stock_levels)
        )

    def list_auto_reorder_candidates(self, sku_ids: Optional[List[int]] = None) -> List[Sku]:
        """Active SKUs flagged for automatic replenishment that name a preferred vendor."""
        q = self._with_thresholds().filter(
            Sku.status == "active",
            Sku.auto_reorder_enabled.is_(True),
            Sku.preferred_vendor_id.isnot(None),
        )
        if sku_ids is not None:
            q = q.filter(Sku.id.in_(sku_ids))
        return q.order_by(Sku.id).all()

    def get_with_thresholds(self, sku_id: int) -> Optional[Sku]:
        return self._with_thresholds().filter(Sku.id == sku_id).first()

    def get_cost_prices(self, sku_ids: List[int]) -> Dict[int, Optional[Decimal]]:
        if not sku_ids:
            return {}
        rows = self.db.query(Sku.id, Sku.cost_price).filter(Sku.id.in_(sku_ids)).all()
        return {sku_id: cost_price for sku_id, cost_price in rows}
