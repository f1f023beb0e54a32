from decimal import Decimal
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from autoreorder.models.inventory import WarehouseInventory
from autoreorder.repositories.base import BaseRepository


class InventoryRepository(BaseRepository[WarehouseInventory]):
    def __init__(self, db: Session):
        super().__init__(WarehouseInventory, db)

    def available_by_sku(self, sku_ids: List[int]) -> Dict[int, Decimal]:
        """Available quantity per SKU summed over warehouses, in one query."""
        if not sku_ids:
            return {}
        rows = (
            self.db.query(
                WarehouseInventory.sku_id,
                func.coalesce(func.sum(WarehouseInventory.available_quantity), 0),
            )
            .filter(WarehouseInventory.sku_id.in_(sku_ids))
            .group_by(WarehouseInventory.sku_id)
            .all()
        )
        return {sku_id: Decimal(str(total)) for sku_id, total in rows}
