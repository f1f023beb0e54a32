# Repository Layer: Data Access (Repository Pattern, GoF)
from autoreorder.repositories.base import BaseRepository
from autoreorder.repositories.catalog_repository import SkuRepository
from autoreorder.repositories.inventory_repository import InventoryRepository
from autoreorder.repositories.purchase_order_repository import PurchaseOrderRepository
from autoreorder.repositories.reorder_history_repository import ReorderHistoryRepository

__all__ = [
    "BaseRepository",
    "SkuRepository",
    "InventoryRepository",
    "PurchaseOrderRepository",
    "ReorderHistoryRepository",
]
