from autoreorder.models.catalog import Vendor, StockClass, ClassMonthlyStockLevel, Sku
from autoreorder.models.inventory import WarehouseInventory
from autoreorder.models.purchase_order import PurchaseOrder, PurchaseOrderItem
from autoreorder.models.reorder_history import ReorderHistory

__all__ = [
    "Vendor",
    "StockClass",
    "ClassMonthlyStockLevel",
    "Sku",
    "WarehouseInventory",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "ReorderHistory",
]
