from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class ReorderRunRequest(BaseModel):
    as_of: Optional[date] = None


class ManualReorderRequest(BaseModel):
    sku_id: int
    as_of: Optional[date] = None


class InventoryChangeReorderRequest(BaseModel):
    sku_ids: List[int] = Field(..., min_length=1, max_length=500)
    as_of: Optional[date] = None


class ReorderRunResponse(BaseModel):
    success: bool
    message: str
    trigger_type: str
    processed_count: int = 0
    created_pos: List[int] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)


class ManualReorderResponse(BaseModel):
    success: bool
    po_id: Optional[int] = None
    reorder_history_id: Optional[int] = None
    error: Optional[str] = None


class EligibleItemView(BaseModel):
    sku_id: int
    sku_code: str
    vendor_id: int
    available: Decimal
    min_threshold: Decimal
    optimal_threshold: Decimal
    status_label: str
    threshold_source: str


class ReorderHistoryResponse(BaseModel):
    id: int
    sku_id: int
    trigger_type: str
    trigger_timestamp: datetime
    inventory_level: Decimal
    min_threshold: Decimal
    optimal_threshold: Decimal
    reorder_quantity: Decimal
    vendor_id: Optional[int] = None
    purchase_order_id: Optional[int] = None
    status: str
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StaleReorderExpireResponse(BaseModel):
    expired: int
    history_ids: List[int] = Field(default_factory=list)


class ReorderStatisticsResponse(BaseModel):
    total_reorders: int = 0
    pending_reorders: int = 0
    successful_reorders: int = 0
    failed_reorders: int = 0
    auto_schedule_count: int = 0
    inventory_change_count: int = 0
    manual_count: int = 0


class PurchaseOrderItemResponse(BaseModel):
    id: int
    sku_id: int
    quantity: Decimal
    unit_price: Decimal
    total_price: Decimal

    class Config:
        from_attributes = True


class PurchaseOrderResponse(BaseModel):
    id: int
    po_number: str
    vendor_id: int
    status: str
    total_amount: Decimal
    notes: Optional[str] = None
    auto_generated: bool
    reorder_source: str
    reorder_trigger_type: str
    related_sku_ids: List[int] = Field(default_factory=list)
    created_at: datetime
    items: List[PurchaseOrderItemResponse] = Field(default_factory=list)

    class Config:
        from_attributes = True
