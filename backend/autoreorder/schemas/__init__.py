from autoreorder.schemas.auth import Principal, SCHEDULER_ROLE
from autoreorder.schemas.reorder import (
    ReorderRunRequest,
    ManualReorderRequest,
    InventoryChangeReorderRequest,
    ReorderRunResponse,
    ManualReorderResponse,
    EligibleItemView,
    ReorderHistoryResponse,
    StaleReorderExpireResponse,
    ReorderStatisticsResponse,
    PurchaseOrderItemResponse,
    PurchaseOrderResponse,
)
