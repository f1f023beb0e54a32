"""
Auto Reorder Router: Thin Controller

Trigger endpoints for the reorder engine plus read-only views of its
audit trail. The evaluation date is taken from the request or the wall clock
here, once, and passed down.
"""
from dataclasses import asdict
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from autoreorder.core.exceptions import EntityNotFoundException
from autoreorder.database import get_db
from autoreorder.dependencies import require_roles
from autoreorder.schemas.auth import Principal, SCHEDULER_ROLE
from autoreorder.schemas.reorder import (
    EligibleItemView,
    InventoryChangeReorderRequest,
    ManualReorderRequest,
    ManualReorderResponse,
    PurchaseOrderResponse,
    ReorderHistoryResponse,
    ReorderRunRequest,
    ReorderRunResponse,
    ReorderStatisticsResponse,
    StaleReorderExpireResponse,
)
from autoreorder.services.auto_reorder_service import AutoReorderService
from autoreorder.services.purchase_order_service import PurchaseOrderMaterializer
from autoreorder.services.reorder_history_service import ReorderHistoryService


router = APIRouter(prefix="/auto-reorder", tags=["Auto Reorder"])

TRIGGER_ROLES = [SCHEDULER_ROLE, "admin", "inventory_manager"]
MANUAL_ROLES = ["admin", "inventory_manager", "purchasing"]
VIEW_ROLES = ["admin", "inventory_manager", "purchasing", "viewer"]


def get_auto_reorder_service(db: Session = Depends(get_db)) -> AutoReorderService:
    return AutoReorderService(db)


def get_history_service(db: Session = Depends(get_db)) -> ReorderHistoryService:
    return ReorderHistoryService(db)


def _evaluation_date(as_of: Optional[date]) -> date:
    return as_of or datetime.utcnow().date()


@router.post("/run", response_model=ReorderRunResponse)
def run_auto_reorder(
    body: Optional[ReorderRunRequest] = Body(default=None),
    service: AutoReorderService = Depends(get_auto_reorder_service),
    _: Principal = Depends(require_roles(TRIGGER_ROLES)),
):
    as_of = _evaluation_date(body.as_of if body else None)
    return service.run_scheduled(as_of).to_response()


@router.post("/inventory-change", response_model=ReorderRunResponse)
def run_inventory_change_reorder(
    body: InventoryChangeReorderRequest,
    service: AutoReorderService = Depends(get_auto_reorder_service),
    _: Principal = Depends(require_roles(TRIGGER_ROLES)),
):
    return service.run_for_skus(body.sku_ids, _evaluation_date(body.as_of)).to_response()


@router.post("/manual", response_model=ManualReorderResponse)
def run_manual_reorder(
    body: ManualReorderRequest,
    service: AutoReorderService = Depends(get_auto_reorder_service),
    _: Principal = Depends(require_roles(MANUAL_ROLES)),
):
    return service.run_manual(body.sku_id, _evaluation_date(body.as_of))


@router.get("/eligible", response_model=List[EligibleItemView])
def list_eligible_items(
    as_of: Optional[date] = None,
    service: AutoReorderService = Depends(get_auto_reorder_service),
    _: Principal = Depends(require_roles(VIEW_ROLES)),
):
    return [EligibleItemView(**asdict(item)) for item in service.preview(_evaluation_date(as_of))]


@router.get("/history", response_model=List[ReorderHistoryResponse])
def list_reorder_history(
    sku_id: int = Query(..., ge=1),
    service: ReorderHistoryService = Depends(get_history_service),
    _: Principal = Depends(require_roles(VIEW_ROLES)),
):
    return service.list_for_sku(sku_id)


@router.get("/history/pending", response_model=List[ReorderHistoryResponse])
def list_pending_reorders(
    service: ReorderHistoryService = Depends(get_history_service),
    _: Principal = Depends(require_roles(VIEW_ROLES)),
):
    return service.list_pending()


@router.get("/history/stale", response_model=List[ReorderHistoryResponse])
def list_stale_reorders(
    older_than_minutes: Optional[int] = Query(None, ge=1),
    service: ReorderHistoryService = Depends(get_history_service),
    _: Principal = Depends(require_roles(VIEW_ROLES)),
):
    return service.list_stale_pending(datetime.utcnow(), older_than_minutes)


@router.post("/history/stale/expire", response_model=StaleReorderExpireResponse)
def expire_stale_reorders(
    older_than_minutes: Optional[int] = Query(None, ge=1),
    service: ReorderHistoryService = Depends(get_history_service),
    _: Principal = Depends(require_roles(["admin"])),
):
    expired = service.expire_stale_pending(datetime.utcnow(), older_than_minutes)
    return StaleReorderExpireResponse(expired=len(expired), history_ids=expired)


@router.get("/statistics", response_model=ReorderStatisticsResponse)
def reorder_statistics(
    service: ReorderHistoryService = Depends(get_history_service),
    _: Principal = Depends(require_roles(VIEW_ROLES)),
):
    return service.statistics()


@router.get("/purchase-orders/{po_id}", response_model=PurchaseOrderResponse)
def get_purchase_order(
    po_id: int,
    db: Session = Depends(get_db),
    _: Principal = Depends(require_roles(VIEW_ROLES)),
):
    po = PurchaseOrderMaterializer(db).get_purchase_order(po_id)
    if not po:
        raise EntityNotFoundException("PurchaseOrder", po_id)
    return po
