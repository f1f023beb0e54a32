"""
PO Materializer: turns one vendor batch into a draft purchase order.

Steps: price each item from the SKU cost price (items without a usable price
are rejected individually), allocate a PO number, total the lines, then write
header and lines so that a header never survives without its lines.

Two write strategies are available through ``PO_WRITE_MODE``:

- ``transaction``: header and lines are flushed in one database transaction
  and rolled back together on failure.
- ``compensating``: the header is committed first, the lines second; if the
  line write fails the committed header is deleted again.
"""
from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from autoreorder.config import PO_WRITE_MODES, settings
from autoreorder.core.exceptions import (
    ConfigurationException,
    PricingException,
    PurchaseOrderWriteException,
)
from autoreorder.models.purchase_order import PurchaseOrder, PurchaseOrderItem
from autoreorder.repositories.catalog_repository import SkuRepository
from autoreorder.repositories.purchase_order_repository import PurchaseOrderRepository
from autoreorder.services.eligibility_service import EligibleItem


logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
NO_ITEMS_ERROR = "no items to order"


@dataclass
class RejectedItem:
    item: EligibleItem
    reason: str


@dataclass
class MaterializationResult:
    vendor_id: int
    po_id: Optional[int] = None
    po_number: Optional[str] = None
    total_amount: Decimal = Decimal("0")
    ordered: List[EligibleItem] = field(default_factory=list)
    rejected: List[RejectedItem] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.po_id is not None and self.error is None


def resolve_unit_price(item: EligibleItem, cost_price: Optional[Decimal]) -> Decimal:
    if cost_price is None or Decimal(str(cost_price)) <= 0:
        raise PricingException(f"SKU {item.sku_code}: cost price not found")
    return Decimal(str(cost_price)).quantize(CENT)


def _store_error(exc: SQLAlchemyError) -> str:
    return str(getattr(exc, "orig", None) or exc)


class PurchaseOrderMaterializer:

    def __init__(self, db: Session, write_mode: Optional[str] = None):
        self._db = db
        self._repo = PurchaseOrderRepository(db)
        self._sku_repo = SkuRepository(db)
        self._write_mode = write_mode or settings.PO_WRITE_MODE
        if self._write_mode not in PO_WRITE_MODES:
            raise ConfigurationException(
                f"Unknown PO write mode '{self._write_mode}'; expected one of {sorted(PO_WRITE_MODES)}"
            )

    def next_po_number(self) -> str:
        prefix = settings.PO_NUMBER_PREFIX
        width = settings.PO_NUMBER_WIDTH
        latest = self._repo.latest_po_number()
        if latest is None:
            return f"{prefix}-{1:0{width}d}"

        match = re.search(rf"{re.escape(prefix)}-(\d+)", latest)
        if match:
            return f"{prefix}-{int(match.group(1)) + 1:0{width}d}"

        logger.warning("po_number_unparseable latest=%r", latest)
        return f"{prefix}-{int(time.time() * 1000)}"

    def materialize(
        self,
        vendor_id: int,
        items: List[EligibleItem],
        trigger_type: str,
    ) -> MaterializationResult:
        result = MaterializationResult(vendor_id=vendor_id)

        for item in items:
            if item.reorder_quantity <= 0:
                raise ValueError(f"SKU {item.sku_code}: reorder quantity must be positive")

        cost_prices = self._sku_repo.get_cost_prices([i.sku_id for i in items])
        lines: List[PurchaseOrderItem] = []
        for item in items:
            try:
                unit_price = resolve_unit_price(item, cost_prices.get(item.sku_id))
            except PricingException as exc:
                logger.warning("reorder_item_rejected sku=%s vendor_id=%s reason=%s", item.sku_code, vendor_id, exc.message)
                result.rejected.append(RejectedItem(item=item, reason=exc.message))
                continue

            quantity = item.reorder_quantity
            line_total = (quantity * unit_price).quantize(CENT)
            lines.append(
                PurchaseOrderItem(
                    sku_id=item.sku_id,
                    quantity=quantity,
                    unit_price=unit_price,
                    total_price=line_total,
                )
            )
            result.ordered.append(item)
            result.total_amount += line_total

        if not lines:
            result.error = NO_ITEMS_ERROR
            return result

        po_number = self.next_po_number()
        header = PurchaseOrder(
            po_number=po_number,
            vendor_id=vendor_id,
            status="draft",
            total_amount=result.total_amount.quantize(CENT),
            notes=self._build_notes(result.ordered, trigger_type),
            auto_generated=True,
            reorder_source="auto_reorder",
            reorder_trigger_type=trigger_type,
            related_sku_ids=[i.sku_id for i in result.ordered],
        )

        try:
            if self._write_mode == "compensating":
                po_id = self._write_compensating(header, lines)
            else:
                po_id = self._write_transactional(header, lines)
        except PurchaseOrderWriteException as exc:
            result.error = exc.message
            return result

        result.po_id = po_id
        result.po_number = po_number
        logger.info(
            "purchase_order_created po_id=%s po_number=%s vendor_id=%s lines=%s total=%s",
            po_id, po_number, vendor_id, len(lines), result.total_amount,
        )
        return result

    def _write_transactional(self, header: PurchaseOrder, lines: List[PurchaseOrderItem]) -> int:
        try:
            self._repo.add_header(header)
            po_id = header.id
            for line in lines:
                line.purchase_order_id = po_id
            self._repo.add_items(lines)
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("purchase_order_write_failed vendor_id=%s error=%s", header.vendor_id, _store_error(exc))
            raise PurchaseOrderWriteException(f"Failed to create purchase order: {_store_error(exc)}") from exc
        return po_id

    def _write_compensating(self, header: PurchaseOrder, lines: List[PurchaseOrderItem]) -> int:
        try:
            self._repo.add_header(header)
            po_id = header.id
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("purchase_order_write_failed vendor_id=%s error=%s", header.vendor_id, _store_error(exc))
            raise PurchaseOrderWriteException(f"Failed to create purchase order: {_store_error(exc)}") from exc

        try:
            for line in lines:
                line.purchase_order_id = po_id
            self._repo.add_items(lines)
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            error = f"Failed to create purchase order items: {_store_error(exc)}"
            logger.warning("purchase_order_compensating_delete po_id=%s", po_id)
            try:
                self._repo.delete_header(po_id)
                self._db.commit()
            except SQLAlchemyError as cleanup_exc:
                self._db.rollback()
                logger.error(
                    "purchase_order_orphaned_header po_id=%s error=%s", po_id, _store_error(cleanup_exc)
                )
                error = f"{error}; cleanup of purchase order {po_id} failed: {_store_error(cleanup_exc)}"
            raise PurchaseOrderWriteException(error, {"po_id": po_id}) from exc

        return po_id

    @staticmethod
    def _build_notes(items: List[EligibleItem], trigger_type: str) -> str:
        if len(items) == 1:
            item = items[0]
            return (
                f"Auto reorder ({trigger_type}) for SKU {item.sku_code} "
                f"(Current: {item.available}, Min: {item.min_threshold}, Optimal: {item.optimal_threshold})"
            )
        return f"Auto reorder ({trigger_type}) for {len(items)} SKUs"

    def get_purchase_order(self, po_id: int) -> Optional[PurchaseOrder]:
        return self._repo.get_with_items(po_id)
