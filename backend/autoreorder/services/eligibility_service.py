"""
Eligibility Scanner: finds SKUs that are under-stocked and configured for
automatic replenishment.

The scan is a pure function of store state and the evaluation date: it
performs one catalog read and one batched inventory read, never one query
per SKU.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from autoreorder.config import settings
from autoreorder.core.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    MissingReorderFieldException,
)
from autoreorder.models.catalog import Sku
from autoreorder.repositories.catalog_repository import SkuRepository
from autoreorder.repositories.inventory_repository import InventoryRepository
from autoreorder.services.threshold_resolver import (
    ZERO,
    Thresholds,
    resolve_thresholds,
    severity_label,
)


@dataclass(frozen=True)
class EligibleItem:
    sku_id: int
    sku_code: str
    vendor_id: int
    available: Decimal
    min_threshold: Decimal
    optimal_threshold: Decimal
    status_label: str
    threshold_source: str = "overall"

    @property
    def reorder_quantity(self) -> Decimal:
        return self.optimal_threshold - self.available

    @classmethod
    def from_sku(
        cls,
        sku: Sku,
        available: Decimal,
        thresholds: Thresholds,
        critical_ratio: float,
    ) -> "EligibleItem":
        if sku.preferred_vendor_id is None:
            raise MissingReorderFieldException(sku.sku_code, "preferred_vendor_id")
        return cls(
            sku_id=sku.id,
            sku_code=sku.sku_code,
            vendor_id=sku.preferred_vendor_id,
            available=available,
            min_threshold=thresholds.min_threshold,
            optimal_threshold=thresholds.optimal_threshold,
            status_label=severity_label(available, thresholds.min_threshold, critical_ratio),
            threshold_source=thresholds.source,
        )


def is_under_threshold(available: Decimal, thresholds: Thresholds) -> bool:
    return thresholds.min_threshold > 0 and available < thresholds.min_threshold


class EligibilityScanner:

    def __init__(self, db: Session, critical_ratio: Optional[float] = None):
        self._sku_repo = SkuRepository(db)
        self._inventory_repo = InventoryRepository(db)
        self._critical_ratio = critical_ratio if critical_ratio is not None else settings.CRITICAL_STOCK_RATIO

    def scan(self, as_of: date, sku_ids: Optional[List[int]] = None) -> List[EligibleItem]:
        """Eligible items ordered by SKU id; ``sku_ids`` narrows the candidate set."""
        skus = self._sku_repo.list_auto_reorder_candidates(sku_ids=sku_ids)
        if not skus:
            return []

        available_by_sku = self._inventory_repo.available_by_sku([s.id for s in skus])

        eligible: List[EligibleItem] = []
        for sku in skus:
            available = available_by_sku.get(sku.id, ZERO)
            thresholds = resolve_thresholds(sku.stock_class, as_of.month)
            if not is_under_threshold(available, thresholds):
                continue
            eligible.append(EligibleItem.from_sku(sku, available, thresholds, self._critical_ratio))
        return eligible

    def evaluate_sku(self, sku_id: int, as_of: date) -> EligibleItem:
        """
        Build the single-item eligible set for a manual reorder.

        The auto-reorder flag is not required here, but the SKU must be active,
        have a preferred vendor, and be below its minimum threshold.
        """
        sku = self._sku_repo.get_with_thresholds(sku_id)
        if not sku:
            raise EntityNotFoundException("Sku", sku_id)
        if sku.status != "active":
            raise BusinessRuleViolationException(f"SKU {sku.sku_code} is not active")

        available = self._inventory_repo.available_by_sku([sku.id]).get(sku.id, ZERO)
        thresholds = resolve_thresholds(sku.stock_class, as_of.month)
        if not thresholds.is_configured:
            raise BusinessRuleViolationException(
                f"SKU {sku.sku_code} has no minimum threshold configured for month {as_of.month}"
            )
        if not is_under_threshold(available, thresholds):
            raise BusinessRuleViolationException(
                f"SKU {sku.sku_code} is not below its minimum threshold "
                f"(available {available}, min {thresholds.min_threshold})"
            )
        return EligibleItem.from_sku(sku, available, thresholds, self._critical_ratio)
