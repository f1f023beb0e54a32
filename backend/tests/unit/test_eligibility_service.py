from datetime import date
from decimal import Decimal

import pytest

from autoreorder.core.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    MissingReorderFieldException,
)
from autoreorder.services.eligibility_service import EligibilityScanner, EligibleItem
from autoreorder.services.threshold_resolver import Thresholds


AS_OF = date(2026, 10, 18)


def test_sku_exactly_at_minimum_is_not_eligible(db, seed):
    vendor = seed.vendor()
    stock_class = seed.overall_class(20, 40)
    seed.sku(stock_class, vendor, available=20)

    assert EligibilityScanner(db).scan(AS_OF) == []


def test_sku_one_below_minimum_is_eligible(db, seed):
    vendor = seed.vendor()
    stock_class = seed.overall_class(20, 40)
    sku = seed.sku(stock_class, vendor, available=19)

    items = EligibilityScanner(db).scan(AS_OF)

    assert [i.sku_id for i in items] == [sku.id]
    item = items[0]
    assert item.vendor_id == vendor.id
    assert item.available == Decimal("19")
    assert item.min_threshold == Decimal("20")
    assert item.optimal_threshold == Decimal("40")
    assert item.reorder_quantity == Decimal("21")
    assert item.status_label == "Low"


def test_severity_is_critical_at_half_the_minimum(db, seed):
    vendor = seed.vendor()
    seed.sku(seed.overall_class(20, 40), vendor, available=10)

    items = EligibilityScanner(db).scan(AS_OF)

    assert items[0].status_label == "Critical"


def test_zero_minimum_never_triggers(db, seed):
    vendor = seed.vendor()
    seed.sku(seed.overall_class(0, 40), vendor, available=0)

    assert EligibilityScanner(db).scan(AS_OF) == []


def test_sku_without_inventory_rows_counts_as_zero_available(db, seed):
    vendor = seed.vendor()
    sku = seed.sku(seed.overall_class(5, 10), vendor)

    items = EligibilityScanner(db).scan(AS_OF)

    assert [i.sku_id for i in items] == [sku.id]
    assert items[0].available == 0


def test_available_quantity_is_summed_over_warehouses(db, seed):
    vendor = seed.vendor()
    sku = seed.sku(seed.overall_class(20, 40), vendor, available=8)
    seed.stock(sku, 9, warehouse_code="EAST")

    items = EligibilityScanner(db).scan(AS_OF)

    assert items[0].available == Decimal("17")


def test_only_active_auto_reorder_skus_with_vendor_are_candidates(db, seed):
    vendor = seed.vendor()
    stock_class = seed.overall_class(20, 40)
    eligible = seed.sku(stock_class, vendor, available=1)
    seed.sku(stock_class, vendor, available=1, auto_reorder=False)
    seed.sku(stock_class, vendor, available=1, status="inactive")
    seed.sku(stock_class, vendor, available=1, status="discontinued")
    seed.sku(stock_class, None, available=1)

    items = EligibilityScanner(db).scan(AS_OF)

    assert [i.sku_id for i in items] == [eligible.id]


def test_monthly_class_uses_evaluation_month(db, seed):
    vendor = seed.vendor()
    stock_class = seed.monthly_class({10: (30, 60), 11: (5, 10)})
    sku = seed.sku(stock_class, vendor, available=20)

    october = EligibilityScanner(db).scan(date(2026, 10, 1))
    november = EligibilityScanner(db).scan(date(2026, 11, 1))
    december = EligibilityScanner(db).scan(date(2026, 12, 1))

    assert [i.sku_id for i in october] == [sku.id]
    assert october[0].threshold_source == "monthly"
    assert october[0].reorder_quantity == Decimal("40")
    assert november == []
    assert december == []


def test_rescan_without_changes_returns_same_items(db, seed):
    vendor = seed.vendor()
    stock_class = seed.overall_class(20, 40)
    for available in (1, 25, 3):
        seed.sku(stock_class, vendor, available=available)

    scanner = EligibilityScanner(db)

    assert scanner.scan(AS_OF) == scanner.scan(AS_OF)


def test_scan_can_be_narrowed_to_sku_ids(db, seed):
    vendor = seed.vendor()
    stock_class = seed.overall_class(20, 40)
    first = seed.sku(stock_class, vendor, available=1)
    second = seed.sku(stock_class, vendor, available=1)

    items = EligibilityScanner(db).scan(AS_OF, sku_ids=[second.id])

    assert [i.sku_id for i in items] == [second.id]
    assert first.id not in [i.sku_id for i in items]


def test_eligible_item_requires_preferred_vendor(db, seed):
    sku = seed.sku(seed.overall_class(20, 40), None)

    with pytest.raises(MissingReorderFieldException) as exc_info:
        EligibleItem.from_sku(sku, Decimal("1"), Thresholds(Decimal("20"), Decimal("40"), "overall"), 0.5)

    assert exc_info.value.field == "preferred_vendor_id"


class TestEvaluateSku:
    def test_manual_evaluation_ignores_auto_reorder_flag(self, db, seed):
        vendor = seed.vendor()
        sku = seed.sku(seed.overall_class(20, 40), vendor, available=5, auto_reorder=False)

        item = EligibilityScanner(db).evaluate_sku(sku.id, AS_OF)

        assert item.sku_id == sku.id
        assert item.reorder_quantity == Decimal("35")

    def test_unknown_sku_raises_not_found(self, db):
        with pytest.raises(EntityNotFoundException):
            EligibilityScanner(db).evaluate_sku(9999, AS_OF)

    def test_inactive_sku_is_rejected(self, db, seed):
        sku = seed.sku(seed.overall_class(20, 40), seed.vendor(), available=5, status="inactive")

        with pytest.raises(BusinessRuleViolationException, match="not active"):
            EligibilityScanner(db).evaluate_sku(sku.id, AS_OF)

    def test_sku_above_minimum_is_rejected(self, db, seed):
        sku = seed.sku(seed.overall_class(20, 40), seed.vendor(), available=25)

        with pytest.raises(BusinessRuleViolationException, match="not below"):
            EligibilityScanner(db).evaluate_sku(sku.id, AS_OF)

    def test_sku_without_thresholds_is_rejected(self, db, seed):
        sku = seed.sku(None, seed.vendor(), available=0)

        with pytest.raises(BusinessRuleViolationException, match="no minimum threshold"):
            EligibilityScanner(db).evaluate_sku(sku.id, AS_OF)

    def test_sku_without_vendor_is_rejected(self, db, seed):
        sku = seed.sku(seed.overall_class(20, 40), None, available=1)

        with pytest.raises(MissingReorderFieldException):
            EligibilityScanner(db).evaluate_sku(sku.id, AS_OF)
